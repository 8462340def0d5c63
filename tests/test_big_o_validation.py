"""
Testes de validação de complexidade Big-O da Árvore AVL.
"""
import sys
import os
import math
import importlib
import numpy as np
import matplotlib
matplotlib.use("Agg")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.avlstore.structures.avl_tree import AVLTree
from src.avlstore.diagnostics import complexity
from src.avlstore.diagnostics.complexity import (
    measure_operations, height_bound, log_growth_ratio, plot_complexity_results
)

SIZES = [100, 500, 1000, 2000]


def test_height_within_avl_bound():
    print("--- Teste: Altura da AVL ---")
    results = measure_operations(SIZES, seed=7, verbose=True)

    assert results['sizes'] == SIZES
    for n, h in zip(results['sizes'], results['heights']):
        assert math.floor(math.log2(n)) + 1 <= h <= height_bound(n), f"Altura {h} fora do limite para n={n}"

    for metric in ('insert_ms', 'search_ms', 'delete_ms'):
        assert np.all(np.array(results[metric]) > 0)


def test_sequential_insertion_height():
    # Inserção ordenada é o pior caso de uma BST comum
    for n in [7, 15, 31, 1023]:
        avl = AVLTree()
        for k in np.arange(n):
            avl.insert(int(k), None)
        assert avl.get_height() == int(np.log2(n + 1)), f"n={n}"


def test_log_growth_ratio():
    results = {'sizes': [10, 100], 'insert_ms': [1.0, 2.0]}
    # Tempo dobrou e log(n) também dobrou
    assert abs(log_growth_ratio(results) - 1.0) < 1e-9


def test_import_keeps_caller_backend():
    # O módulo não deve trocar o backend escolhido por quem o importa
    matplotlib.use("pdf")
    try:
        importlib.reload(complexity)
        assert matplotlib.get_backend().lower() == "pdf"
    finally:
        matplotlib.use("Agg")


def test_plot_complexity_results(tmp_path):
    results = measure_operations([50, 100], seed=1)
    path = plot_complexity_results(results, str(tmp_path / "plots" / "complexity.png"))
    assert os.path.exists(path)
    assert os.path.getsize(path) > 0


if __name__ == "__main__":
    print("=" * 60)
    print("VALIDAÇÃO DE COMPLEXIDADE BIG-O")
    print("=" * 60)
    test_height_within_avl_bound()
    test_sequential_insertion_height()
    print(">> SUCESSO: Complexidades validadas.")
