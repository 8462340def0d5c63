"""
Validação empírica das complexidades da Árvore AVL:
- Inserção: O(log n)
- Busca: O(log n)
- Remoção: O(log n)
- Altura: <= 1.44 * log2(n + 2)
"""
import os
import time
from typing import Dict, List, Optional

import numpy as np
import matplotlib.pyplot as plt

from src.avlstore.structures.avl_tree import AVLTree

SIZES = [100, 500, 1000, 2000, 5000]
PLOT_PATH = "data/complexity_validation.png"
SEARCH_SAMPLES = 100


def height_bound(n: int) -> float:
    """Altura máxima teórica de uma AVL com n nós."""
    return 1.44 * np.log2(n + 2)


def measure_operations(sizes: Optional[List[int]] = None, seed: int = 42, verbose: bool = False) -> Dict[str, list]:
    """
    Para cada tamanho n: insere n chaves embaralhadas, busca e remove amostras
    aleatórias, e registra o tempo médio por operação (ms) e a altura final.
    """
    sizes = sizes or SIZES
    rng = np.random.default_rng(seed)

    results = {'sizes': [], 'insert_ms': [], 'search_ms': [], 'delete_ms': [], 'heights': []}

    for n in sizes:
        keys = rng.permutation(n)
        avl = AVLTree()

        start = time.perf_counter()
        for k in keys:
            avl.insert(int(k), f"valor-{k}")
        insert_ms = (time.perf_counter() - start) * 1000 / n

        tree_height = avl.get_height()

        samples = rng.choice(keys, size=min(n, SEARCH_SAMPLES), replace=False)
        start = time.perf_counter()
        for k in samples:
            avl.search(int(k))
        search_ms = (time.perf_counter() - start) * 1000 / len(samples)

        start = time.perf_counter()
        for k in samples:
            avl.delete(int(k))
        delete_ms = (time.perf_counter() - start) * 1000 / len(samples)

        results['sizes'].append(n)
        results['insert_ms'].append(insert_ms)
        results['search_ms'].append(search_ms)
        results['delete_ms'].append(delete_ms)
        results['heights'].append(tree_height)

        if verbose:
            print(f"  n={n:5d}: altura={tree_height:2d} (limite {height_bound(n):.2f}) | "
                  f"insert {insert_ms:.4f} ms | search {search_ms:.4f} ms | delete {delete_ms:.4f} ms")

    return results


def log_growth_ratio(results: Dict[str, list], metric: str = 'insert_ms') -> float:
    """
    Razão média de crescimento do tempo dividida pela razão média de log(n).
    Próximo de 1 indica crescimento logarítmico.
    """
    sizes = np.array(results['sizes'], dtype=float)
    times = np.array(results[metric], dtype=float)
    ratios = times[1:] / times[:-1]
    log_ratios = np.log(sizes[1:]) / np.log(sizes[:-1])
    return float(np.mean(ratios) / np.mean(log_ratios))


def plot_complexity_results(results: Dict[str, list], path: str = PLOT_PATH) -> str:
    """Gera o gráfico de altura e tempos contra a curva O(log n) teórica."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    sizes = results['sizes']
    bounds = [height_bound(n) for n in sizes]

    fig, (ax_height, ax_time) = plt.subplots(1, 2, figsize=(12, 5))

    ax_height.plot(sizes, results['heights'], 'b-o', label='Altura Observada')
    ax_height.plot(sizes, bounds, 'r--', label='1.44 log2(n+2)')
    ax_height.set_xlabel('Tamanho (n)')
    ax_height.set_ylabel('Altura')
    ax_height.set_title('Altura da AVL')
    ax_height.legend()
    ax_height.grid(True)

    ax_time.plot(sizes, results['insert_ms'], 'g-o', label='Inserção')
    ax_time.plot(sizes, results['search_ms'], 'b-o', label='Busca')
    ax_time.plot(sizes, results['delete_ms'], 'm-o', label='Remoção')
    ax_time.set_xlabel('Tamanho (n)')
    ax_time.set_ylabel('Tempo médio (ms)')
    ax_time.set_title('Validação de Complexidade: O(log n)')
    ax_time.legend()
    ax_time.grid(True)

    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


if __name__ == "__main__":
    print("=" * 60)
    print("VALIDAÇÃO DE COMPLEXIDADE BIG-O")
    print("=" * 60)
    res = measure_operations(verbose=True)
    print(f"  Razão inserção/log(n): {log_growth_ratio(res, 'insert_ms'):.3f}")
    print(f"  Razão busca/log(n):    {log_growth_ratio(res, 'search_ms'):.3f}")
    print(f"  >> Gráfico salvo em {plot_complexity_results(res)}")
