import sys
import os
import pytest
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.avlstore.structures.avl_tree import AVLNode, AVLTree, update_height, insert
from src.avlstore.diagnostics.validation import (
    AVLInvariantError, validate_tree, check_bst, check_heights, check_balance, recursive_height
)


def test_valid_tree_passes():
    root = None
    for key in [8, 3, 10, 1, 6, 14, 4, 7, 13]:
        root = insert(root, key, None)
    assert validate_tree(root) == 9
    assert validate_tree(None) == 0
    assert recursive_height(root) == root.height


def test_bst_violation_detected():
    root = AVLNode(5, None)
    root.left = AVLNode(7, None)
    update_height(root)

    with pytest.raises(AVLInvariantError):
        check_bst(root)


def test_duplicate_key_detected():
    root = AVLNode(5, None)
    root.right = AVLNode(5, None)
    update_height(root)

    with pytest.raises(AVLInvariantError):
        validate_tree(root)


def test_stale_height_detected():
    root = AVLNode(2, None)
    root.left = AVLNode(1, None)
    # Altura não atualizada: continua 1

    with pytest.raises(AVLInvariantError, match="Altura"):
        check_heights(root)


def test_imbalance_detected():
    root = AVLNode(1, None)
    root.right = AVLNode(2, None)
    root.right.right = AVLNode(3, None)
    update_height(root.right.right)
    update_height(root.right)
    update_height(root)

    with pytest.raises(AVLInvariantError, match="desbalanceado"):
        check_balance(root)

    # AVLInvariantError também é um ValueError
    with pytest.raises(ValueError):
        validate_tree(root)


def test_tree_validate_checks_size():
    avl = AVLTree()
    for key in range(5):
        avl.insert(key, key)
    assert avl.validate() == 5

    avl.size = 99
    with pytest.raises(AVLInvariantError):
        avl.validate()


def test_none_key_rejected():
    avl = AVLTree()
    with pytest.raises(ValueError):
        avl.insert(None, "x")
    assert None not in avl

    # Mesmo comportamento com a árvore vazia ou não
    for method in (avl.search, avl.get_node, avl.delete):
        with pytest.raises(ValueError):
            method(None)

    avl.insert(1, "um")
    for method in (avl.search, avl.get_node, avl.delete):
        with pytest.raises(ValueError):
            method(None)

    assert None not in avl
    assert len(avl) == 1
    avl.validate()


def test_balance_check_uses_cached_heights():
    # Alturas em cache mentem: a cadeia real está desbalanceada
    root = AVLNode(1, None)
    root.right = AVLNode(2, None)
    root.right.right = AVLNode(3, None)
    root.height = 2

    check_balance(root)

    # validate_tree confere as alturas antes do balanceamento
    with pytest.raises(AVLInvariantError, match="Altura"):
        validate_tree(root)


if __name__ == "__main__":
    test_valid_tree_passes()
    print(">> SUCESSO: Validador aceitou árvore correta.")
