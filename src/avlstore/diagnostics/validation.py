from typing import Optional
from src.avlstore.structures.avl_tree import AVLNode, balance_factor, count_nodes


class AVLInvariantError(ValueError):
    """Lançada quando uma árvore viola as invariantes BST, AVL ou de altura."""


def recursive_height(node: Optional[AVLNode]) -> int:
    """Altura recalculada percorrendo a subárvore (ignora o cache). O(n)."""
    if node is None:
        return 0
    return 1 + max(recursive_height(node.left), recursive_height(node.right))


def check_bst(node: Optional[AVLNode], low=None, high=None):
    """Todas as chaves da esquerda < chave < todas as chaves da direita (estrito)."""
    if node is None:
        return
    if low is not None and not low < node.key:
        raise AVLInvariantError(f"Ordem BST violada: {node.key} deveria ser maior que {low}.")
    if high is not None and not node.key < high:
        raise AVLInvariantError(f"Ordem BST violada: {node.key} deveria ser menor que {high}.")
    check_bst(node.left, low, node.key)
    check_bst(node.right, node.key, high)


def check_heights(node: Optional[AVLNode]) -> int:
    """Confere a altura em cache de cada nó. Retorna a altura real da subárvore."""
    if node is None:
        return 0
    real = 1 + max(check_heights(node.left), check_heights(node.right))
    if node.height != real:
        raise AVLInvariantError(f"Altura em cache incorreta no nó {node.key}: {node.height} != {real}.")
    return real


def check_balance(node: Optional[AVLNode]):
    """
    |altura(esq) - altura(dir)| <= 1 em todos os nós, pelas alturas em cache. O(n).
    Pressupõe alturas corretas: validate_tree roda check_heights antes.
    """
    if node is None:
        return
    if abs(balance_factor(node)) > 1:
        raise AVLInvariantError(f"Nó {node.key} desbalanceado (fator {balance_factor(node)}).")
    check_balance(node.left)
    check_balance(node.right)


def validate_tree(root: Optional[AVLNode]) -> int:
    """
    Executa todas as verificações e retorna o número de nós.
    Chaves duplicadas são detectadas pela ordem BST estrita.
    """
    check_bst(root)
    check_heights(root)
    check_balance(root)
    return count_nodes(root)
