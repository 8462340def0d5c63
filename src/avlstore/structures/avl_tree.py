from typing import Any, List, Optional, TextIO, Tuple

LEAF_HEIGHT = 1


class AVLNode:
    """
    Nó interno da Árvore AVL.
    Armazena a chave, o valor associado (payload opaco) e a altura em cache.
    """
    def __init__(self, key, value):
        self.key = key
        self.value = value
        self.left: Optional["AVLNode"] = None
        self.right: Optional["AVLNode"] = None
        self.height = LEAF_HEIGHT   # Altura inicial do nó é 1

    def __repr__(self):
        return f"AVLNode(key={self.key!r}, height={self.height})"


def create_node(key, value) -> AVLNode:
    """Cria uma folha com altura 1 e sem filhos."""
    return AVLNode(key, value)


# --- Altura e Fator de Balanceamento ---

def height(node: Optional[AVLNode]) -> int:
    """Altura em cache do nó (0 para subárvore vazia). O(1)."""
    if node is None:
        return 0
    return node.height


def update_height(node: AVLNode):
    """Recalcula a altura a partir das alturas em cache dos filhos. O(1)."""
    node.height = 1 + max(height(node.left), height(node.right))


def balance_factor(node: Optional[AVLNode]) -> int:
    if node is None:
        return 0
    return height(node.left) - height(node.right)


# --- Rotações ---

def rotate_right(z: AVLNode, verbose: bool = False) -> AVLNode:
    """
    Rotação simples à direita.
    Usada quando o peso está na esquerda (Left-Left).
    """
    y = z.left
    T3 = y.right

    y.right = z
    z.left = T3

    # O nó rebaixado primeiro, depois a nova raiz
    update_height(z)
    update_height(y)

    if verbose:
        print(f"[AVL ROTACAO] direita em {z.key} -> nova raiz {y.key}")
    return y


def rotate_left(z: AVLNode, verbose: bool = False) -> AVLNode:
    """
    Rotação simples à esquerda.
    Usada quando o peso está na direita (Right-Right).
    """
    y = z.right
    T2 = y.left

    y.left = z
    z.right = T2

    update_height(z)
    update_height(y)

    if verbose:
        print(f"[AVL ROTACAO] esquerda em {z.key} -> nova raiz {y.key}")
    return y


def rotate_left_right(z: AVLNode, verbose: bool = False) -> AVLNode:
    """Rotação dupla: esquerda no filho esquerdo, depois direita em z (Left-Right)."""
    z.left = rotate_left(z.left, verbose)
    return rotate_right(z, verbose)


def rotate_right_left(z: AVLNode, verbose: bool = False) -> AVLNode:
    """Rotação dupla: direita no filho direito, depois esquerda em z (Right-Left)."""
    z.right = rotate_right(z.right, verbose)
    return rotate_left(z, verbose)


def rebalance(node: AVLNode, verbose: bool = False) -> AVLNode:
    """
    Aplica a regra de decisão AVL a um nó cuja altura já foi atualizada.
    Retorna a raiz local (possivelmente nova) da subárvore.
    """
    balance = balance_factor(node)

    # Pesado à direita
    if balance < -1:
        if balance_factor(node.right) > 0:
            return rotate_right_left(node, verbose)
        return rotate_left(node, verbose)

    # Pesado à esquerda
    if balance > 1:
        if balance_factor(node.left) < 0:
            return rotate_left_right(node, verbose)
        return rotate_right(node, verbose)

    return node


# --- Operações ---

def search(node: Optional[AVLNode], key) -> Optional[AVLNode]:
    """Busca o nó com a chave em O(log n). Retorna None se não existir."""
    if node is None or node.key == key:
        return node
    if key < node.key:
        return search(node.left, key)
    return search(node.right, key)


def successor(node: AVLNode) -> AVLNode:
    """Sucessor in-order: o nó mais à esquerda da subárvore direita."""
    succ = node.right
    while succ.left is not None:
        succ = succ.left
    return succ


def insert(node: Optional[AVLNode], key, value, verbose: bool = False) -> AVLNode:
    """
    Insere o par chave/valor na subárvore e rebalanceia na volta da recursão.
    Chave já existente: o valor é sobrescrito e a forma da árvore não muda.
    Retorna a raiz resultante.
    """
    return insert_node(node, key, value, verbose)[0]


def insert_node(node: Optional[AVLNode], key, value, verbose: bool = False) -> Tuple[AVLNode, bool]:
    """Como insert, mas retorna também se um nó novo foi criado."""
    if node is None:
        return create_node(key, value), True

    if key < node.key:
        node.left, created = insert_node(node.left, key, value, verbose)
    elif key > node.key:
        node.right, created = insert_node(node.right, key, value, verbose)
    elif key == node.key:
        # Chaves duplicadas não são permitidas, atualizamos o valor
        node.value = value
        return node, False
    else:
        raise ValueError(f"Chave sem ordem total: {key!r}")

    if not created:
        return node, False

    update_height(node)
    return rebalance(node, verbose), True


def delete(node: Optional[AVLNode], key, verbose: bool = False) -> Optional[AVLNode]:
    """
    Remove a chave da subárvore. Se a chave não existir a árvore volta intacta.
    Ao contrário da inserção, pode rotacionar em vários ancestrais.
    Retorna a raiz resultante.
    """
    return delete_node(node, key, verbose)[0]


def delete_node(node: Optional[AVLNode], key, verbose: bool = False) -> Tuple[Optional[AVLNode], bool]:
    """Como delete, mas retorna também se a chave foi removida."""
    if node is None:
        return None, False

    if key < node.key:
        node.left, removed = delete_node(node.left, key, verbose)
    elif key > node.key:
        node.right, removed = delete_node(node.right, key, verbose)
    elif key == node.key:
        # Zero ou um filho: o filho (ou None) assume o lugar do nó
        if node.left is None:
            return node.right, True
        if node.right is None:
            return node.left, True

        # Dois filhos: copia os dados do sucessor e remove o sucessor da direita
        succ = successor(node)
        node.key = succ.key
        node.value = succ.value
        node.right, removed = delete_node(node.right, succ.key, verbose)
    else:
        # Chave incomparável nunca está na árvore
        return node, False

    if not removed:
        return node, False

    update_height(node)
    return rebalance(node, verbose), True


# --- Percurso e Destruição ---

def inorder_nodes(node: Optional[AVLNode]) -> List[AVLNode]:
    """Nós em ordem (esquerda, nó, direita)."""
    nodes: List[AVLNode] = []
    _in_order(node, nodes)
    return nodes


def _in_order(node: Optional[AVLNode], nodes: List[AVLNode]):
    if node:
        _in_order(node.left, nodes)
        nodes.append(node)
        _in_order(node.right, nodes)


def inorder_keys(node: Optional[AVLNode]) -> List[Any]:
    return [n.key for n in inorder_nodes(node)]


def count_nodes(node: Optional[AVLNode]) -> int:
    if node is None:
        return 0
    return 1 + count_nodes(node.left) + count_nodes(node.right)


def print_tree_inorder(node: Optional[AVLNode], file: Optional[TextIO] = None):
    """
    Imprime as chaves em ordem, uma por linha, recuadas pela profundidade
    e seguidas da altura em cache: ' <chave> [<altura>]'. Apenas para debug.
    """
    _print_tree_inorder(node, 0, file)


def _print_tree_inorder(node: Optional[AVLNode], offset: int, file: Optional[TextIO]):
    if node is None:
        return
    _print_tree_inorder(node.left, offset + 1, file)
    print(f"{' ' * offset} {node.key} [{node.height}]", file=file)
    _print_tree_inorder(node.right, offset + 1, file)


def delete_tree(node: Optional[AVLNode]):
    """
    Libera a árvore inteira em pós-ordem (filhos antes do nó).
    A raiz não deve ser usada depois desta chamada.
    """
    if node is None:
        return
    delete_tree(node.left)
    delete_tree(node.right)
    node.left = None
    node.right = None
    node.value = None


class AVLTree:
    """
    Dona da raiz de uma Árvore AVL chave/valor.
    Repassa a raiz às operações recursivas e religa o resultado.
    Garante busca, inserção e remoção em O(log n).
    """
    def __init__(self, verbose: bool = False):
        self.root: Optional[AVLNode] = None
        self.size = 0
        self.verbose = verbose   # Se True, imprime cada rotação

    @staticmethod
    def _check_key(key):
        if key is None:
            raise ValueError("A chave não pode ser None.")

    def insert(self, key, value):
        """Insere um novo nó e rebalanceia a árvore automaticamente."""
        self._check_key(key)
        self.root, created = insert_node(self.root, key, value, self.verbose)
        if created:
            self.size += 1

    def search(self, key):
        """Busca pela chave em O(log n). Retorna o valor ou None."""
        node = self.get_node(key)
        return node.value if node else None

    def get_node(self, key) -> Optional[AVLNode]:
        self._check_key(key)
        return search(self.root, key)

    def delete(self, key) -> bool:
        """Remove a chave. Retorna False se ela não estava na árvore."""
        self._check_key(key)
        self.root, removed = delete_node(self.root, key, self.verbose)
        if removed:
            self.size -= 1
        return removed

    def clear(self):
        delete_tree(self.root)
        self.root = None
        self.size = 0

    def print_tree_inorder(self, file: Optional[TextIO] = None):
        print_tree_inorder(self.root, file)

    def get_all_keys(self) -> List[Any]:
        return inorder_keys(self.root)

    def get_all_values(self) -> List[Any]:
        """Retorna todos os valores (in-order traversal) para debug."""
        return [n.value for n in inorder_nodes(self.root)]

    def get_all_items(self) -> List[Tuple[Any, Any]]:
        return [(n.key, n.value) for n in inorder_nodes(self.root)]

    def get_height(self) -> int:
        return height(self.root)

    def is_empty(self) -> bool:
        return self.root is None

    def validate(self) -> int:
        """
        Verifica as invariantes BST/AVL/altura da árvore inteira.
        Retorna o número de nós; lança AVLInvariantError se algo estiver errado.
        """
        from src.avlstore.diagnostics.validation import AVLInvariantError, validate_tree

        count = validate_tree(self.root)
        if count != self.size:
            raise AVLInvariantError(f"Tamanho registrado {self.size} difere da contagem real {count}.")
        return count

    def __len__(self):
        return self.size

    def __contains__(self, key):
        if key is None:
            return False
        return search(self.root, key) is not None

    def __repr__(self):
        return f"AVLTree(size={self.size}, height={self.get_height()})"
