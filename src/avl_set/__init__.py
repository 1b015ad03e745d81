from .avl_tree import AVLTree
from .node import AVLNode, TreeState

__all__ = ['AVLTree', 'AVLNode', 'TreeState']
