import logging
from typing import TypeVar, Generic, List, Iterable, Iterator, Optional

from .node import AVLNode, _height

T = TypeVar('T')

logger = logging.getLogger(__name__)


class AVLTree(Generic[T]):
    """An ordered multiset kept height-balanced with AVL rotations.

    Values equal to an existing value are accepted and placed to its right,
    so iteration yields equal values in insertion order. Rotations may later
    lift one of them above an equal value, so the shape only guarantees
    left <= node <= right. Nodes handed out by ``root`` and ``find`` are
    read-only views.
    """

    def __init__(self, values: Optional[Iterable[T]] = None) -> None:
        self._root: Optional[AVLNode[T]] = None
        self._count: int = 0
        if values is not None:
            for value in values:
                self.add(value)

    @property
    def root(self) -> Optional[AVLNode[T]]:
        return self._root

    @property
    def count(self) -> int:
        return self._count

    def add(self, value: T) -> None:
        if self._root is None:
            self._root = AVLNode(value, None, self)
        else:
            self._add_to(self._root, value)
        self._count += 1

    def _add_to(self, node: AVLNode[T], value: T) -> None:
        if value < node.value:
            if node.left is None:
                node._set_left(AVLNode(value, node, self))
            else:
                self._add_to(node.left, value)
        else:
            if node.right is None:
                node._set_right(AVLNode(value, node, self))
            else:
                self._add_to(node.right, value)

        node.balance()

    def find(self, value: T) -> Optional[AVLNode[T]]:
        """Return the first node holding a value equal to ``value``, or None.

        With duplicates this is whichever equal node the descent meets first,
        not necessarily the earliest inserted one.
        """
        current = self._root
        while current is not None:
            if value < current.value:
                current = current.left
            elif current.value < value:
                current = current.right
            else:
                break
        return current

    def contains(self, value: T) -> bool:
        return self.find(value) is not None

    def remove(self, value: T) -> bool:
        """Remove one occurrence of ``value``.

        Returns False, leaving the tree untouched, when the value is absent.
        """
        current = self.find(value)
        if current is None:
            return False

        parent = current.parent
        right = current.right

        if right is None:
            # No right child: the left subtree takes the node's place.
            logger.debug("remove %r: no right child", value)
            self._replace_child(parent, current, current.left)
            start = parent
        elif right.left is None:
            # Right child has no left subtree: it moves up and adopts the left.
            logger.debug("remove %r: right child promoted", value)
            right._set_left(current.left)
            self._replace_child(parent, current, right)
            start = right
        else:
            # Splice out the in-order successor and put it in the node's place.
            logger.debug("remove %r: successor splice", value)
            successor = right.left
            while successor.left is not None:
                successor = successor.left
            successor_parent = successor.parent
            assert successor_parent is not None
            successor_parent._set_left(successor.right)
            successor._set_left(current.left)
            successor._set_right(current.right)
            self._replace_child(parent, current, successor)
            start = successor_parent

        current._set_left(None)
        current._set_right(None)
        self._count -= 1

        if start is None:
            start = self._root
        self._rebalance_from(start)
        return True

    def _set_root(self, node: Optional[AVLNode[T]]) -> None:
        self._root = node
        if node is not None:
            node._set_parent(None)

    def _replace_child(self, parent: Optional[AVLNode[T]], child: AVLNode[T],
                       replacement: Optional[AVLNode[T]]) -> None:
        if parent is None:
            self._set_root(replacement)
        elif parent.left is child:
            parent._set_left(replacement)
        else:
            parent._set_right(replacement)

    def _rebalance_from(self, node: Optional[AVLNode[T]]) -> None:
        while node is not None:
            node = node.balance().parent

    def min(self) -> T:
        if self._root is None:
            raise ValueError("min from empty tree")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.value

    def max(self) -> T:
        if self._root is None:
            raise ValueError("max from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    def is_empty(self) -> bool:
        return self._count == 0

    def clear(self) -> None:
        self._root = None
        self._count = 0

    def height(self) -> int:
        return _height(self._root)

    def _in_order_nodes(self) -> Iterator[AVLNode[T]]:
        stack: List[AVLNode[T]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def in_order(self) -> List[T]:
        return list(self)

    def pre_order(self) -> List[T]:
        result: List[T] = []
        if self._root is None:
            return result
        stack: List[AVLNode[T]] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.value)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def post_order(self) -> List[T]:
        result: List[T] = []
        if self._root is None:
            return result
        stack: List[AVLNode[T]] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.value)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        result.reverse()
        return result

    def copy(self) -> 'AVLTree[T]':
        # In-order reinsertion keeps equal values in their current order.
        return AVLTree(self)

    def is_balanced(self) -> bool:
        return all(abs(node.balance_factor) <= 1 for node in self._in_order_nodes())

    def __len__(self) -> int:
        return self._count

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[T]:
        for node in self._in_order_nodes():
            yield node.value

    def __repr__(self) -> str:
        return f"AVLTree({self.in_order()})"

    def __str__(self) -> str:
        return f"AVLTree(size={self._count}, height={self.height()})"
