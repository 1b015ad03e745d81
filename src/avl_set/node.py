import logging
import weakref
from enum import Enum
from typing import TypeVar, Generic, Optional, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .avl_tree import AVLTree

T = TypeVar('T')

logger = logging.getLogger(__name__)


class TreeState(Enum):
    BALANCED = 0
    LEFT_HEAVY = 1
    RIGHT_HEAVY = 2


class AVLNode(Generic[T]):
    """A node of an AVL tree.

    A rotation may leave a value equal to the node in its left subtree, so
    the ordering holds as left <= node <= right. Links are read-only outside
    the tree; the tree rewires them through the underscore mutators. The
    parent link is a weak reference used only to walk upward.
    """

    def __init__(self, value: T, parent: Optional['AVLNode[T]'], tree: 'AVLTree[T]') -> None:
        self._value: T = value
        self._left: Optional[AVLNode[T]] = None
        self._right: Optional[AVLNode[T]] = None
        self._parent: Optional[Callable[[], Optional[AVLNode[T]]]] = None
        self._tree = weakref.ref(tree)
        self.height: int = 1
        self._set_parent(parent)

    @property
    def value(self) -> T:
        return self._value

    @property
    def parent(self) -> Optional['AVLNode[T]']:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def left(self) -> Optional['AVLNode[T]']:
        return self._left

    @property
    def right(self) -> Optional['AVLNode[T]']:
        return self._right

    def _set_parent(self, node: Optional['AVLNode[T]']) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    def _set_left(self, node: Optional['AVLNode[T]']) -> None:
        self._left = node
        if node is not None:
            node._set_parent(self)

    def _set_right(self, node: Optional['AVLNode[T]']) -> None:
        self._right = node
        if node is not None:
            node._set_parent(self)

    @property
    def left_height(self) -> int:
        return _height(self._left)

    @property
    def right_height(self) -> int:
        return _height(self._right)

    @property
    def balance_factor(self) -> int:
        return self.right_height - self.left_height

    @property
    def state(self) -> TreeState:
        if self.left_height - self.right_height > 1:
            return TreeState.LEFT_HEAVY
        if self.right_height - self.left_height > 1:
            return TreeState.RIGHT_HEAVY
        return TreeState.BALANCED

    def update_height(self) -> None:
        self.height = 1 + max(self.left_height, self.right_height)

    def balance(self) -> 'AVLNode[T]':
        """Refresh this node's height and rotate if it violates the AVL bound.

        Returns the node now at the top of this subtree, which is either this
        node or the child promoted by a rotation.
        """
        self.update_height()
        state = self.state

        if state is TreeState.RIGHT_HEAVY:
            assert self._right is not None
            if self._right.balance_factor < 0:
                return self._left_right_rotation()
            return self._left_rotation()

        if state is TreeState.LEFT_HEAVY:
            assert self._left is not None
            if self._left.balance_factor > 0:
                return self._right_left_rotation()
            return self._right_rotation()

        return self

    def _left_rotation(self) -> 'AVLNode[T]':
        #  a
        #   \
        #    b
        #     \
        #      c
        # becomes
        #       b
        #      / \
        #     a   c
        new_root = self._right
        assert new_root is not None
        logger.debug("left rotation at %r", self._value)

        self._replace_root(new_root)
        self._set_right(new_root.left)
        new_root._set_left(self)

        self.update_height()
        new_root.update_height()
        return new_root

    def _right_rotation(self) -> 'AVLNode[T]':
        #      c
        #     /
        #    b
        #   /
        #  a
        # becomes
        #      b
        #     / \
        #    a   c
        new_root = self._left
        assert new_root is not None
        logger.debug("right rotation at %r", self._value)

        self._replace_root(new_root)
        self._set_left(new_root.right)
        new_root._set_right(self)

        self.update_height()
        new_root.update_height()
        return new_root

    def _left_right_rotation(self) -> 'AVLNode[T]':
        assert self._right is not None
        self._right._right_rotation()
        return self._left_rotation()

    def _right_left_rotation(self) -> 'AVLNode[T]':
        assert self._left is not None
        self._left._left_rotation()
        return self._right_rotation()

    def _replace_root(self, new_root: 'AVLNode[T]') -> None:
        parent = self.parent
        if parent is not None:
            if parent.left is self:
                parent._set_left(new_root)
            elif parent.right is self:
                parent._set_right(new_root)
        else:
            tree = self._tree()
            assert tree is not None
            tree._set_root(new_root)

        new_root._set_parent(parent)
        self._set_parent(new_root)

    def __repr__(self) -> str:
        return f"AVLNode({self._value!r})"


def _height(node: Optional[AVLNode]) -> int:
    if node is None:
        return 0
    return node.height
