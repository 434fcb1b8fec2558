"""Position handles for O(1) relinking at a known node."""

from typing import TYPE_CHECKING, Generic

from linklists.errors import InvalidPositionError
from linklists.types import T

if TYPE_CHECKING:
    from linklists.doubly import DoublyNode
    from linklists.singly import SinglyNode


class Position(Generic[T]):
    """
    Opaque handle to a single node of a linked list.

    Positions are returned by every insertion and by lookups such as find()
    and position_at(). A position stays valid only while its node is linked
    into the list that produced it: once the node is removed, or the list is
    cleared or garbage collected, any use of the position raises
    InvalidPositionError.
    """

    __slots__ = ("_node",)

    def __init__(self, node: "SinglyNode[T] | DoublyNode[T]") -> None:
        self._node = node

    @property
    def value(self) -> T:
        """The element stored at this position."""
        self._ensure_linked()
        return self._node.value

    @value.setter
    def value(self, value: T) -> None:
        self._ensure_linked()
        self._node.value = value

    def is_valid(self) -> bool:
        """Return True while the node is still linked into a list."""
        return self._node.owner is not None

    def _ensure_linked(self) -> None:
        if self._node.owner is None:
            raise InvalidPositionError("Position refers to a node that was removed")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        if self._node.owner is None:
            return "Position(<invalid>)"
        return f"Position({self._node.value!r})"
