"""Iterators over a chain of linked nodes."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from linklists.doubly import DoublyLinkedList
    from linklists.singly import SinglyLinkedList

N = TypeVar("N")  # Node type
R = TypeVar("R")  # Produced item type


class ChainIterator(Generic[N, R]):
    """
    Iterator that walks nodes of one list and produces one item per node.

    The iterator remembers the list's version when it is created. Any
    structural change made after that point, including one made before the
    first step, makes the next step raise RuntimeError. Once exhausted it
    keeps raising StopIteration.
    """

    __slots__ = ("_owner", "_version", "_node", "_advance", "_produce", "_remaining")

    def __init__(
        self,
        owner: "SinglyLinkedList[Any] | DoublyLinkedList[Any]",
        start: N | None,
        advance: Callable[[N], N | None],
        produce: Callable[[N], R],
    ) -> None:
        self._owner: SinglyLinkedList[Any] | DoublyLinkedList[Any] | None = owner
        self._version = owner._version
        self._node = start
        self._advance = advance
        self._produce = produce
        self._remaining = len(owner)

    def __iter__(self) -> "ChainIterator[N, R]":
        return self

    def __next__(self) -> R:
        if self._owner is None:
            raise StopIteration
        if self._owner._version != self._version:
            raise RuntimeError(f"{type(self._owner).__name__} mutated during iteration")
        node = self._node
        if node is None:
            self._owner = None
            self._remaining = 0
            raise StopIteration
        self._node = self._advance(node)
        self._remaining -= 1
        return self._produce(node)

    def __length_hint__(self) -> int:
        """Return the number of items left to produce."""
        return self._remaining
