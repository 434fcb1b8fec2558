"""Singly linked list with a cached tail reference."""

import copy
import logging
from collections.abc import Iterable, Iterator
from operator import attrgetter
from typing import Any, Generic, NoReturn

from linklists.errors import (
    EmptyListError,
    IndexOutOfBoundsError,
    InvalidPositionError,
    InvariantViolationError,
)
from linklists.iterators import ChainIterator
from linklists.position import Position
from linklists.types import Predicate, T

logger = logging.getLogger(__name__)

_next_node = attrgetter("next")
_node_value = attrgetter("value")


class SinglyNode(Generic[T]):
    """A node in the singly linked list."""

    __slots__ = ("value", "next", "owner")

    def __init__(self, value: T) -> None:
        self.value = value
        self.next: SinglyNode[T] | None = None
        # Membership token of the containing list, None once unlinked
        self.owner: object | None = None


class SinglyLinkedList(Generic[T]):
    """
    Singly linked list of values.

    Each node owns only its successor, so ownership runs in a single chain
    from the head to the last node. The tail is cached, which makes
    push_back() O(1); pop_back() still has to walk to the node before the
    tail and is O(n).

    The list is not synchronized. Iterators and positions are tied to the
    list: a structural change while iterating makes the iterator raise
    RuntimeError, and a position whose node was removed raises
    InvalidPositionError when used.
    """

    def __init__(
        self,
        iterable: Iterable[T] | None = None,
        *,
        check_invariants: bool = False,
    ) -> None:
        """
        Initialize the list.

        Args:
            iterable: Values to append, in order.
            check_invariants: If True, validate() runs after every mutation
                so that a corrupted structure fails immediately.
        """
        self._head: SinglyNode[T] | None = None
        self._tail: SinglyNode[T] | None = None
        self._size = 0
        self._version = 0
        self._membership = object()
        self._check_invariants = check_invariants
        if iterable is not None:
            for value in iterable:
                self._link_back(SinglyNode(value))
            self._mutated()

    def __del__(self) -> None:
        self._release_nodes()

    def push_front(self, value: T) -> Position[T]:
        """Insert value before the current head. O(1)."""
        node = SinglyNode(value)
        node.next = self._head
        node.owner = self._membership
        self._head = node
        if self._tail is None:
            self._tail = node
        self._size += 1
        self._version += 1
        self._mutated()
        return Position(node)

    def push_back(self, value: T) -> Position[T]:
        """Append value after the current tail. O(1)."""
        node = SinglyNode(value)
        self._link_back(node)
        self._mutated()
        return Position(node)

    def pop_front(self) -> T:
        """
        Remove and return the first value. O(1).

        Raises:
            EmptyListError: If the list has no elements
        """
        if self._head is None:
            raise EmptyListError("pop_front from an empty list")
        value = self._unlink_front()
        self._mutated()
        return value

    def pop_back(self) -> T:
        """
        Remove and return the last value. O(n).

        Raises:
            EmptyListError: If the list has no elements
        """
        if self._head is None:
            raise EmptyListError("pop_back from an empty list")
        if self._size == 1:
            value = self._unlink_front()
        else:
            value = self._unlink_after(self._node_at(self._size - 2))
        self._mutated()
        return value

    def peek_front(self) -> T:
        """Return the first value without removing it."""
        if self._head is None:
            raise EmptyListError("peek_front on an empty list")
        return self._head.value

    def peek_back(self) -> T:
        """Return the last value without removing it."""
        if self._tail is None:
            raise EmptyListError("peek_back on an empty list")
        return self._tail.value

    def insert_after(self, position: Position[T], value: T) -> Position[T]:
        """
        Insert value right after the node at position. O(1).

        Raises:
            InvalidPositionError: If position does not belong to this list
        """
        node = SinglyNode(value)
        self._link_after(self._node_of(position), node)
        self._mutated()
        return Position(node)

    def remove_after(self, position: Position[T]) -> T:
        """
        Remove and return the value following position. O(1).

        Raises:
            InvalidPositionError: If position does not belong to this list
            IndexOutOfBoundsError: If position is the last node
        """
        prev = self._node_of(position)
        if prev.next is None:
            raise IndexOutOfBoundsError("No element after the last position")
        value = self._unlink_after(prev)
        self._mutated()
        return value

    def insert_at(self, index: int, value: T) -> Position[T]:
        """
        Insert value so that it ends up at index. O(n).

        Raises:
            IndexOutOfBoundsError: Unless 0 <= index <= len(self)
        """
        if not 0 <= index <= self._size:
            raise IndexOutOfBoundsError(
                f"Insert index {index} out of range for length {self._size}"
            )
        if index == 0:
            return self.push_front(value)
        if index == self._size:
            return self.push_back(value)
        node = SinglyNode(value)
        self._link_after(self._node_at(index - 1), node)
        self._mutated()
        return Position(node)

    def remove_at(self, index: int) -> T:
        """
        Remove and return the value at index. O(n).

        Raises:
            IndexOutOfBoundsError: Unless 0 <= index < len(self)
        """
        self._check_index(index)
        if index == 0:
            value = self._unlink_front()
        else:
            value = self._unlink_after(self._node_at(index - 1))
        self._mutated()
        return value

    def position_at(self, index: int) -> Position[T]:
        """Return a position for the node at index. O(n)."""
        self._check_index(index)
        return Position(self._node_at(index))

    def search(self, predicate: Predicate[T]) -> int | None:
        """Return the index of the first value matching predicate, or None."""
        for index, value in enumerate(self):
            if predicate(value):
                return index
        return None

    def find(self, predicate: Predicate[T]) -> Position[T] | None:
        """Return a position for the first value matching predicate, or None."""
        node = self._head
        while node is not None:
            if predicate(node.value):
                return Position(node)
            node = node.next
        return None

    def split_after(self, predicate: Predicate[T]) -> "SinglyLinkedList[T] | None":
        """
        Detach every node after the first value matching predicate.

        The detached nodes form a new list, which is empty when the match is
        the last node. Positions for detached nodes now belong to the new
        list.

        Returns:
            The detached tail, or None if no value matches
        """
        node = self._head
        while node is not None and not predicate(node.value):
            node = node.next
        if node is None:
            return None

        rest = type(self)(check_invariants=self._check_invariants)
        chain = node.next
        node.next = None
        moved_tail = None
        moved = 0
        while chain is not None:
            chain.owner = rest._membership
            if moved_tail is None:
                rest._head = chain
            moved_tail = chain
            moved += 1
            chain = chain.next
        rest._tail = moved_tail
        rest._size = moved

        self._tail = node
        self._size -= moved
        self._version += 1
        self._mutated()
        rest._mutated()
        return rest

    def clear(self) -> None:
        """Remove every node, invalidating all positions. O(n)."""
        released = self._release_nodes()
        self._version += 1
        logger.debug("Cleared %s, released %d nodes", type(self).__name__, released)

    def copy(self) -> "SinglyLinkedList[T]":
        """Return a shallow copy with the same values in the same order."""
        return type(self)(self, check_invariants=self._check_invariants)

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> "SinglyLinkedList[T]":
        duplicate = type(self)(check_invariants=self._check_invariants)
        memo[id(self)] = duplicate
        for value in self:
            duplicate._link_back(SinglyNode(copy.deepcopy(value, memo)))
        duplicate._mutated()
        return duplicate

    def is_empty(self) -> bool:
        """Return True if the list has no elements."""
        return self._size == 0

    def iter(self) -> Iterator[T]:
        """Return a new forward iterator over the values."""
        return ChainIterator(self, self._head, _next_node, _node_value)

    def positions(self) -> Iterator[Position[T]]:
        """
        Return a new forward iterator over positions.

        Assigning to ``position.value`` while iterating is allowed, so every
        value can be updated in place in a single pass. Structural changes
        invalidate the iterator as usual.
        """
        return ChainIterator(self, self._head, _next_node, Position)

    def validate(self) -> None:
        """
        Check every structural invariant of the list.

        Raises:
            InvariantViolationError: If the chain has a cycle, a foreign node,
                a stale tail, or a length that disagrees with the counter
        """
        seen: set[int] = set()
        last = None
        node = self._head
        while node is not None:
            if id(node) in seen:
                self._violation(f"Cycle detected after {len(seen)} nodes")
            if node.owner is not self._membership:
                self._violation(f"Node {len(seen)} is not owned by this list")
            seen.add(id(node))
            last = node
            node = node.next
        if last is not self._tail:
            self._violation("Cached tail is not the last reachable node")
        if len(seen) != self._size:
            self._violation(f"Length is {self._size} but {len(seen)} nodes are reachable")

    def __len__(self) -> int:
        """Return the number of elements."""
        return self._size

    def __bool__(self) -> bool:
        """Return True if the list is non-empty."""
        return self._size > 0

    def __iter__(self) -> Iterator[T]:
        """Return a new iterator from head to tail."""
        return self.iter()

    def __contains__(self, value: object) -> bool:
        return any(item == value for item in self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SinglyLinkedList):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(a == b for a, b in zip(self, other))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def _link_back(self, node: SinglyNode[T]) -> None:
        node.owner = self._membership
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._size += 1
        self._version += 1

    def _link_after(self, prev: SinglyNode[T], node: SinglyNode[T]) -> None:
        # The new node must point at the remainder before prev points at it
        node.next = prev.next
        node.owner = self._membership
        prev.next = node
        if self._tail is prev:
            self._tail = node
        self._size += 1
        self._version += 1

    def _unlink_front(self) -> T:
        node = self._head
        if node is None:
            self._violation("Unlinking the head of a list without one")
        self._head = node.next
        if self._head is None:
            self._tail = None
        return self._detach(node)

    def _unlink_after(self, prev: SinglyNode[T]) -> T:
        node = prev.next
        if node is None:
            self._violation("Unlinking after the last node")
        prev.next = node.next
        if self._tail is node:
            self._tail = prev
        return self._detach(node)

    def _detach(self, node: SinglyNode[T]) -> T:
        value = node.value
        node.next = None
        node.owner = None
        self._size -= 1
        self._version += 1
        return value

    def _release_nodes(self) -> int:
        # Unlink head to tail so that dropping a long chain never recurses
        node = self._head
        self._head = None
        self._tail = None
        self._size = 0
        released = 0
        while node is not None:
            following = node.next
            node.next = None
            node.owner = None
            node = following
            released += 1
        return released

    def _node_at(self, index: int) -> SinglyNode[T]:
        node = self._head
        for _ in range(index):
            if node is None:
                break
            node = node.next
        if node is None:
            self._violation(f"Chain ends before index {index} of {self._size}")
        return node

    def _node_of(self, position: Position[T]) -> SinglyNode[T]:
        node = position._node
        if not isinstance(node, SinglyNode) or node.owner is not self._membership:
            raise InvalidPositionError("Position does not belong to this list")
        return node

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexOutOfBoundsError(
                f"Index {index} out of range for length {self._size}"
            )

    def _mutated(self) -> None:
        if self._check_invariants:
            self.validate()

    def _violation(self, message: str) -> NoReturn:
        logger.error("%s invariant violated: %s", type(self).__name__, message)
        raise InvariantViolationError(message)
