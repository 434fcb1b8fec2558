"""Doubly linked list with non-owning back-references."""

import copy
import logging
import weakref
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
_prev_node = attrgetter("prev")
_node_value = attrgetter("value")


class DoublyNode(Generic[T]):
    """
    A node in the doubly linked list.

    Only ``next`` keeps the following node alive. ``prev`` is stored as a
    weak reference, so the two directions never form a strong cycle.
    """

    __slots__ = ("value", "next", "_prev", "owner", "__weakref__")

    def __init__(self, value: T) -> None:
        self.value = value
        self.next: DoublyNode[T] | None = None
        self._prev: weakref.ref[DoublyNode[T]] | None = None
        # Membership token of the containing list, None once unlinked
        self.owner: object | None = None

    @property
    def prev(self) -> "DoublyNode[T] | None":
        if self._prev is None:
            return None
        return self._prev()

    @prev.setter
    def prev(self, node: "DoublyNode[T] | None") -> None:
        self._prev = weakref.ref(node) if node is not None else None


class DoublyLinkedList(Generic[T]):
    """
    Doubly linked list of values with O(1) operations at both ends.

    Ownership flows from the head through ``next`` links; the back-links and
    the cached tail are weak references. Index-based operations walk from
    whichever end is closer to the index.

    The list is not synchronized. A structural change while iterating makes
    the iterator raise RuntimeError, and a position whose node was removed
    raises InvalidPositionError when used.
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
        self._head: DoublyNode[T] | None = None
        self._tail_ref: weakref.ref[DoublyNode[T]] | None = None
        self._size = 0
        self._version = 0
        self._membership = object()
        self._check_invariants = check_invariants
        if iterable is not None:
            for value in iterable:
                self._link_between(self._tail, DoublyNode(value), None)
            self._mutated()

    def __del__(self) -> None:
        self._release_nodes()

    @property
    def _tail(self) -> DoublyNode[T] | None:
        if self._tail_ref is None:
            return None
        return self._tail_ref()

    @_tail.setter
    def _tail(self, node: DoublyNode[T] | None) -> None:
        self._tail_ref = weakref.ref(node) if node is not None else None

    def push_front(self, value: T) -> Position[T]:
        """Insert value before the current head. O(1)."""
        node = DoublyNode(value)
        self._link_between(None, node, self._head)
        self._mutated()
        return Position(node)

    def push_back(self, value: T) -> Position[T]:
        """Append value after the current tail. O(1)."""
        node = DoublyNode(value)
        self._link_between(self._tail, node, None)
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
        value = self._unlink(self._head)
        self._mutated()
        return value

    def pop_back(self) -> T:
        """
        Remove and return the last value. O(1).

        Raises:
            EmptyListError: If the list has no elements
        """
        tail = self._tail
        if tail is None:
            raise EmptyListError("pop_back from an empty list")
        value = self._unlink(tail)
        self._mutated()
        return value

    def peek_front(self) -> T:
        """Return the first value without removing it."""
        if self._head is None:
            raise EmptyListError("peek_front on an empty list")
        return self._head.value

    def peek_back(self) -> T:
        """Return the last value without removing it."""
        tail = self._tail
        if tail is None:
            raise EmptyListError("peek_back on an empty list")
        return tail.value

    def insert_after(self, position: Position[T], value: T) -> Position[T]:
        """Insert value right after the node at position. O(1)."""
        anchor = self._node_of(position)
        node = DoublyNode(value)
        self._link_between(anchor, node, anchor.next)
        self._mutated()
        return Position(node)

    def insert_before(self, position: Position[T], value: T) -> Position[T]:
        """Insert value right before the node at position. O(1)."""
        anchor = self._node_of(position)
        node = DoublyNode(value)
        self._link_between(anchor.prev, node, anchor)
        self._mutated()
        return Position(node)

    def remove_after(self, position: Position[T]) -> T:
        """
        Remove and return the value following position. O(1).

        Raises:
            InvalidPositionError: If position does not belong to this list
            IndexOutOfBoundsError: If position is the last node
        """
        anchor = self._node_of(position)
        if anchor.next is None:
            raise IndexOutOfBoundsError("No element after the last position")
        value = self._unlink(anchor.next)
        self._mutated()
        return value

    def remove_before(self, position: Position[T]) -> T:
        """
        Remove and return the value preceding position. O(1).

        Raises:
            InvalidPositionError: If position does not belong to this list
            IndexOutOfBoundsError: If position is the first node
        """
        anchor = self._node_of(position)
        prev = anchor.prev
        if prev is None:
            raise IndexOutOfBoundsError("No element before the first position")
        value = self._unlink(prev)
        self._mutated()
        return value

    def remove(self, position: Position[T]) -> T:
        """Remove and return the value at position, invalidating it. O(1)."""
        value = self._unlink(self._node_of(position))
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
        node = DoublyNode(value)
        if index == self._size:
            self._link_between(self._tail, node, None)
        else:
            after = self._node_at(index)
            self._link_between(after.prev, node, after)
        self._mutated()
        return Position(node)

    def remove_at(self, index: int) -> T:
        """
        Remove and return the value at index. O(n).

        Raises:
            IndexOutOfBoundsError: Unless 0 <= index < len(self)
        """
        self._check_index(index)
        value = self._unlink(self._node_at(index))
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

    def split_after(self, predicate: Predicate[T]) -> "DoublyLinkedList[T] | None":
        """
        Detach every node after the first value matching predicate.

        Returns:
            The detached nodes as a new list (empty when the match is the
            last node), or None if no value matches
        """
        node = self._head
        while node is not None and not predicate(node.value):
            node = node.next
        if node is None:
            return None

        rest = type(self)(check_invariants=self._check_invariants)
        chain = node.next
        node.next = None
        if chain is not None:
            chain.prev = None
            rest._head = chain
        moved_tail = None
        moved = 0
        while chain is not None:
            chain.owner = rest._membership
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

    def copy(self) -> "DoublyLinkedList[T]":
        """Return a shallow copy with the same values in the same order."""
        return type(self)(self, check_invariants=self._check_invariants)

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> "DoublyLinkedList[T]":
        # Weak back-links would still point into self, so the chain is rebuilt
        duplicate = type(self)(check_invariants=self._check_invariants)
        memo[id(self)] = duplicate
        for value in self:
            node = DoublyNode(copy.deepcopy(value, memo))
            duplicate._link_between(duplicate._tail, node, None)
        duplicate._mutated()
        return duplicate

    def is_empty(self) -> bool:
        """Return True if the list has no elements."""
        return self._size == 0

    def iter(self) -> Iterator[T]:
        """Return a new iterator from head to tail."""
        return ChainIterator(self, self._head, _next_node, _node_value)

    def iter_reversed(self) -> Iterator[T]:
        """Return a new iterator from tail to head."""
        return ChainIterator(self, self._tail, _prev_node, _node_value)

    def positions(self) -> Iterator[Position[T]]:
        """
        Return a new iterator over positions from head to tail.

        Assigning to ``position.value`` while iterating is allowed, so every
        value can be updated in place in a single pass. Structural changes
        invalidate the iterator as usual.
        """
        return ChainIterator(self, self._head, _next_node, Position)

    def positions_reversed(self) -> Iterator[Position[T]]:
        """Return a new iterator over positions from tail to head."""
        return ChainIterator(self, self._tail, _prev_node, Position)

    def validate(self) -> None:
        """
        Check every structural invariant of the list.

        Raises:
            InvariantViolationError: If the chain has a cycle, a foreign node,
                a broken back-link, a stale tail, or a length that disagrees
                with the counter
        """
        seen: set[int] = set()
        prev = None
        node = self._head
        while node is not None:
            if id(node) in seen:
                self._violation(f"Cycle detected after {len(seen)} nodes")
            if node.owner is not self._membership:
                self._violation(f"Node {len(seen)} is not owned by this list")
            if node.prev is not prev:
                self._violation(f"Back-link of node {len(seen)} does not match its predecessor")
            seen.add(id(node))
            prev = node
            node = node.next
        if prev is not self._tail:
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

    def __reversed__(self) -> Iterator[T]:
        """Return a new iterator from tail to head."""
        return self.iter_reversed()

    def __contains__(self, value: object) -> bool:
        return any(item == value for item in self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DoublyLinkedList):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(a == b for a, b in zip(self, other))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def _link_between(
        self,
        before: DoublyNode[T] | None,
        node: DoublyNode[T],
        after: DoublyNode[T] | None,
    ) -> None:
        """
        Link node between two neighbours, either of which may be the list itself.

        The new node takes its links first, then the successor's back-link
        moves, and the predecessor (or head) takes ownership of the new node
        last.
        """
        node.next = after
        node.prev = before
        node.owner = self._membership
        if after is None:
            self._tail = node
        else:
            after.prev = node
        if before is None:
            self._head = node
        else:
            before.next = node
        self._size += 1
        self._version += 1

    def _unlink(self, node: DoublyNode[T]) -> T:
        before = node.prev
        after = node.next
        if before is None:
            self._head = after
        else:
            before.next = after
        if after is None:
            self._tail = before
        else:
            after.prev = before
        value = node.value
        node.next = None
        node.prev = None
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
            node.prev = None
            node.owner = None
            node = following
            released += 1
        return released

    def _node_at(self, index: int) -> DoublyNode[T]:
        if index < self._size // 2:
            node = self._head
            for _ in range(index):
                if node is None:
                    break
                node = node.next
        else:
            node = self._tail
            for _ in range(self._size - 1 - index):
                if node is None:
                    break
                node = node.prev
        if node is None:
            self._violation(f"Chain ends before index {index} of {self._size}")
        return node

    def _node_of(self, position: Position[T]) -> DoublyNode[T]:
        node = position._node
        if not isinstance(node, DoublyNode) or node.owner is not self._membership:
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
