"""Tests for the singly linked list."""

import copy
import operator

import pytest

from linklists import (
    EmptyListError,
    IndexOutOfBoundsError,
    SinglyLinkedList,
    SinglyNode,
)


def test_node_creation() -> None:
    """Test creating a node."""
    node = SinglyNode("value1")
    assert node.value == "value1"
    assert node.next is None
    assert node.owner is None


def test_empty_list() -> None:
    """Test empty list behavior."""
    lst = SinglyLinkedList[int](check_invariants=True)
    assert len(lst) == 0
    assert not lst
    assert lst.is_empty()
    assert list(lst) == []


def test_push_back_preserves_order() -> None:
    """Test that iteration yields values in push order."""
    lst = SinglyLinkedList[int](check_invariants=True)
    for i in range(10):
        lst.push_back(i)
    assert len(lst) == 10
    assert list(lst) == list(range(10))
    assert list(lst.iter()) == list(range(10))


def test_push_front() -> None:
    """Test prepending values."""
    lst = SinglyLinkedList[int](check_invariants=True)
    lst.push_front(1)
    lst.push_front(2)
    lst.push_back(0)
    assert list(lst) == [2, 1, 0]
    assert lst.peek_front() == 2
    assert lst.peek_back() == 0


def test_pop_front_after_push_front() -> None:
    """Test LIFO behaviour at the front."""
    lst = SinglyLinkedList[str](["a", "b"], check_invariants=True)
    lst.push_front("z")
    assert lst.pop_front() == "z"
    assert list(lst) == ["a", "b"]


def test_round_trip_from_front() -> None:
    """Test that pushing and popping at the front reverses the values."""
    lst = SinglyLinkedList[int](check_invariants=True)
    for i in range(5):
        lst.push_front(i)
    assert [lst.pop_front() for _ in range(5)] == [4, 3, 2, 1, 0]
    assert not lst


def test_pop_back() -> None:
    """Test removing from the back by walking the chain."""
    lst = SinglyLinkedList[int]([1, 2, 3], check_invariants=True)
    assert lst.pop_back() == 3
    assert lst.peek_back() == 2
    assert lst.pop_back() == 2
    assert lst.pop_back() == 1
    assert not lst
    lst.push_back(7)
    assert list(lst) == [7]


def test_pop_empty_is_idempotent() -> None:
    """Test that popping an empty list always fails without changing length."""
    lst = SinglyLinkedList[int](check_invariants=True)
    for _ in range(3):
        with pytest.raises(EmptyListError):
            lst.pop_front()
        with pytest.raises(EmptyListError):
            lst.pop_back()
        assert len(lst) == 0


def test_peek_empty() -> None:
    """Test peeking at an empty list."""
    lst = SinglyLinkedList[int]()
    with pytest.raises(EmptyListError):
        lst.peek_front()
    with pytest.raises(EmptyListError):
        lst.peek_back()


def test_insert_at() -> None:
    """Test inserting into the middle by index."""
    lst = SinglyLinkedList[int]([1, 2, 4], check_invariants=True)
    position = lst.insert_at(2, 3)
    assert list(lst) == [1, 2, 3, 4]
    assert len(lst) == 4
    assert position.value == 3


def test_insert_at_ends() -> None:
    """Test inserting at index 0 and at index len."""
    lst = SinglyLinkedList[int](check_invariants=True)
    lst.insert_at(0, 2)
    lst.insert_at(0, 1)
    lst.insert_at(2, 3)
    assert list(lst) == [1, 2, 3]
    assert lst.peek_back() == 3


def test_insert_at_out_of_range() -> None:
    """Test that inserting past the end fails instead of clamping."""
    lst = SinglyLinkedList[int]([1, 2])
    with pytest.raises(IndexOutOfBoundsError):
        lst.insert_at(3, 9)
    with pytest.raises(IndexOutOfBoundsError):
        lst.insert_at(-1, 9)
    assert list(lst) == [1, 2]


def test_remove_at() -> None:
    """Test removing by index."""
    lst = SinglyLinkedList[int]([1, 2, 3], check_invariants=True)
    assert lst.remove_at(1) == 2
    assert list(lst) == [1, 3]
    assert len(lst) == 2


def test_remove_at_tail_updates_tail() -> None:
    """Test that removing the last node keeps push_back working."""
    lst = SinglyLinkedList[int]([1, 2, 3], check_invariants=True)
    assert lst.remove_at(2) == 3
    lst.push_back(4)
    assert list(lst) == [1, 2, 4]
    assert lst.remove_at(0) == 1
    assert list(lst) == [2, 4]


def test_remove_at_out_of_range() -> None:
    """Test that removing at index len fails."""
    lst = SinglyLinkedList[int]([1, 2, 3])
    with pytest.raises(IndexOutOfBoundsError):
        lst.remove_at(3)
    with pytest.raises(IndexOutOfBoundsError):
        SinglyLinkedList[int]().remove_at(0)
    assert len(lst) == 3


def test_insert_and_remove_after_position() -> None:
    """Test O(1) relinking after a held position."""
    lst = SinglyLinkedList[str](check_invariants=True)
    first = lst.push_back("a")
    lst.push_back("c")
    second = lst.insert_after(first, "b")
    assert list(lst) == ["a", "b", "c"]

    assert lst.remove_after(second) == "c"
    assert lst.peek_back() == "b"
    with pytest.raises(IndexOutOfBoundsError):
        lst.remove_after(second)

    lst.insert_after(second, "d")
    assert list(lst) == ["a", "b", "d"]
    assert lst.peek_back() == "d"


def test_search() -> None:
    """Test searching for the first matching value."""
    assert SinglyLinkedList([1, 2, 3, 4]).search(lambda x: x == 3) == 2
    assert SinglyLinkedList([1, 2, 4]).search(lambda x: x == 3) is None


def test_find_and_position_at() -> None:
    """Test looking up positions."""
    lst = SinglyLinkedList[int]([5, 6, 7])
    position = lst.find(lambda x: x % 2 == 0)
    assert position is not None
    assert position == lst.position_at(1)
    assert lst.find(lambda x: x > 10) is None
    with pytest.raises(IndexOutOfBoundsError):
        lst.position_at(3)


def test_split_after() -> None:
    """Test detaching the nodes after a match into a new list."""
    lst = SinglyLinkedList[int](range(6), check_invariants=True)
    moved = lst.position_at(4)

    rest = lst.split_after(lambda x: x == 2)
    assert rest is not None
    assert list(lst) == [0, 1, 2]
    assert list(rest) == [3, 4, 5]
    assert lst.peek_back() == 2
    assert rest.peek_back() == 5

    assert rest.remove_after(moved) == 5
    lst.push_back(9)
    assert list(lst) == [0, 1, 2, 9]


def test_split_after_last_and_missing() -> None:
    """Test splitting at the tail and with no match."""
    lst = SinglyLinkedList[int]([1, 2])
    rest = lst.split_after(lambda x: x == 2)
    assert rest is not None
    assert len(rest) == 0
    assert lst.split_after(lambda x: x == 9) is None
    assert list(lst) == [1, 2]


def test_mutation_during_iteration() -> None:
    """Test that a structural change invalidates running iterators."""
    lst = SinglyLinkedList[int]([1, 2, 3])
    values = iter(lst)
    assert next(values) == 1
    lst.pop_front()
    with pytest.raises(RuntimeError):
        next(values)


def test_mutation_before_first_step() -> None:
    """Test that an iterator fails even if the list changed before it started."""
    lst = SinglyLinkedList[int]([1, 2, 3])
    values = lst.iter()
    lst.pop_front()
    with pytest.raises(RuntimeError):
        next(values)

    values = iter(lst)
    lst.clear()
    with pytest.raises(RuntimeError):
        next(values)


def test_exhausted_iterator_stays_exhausted() -> None:
    """Test that a finished iterator keeps stopping after later mutations."""
    lst = SinglyLinkedList[int]([1])
    values = iter(lst)
    assert list(values) == [1]
    lst.push_back(2)
    with pytest.raises(StopIteration):
        next(values)


def test_iterator_length_hint() -> None:
    """Test that iterators report how many values remain."""
    lst = SinglyLinkedList[int]([1, 2, 3])
    values = iter(lst)
    assert operator.length_hint(values) == 3
    next(values)
    assert operator.length_hint(values) == 2


def test_positions_update_in_place() -> None:
    """Test updating every value in a single pass over positions."""
    lst = SinglyLinkedList[int]([1, 2, 3], check_invariants=True)
    for position in lst.positions():
        position.value *= 10
    assert list(lst) == [10, 20, 30]


def test_positions_invalidated_by_mutation() -> None:
    """Test that walking positions fails after a structural change."""
    lst = SinglyLinkedList[int]([1, 2, 3])
    walker = lst.positions()
    lst.insert_after(next(walker), 5)
    with pytest.raises(RuntimeError):
        next(walker)


def test_deepcopy() -> None:
    """Test that a deep copy shares no nodes or values with the original."""
    lst = SinglyLinkedList[list[int]]([[1], [2]], check_invariants=True)
    duplicate = copy.deepcopy(lst)
    assert duplicate == lst
    duplicate.peek_front().append(9)
    duplicate.pop_back()
    duplicate.push_back([3])
    assert list(lst) == [[1], [2]]
    assert list(duplicate) == [[1, 9], [3]]
    lst.validate()
    duplicate.validate()


def test_clear() -> None:
    """Test clearing the list."""
    lst = SinglyLinkedList[int](range(5), check_invariants=True)
    lst.clear()
    assert len(lst) == 0
    assert list(lst) == []
    lst.push_back(1)
    assert list(lst) == [1]


def test_clear_very_long_list() -> None:
    """Test that releasing a long chain does not recurse."""
    lst = SinglyLinkedList[int](range(200_000))
    lst.clear()
    assert not lst
    lst = SinglyLinkedList[int](range(200_000))
    del lst


def test_copy_and_equality() -> None:
    """Test copying and comparing lists."""
    lst = SinglyLinkedList[int]([1, 2, 3])
    duplicate = lst.copy()
    assert duplicate == lst
    duplicate.pop_front()
    assert duplicate != lst
    assert list(lst) == [1, 2, 3]


def test_contains_and_repr() -> None:
    """Test membership and debug output."""
    lst = SinglyLinkedList[str](["x"])
    assert "x" in lst
    assert "y" not in lst
    assert repr(lst) == "SinglyLinkedList(['x'])"
