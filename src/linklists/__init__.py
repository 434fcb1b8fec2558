"""linklists - Singly and doubly linked lists with O(1) relinking at held positions."""

from linklists.doubly import DoublyLinkedList, DoublyNode
from linklists.errors import (
    EmptyListError,
    IndexOutOfBoundsError,
    InvalidPositionError,
    InvariantViolationError,
    LinkListsError,
)
from linklists.position import Position
from linklists.singly import SinglyLinkedList, SinglyNode
from linklists.types import Predicate

__version__ = "0.0.1"

__all__ = [
    "SinglyLinkedList",
    "SinglyNode",
    "DoublyLinkedList",
    "DoublyNode",
    "Position",
    "Predicate",
    "LinkListsError",
    "EmptyListError",
    "IndexOutOfBoundsError",
    "InvalidPositionError",
    "InvariantViolationError",
]
