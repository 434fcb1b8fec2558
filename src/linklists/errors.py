"""Exception classes for linklists."""


class LinkListsError(Exception):
    """Base exception for all linklists errors."""


class EmptyListError(LinkListsError, LookupError):
    """Raised when popping or peeking at a list that holds no elements."""


class IndexOutOfBoundsError(LinkListsError, IndexError):
    """Raised when an index or a neighbouring position lies outside the list."""


class InvalidPositionError(LinkListsError, ValueError):
    """Raised when a position does not belong to the list it is used against."""


class InvariantViolationError(LinkListsError, AssertionError):
    """Raised when the node structure itself is found to be corrupted."""
