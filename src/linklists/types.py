"""Type definitions for linklists."""

from typing import Callable, TypeAlias, TypeVar

# Element type
T = TypeVar("T")

# Test applied to element values by search(), find() and split_after()
Predicate: TypeAlias = Callable[[T], bool]
