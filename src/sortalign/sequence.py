# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Ordered, duplicate-free list container.

``SortedUniqueList`` wraps a private Python list and keeps one invariant:
every adjacent pair ``(x, y)`` satisfies ``x < y``. That single predicate
enforces both ordering and uniqueness. Lookups use binary search over the
backing list (``bisect``); mutation goes through validated ``insert`` and
``push``, the order-preserving ``retain``, or the documented escape hatches
``set_unchecked`` and ``raw_mut`` which leave the invariant to the caller.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Callable, Iterable, Iterator, Sequence
from itertools import pairwise
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, Self, overload, override

from sortalign._infra.exceptions import DuplicateKeyError, OrderViolationError, SortalignValidationError

if TYPE_CHECKING:
    from sortalign.alignment import Alignment
    from sortalign.core.model_types import LeftOrRight


class SupportsLessThan(Protocol):
    """Protocol for elements with a strict total order."""

    def __lt__(self, other: Any, /) -> bool: ...


def is_sorted_unique[T: SupportsLessThan](items: Iterable[T]) -> bool:
    """Return True when every adjacent pair is strictly ascending.

    Args:
        items: Values to check, in iteration order.

    Returns:
        ``True`` for empty and single-element inputs, otherwise whether
        ``a < b`` holds for all neighbours ``a, b``.
    """
    return all(a < b for a, b in pairwise(items))


class SortedUniqueList[T: SupportsLessThan](Sequence[T]):
    """Sequence of strictly ascending, unique elements.

    The container behaves as a read-only ``Sequence``: it supports indexing,
    slicing (returning a plain list), iteration, ``len`` and ``in``. Every
    mutation either preserves the invariant or is explicitly documented as
    unchecked.

    Example:
        >>> items = SortedUniqueList[int]()
        >>> items.insert(5)
        0
        >>> items.insert(1)
        0
        >>> list(items)
        [1, 5]
    """

    __slots__ = ("_items",)
    __hash__: ClassVar[None] = None  # pyright: ignore[reportIncompatibleMethodOverride]

    def __init__(self) -> None:
        self._items: list[T] = []

    @classmethod
    def with_capacity(cls, capacity: int) -> Self:
        """Return an empty list sized for roughly ``capacity`` elements.

        Python lists grow on demand, so the hint is validated but not used
        for preallocation.

        Raises:
            SortalignValidationError: If ``capacity`` is negative.
        """
        if capacity < 0:
            message = f"capacity must be non-negative, got {capacity}"
            raise SortalignValidationError(message)
        return cls()

    @classmethod
    def from_sorted(cls, items: Iterable[T]) -> Self:
        """Build from values that are already strictly ascending.

        Raises:
            OrderViolationError: On the first value that does not exceed its predecessor.
        """
        result = cls()
        for item in items:
            result.push(item)
        return result

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> Self:
        """Sort ``items`` and build a list from them.

        Raises:
            DuplicateKeyError: If two values compare equal.
        """
        ordered = sorted(items)
        result = cls()
        for index, item in enumerate(ordered):
            if result._items and not (result._items[-1] < item):
                raise DuplicateKeyError(item, index - 1)
            result._items.append(item)
        return result

    # ---------------- Query ----------------
    @override
    def __len__(self) -> int:
        return len(self._items)

    def len(self) -> int:
        """Return the number of elements."""
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    @override
    def __getitem__(self, index: int | slice) -> T | list[T]:
        return self._items[index]

    @override
    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @override
    def __reversed__(self) -> Iterator[T]:
        return reversed(self._items)

    @override
    def __contains__(self, key: object) -> bool:
        try:
            return self.position(key) is not None  # type: ignore[arg-type]
        except TypeError:
            return False

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, SortedUniqueList):
            return self._items == other._items  # pyright: ignore[reportUnknownMemberType]
        return NotImplemented

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def contains(self, key: T) -> bool:
        """Return True when an element comparing equal to ``key`` is present."""
        return self.position(key) is not None

    def position(self, key: T) -> int | None:
        """Return the index of the element equal to ``key``, or None."""
        index = bisect_left(self._items, key)
        if index < len(self._items) and not (key < self._items[index]):
            return index
        return None

    def get(self, index: int) -> T | None:
        """Return the element at ``index``, or None when out of range.

        Negative indexes are treated as out of range.
        """
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def first(self) -> T | None:
        return self._items[0] if self._items else None

    def last(self) -> T | None:
        return self._items[-1] if self._items else None

    def index_by(self, compare: Callable[[T], int]) -> int | None:
        """Binary-search with a three-way comparator against an implicit key.

        Args:
            compare: Called with a candidate element; returns a negative number
                when the element sorts before the target, zero on a match and a
                positive number when it sorts after. The comparator must be
                consistent with the list's order.

        Returns:
            Position of the matching element, or None.
        """
        lo, hi = 0, len(self._items)
        while lo < hi:
            mid = (lo + hi) // 2
            order = compare(self._items[mid])
            if order < 0:
                lo = mid + 1
            elif order > 0:
                hi = mid
            else:
                return mid
        return None

    def find_by(self, compare: Callable[[T], int]) -> T | None:
        """Return the element located by ``index_by``, or None."""
        index = self.index_by(compare)
        return None if index is None else self._items[index]

    def index_by_key[K: SupportsLessThan](self, key: K, key_func: Callable[[T], K]) -> int | None:
        """Binary-search by a projected key.

        Args:
            key: Projected key to look for.
            key_func: Projection that must be monotonic with the list's order.

        Returns:
            Position of the element whose projection equals ``key``, or None.
        """
        index = bisect_left(self._items, key, key=key_func)
        if index < len(self._items) and not (key < key_func(self._items[index])):
            return index
        return None

    def find_by_key[K: SupportsLessThan](self, key: K, key_func: Callable[[T], K]) -> T | None:
        """Return the element located by ``index_by_key``, or None."""
        index = self.index_by_key(key, key_func)
        return None if index is None else self._items[index]

    def is_valid(self) -> bool:
        """Re-check the ordering invariant after escape-hatch mutation."""
        return is_sorted_unique(self._items)

    def as_list(self) -> list[T]:
        """Return a shallow copy of the elements as a plain list."""
        return list(self._items)

    def copy(self) -> Self:
        result = type(self)()
        result._items = list(self._items)
        return result

    # ---------------- Mutation ----------------
    def insert(self, element: T) -> int:
        """Insert ``element`` at its sorted position.

        Args:
            element: Value to insert.

        Returns:
            The index the element now occupies.

        Raises:
            DuplicateKeyError: If an equal element exists. The list is left unchanged.
        """
        index = bisect_left(self._items, element)
        if index < len(self._items) and not (element < self._items[index]):
            raise DuplicateKeyError(element, index)
        self._items.insert(index, element)
        return index

    def push(self, element: T) -> None:
        """Append ``element``, which must exceed the current last element.

        Raises:
            OrderViolationError: If the list is non-empty and ``element`` is not
                strictly greater than its last element. The list is left unchanged.
        """
        if self._items and not (self._items[-1] < element):
            raise OrderViolationError(element, self._items[-1])
        self._items.append(element)

    def retain(self, predicate: Callable[[T], bool]) -> None:
        """Keep only elements for which ``predicate`` returns True, in order."""
        self._items[:] = [item for item in self._items if predicate(item)]

    def set_unchecked(self, index: int, value: T) -> None:
        """Overwrite the element at ``index`` without checking the invariant.

        The caller must restore strict ascending order before any further use
        of this list; ``is_valid`` can confirm it.
        """
        self._items[index] = value

    def raw_mut(self) -> list[T]:
        """Return the backing list itself.

        Mutating it bypasses every check; the caller is responsible for
        keeping the elements strictly ascending.
        """
        return self._items

    # ---------------- Combination ----------------
    def merge(self, other: SortedUniqueList[T], tie_break: Callable[[T, T], LeftOrRight]) -> SortedUniqueList[T]:
        """Return the union of ``self`` and ``other``; see ``sortalign.merge.merge``."""
        from sortalign.merge import merge  # noqa: PLC0415

        return merge(self, other, tie_break)

    def align(
        self,
        other: SortedUniqueList[T],
        classifier: Callable[[Alignment[T]], T | None],
    ) -> SortedUniqueList[T]:
        """Classify every element pairing; see ``sortalign.merge.align``."""
        from sortalign.merge import align  # noqa: PLC0415

        return align(self, other, classifier)


__all__ = ["SortedUniqueList", "SupportsLessThan", "is_sorted_unique"]
