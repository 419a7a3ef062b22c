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


"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from hypothesis import strategies as st

from sortalign import SortedUniqueList

__all__ = [
    "Keyed",
    "keyed_sequences",
    "sorted_unique_ints",
    "sorted_unique_lists",
]


@dataclass(frozen=True, order=True)
class Keyed:
    """Element ordered by ``key`` only; ``tag`` rides along as payload."""

    key: int
    tag: str = field(default="", compare=False)


def sorted_unique_ints(max_value: int = 60, max_size: int = 25) -> st.SearchStrategy[list[int]]:
    """Return a strategy that yields strictly ascending integer lists."""
    values = st.lists(st.integers(min_value=-max_value, max_value=max_value), unique=True, max_size=max_size)
    return values.map(sorted)


def sorted_unique_lists(max_value: int = 60, max_size: int = 25) -> st.SearchStrategy[SortedUniqueList[int]]:
    """Return a strategy that yields populated ``SortedUniqueList`` instances.

    Args:
        max_value: Absolute bound on generated keys; small bounds force overlap.
        max_size: Maximum number of elements.

    Returns:
        Hypothesis strategy producing ``SortedUniqueList[int]``.
    """
    return sorted_unique_ints(max_value=max_value, max_size=max_size).map(SortedUniqueList[int].from_sorted)


def keyed_sequences(tag: str, max_value: int = 30, max_size: int = 15) -> st.SearchStrategy[SortedUniqueList[Keyed]]:
    """Strategy for keyed lists whose elements all carry ``tag``."""
    return sorted_unique_ints(max_value=max_value, max_size=max_size).map(
        lambda keys: SortedUniqueList[Keyed].from_sorted(Keyed(key, tag) for key in keys),
    )
