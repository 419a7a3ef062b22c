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


"""Set algebra and diff helpers expressed as ``align`` classifiers."""

from __future__ import annotations

from collections import Counter

from sortalign.alignment import Alignment, Match
from sortalign.core.model_types import AlignmentKind, LeftOrRight
from sortalign.merge import align, iter_alignments, keep_left, merge
from sortalign.sequence import SortedUniqueList, SupportsLessThan


def union[T: SupportsLessThan](left: SortedUniqueList[T], right: SortedUniqueList[T]) -> SortedUniqueList[T]:
    """Return every key of either input, preferring left instances on ties."""
    return merge(left, right, keep_left)


def intersection[T: SupportsLessThan](left: SortedUniqueList[T], right: SortedUniqueList[T]) -> SortedUniqueList[T]:
    """Return the keys present in both inputs, using the left instances."""

    def _keep_matches(case: Alignment[T]) -> T | None:
        return case.left if isinstance(case, Match) else None

    return align(left, right, _keep_matches)


def difference[T: SupportsLessThan](left: SortedUniqueList[T], right: SortedUniqueList[T]) -> SortedUniqueList[T]:
    """Return the keys of ``left`` that are absent from ``right``."""

    def _keep_left_only(case: Alignment[T]) -> T | None:
        return case.value if case.side is LeftOrRight.LEFT else None

    return align(left, right, _keep_left_only)


def symmetric_difference[T: SupportsLessThan](
    left: SortedUniqueList[T],
    right: SortedUniqueList[T],
) -> SortedUniqueList[T]:
    """Return the keys present in exactly one input."""

    def _drop_matches(case: Alignment[T]) -> T | None:
        return None if isinstance(case, Match) else case.value

    return align(left, right, _drop_matches)


def classify[T: SupportsLessThan](
    left: SortedUniqueList[T],
    right: SortedUniqueList[T],
) -> list[tuple[AlignmentKind, T]]:
    """Return ``(kind, value)`` for every alignment case, in scan order.

    Useful for diff/patch-style callers that need to tell leading and
    trailing excess apart from interleaved gaps.
    """
    return [(case.kind, case.value) for case in iter_alignments(left, right)]


def alignment_counts[T: SupportsLessThan](
    left: SortedUniqueList[T],
    right: SortedUniqueList[T],
) -> Counter[AlignmentKind]:
    """Count how many elements fall into each alignment case."""
    return Counter(case.kind for case in iter_alignments(left, right))


__all__ = [
    "alignment_counts",
    "classify",
    "difference",
    "intersection",
    "symmetric_difference",
    "union",
]
