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


"""Property-based tests for merge and align."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sortalign import (
    Alignment,
    AlignmentKind,
    LeftOrRight,
    Match,
    SortedUniqueList,
    align,
    alignment_counts,
    is_sorted_unique,
    keep_left,
    merge,
)
from tests.property_based.strategies import Keyed, keyed_sequences, sorted_unique_lists

pytestmark = [pytest.mark.property, pytest.mark.merge]

HEAD_KINDS = {AlignmentKind.EXCESS_LEFT_HEAD, AlignmentKind.EXCESS_RIGHT_HEAD}
TAIL_KINDS = {AlignmentKind.EXCESS_LEFT_TAIL, AlignmentKind.EXCESS_RIGHT_TAIL}


@given(sorted_unique_lists(), sorted_unique_lists(), st.sampled_from(tuple(LeftOrRight)))
def test_merge_output_is_sorted_union(
    left: SortedUniqueList[int],
    right: SortedUniqueList[int],
    side: LeftOrRight,
) -> None:
    result = merge(left, right, lambda _a, _b: side)
    assert is_sorted_unique(result)
    assert set(result) == set(left) | set(right)


@given(keyed_sequences("left"), keyed_sequences("right"), st.booleans())
def test_merge_keeps_exactly_the_chosen_instance(
    left: SortedUniqueList[Keyed],
    right: SortedUniqueList[Keyed],
    prefer_left: bool,
) -> None:
    chosen = LeftOrRight.LEFT if prefer_left else LeftOrRight.RIGHT
    result = merge(left, right, lambda _a, _b: chosen)
    shared = {item.key for item in left} & {item.key for item in right}
    for item in result:
        if item.key in shared:
            assert item.tag == chosen.value
    assert len(result) == len({item.key for item in left} | {item.key for item in right})


@given(sorted_unique_lists(), sorted_unique_lists())
def test_align_pass_through_equals_merge(left: SortedUniqueList[int], right: SortedUniqueList[int]) -> None:
    assert align(left, right, lambda case: case.value) == merge(left, right, keep_left)


@given(sorted_unique_lists(), sorted_unique_lists())
def test_align_veto_all_is_empty(left: SortedUniqueList[int], right: SortedUniqueList[int]) -> None:
    assert len(align(left, right, lambda _case: None)) == 0


@given(sorted_unique_lists(), st.sampled_from(tuple(LeftOrRight)))
def test_merge_with_itself_is_identity(items: SortedUniqueList[int], side: LeftOrRight) -> None:
    assert merge(items, items, lambda _a, _b: side) == items


@given(sorted_unique_lists(), sorted_unique_lists())
def test_classifier_sees_each_key_once_in_ascending_order(
    left: SortedUniqueList[int],
    right: SortedUniqueList[int],
) -> None:
    seen: list[int] = []

    def _record(case: Alignment[int]) -> int | None:
        seen.append(case.value)
        return None

    _ = align(left, right, _record)
    assert seen == sorted(set(left) | set(right))


@given(sorted_unique_lists(), sorted_unique_lists())
def test_case_counts_partition_both_inputs(left: SortedUniqueList[int], right: SortedUniqueList[int]) -> None:
    counts = alignment_counts(left, right)
    left_total = sum(count for kind, count in counts.items() if kind.side is LeftOrRight.LEFT)
    right_total = sum(count for kind, count in counts.items() if kind.side is LeftOrRight.RIGHT)
    matches = counts[AlignmentKind.MATCH]
    assert left_total + matches == len(left)
    assert right_total + matches == len(right)


@given(sorted_unique_lists(), sorted_unique_lists())
def test_head_cases_precede_and_tail_cases_follow(
    left: SortedUniqueList[int],
    right: SortedUniqueList[int],
) -> None:
    kinds: list[AlignmentKind] = []

    def _record(case: Alignment[int]) -> int | None:
        kinds.append(case.kind)
        return case.value if isinstance(case, Match) else None

    _ = align(left, right, _record)
    interior = [index for index, kind in enumerate(kinds) if kind not in HEAD_KINDS | TAIL_KINDS]
    heads = [index for index, kind in enumerate(kinds) if kind in HEAD_KINDS]
    tails = [index for index, kind in enumerate(kinds) if kind in TAIL_KINDS]
    if interior:
        assert all(index < interior[0] for index in heads)
        assert all(index > interior[-1] for index in tails)
    assert len({kinds[index] for index in heads}) <= 1
    assert len({kinds[index] for index in tails}) <= 1
