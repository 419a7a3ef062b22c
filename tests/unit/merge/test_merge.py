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


"""Unit tests for merge (union with tie-break)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from sortalign import (
    InputOrderViolation,
    LeftOrRight,
    OutputOrderViolation,
    SortalignTypeError,
    SortedUniqueList,
    is_sorted_unique,
    keep_left,
    keep_right,
    merge,
)

pytestmark = [pytest.mark.unit, pytest.mark.merge]


@dataclass(frozen=True, order=True)
class Tagged:
    key: int
    source: str = field(compare=False)


def _tagged(source: str, *keys: int) -> SortedUniqueList[Tagged]:
    return SortedUniqueList[Tagged].from_sorted(Tagged(key, source) for key in keys)


def test_merge_produces_sorted_union() -> None:
    left = SortedUniqueList[int].from_iterable([5, 1, 8, 0])
    right = SortedUniqueList[int].from_iterable([55, 1, 5, 7, 9])
    result = merge(left, right, keep_left)
    assert is_sorted_unique(result)
    assert list(result) == [0, 1, 5, 7, 8, 9, 55]


def test_merge_method_form() -> None:
    left = SortedUniqueList[int].from_sorted([1, 3])
    right = SortedUniqueList[int].from_sorted([2, 3])
    assert list(left.merge(right, keep_left)) == [1, 2, 3]


def test_merge_does_not_mutate_inputs() -> None:
    left = SortedUniqueList[int].from_sorted([1, 2])
    right = SortedUniqueList[int].from_sorted([2, 3])
    _ = merge(left, right, keep_left)
    assert list(left) == [1, 2]
    assert list(right) == [2, 3]


def test_merge_with_empty_inputs() -> None:
    empty = SortedUniqueList[int]()
    items = SortedUniqueList[int].from_sorted([1, 2])
    assert list(merge(empty, empty, keep_left)) == []
    assert list(merge(items, empty, keep_left)) == [1, 2]
    assert list(merge(empty, items, keep_left)) == [1, 2]


def test_merge_tie_break_selects_side() -> None:
    left = _tagged("left", 1, 2, 3)
    right = _tagged("right", 2, 3, 4)
    kept_left = merge(left, right, keep_left)
    kept_right = merge(left, right, keep_right)
    assert [(item.key, item.source) for item in kept_left] == [
        (1, "left"),
        (2, "left"),
        (3, "left"),
        (4, "right"),
    ]
    assert [(item.key, item.source) for item in kept_right] == [
        (1, "left"),
        (2, "right"),
        (3, "right"),
        (4, "right"),
    ]


def test_merge_tie_break_called_once_per_shared_key_in_order() -> None:
    left = _tagged("left", 0, 2, 4, 6)
    right = _tagged("right", 1, 2, 3, 6, 9)
    calls: list[tuple[int, int]] = []

    def _alternate(a: Tagged, b: Tagged) -> LeftOrRight:
        calls.append((a.key, b.key))
        return LeftOrRight.LEFT if len(calls) % 2 else LeftOrRight.RIGHT

    result = merge(left, right, _alternate)
    assert calls == [(2, 2), (6, 6)]
    assert [item.source for item in result if item.key in {2, 6}] == ["left", "right"]


def test_merge_identical_inputs_is_identity() -> None:
    items = SortedUniqueList[int].from_sorted([-3, 0, 4, 11])
    assert merge(items, items, keep_right) == items


def test_merge_rejects_invalid_tie_break_result() -> None:
    left = SortedUniqueList[int].from_sorted([1])
    right = SortedUniqueList[int].from_sorted([1])
    with pytest.raises(SortalignTypeError, match="LeftOrRight"):
        _ = merge(left, right, lambda _a, _b: "left")  # type: ignore[arg-type,return-value]


def test_merge_detects_corrupted_input() -> None:
    left = SortedUniqueList[int].from_sorted([1, 2, 3])
    left.raw_mut()[:] = [3, 1]
    right = SortedUniqueList[int]()
    with pytest.raises(OutputOrderViolation) as excinfo:
        _ = merge(left, right, keep_left)
    assert excinfo.value.element == 1
    assert excinfo.value.last == 3
    assert isinstance(excinfo.value, AssertionError)


def test_merge_verify_reports_corrupted_right_input() -> None:
    left = SortedUniqueList[int].from_sorted([1, 2])
    right = SortedUniqueList[int].from_sorted([5, 6, 7])
    right.set_unchecked(2, 6)
    with pytest.raises(InputOrderViolation) as excinfo:
        _ = merge(left, right, keep_left, verify=True)
    assert excinfo.value.side == "right"
    assert excinfo.value.index == 2


def test_merge_ignores_config_files_and_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    _ = (tmp_path / "sortalign.toml").write_text("not = = toml\n", encoding="utf-8")
    monkeypatch.setenv("SORTALIGN_LOG_LEVEL", "loud")
    left = SortedUniqueList[int].from_sorted([1, 2])
    right = SortedUniqueList[int].from_sorted([2, 3])
    assert list(merge(left, right, keep_left)) == [1, 2, 3]
    assert list(merge(left, right, keep_left, verify=True)) == [1, 2, 3]
