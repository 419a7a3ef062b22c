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


"""Merge-join engine over two ``SortedUniqueList`` inputs.

Both public entry points drive the same private generator, ``_lockstep``,
which walks the two inputs with one cursor each and yields an alignment case
for every element in ascending key order:

1. both present, ``l < r``: consume left (head or disjoint)
2. both present, ``r < l``: consume right (head or disjoint)
3. equal keys: consume one from each side as a ``Match``
4. left exhausted: every remaining right element is a right tail
5. right exhausted: every remaining left element is a left tail

Head versus disjoint is decided by whether the *other* cursor has consumed
anything yet. There is no backtracking, no re-sorting and no auxiliary index;
the scan is O(n + m). Output is built with ``SortedUniqueList.push`` so an
ordering defect that reaches the output surfaces immediately as
``OutputOrderViolation``. Passing ``verify=True`` also re-checks both inputs
before the scan, which catches corruption the classifier would otherwise
drop unseen.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Callable, Iterator, Sequence
from itertools import islice, pairwise

from sortalign._infra.exceptions import (
    ClassifierContractViolation,
    InputOrderViolation,
    OrderViolationError,
    OutputOrderViolation,
    SortalignTypeError,
)
from sortalign._infra.logging_utils import structured_extra
from sortalign.alignment import (
    Alignment,
    DisjointLeft,
    DisjointRight,
    ExcessLeftHead,
    ExcessLeftTail,
    ExcessRightHead,
    ExcessRightTail,
    Match,
)
from sortalign.core.model_types import AlignmentKind, LeftOrRight, LogComponent
from sortalign.sequence import SortedUniqueList, SupportsLessThan

logger: logging.Logger = logging.getLogger("sortalign.merge")

type TieBreak[T] = Callable[[T, T], LeftOrRight]
type Classifier[T] = Callable[[Alignment[T]], T | None]


def keep_left[T](left: T, right: T) -> LeftOrRight:  # noqa: ARG001
    """Tie-break that keeps the left element."""
    return LeftOrRight.LEFT


def keep_right[T](left: T, right: T) -> LeftOrRight:  # noqa: ARG001
    """Tie-break that keeps the right element."""
    return LeftOrRight.RIGHT


def _lockstep[T: SupportsLessThan](left: Sequence[T], right: Sequence[T]) -> Iterator[Alignment[T]]:
    # i and j double as the per-side consumption counters
    i = j = 0
    left_len, right_len = len(left), len(right)
    while i < left_len and j < right_len:
        left_value, right_value = left[i], right[j]
        if left_value < right_value:
            yield ExcessLeftHead(left_value) if j == 0 else DisjointLeft(left_value)
            i += 1
        elif right_value < left_value:
            yield ExcessRightHead(right_value) if i == 0 else DisjointRight(right_value)
            j += 1
        else:
            yield Match(left_value, right_value)
            i += 1
            j += 1
    for item in islice(left, i, None):
        yield ExcessLeftTail(item)
    for item in islice(right, j, None):
        yield ExcessRightTail(item)


def iter_alignments[T: SupportsLessThan](
    left: SortedUniqueList[T],
    right: SortedUniqueList[T],
) -> Iterator[Alignment[T]]:
    """Yield the alignment case of every element of both inputs, in key order.

    This is the read-only form of the scan behind ``merge`` and ``align``.
    """
    return _lockstep(left, right)


def _push_output[T: SupportsLessThan](output: SortedUniqueList[T], value: T) -> None:
    try:
        output.push(value)
    except OrderViolationError as exc:
        raise OutputOrderViolation(exc.element, exc.last) from exc


def _resolve_tie[T](tie_break: TieBreak[T], left: T, right: T) -> T:
    choice = tie_break(left, right)
    if not isinstance(choice, LeftOrRight):
        message = f"tie_break must return a LeftOrRight member, got {choice!r}"
        raise SortalignTypeError(message)
    return left if choice is LeftOrRight.LEFT else right


def _verify_inputs[T: SupportsLessThan](left: Sequence[T], right: Sequence[T]) -> None:
    for side, items in ((LeftOrRight.LEFT, left), (LeftOrRight.RIGHT, right)):
        for index, (previous, current) in enumerate(pairwise(items), start=1):
            if not (previous < current):
                raise InputOrderViolation(side, index, current, previous)


def _finish[T: SupportsLessThan](
    output: SortedUniqueList[T],
    *,
    operation: str,
    left_size: int,
    right_size: int,
    counts: Counter[AlignmentKind],
    started: float,
    details: dict[str, object] | None = None,
) -> SortedUniqueList[T]:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "%s combined %d + %d elements into %d",
            operation,
            left_size,
            right_size,
            len(output),
            extra=structured_extra(
                component=LogComponent.MERGE,
                operation=operation,
                left_size=left_size,
                right_size=right_size,
                output_size=len(output),
                duration_ms=(time.perf_counter() - started) * 1000.0,
                counts=counts,
                details=details or {},
            ),
        )
    return output


def merge[T: SupportsLessThan](
    left: SortedUniqueList[T],
    right: SortedUniqueList[T],
    tie_break: TieBreak[T],
    *,
    verify: bool = False,
) -> SortedUniqueList[T]:
    """Merge two sorted unique lists into a new one holding the union of keys.

    Elements present on one side only are copied through unchanged. For each
    key present on both sides ``tie_break(left_element, right_element)`` is
    called exactly once, in ascending key order, and decides which instance
    survives. No key is ever dropped.

    Args:
        left: First input; never mutated.
        right: Second input; never mutated.
        tie_break: Selector for equal-keyed pairs. Use ``keep_left`` or
            ``keep_right`` for the common fixed policies.
        verify: Check that both inputs are strictly ascending before the scan.
            Costs one extra pass over each input.

    Returns:
        A new ``SortedUniqueList``.

    Raises:
        SortalignTypeError: If ``tie_break`` returns something other than a
            ``LeftOrRight`` member.
        OutputOrderViolation: If an input no longer satisfies its ordering
            invariant (for example after ``raw_mut`` edits).
        InputOrderViolation: If ``verify`` is set and an input is not strictly
            ascending.
    """
    started = time.perf_counter()
    if verify:
        _verify_inputs(left, right)
    output = SortedUniqueList[T].with_capacity(len(left) + len(right))
    counts: Counter[AlignmentKind] = Counter()
    for case in _lockstep(left, right):
        counts[case.kind] += 1
        match case:
            case Match(left=left_value, right=right_value):
                value = _resolve_tie(tie_break, left_value, right_value)
            case _:
                value = case.value
        _push_output(output, value)
    return _finish(
        output,
        operation="merge",
        left_size=len(left),
        right_size=len(right),
        counts=counts,
        started=started,
    )


def align[T: SupportsLessThan](
    left: SortedUniqueList[T],
    right: SortedUniqueList[T],
    classifier: Classifier[T],
    *,
    verify: bool = False,
) -> SortedUniqueList[T]:
    """Classify every element pairing of two sorted unique lists.

    Every element of either input is wrapped in its alignment case and passed
    to ``classifier`` exactly once, in ascending key order; a shared key is
    reported once as a ``Match``. The classifier returns ``None`` to drop the
    element or a value to keep. A kept value may be a different instance but
    must compare equal to ``case.value``, so the output stays strictly
    ascending.

    Args:
        left: First input; never mutated.
        right: Second input; never mutated.
        classifier: Callback deciding what survives for each case.
        verify: Check that both inputs are strictly ascending before the scan.
            Costs one extra pass over each input.

    Returns:
        A new ``SortedUniqueList`` with the surviving values.

    Raises:
        ClassifierContractViolation: If the classifier returns a value that does
            not compare equal to the element it was given.
        OutputOrderViolation: If an input no longer satisfies its ordering
            invariant.
        InputOrderViolation: If ``verify`` is set and an input is not strictly
            ascending.
    """
    started = time.perf_counter()
    if verify:
        _verify_inputs(left, right)
    output = SortedUniqueList[T].with_capacity(len(left) + len(right))
    counts: Counter[AlignmentKind] = Counter()
    dropped = 0
    for case in _lockstep(left, right):
        counts[case.kind] += 1
        replacement = classifier(case)
        if replacement is None:
            dropped += 1
            continue
        if not (replacement == case.value):
            raise ClassifierContractViolation(case.kind, case.value, replacement)
        _push_output(output, replacement)
    return _finish(
        output,
        operation="align",
        left_size=len(left),
        right_size=len(right),
        counts=counts,
        started=started,
        details={"dropped": dropped},
    )


__all__ = ["Classifier", "TieBreak", "align", "iter_alignments", "keep_left", "keep_right", "merge"]
