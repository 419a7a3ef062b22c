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


"""Alignment cases reported by the lock-step scan.

Each case is a small frozen view onto element(s) of the two source lists.
Cases are handed to an ``align`` classifier one at a time and should not be
retained past that call. They support structural pattern matching::

    match case:
        case Match(left, right):
            ...
        case ExcessLeftHead(value) | DisjointLeft(value) | ExcessLeftTail(value):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sortalign.core.model_types import AlignmentKind, LeftOrRight


@dataclass(frozen=True, slots=True)
class Match[T]:
    """Equal keys found on both sides; ``value`` is the left instance."""

    left: T
    right: T
    kind: ClassVar[AlignmentKind] = AlignmentKind.MATCH

    @property
    def value(self) -> T:
        return self.left

    @property
    def side(self) -> LeftOrRight | None:
        return None


@dataclass(frozen=True, slots=True)
class _SingleSided[T]:
    value: T
    kind: ClassVar[AlignmentKind]

    @property
    def side(self) -> LeftOrRight | None:
        return self.kind.side


class ExcessLeftHead[T](_SingleSided[T]):
    """Left-only key seen before the right side consumed anything."""

    __slots__ = ()
    kind = AlignmentKind.EXCESS_LEFT_HEAD


class ExcessRightHead[T](_SingleSided[T]):
    """Right-only key seen before the left side consumed anything."""

    __slots__ = ()
    kind = AlignmentKind.EXCESS_RIGHT_HEAD


class DisjointLeft[T](_SingleSided[T]):
    """Left-only key in the interior, after the right side consumed something."""

    __slots__ = ()
    kind = AlignmentKind.DISJOINT_LEFT


class DisjointRight[T](_SingleSided[T]):
    """Right-only key in the interior, after the left side consumed something."""

    __slots__ = ()
    kind = AlignmentKind.DISJOINT_RIGHT


class ExcessLeftTail[T](_SingleSided[T]):
    """Left key remaining once the right side is exhausted."""

    __slots__ = ()
    kind = AlignmentKind.EXCESS_LEFT_TAIL


class ExcessRightTail[T](_SingleSided[T]):
    """Right key remaining once the left side is exhausted."""

    __slots__ = ()
    kind = AlignmentKind.EXCESS_RIGHT_TAIL


type Alignment[T] = (
    Match[T]
    | ExcessLeftHead[T]
    | ExcessRightHead[T]
    | DisjointLeft[T]
    | DisjointRight[T]
    | ExcessLeftTail[T]
    | ExcessRightTail[T]
)

__all__ = [
    "Alignment",
    "DisjointLeft",
    "DisjointRight",
    "ExcessLeftHead",
    "ExcessLeftTail",
    "ExcessRightHead",
    "ExcessRightTail",
    "Match",
]
