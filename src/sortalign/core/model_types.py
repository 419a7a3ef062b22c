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


"""Enumerations shared across sortalign.

This module collects the small closed vocabularies used by the container,
the merge-join engine and the logging layer:

- ``LeftOrRight``: tie-break selector returned to ``merge``
- ``AlignmentKind``: the seven classification cases reported by ``align``
- ``LogFormat`` / ``LogComponent``: structured logging vocabulary
"""

from __future__ import annotations

from enum import StrEnum

__all__ = [
    "AlignmentKind",
    "LeftOrRight",
    "LogComponent",
    "LogFormat",
]


class LeftOrRight(StrEnum):
    """Selector telling ``merge`` which of two equal-keyed elements to keep.

    Attributes:
        LEFT: Keep the element from the left (receiver) sequence.
        RIGHT: Keep the element from the right (argument) sequence.
    """

    LEFT = "left"
    RIGHT = "right"


class AlignmentKind(StrEnum):
    """Enumeration of the classification cases produced by the lock-step scan.

    Head cases happen before the opposite cursor has consumed anything, tail
    cases after the opposite side is exhausted, and disjoint cases cover the
    interior gaps in between.

    Attributes:
        MATCH: Key present in both sequences.
        EXCESS_LEFT_HEAD: Left-only key before the right side consumed anything.
        EXCESS_RIGHT_HEAD: Right-only key before the left side consumed anything.
        DISJOINT_LEFT: Left-only key in the interior of the scan.
        DISJOINT_RIGHT: Right-only key in the interior of the scan.
        EXCESS_LEFT_TAIL: Left key remaining after the right side ran out.
        EXCESS_RIGHT_TAIL: Right key remaining after the left side ran out.
    """

    MATCH = "match"
    EXCESS_LEFT_HEAD = "excess_left_head"
    EXCESS_RIGHT_HEAD = "excess_right_head"
    DISJOINT_LEFT = "disjoint_left"
    DISJOINT_RIGHT = "disjoint_right"
    EXCESS_LEFT_TAIL = "excess_left_tail"
    EXCESS_RIGHT_TAIL = "excess_right_tail"

    @property
    def side(self) -> LeftOrRight | None:
        """Return the side that owns the element, or ``None`` for matches."""
        match self:
            case AlignmentKind.MATCH:
                return None
            case (
                AlignmentKind.EXCESS_LEFT_HEAD
                | AlignmentKind.DISJOINT_LEFT
                | AlignmentKind.EXCESS_LEFT_TAIL
            ):
                return LeftOrRight.LEFT
            case _:
                return LeftOrRight.RIGHT


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable library components.

    Attributes:
        MERGE: Merge-join engine (``merge`` and ``align``).
        CONFIG: Configuration loading.
    """

    MERGE = "merge"
    CONFIG = "config"
