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


"""Common exception hierarchy for sortalign.

Two families live here. Validation errors (``DuplicateKeyError``,
``OrderViolationError``) are raised for caller-triggerable conditions on a
single container and are safe to catch. Invariant errors derive from
``AssertionError`` and signal a broken contract inside ``merge``/``align``;
they are never caught by the library.
"""

from __future__ import annotations

__all__ = [
    "ClassifierContractViolation",
    "DuplicateKeyError",
    "InputOrderViolation",
    "OrderViolationError",
    "OutputOrderViolation",
    "SortalignError",
    "SortalignInvariantError",
    "SortalignTypeError",
    "SortalignValidationError",
]


class SortalignError(Exception):
    """Base error for all sortalign exceptions."""


class SortalignValidationError(SortalignError, ValueError):
    """Raised when input data fails validation checks."""


class SortalignTypeError(SortalignError, TypeError):
    """Raised when input data has an unexpected type."""


class SortalignInvariantError(SortalignError, AssertionError):
    """Raised when an internal ordering invariant is violated."""


class DuplicateKeyError(SortalignValidationError):
    """Raised by ``insert`` when an element with an equal key already exists."""

    def __init__(self, element: object, index: int) -> None:
        """Initialize the exception with the rejected element.

        Args:
            element: Element whose key is already present.
            index: Position of the existing equal-keyed element.
        """
        self.element = element
        self.index = index
        super().__init__(f"Element {element!r} already exists at index {index}")


class OrderViolationError(SortalignValidationError):
    """Raised by ``push`` when the element does not exceed the current maximum."""

    def __init__(self, element: object, last: object) -> None:
        """Initialize the exception with the rejected element and current maximum.

        Args:
            element: Element that was pushed.
            last: Current last (largest) element of the sequence.
        """
        self.element = element
        self.last = last
        super().__init__(f"Cannot push {element!r}: it must be strictly greater than {last!r}")


class ClassifierContractViolation(SortalignInvariantError):
    """Raised by ``align`` when a classifier substitutes a non-equal value."""

    def __init__(self, kind: str, original: object, replacement: object) -> None:
        """Initialize the exception with the offending substitution.

        Args:
            kind: Alignment case that was being classified.
            original: Element the alignment case was derived from.
            replacement: Value returned by the classifier.
        """
        self.kind = kind
        self.original = original
        self.replacement = replacement
        super().__init__(
            f"Classifier returned {replacement!r} for {kind} case of {original!r}; "
            "replacements must compare equal to the original element",
        )


class OutputOrderViolation(SortalignInvariantError):
    """Raised when merge/align output would lose strict ascending order."""

    def __init__(self, element: object, last: object) -> None:
        """Initialize the exception with the out-of-order output element.

        Args:
            element: Element that would have been appended.
            last: Last element already in the output.
        """
        self.element = element
        self.last = last
        super().__init__(
            f"Output order violated: {element!r} follows {last!r}; "
            "an input sequence no longer satisfies its ordering invariant",
        )


class InputOrderViolation(SortalignInvariantError):
    """Raised by a verified merge/align when an input breaks strict ascending order."""

    def __init__(self, side: str, index: int, element: object, previous: object) -> None:
        """Initialize the exception with the first out-of-order input element.

        Args:
            side: Which input (``left`` or ``right``) is corrupted.
            index: Position of the offending element in that input.
            element: Element that does not exceed its predecessor.
            previous: Element immediately before it.
        """
        self.side = side
        self.index = index
        self.element = element
        self.previous = previous
        super().__init__(
            f"{side} input is not strictly ascending at index {index}: {element!r} follows {previous!r}",
        )
