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


"""sortalign - ordered unique lists with a linear merge-join engine.

Provides ``SortedUniqueList``, a strictly ascending duplicate-free container,
together with ``merge`` (union with a tie-break for shared keys) and
``align`` (classify every element pairing and let a callback decide what
survives). Both run as a single O(n + m) lock-step scan.
"""

from __future__ import annotations

from sortalign.exceptions import (
    ClassifierContractViolation,
    DuplicateKeyError,
    InputOrderViolation,
    OrderViolationError,
    OutputOrderViolation,
    SortalignError,
    SortalignInvariantError,
    SortalignTypeError,
    SortalignValidationError,
)

from .alignment import (
    Alignment,
    DisjointLeft,
    DisjointRight,
    ExcessLeftHead,
    ExcessLeftTail,
    ExcessRightHead,
    ExcessRightTail,
    Match,
)
from .config import Config, load_config
from .core.model_types import AlignmentKind, LeftOrRight
from .merge import align, iter_alignments, keep_left, keep_right, merge
from .sequence import SortedUniqueList, is_sorted_unique
from .setops import (
    alignment_counts,
    classify,
    difference,
    intersection,
    symmetric_difference,
    union,
)

__all__ = [
    "Alignment",
    "AlignmentKind",
    "ClassifierContractViolation",
    "Config",
    "DisjointLeft",
    "DisjointRight",
    "DuplicateKeyError",
    "InputOrderViolation",
    "ExcessLeftHead",
    "ExcessLeftTail",
    "ExcessRightHead",
    "ExcessRightTail",
    "LeftOrRight",
    "Match",
    "OrderViolationError",
    "OutputOrderViolation",
    "SortalignError",
    "SortalignInvariantError",
    "SortalignTypeError",
    "SortalignValidationError",
    "SortedUniqueList",
    "__version__",
    "align",
    "alignment_counts",
    "classify",
    "difference",
    "intersection",
    "is_sorted_unique",
    "iter_alignments",
    "keep_left",
    "keep_right",
    "load_config",
    "merge",
    "symmetric_difference",
    "union",
]

__version__ = "0.1.0"
