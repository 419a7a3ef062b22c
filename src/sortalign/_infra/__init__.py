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


"""Private infrastructure for sortalign.

Submodules are imported on first attribute access:

- ``exceptions``: exception hierarchy
- ``error_codes``: stable ``SAxxx`` codes for that hierarchy
- ``logging_utils``: formatters, ``configure_logging`` and ``structured_extra``
- ``precedence``: first-set-wins resolution across setting layers
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from types import ModuleType

    from . import error_codes, exceptions, logging_utils, precedence

_LAZY_SUBMODULES: Final[frozenset[str]] = frozenset({"error_codes", "exceptions", "logging_utils", "precedence"})

__all__ = ["error_codes", "exceptions", "logging_utils", "precedence"]


def __getattr__(name: str) -> ModuleType:
    if name in _LAZY_SUBMODULES:
        module = importlib.import_module(f".{name}", __name__)
        globals()[name] = module
        return module
    message = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(message)


def __dir__() -> list[str]:
    return sorted(set(globals()) | _LAZY_SUBMODULES)
