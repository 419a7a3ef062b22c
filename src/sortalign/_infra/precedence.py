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


"""Layered setting resolution.

Settings are looked up through an ordered stack of optional layers, highest
precedence first, for example an explicit argument, then an environment
override, then a configuration file. The first layer that holds a value
wins; ``default`` applies when every layer is unset.
"""

from __future__ import annotations


def resolve_with_precedence[T](*layers: T | None, default: T) -> T:
    """Return the first layer that is not None, or ``default``.

    Args:
        *layers: Candidate values ordered from highest to lowest precedence.
            ``None`` marks a layer that does not set the value. Falsy values
            such as ``False`` or ``0`` still count as set.
        default: Value used when every layer is unset.

    Returns:
        The highest-precedence value that is set.

    Example:
        >>> resolve_with_precedence(None, "json", "text", default="text")
        'json'
        >>> resolve_with_precedence(False, True, default=True)
        False
    """
    for value in layers:
        if value is not None:
            return value
    return default


__all__ = ["resolve_with_precedence"]
