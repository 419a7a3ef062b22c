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


"""Configuration loading for sortalign.

Settings come from, in increasing precedence, built-in defaults, the first
configuration file that carries sortalign data, and ``SORTALIGN_*``
environment variables. Files are searched in this order:

1. ``sortalign.toml`` (top-level table)
2. ``.sortalign.toml`` (top-level table)
3. ``pyproject.toml`` (``[tool.sortalign]`` table)
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

from pydantic import ValidationError

from sortalign._infra.logging_utils import LOG_FORMAT_ENV, LOG_LEVEL_ENV, structured_extra
from sortalign.core.model_types import LogComponent

from .models import (
    Config,
    ConfigModel,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    config_from_models,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger("sortalign.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("sortalign.toml", ".sortalign.toml", "pyproject.toml")
ENV_FIELDS: Final[dict[str, str]] = {
    "log_format": LOG_FORMAT_ENV,
    "log_level": LOG_LEVEL_ENV,
}


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Resolved configuration instance.
        path: Filesystem path the file settings were loaded from, or None when
            no configuration file contributed.
    """

    config: Config
    path: Path | None


def load_config(explicit_path: Path | None = None, *, environ: Mapping[str, str] | None = None) -> Config:
    """Load sortalign configuration from disk and the environment.

    Args:
        explicit_path: Optional configuration file or directory to search. When
            None, the current working directory is searched.
        environ: Environment mapping to read overrides from. Defaults to
            ``os.environ``.

    Returns:
        The resolved ``Config``.
    """
    return load_config_with_metadata(explicit_path, environ=environ).config


def load_config_with_metadata(
    explicit_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> LoadedConfig:
    """Load sortalign configuration with metadata about the source file.

    An explicit file path is the only candidate checked and must contain
    sortalign settings. An explicit directory, or the current working
    directory, is searched using ``CONFIG_FILENAMES`` and the first file
    holding sortalign data wins.

    Args:
        explicit_path: Optional configuration file or directory.
        environ: Environment mapping to read overrides from.

    Returns:
        LoadedConfig: Resolved configuration and the file it originated from.

    Raises:
        ConfigReadError: If a candidate file cannot be read or parsed.
        InvalidConfigFileError: If a candidate file holds invalid settings.
        ConfigValidationError: If an environment override is invalid.
    """
    env_model = _env_model(os.environ if environ is None else environ)
    for candidate, explicit in _config_search_order(explicit_path):
        file_model = _load_candidate_model(candidate, explicit=explicit)
        if file_model is not None:
            logger.debug(
                "Loaded sortalign configuration from %s",
                candidate,
                extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
            )
            return LoadedConfig(config=config_from_models(file_model, env_model), path=candidate.resolve())
    logger.debug(
        "No sortalign configuration file found; using defaults",
        extra=structured_extra(component=LogComponent.CONFIG),
    )
    return LoadedConfig(config=config_from_models(None, env_model), path=None)


def _config_search_order(explicit_path: Path | None) -> list[tuple[Path, bool]]:
    if explicit_path is not None:
        resolved = explicit_path if explicit_path.is_absolute() else (Path.cwd() / explicit_path).resolve()
        if not resolved.is_dir():
            return [(resolved, True)]
        base_dir = resolved
    else:
        base_dir = Path.cwd()
    return [(base_dir / name, False) for name in CONFIG_FILENAMES]


def _load_candidate_model(candidate: Path, *, explicit: bool) -> ConfigModel | None:
    if not candidate.exists():
        if explicit:
            raise ConfigReadError(candidate, FileNotFoundError(str(candidate)))
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_sortalign_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define a [tool.sortalign] section"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    try:
        return ConfigModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc


def _extract_sortalign_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Extract the sortalign configuration payload from a TOML mapping.

    Args:
        candidate: Source configuration path.
        raw_map: Data parsed from the TOML document.

    Returns:
        Mapping to validate, or None when a pyproject.toml has no sortalign table.

    Raises:
        InvalidConfigFileError: If [tool.sortalign] exists but is not a table.
    """
    if candidate.name != "pyproject.toml":
        return raw_map
    tool_section = raw_map.get("tool")
    if not isinstance(tool_section, dict):
        return None
    section = cast("dict[str, object]", tool_section).get("sortalign")
    if section is None:
        return None
    if not isinstance(section, dict):
        message = "[tool.sortalign] must be a TOML table"
        raise InvalidConfigFileError(candidate, ValueError(message))
    return cast("dict[str, object]", section)


def _env_model(environ: Mapping[str, str]) -> ConfigModel | None:
    payload: dict[str, str] = {}
    for field, name in ENV_FIELDS.items():
        value = environ.get(name, "").strip()
        if value:
            payload[field] = value
    if not payload:
        return None
    try:
        return ConfigModel.model_validate(payload)
    except ValidationError as exc:
        message = f"Invalid sortalign environment settings: {exc}"
        raise ConfigValidationError(message) from exc


__all__ = [
    "CONFIG_FILENAMES",
    "LoadedConfig",
    "load_config",
    "load_config_with_metadata",
]
