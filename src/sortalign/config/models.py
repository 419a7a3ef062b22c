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


"""Configuration models and validation for sortalign.

Raw settings from TOML files and environment variables are validated by the
pydantic ``ConfigModel`` and then collapsed into the frozen ``Config``
dataclass used at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from sortalign._infra.exceptions import SortalignValidationError
from sortalign._infra.precedence import resolve_with_precedence
from sortalign.core.model_types import LogFormat

if TYPE_CHECKING:
    from pathlib import Path

LogLevelName = Literal["debug", "info", "warning", "error"]

DEFAULT_LOG_FORMAT: Final[LogFormat] = LogFormat.TEXT
DEFAULT_LOG_LEVEL: Final[LogLevelName] = "info"


class ConfigValidationError(SortalignValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid sortalign configuration in {path}: {error}")


class ConfigModel(BaseModel):
    """Pydantic model for validating sortalign settings.

    Every field is optional so that unset values can fall through the
    precedence chain. The same model validates TOML tables and environment
    overrides.

    Attributes:
        log_format: Formatter used by ``configure_logging``.
        log_level: Verbosity used by ``configure_logging``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    log_format: LogFormat | None = None
    log_level: LogLevelName | None = None

    @field_validator("log_format", "log_level", mode="before")
    @classmethod
    def _normalise_choice(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


@dataclass(slots=True, frozen=True)
class Config:
    """Resolved runtime configuration.

    Attributes:
        log_format: Preferred log output format.
        log_level: Preferred log verbosity.
    """

    log_format: LogFormat = DEFAULT_LOG_FORMAT
    log_level: LogLevelName = DEFAULT_LOG_LEVEL


def config_from_models(file_model: ConfigModel | None, env_model: ConfigModel | None) -> Config:
    """Collapse file and environment models into a runtime ``Config``.

    Args:
        file_model: Settings read from a configuration file, if any.
        env_model: Settings read from environment variables, if any.

    Returns:
        Config with environment values taking precedence over file values.
    """
    file_values = file_model or ConfigModel()
    env_values = env_model or ConfigModel()
    return Config(
        log_format=resolve_with_precedence(env_values.log_format, file_values.log_format, default=DEFAULT_LOG_FORMAT),
        log_level=resolve_with_precedence(env_values.log_level, file_values.log_level, default=DEFAULT_LOG_LEVEL),
    )


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "DEFAULT_LOG_LEVEL",
    "Config",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "LogLevelName",
    "config_from_models",
]
