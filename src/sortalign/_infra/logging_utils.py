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


"""Structured logging utilities shared across sortalign components."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Final, Literal, SupportsFloat, SupportsInt, TypedDict, Unpack, cast, override

from sortalign._infra.precedence import resolve_with_precedence
from sortalign.core.model_types import AlignmentKind, LogComponent, LogFormat

if TYPE_CHECKING:
    from sortalign.config.models import Config

ROOT_LOGGER_NAME: Final[str] = "sortalign"
LOG_FORMAT_ENV: Final[str] = "SORTALIGN_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "SORTALIGN_LOG_LEVEL"

LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = cast(
    "tuple[Literal['text', 'json'], ...]",
    tuple(format_.value for format_ in LogFormat),
)
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = (
    "debug",
    "info",
    "warning",
    "error",
)
STRUCTURED_FIELDS: Final[tuple[str, ...]] = (
    "component",
    "operation",
    "left_size",
    "right_size",
    "output_size",
    "duration_ms",
    "counts",
    "path",
    "details",
)
CHILD_LOGGERS: Final[tuple[str, ...]] = (
    "sortalign.merge",
    "sortalign.config",
)


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Resolved logging configuration for diagnostics and debugging."""

    format: LogFormat
    level: int
    level_name: str


def _normalise_enums(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        mapping = cast("Mapping[object, object]", value)
        return {str(_normalise_enums(key)): _normalise_enums(item) for key, item in mapping.items()}
    if isinstance(value, (list, tuple)):
        return [_normalise_enums(item) for item in cast("Iterable[object]", value)]
    return value


class JSONLogFormatter(logging.Formatter):
    """Render log records as structured JSON objects."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON string.

        Args:
            record: Log record to serialise.

        Returns:
            JSON-formatted string containing standard and structured fields.
        """
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(_normalise_enums(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """Readable, single-line formatter for console output."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")


def _coerce_log_format(log_format: LogFormat | str) -> LogFormat:
    if isinstance(log_format, LogFormat):
        return log_format
    return LogFormat.from_str(log_format)


def _coerce_log_level(level: str | int) -> tuple[int, str]:
    if isinstance(level, int):
        return level, logging.getLevelName(level).lower()
    value = str(level).strip().lower()
    match value:
        case "debug":
            return logging.DEBUG, "debug"
        case "warning":
            return logging.WARNING, "warning"
        case "error":
            return logging.ERROR, "error"
        case _:
            return logging.INFO, "info"


def _configure_handler(log_format: LogFormat) -> logging.Handler:
    handler = logging.StreamHandler()
    if log_format is LogFormat.JSON:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(TextLogFormatter())
    return handler


def _apply_child_levels(level: int, children: Iterable[str]) -> None:
    for child in children:
        logging.getLogger(child).setLevel(level)


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
    settings: Config | None = None,
) -> LogConfig:
    """Configure sortalign logging according to the requested format and level.

    The library never calls this on import; applications opt in. Arguments
    left as ``None`` fall back to ``settings``, which already folds the
    ``SORTALIGN_LOG_FORMAT`` / ``SORTALIGN_LOG_LEVEL`` environment variables
    over the configuration file, and finally to ``text`` / ``info``.

    Args:
        log_format: Desired log output format.
        log_level: Preferred verbosity (string or numeric).
        settings: Loaded configuration to fall back on. When omitted and an
            argument is missing, ``sortalign.config.load_config()`` is called
            for the current working directory.

    Returns:
        A ``LogConfig`` describing the selected formatter and resolved numeric
        log level, which is also applied to the root and child loggers.

    Raises:
        ValueError: If ``log_format`` names an unknown format.
        ConfigValidationError: If configuration has to be loaded and is invalid.
    """
    explicit_format = None if log_format is None else _coerce_log_format(log_format)
    if settings is None and (explicit_format is None or log_level is None):
        from sortalign.config.loader import load_config  # noqa: PLC0415

        settings = load_config()
    selected_format = resolve_with_precedence(
        explicit_format,
        settings.log_format if settings is not None else None,
        default=LogFormat.TEXT,
    )
    level_value, level_name = _coerce_log_level(
        resolve_with_precedence(
            log_level,
            settings.log_level if settings is not None else None,
            default="info",
        ),
    )

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(_configure_handler(selected_format))
    root_logger.setLevel(level_value)
    root_logger.propagate = False

    _apply_child_levels(level_value, CHILD_LOGGERS)
    return LogConfig(format=selected_format, level=level_value, level_name=level_name)


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Structured logging extras accepted by sortalign log records."""

    operation: str
    left_size: int
    right_size: int
    output_size: int
    duration_ms: float
    counts: Mapping[AlignmentKind, int]
    path: str
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    operation: str
    left_size: int
    right_size: int
    output_size: int
    duration_ms: float
    counts: Mapping[AlignmentKind, int]
    path: str | os.PathLike[str]
    details: Mapping[str, object]


def _normalise_path(value: object) -> str | None:
    if value is None:
        return None
    return os.fspath(cast("str | os.PathLike[str]", value))


def _to_float(value: object) -> float:
    return float(cast("SupportsFloat | str | float", value))


def _to_int(value: object) -> int:
    return int(cast("SupportsInt | str | int", value))


def _maybe_assign(
    extra: StructuredLogExtra,
    *,
    key: str,
    kwargs: dict[str, object],
    transform: Callable[[object], object | None] | None = None,
) -> None:
    if key not in kwargs:
        return
    value = kwargs[key]
    if value is None:
        return
    if transform is not None:
        value = transform(value)
        if value is None:
            return
    cast("dict[str, object]", extra)[key] = value


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Return a consistently typed ``logging.extra`` payload.

    Args:
        component: Logical logging component for the record.
        **kwargs: Optional structured fields (operation, sizes, duration, counts, etc.).

    Returns:
        Mapping suitable for the ``extra`` parameter when emitting log records.
    """
    extra: StructuredLogExtra = {"component": component}
    payload_kwargs = cast("dict[str, object]", kwargs)
    _maybe_assign(extra, key="operation", kwargs=payload_kwargs, transform=str)
    for size_key in ("left_size", "right_size", "output_size"):
        _maybe_assign(extra, key=size_key, kwargs=payload_kwargs, transform=_to_int)
    _maybe_assign(extra, key="duration_ms", kwargs=payload_kwargs, transform=_to_float)
    counts = payload_kwargs.get("counts")
    if isinstance(counts, Mapping) and counts:
        extra["counts"] = dict(cast("Mapping[AlignmentKind, int]", counts))
    _maybe_assign(extra, key="path", kwargs=payload_kwargs, transform=_normalise_path)
    details = payload_kwargs.get("details")
    if isinstance(details, Mapping) and details:
        extra["details"] = dict(cast("Mapping[str, object]", details))
    return extra


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "LogConfig",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
