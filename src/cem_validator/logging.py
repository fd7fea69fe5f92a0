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

"""Structured logging utilities and the report sink used by validation runs."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final, Literal, Protocol, TypedDict, Unpack, cast, override

from cem_validator.core.model_types import LogComponent, LogFormat, RuleId, Severity
from cem_validator.json import normalize_enums_for_json

if TYPE_CHECKING:
    from typing import TextIO

ROOT_LOGGER_NAME: Final[str] = "cem_validator"
REPORTING_LOGGER_NAME: Final[str] = "cem_validator.reporting"
LOG_FORMAT_ENV: Final[str] = "CEM_VALIDATOR_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "CEM_VALIDATOR_LOG_LEVEL"

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
    "rule",
    "severity",
    "path",
    "counts",
    "outcome",
    "details",
)
CHILD_LOGGERS: Final[tuple[str, ...]] = (
    "cem_validator.cli",
    "cem_validator.config",
    "cem_validator.manifest",
    "cem_validator.rules",
    "cem_validator.reporting",
    "cem_validator.validator",
)

ANSI_RESET: Final[str] = "\x1b[0m"
ANSI_RED: Final[str] = "\x1b[31m"
ANSI_GREEN: Final[str] = "\x1b[32m"
ANSI_YELLOW: Final[str] = "\x1b[33m"
SUCCESS_OUTCOME: Final[str] = "success"


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Resolved logging configuration."""

    format: LogFormat
    level: int
    level_name: str
    colour: bool


class JSONLogFormatter(logging.Formatter):
    """Render log records as structured JSON objects."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        for name in STRUCTURED_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """Readable, single-line formatter for CLI output.

    With ``colour`` enabled, errors render red, warnings yellow and records
    tagged with the success outcome green.
    """

    def __init__(self, *, colour: bool = False) -> None:
        super().__init__("[%(levelname)s] %(message)s")
        self.colour = colour

    @override
    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.colour:
            return text
        code = _colour_for(record)
        return f"{code}{text}{ANSI_RESET}" if code else text


def _colour_for(record: logging.LogRecord) -> str | None:
    if record.levelno >= logging.ERROR:
        return ANSI_RED
    if record.levelno >= logging.WARNING:
        return ANSI_YELLOW
    if getattr(record, "outcome", None) == SUCCESS_OUTCOME:
        return ANSI_GREEN
    return None


_LEVELS_BY_NAME: Final[Mapping[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
DEFAULT_LOG_LEVEL: Final[str] = "info"


def _env_or(value: str | int | None, env_name: str) -> str | int | None:
    if value is not None:
        return value
    return os.getenv(env_name) or None


def _resolve_format(preferred: LogFormat | str | None) -> LogFormat:
    chosen = _env_or(preferred, LOG_FORMAT_ENV)
    if chosen is None:
        return LogFormat.TEXT
    return chosen if isinstance(chosen, LogFormat) else LogFormat.from_str(str(chosen))


def _resolve_level(preferred: str | int | None) -> tuple[int, str]:
    # Unknown names fall back to info.
    chosen = _env_or(preferred, LOG_LEVEL_ENV)
    if isinstance(chosen, int):
        return chosen, logging.getLevelName(chosen).lower()
    name = str(chosen or DEFAULT_LOG_LEVEL).strip().lower()
    if name not in _LEVELS_BY_NAME:
        name = DEFAULT_LOG_LEVEL
    return _LEVELS_BY_NAME[name], name


def _stream_is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _configure_handler(log_format: LogFormat, *, colour: bool | None) -> tuple[logging.Handler, bool]:
    handler: logging.StreamHandler[TextIO] = logging.StreamHandler()
    if log_format is LogFormat.JSON:
        handler.setFormatter(JSONLogFormatter())
        return handler, False
    use_colour = _stream_is_tty(handler.stream) if colour is None else colour
    handler.setFormatter(TextLogFormatter(colour=use_colour))
    return handler, use_colour


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
    colour: bool | None = None,
) -> LogConfig:
    """Configure cem-validator logging according to the requested format and level.

    Args:
        log_format: Desired log output format. ``None`` falls back to the
            ``CEM_VALIDATOR_LOG_FORMAT`` environment variable or ``text``.
        log_level: Preferred verbosity (string or numeric). ``None`` consults
            ``CEM_VALIDATOR_LOG_LEVEL`` or defaults to ``info``.
        colour: Force ANSI colours on or off for text output. ``None`` enables
            them only when the handler stream is a terminal.

    Returns:
        A ``LogConfig`` describing the selected formatter and level, which is
        also applied to the root and child loggers.
    """
    selected_format = _resolve_format(log_format)
    level_value, level_name = _resolve_level(log_level)
    handler, use_colour = _configure_handler(selected_format, colour=colour)

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level_value)
    package_logger.propagate = False
    for child in CHILD_LOGGERS:
        logging.getLogger(child).setLevel(level_value)
    return LogConfig(
        format=selected_format,
        level=level_value,
        level_name=level_name,
        colour=use_colour,
    )


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Structured logging extras accepted by cem-validator log records."""

    rule: RuleId
    severity: Severity
    path: str
    counts: Mapping[Severity, int]
    outcome: str
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    rule: RuleId | str
    severity: Severity | str
    path: str | os.PathLike[str]
    counts: Mapping[Severity, int]
    outcome: str
    details: Mapping[str, object]


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Return a consistently typed ``logging.extra`` payload.

    Args:
        component: Logical logging component for the record.
        **kwargs: Optional structured fields (rule, severity, path, counts, ...).

    Returns:
        Mapping suitable for the ``extra`` parameter when emitting log records.
    """
    extra: StructuredLogExtra = {"component": component}
    rule = kwargs.get("rule")
    if rule is not None:
        extra["rule"] = RuleId(rule)
    severity = kwargs.get("severity")
    if severity is not None:
        extra["severity"] = severity if isinstance(severity, Severity) else Severity.from_str(severity)
    path = kwargs.get("path")
    if path is not None:
        extra["path"] = os.fspath(path)
    counts = kwargs.get("counts")
    if counts:
        extra["counts"] = dict(counts)
    outcome = kwargs.get("outcome")
    if outcome:
        extra["outcome"] = outcome
    details = kwargs.get("details")
    if details:
        extra["details"] = dict(details)
    return extra


class ReportSink(Protocol):
    """Destination for the human-readable output of a validation run.

    Every operation drops its message unless the sink is verbose or the call
    passes ``force=True``.
    """

    def info(self, message: str, *, force: bool = False) -> None: ...

    def success(self, message: str, *, force: bool = False) -> None: ...

    def warning(self, message: str, *, force: bool = False) -> None: ...

    def error(self, message: str, *, force: bool = False) -> None: ...


def _default_reporting_logger() -> logging.Logger:
    return logging.getLogger(REPORTING_LOGGER_NAME)


@dataclass(slots=True)
class LoggingSink:
    """Report sink writing to the ``cem_validator.reporting`` logger.

    Attributes:
        debug: When true every message is emitted; otherwise only forced ones.
        logger: Logger receiving the records.
    """

    debug: bool = False
    logger: logging.Logger = field(default_factory=_default_reporting_logger)

    def info(self, message: str, *, force: bool = False) -> None:
        self._emit(logging.INFO, message, force=force)

    def success(self, message: str, *, force: bool = False) -> None:
        self._emit(logging.INFO, message, force=force, outcome=SUCCESS_OUTCOME)

    def warning(self, message: str, *, force: bool = False) -> None:
        self._emit(logging.WARNING, message, force=force)

    def error(self, message: str, *, force: bool = False) -> None:
        self._emit(logging.ERROR, message, force=force)

    def _emit(self, level: int, message: str, *, force: bool, outcome: str | None = None) -> None:
        if not (self.debug or force):
            return
        extra = structured_extra(LogComponent.REPORTING, outcome=outcome) if outcome else None
        self.logger.log(level, message, extra=cast("Mapping[str, object] | None", extra))


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "LogConfig",
    "LoggingSink",
    "ReportSink",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
