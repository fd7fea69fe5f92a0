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

"""Unit tests for logging configuration, formatters and the logging sink."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cem_validator.core.model_types import LogComponent, LogFormat, RuleId, Severity
from cem_validator.logging import (
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    CHILD_LOGGERS,
    LOG_FORMAT_ENV,
    LOG_LEVEL_ENV,
    ROOT_LOGGER_NAME,
    JSONLogFormatter,
    LoggingSink,
    TextLogFormatter,
    configure_logging,
    structured_extra,
)

pytestmark = pytest.mark.unit


def _record(level: int, message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("cem_validator.test", level, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_installs_single_handler() -> None:
    config = configure_logging("json", log_level="debug")
    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert config.format is LogFormat.JSON
    assert config.level == logging.DEBUG
    assert config.level_name == "debug"
    assert not config.colour
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JSONLogFormatter)
    assert not root.propagate
    assert all(logging.getLogger(name).level == logging.DEBUG for name in CHILD_LOGGERS)

    _ = configure_logging("text", log_level="warning", colour=False)
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, TextLogFormatter)


def test_configure_logging_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_FORMAT_ENV, "json")
    monkeypatch.setenv(LOG_LEVEL_ENV, "error")
    config = configure_logging()
    assert config.format is LogFormat.JSON
    assert config.level == logging.ERROR


def test_unknown_level_falls_back_to_info() -> None:
    assert configure_logging("text", log_level="chatty", colour=False).level == logging.INFO


def test_json_formatter_includes_structured_fields() -> None:
    record = _record(
        logging.WARNING,
        "finding",
        component=LogComponent.RULES,
        rule=RuleId.TAG_NAME,
        severity=Severity.ERROR,
        counts={Severity.ERROR: 2},
    )
    payload = json.loads(JSONLogFormatter().format(record))
    assert payload["level"] == "warning"
    assert payload["message"] == "finding"
    assert payload["logger"] == "cem_validator.test"
    assert payload["component"] == "rules"
    assert payload["rule"] == "manifest.tagName"
    assert payload["severity"] == "error"
    assert payload["counts"] == {"error": 2}
    assert "path" not in payload


def test_text_formatter_colours() -> None:
    plain = TextLogFormatter(colour=False)
    coloured = TextLogFormatter(colour=True)
    assert plain.format(_record(logging.ERROR, "boom")) == "[ERROR] boom"
    assert coloured.format(_record(logging.ERROR, "boom")) == f"{ANSI_RED}[ERROR] boom{ANSI_RESET}"
    assert coloured.format(_record(logging.INFO, "done", outcome="success")).startswith(ANSI_GREEN)
    assert coloured.format(_record(logging.INFO, "note")) == "[INFO] note"


def test_structured_extra_normalises_values() -> None:
    extra = structured_extra(
        LogComponent.CONFIG,
        rule="manifest.tagName",
        severity="WARNING",
        path=Path("pkg") / "package.json",
        counts={},
    )
    assert extra == {
        "component": LogComponent.CONFIG,
        "rule": RuleId.TAG_NAME,
        "severity": Severity.WARNING,
        "path": str(Path("pkg") / "package.json"),
    }


def test_logging_sink_drops_unforced_messages(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger=ROOT_LOGGER_NAME)
    sink = LoggingSink()
    sink.info("quiet")
    sink.warning("loud", force=True)
    sink.success("done")
    assert [record.getMessage() for record in caplog.records] == ["loud"]


def test_logging_sink_debug_emits_everything(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger=ROOT_LOGGER_NAME)
    sink = LoggingSink(debug=True)
    sink.info("started")
    sink.success("done")
    sink.error("failed")
    assert [(record.levelno, record.getMessage()) for record in caplog.records] == [
        (logging.INFO, "started"),
        (logging.INFO, "done"),
        (logging.ERROR, "failed"),
    ]
    assert getattr(caplog.records[1], "outcome", None) == "success"
    assert not hasattr(caplog.records[0], "outcome")
