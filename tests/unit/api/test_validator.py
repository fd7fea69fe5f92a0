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

"""Unit tests for the validate entry point and CemValidator."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import pytest

from cem_validator import CemValidator, ValidationFailedError, validate
from cem_validator.exceptions import InvalidFilePathError, PackageJsonReadError
from cem_validator.logging import LoggingSink
from cem_validator.manifest.models import ManifestValidationError
from tests.fixtures.builders import build_package_json
from tests.fixtures.stubs import RecordingSink

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_fixture_manifest_fails_with_four_findings(
    fixture_manifest: Any,  # noqa: ANN401
    fixture_package_json: Any,  # noqa: ANN401
    recording_sink: RecordingSink,
) -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        _ = validate(fixture_manifest, package_json=fixture_package_json, sink=recording_sink)
    assert [str(error.rule) for error in excinfo.value.errors] == ["manifest.tagName", "manifest.exportTypes"]
    assert "[cem-validator] - 2 warning(s) found." in recording_sink.messages("warning")


def test_log_errors_returns_report(
    fixture_manifest: Any,  # noqa: ANN401
    fixture_package_json: Any,  # noqa: ANN401
    recording_sink: RecordingSink,
) -> None:
    report = validate(
        fixture_manifest,
        {"logErrors": True},
        package_json=fixture_package_json,
        sink=recording_sink,
    )
    assert [str(finding.rule) for finding in report.findings] == [
        "manifest.tagName",
        "manifest.modulePath",
        "manifest.definitionPath",
        "manifest.exportTypes",
    ]
    assert not report.passed
    assert recording_sink.messages()[-1] == "[cem-validator] - Custom Elements Manifest validation complete."


def test_skip_short_circuits(recording_sink: RecordingSink) -> None:
    report = validate({"modules": "not-a-list"}, {"skip": True}, sink=recording_sink)
    assert report.skipped
    assert report.findings == ()
    assert recording_sink.messages() == ["[cem-validator] - Skipped"]
    assert recording_sink.records[0].force


def test_repeated_runs_are_idempotent(
    fixture_manifest: Any,  # noqa: ANN401
    fixture_package_json: Any,  # noqa: ANN401
    recording_sink: RecordingSink,
) -> None:
    validator = CemValidator.from_options({"log_errors": True}, sink=recording_sink)
    first = validator.validate(fixture_manifest, package_json=fixture_package_json)
    second = validator.validate(fixture_manifest, package_json=fixture_package_json)
    assert first.findings == second.findings
    assert len(validator.collector) == 0


def test_exclude_option(
    fixture_manifest: Any,  # noqa: ANN401
    fixture_package_json: Any,  # noqa: ANN401
    recording_sink: RecordingSink,
) -> None:
    report = validate(
        fixture_manifest,
        {"exclude": ["WaSelect"]},
        package_json=fixture_package_json,
        sink=recording_sink,
    )
    assert report.findings == ()
    assert recording_sink.messages("success") == [
        "[cem-validator] - All rules passed. No issues found.",
        "[cem-validator] - Custom Elements Manifest validation complete.",
    ]


def test_reads_package_json_from_disk(tmp_path: Path, recording_sink: RecordingSink) -> None:
    descriptor = tmp_path / "package.json"
    descriptor.write_text(json.dumps(build_package_json(type="commonjs")), encoding="utf-8")
    report = validate(
        {"schemaVersion": "2.1.0", "modules": []},
        {"packageJsonPath": str(descriptor)},
        sink=recording_sink,
    )
    assert [str(finding.rule) for finding in report.findings] == ["packageJson.packageType"]


def test_malformed_package_json_path_raises_before_checking(recording_sink: RecordingSink) -> None:
    with pytest.raises(InvalidFilePathError, match=r'"\./\*\.json" is not a valid file path\.'):
        _ = validate({"modules": []}, {"packageJsonPath": "./*.json"}, sink=recording_sink)
    assert recording_sink.records == []


def test_missing_package_json_raises_read_error(tmp_path: Path, recording_sink: RecordingSink) -> None:
    with pytest.raises(PackageJsonReadError):
        _ = validate({"modules": []}, {"packageJsonPath": str(tmp_path / "missing.json")}, sink=recording_sink)


def test_structurally_invalid_manifest_raises(recording_sink: RecordingSink) -> None:
    with pytest.raises(ManifestValidationError, match="modules"):
        _ = validate({"modules": "not-a-list"}, package_json=build_package_json(), sink=recording_sink)


def test_default_sink_follows_debug_flag() -> None:
    validator = CemValidator.from_options({"debug": True})
    assert isinstance(validator.sink, LoggingSink)
    assert validator.sink.debug


def test_logging_sink_emits_forced_records_only(
    caplog: pytest.LogCaptureFixture,
    fixture_manifest: Any,  # noqa: ANN401
    fixture_package_json: Any,  # noqa: ANN401
) -> None:
    caplog.set_level(logging.INFO, logger="cem_validator")
    _ = validate(fixture_manifest, {"logErrors": True}, package_json=fixture_package_json)
    reporting = [record for record in caplog.records if record.name == "cem_validator.reporting"]
    assert [record.levelno for record in reporting] == [logging.WARNING, logging.ERROR]
