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

"""Unit tests for the command-line interface."""

from __future__ import annotations

import argparse
import json
import shutil
from typing import TYPE_CHECKING

import pytest

from cem_validator import __version__
from cem_validator.cli import build_options, main, parse_rule_override
from cem_validator.cli.app import (
    DEBUG_ENV,
    LOG_ERRORS_ENV,
    PACKAGE_JSON_ENV,
    SKIP_ENV,
    RuleOverrideError,
)
from cem_validator.core.model_types import Severity
from cem_validator.logging import LOG_FORMAT_ENV, LOG_LEVEL_ENV
from tests.fixtures.builders import (
    DATA_DIR,
    build_component,
    build_definition_export,
    build_js_export,
    build_manifest,
    build_module,
    build_package_json,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in (PACKAGE_JSON_ENV, LOG_ERRORS_ENV, DEBUG_ENV, SKIP_ENV, LOG_FORMAT_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "package.json").write_text(json.dumps(build_package_json()), encoding="utf-8")
    return tmp_path


def _write_passing_manifest(root: Path) -> None:
    manifest = build_manifest(
        build_module(
            "dist/my-element.js",
            declarations=[build_component()],
            exports=[build_js_export("MyElement")],
        ),
        build_module("src/define.js", exports=[build_definition_export("my-element", "MyElement")]),
    )
    (root / "custom-elements.json").write_text(json.dumps(manifest), encoding="utf-8")


def _copy_fixture_manifest(root: Path) -> None:
    _ = shutil.copy(DATA_DIR / "custom-elements.json", root / "custom-elements.json")


def _namespace(**overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {
        "package_json": None,
        "cem_file_name": None,
        "log_errors": None,
        "debug": None,
        "skip": None,
        "exclude": None,
        "rule": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    assert capsys.readouterr().out == f"cem-validator {__version__}\n"


def test_passing_manifest_exits_zero(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_passing_manifest(workspace)
    assert main([]) == 0
    assert "CV" not in capsys.readouterr().err


def test_blocking_findings_exit_one(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _copy_fixture_manifest(workspace)
    assert main(["custom-elements.json"]) == 1
    err = capsys.readouterr().err
    assert "[cem-validator] CV200 2 blocking finding(s)." in err
    assert "2 error(s) found." in err


def test_log_errors_flag_exits_zero(workspace: Path) -> None:
    _copy_fixture_manifest(workspace)
    assert main(["--log-errors"]) == 0


def test_log_errors_from_environment(workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _copy_fixture_manifest(workspace)
    monkeypatch.setenv(LOG_ERRORS_ENV, "true")
    assert main([]) == 0


def test_rule_overrides_relax_errors(workspace: Path) -> None:
    _copy_fixture_manifest(workspace)
    assert main(["--rule", "manifest.tagName=off", "--rule", "manifest.export_types=warning"]) == 0


def test_cli_rule_beats_config_file(workspace: Path) -> None:
    _copy_fixture_manifest(workspace)
    (workspace / "cem-validator.toml").write_text(
        '[rules.manifest]\ntagName = "off"\nexportTypes = "warning"\n',
        encoding="utf-8",
    )
    assert main([]) == 0
    assert main(["--rule", "manifest.tagName=error"]) == 1


def test_exclude_skips_components(workspace: Path) -> None:
    _copy_fixture_manifest(workspace)
    assert main(["--exclude", "WaSelect"]) == 0


def test_skip_does_not_read_manifest(workspace: Path) -> None:
    assert main(["missing.json", "--skip"]) == 0


def test_missing_manifest_reports_code(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["missing.json"]) == 1
    assert "[cem-validator] CV301" in capsys.readouterr().err


def test_invalid_package_json_path(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_passing_manifest(workspace)
    assert main(["--package-json", "./*.json"]) == 1
    assert "[cem-validator] CV120" in capsys.readouterr().err


def test_invalid_config_file(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workspace / "cem-validator.toml").write_text("verbose = true\n", encoding="utf-8")
    assert main([]) == 1
    assert "[cem-validator] CV113" in capsys.readouterr().err


def test_malformed_rule_is_usage_error(workspace: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = main(["--rule", "tagName=off"])
    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("manifest.tagName=warning", ("manifest", "tagName", Severity.WARNING)),
        ("package_json.published_cem=OFF", ("packageJson", "publishedCem", Severity.OFF)),
    ],
)
def test_parse_rule_override(token: str, expected: tuple[str, str, Severity]) -> None:
    assert parse_rule_override(token) == expected


@pytest.mark.parametrize("token", ["manifest.tagName", "tagName=off", "manifest.=off", "manifest.tagName=loud"])
def test_parse_rule_override_rejects(token: str) -> None:
    with pytest.raises(RuleOverrideError):
        _ = parse_rule_override(token)


def test_build_options_layers_sources(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(PACKAGE_JSON_ENV, "./lib/package.json")
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    monkeypatch.delenv(LOG_ERRORS_ENV, raising=False)
    monkeypatch.delenv(SKIP_ENV, raising=False)
    config: dict[str, object] = {
        "packageJsonPath": "./config/package.json",
        "debug": True,
        "exclude": ["FromConfig"],
        "rules": {"manifest": {"modulePath": "off", "tagName": "off"}},
    }
    options = build_options(_namespace(exclude=["FromCli"], rule=["manifest.tagName=warning"]), config)
    assert options.package_json_path == "./lib/package.json"
    assert options.debug
    assert not options.log_errors
    assert options.exclude == ("FromCli",)
    assert options.rules.manifest.module_path is Severity.OFF
    assert options.rules.manifest.tag_name is Severity.WARNING
