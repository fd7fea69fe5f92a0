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

"""Unit tests for TOML option discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cem_validator.config.loader import load_options_file
from cem_validator.config.models import ConfigReadError, InvalidConfigFileError

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_no_config_files_returns_empty(tmp_path: Path) -> None:
    loaded = load_options_file(base_dir=tmp_path)
    assert loaded.options == {}
    assert loaded.path is None


def test_standalone_file_wins_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.cem-validator]\nlogErrors = true\n', encoding="utf-8")
    (tmp_path / ".cem-validator.toml").write_text('debug = true\n', encoding="utf-8")
    (tmp_path / "cem-validator.toml").write_text(
        'package_json_path = "./lib/package.json"\n\n[rules.manifest]\ntagName = "warning"\n',
        encoding="utf-8",
    )
    loaded = load_options_file(base_dir=tmp_path)
    assert loaded.path == (tmp_path / "cem-validator.toml").resolve()
    assert loaded.options == {
        "packageJsonPath": "./lib/package.json",
        "rules": {"manifest": {"tagName": "warning"}},
    }


def test_pyproject_tool_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n[tool.cem-validator]\nexclude = ["Legacy"]\n',
        encoding="utf-8",
    )
    loaded = load_options_file(base_dir=tmp_path)
    assert loaded.options == {"exclude": ["Legacy"]}


def test_pyproject_without_table_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    assert load_options_file(base_dir=tmp_path).path is None


def test_explicit_pyproject_without_table_is_invalid(tmp_path: Path) -> None:
    target = tmp_path / "pyproject.toml"
    target.write_text('[project]\nname = "demo"\n', encoding="utf-8")
    with pytest.raises(InvalidConfigFileError):
        _ = load_options_file(target)


def test_explicit_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigReadError):
        _ = load_options_file(tmp_path / "nope.toml")


def test_malformed_toml_raises_read_error(tmp_path: Path) -> None:
    (tmp_path / "cem-validator.toml").write_text("debug = \n", encoding="utf-8")
    with pytest.raises(ConfigReadError):
        _ = load_options_file(base_dir=tmp_path)


def test_schema_errors_raise_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "cem-validator.toml").write_text('[rules.manifest]\ntagName = "loud"\n', encoding="utf-8")
    with pytest.raises(InvalidConfigFileError) as excinfo:
        _ = load_options_file(base_dir=tmp_path)
    assert excinfo.value.path == tmp_path / "cem-validator.toml"
