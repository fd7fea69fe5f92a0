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

"""Discover and load validator options from TOML files.

Options live either in a standalone ``cem-validator.toml`` /
``.cem-validator.toml`` document or in the ``[tool.cem-validator]`` table of
``pyproject.toml``. The first file in that order that carries options wins.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from cem_validator.core.model_types import LogComponent
from cem_validator.logging import structured_extra

from .models import ConfigReadError, ConfigValidationError, InvalidConfigFileError
from .resolve import normalise_keys, resolve_options

__all__ = ["CONFIG_FILENAMES", "LoadedOptions", "load_options_file"]

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("cem-validator.toml", ".cem-validator.toml", "pyproject.toml")
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
TOOL_TABLE: Final[str] = "cem-validator"

logger: logging.Logger = logging.getLogger("cem_validator.config")


def _empty_options() -> dict[str, object]:
    return {}


@dataclass(slots=True, frozen=True)
class LoadedOptions:
    """Raw options read from a configuration file.

    Attributes:
        options: camelCase option mapping, already checked against the schema.
        path: File the options came from, or None when no file was found.
    """

    options: dict[str, object] = field(default_factory=_empty_options)
    path: Path | None = None


def load_options_file(explicit_path: Path | None = None, *, base_dir: Path | None = None) -> LoadedOptions:
    """Load options from ``explicit_path`` or from the first standard file found.

    Args:
        explicit_path: Configuration file to read. When given, only this file
            is considered and it must contain options.
        base_dir: Directory searched for standard file names. Defaults to the
            current working directory.

    Returns:
        Loaded options; empty when no candidate file exists.

    Raises:
        ConfigReadError: If a candidate file cannot be read or parsed.
        InvalidConfigFileError: If a file's options fail validation.
    """
    if explicit_path is not None:
        candidates = [explicit_path]
    else:
        root = base_dir or Path.cwd()
        candidates = [root / name for name in CONFIG_FILENAMES]
    for candidate in candidates:
        loaded = _load_candidate(candidate, explicit=explicit_path is not None)
        if loaded is not None:
            logger.debug(
                "Loaded options from %s",
                candidate,
                extra=structured_extra(LogComponent.CONFIG, path=candidate),
            )
            return loaded
    return LoadedOptions()


def _load_candidate(candidate: Path, *, explicit: bool) -> LoadedOptions | None:
    if not candidate.exists():
        if explicit:
            raise ConfigReadError(candidate, FileNotFoundError(str(candidate)))
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define a [tool.{TOOL_TABLE}] table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    options = normalise_keys(payload)
    try:
        resolve_options(options)
    except ConfigValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    return LoadedOptions(options=options, path=candidate.resolve())


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    if candidate.name != PYPROJECT_FILENAME:
        return raw_map
    tool_section = raw_map.get("tool")
    if tool_section is None:
        return None
    if not isinstance(tool_section, dict):
        message = "[tool] in pyproject.toml must be a TOML table"
        raise InvalidConfigFileError(candidate, ValueError(message))
    section: object = tool_section.get(TOOL_TABLE)
    if section is None:
        return None
    if not isinstance(section, dict):
        message = f"[tool.{TOOL_TABLE}] must be a TOML table"
        raise InvalidConfigFileError(candidate, ValueError(message))
    return {str(key): value for key, value in section.items()}
