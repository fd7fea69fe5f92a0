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

"""Read the package descriptor (``package.json``) that manifests are checked against."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cem_validator.core.model_types import LogComponent
from cem_validator.exceptions import InvalidFilePathError, PackageJsonReadError
from cem_validator.json import JSONValue
from cem_validator.logging import structured_extra
from cem_validator.paths import is_valid_file_path

__all__ = ["read_package_json"]

logger: logging.Logger = logging.getLogger("cem_validator.validator")


def read_package_json(path: str) -> JSONValue:
    """Load and decode the package descriptor at ``path``.

    The path is checked lexically before any filesystem access.

    Args:
        path: Location of the descriptor, e.g. ``"./package.json"``.

    Returns:
        The decoded JSON document. Its shape is not validated here.

    Raises:
        InvalidFilePathError: If ``path`` is not a plain file path.
        PackageJsonReadError: If the file cannot be read or is not JSON.
    """
    if not is_valid_file_path(path):
        raise InvalidFilePathError(path)
    try:
        payload: JSONValue = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PackageJsonReadError(path, exc) from exc
    logger.debug(
        "Read package descriptor %s",
        path,
        extra=structured_extra(LogComponent.VALIDATOR, path=path),
    )
    return payload
