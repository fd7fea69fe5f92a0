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

"""Load manifest documents from disk or from raw input."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cem_validator.core.model_types import LogComponent
from cem_validator.exceptions import CemValidatorError
from cem_validator.logging import structured_extra

from .models import validate_manifest_payload

if TYPE_CHECKING:
    from .models import PackageManifestModel

__all__ = ["ManifestReadError", "load_manifest", "load_manifest_file"]

logger: logging.Logger = logging.getLogger("cem_validator.manifest")


class ManifestReadError(CemValidatorError):
    """Raised when a manifest file cannot be read or decoded.

    Attributes:
        path: Location of the manifest file.
        error: Underlying I/O or decoding error.
    """

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize with the manifest path and the underlying error.

        Args:
            path: Location of the manifest file.
            error: Underlying I/O or decoding error.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read manifest {path}: {error}")


def load_manifest(raw: Any) -> PackageManifestModel:  # noqa: ANN401  # JUSTIFIED: Accepts arbitrary input from JSON parsing, validated at runtime
    """Parse a manifest payload into the manifest models.

    Args:
        raw: Raw manifest data from any source (typically parsed JSON).

    Returns:
        Validated manifest model.
    """
    return validate_manifest_payload(raw)


def load_manifest_file(path: Path | str) -> PackageManifestModel:
    """Read and validate the manifest stored at ``path``.

    Args:
        path: Location of a ``custom-elements.json`` style document.

    Returns:
        Validated manifest model.

    Raises:
        ManifestReadError: If the file is missing or not valid JSON.
    """
    manifest_path = Path(path)
    try:
        raw = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestReadError(manifest_path, exc) from exc
    logger.debug(
        "Loaded manifest %s",
        manifest_path,
        extra=structured_extra(LogComponent.MANIFEST, path=manifest_path),
    )
    return load_manifest(raw)
