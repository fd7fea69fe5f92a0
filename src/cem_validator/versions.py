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

"""Restricted semantic-version parsing and comparison.

Only ``MAJOR.MINOR.PATCH`` with an optional ``-tag`` suffix is understood.
Build metadata, ranges and pre-release ordering are out of scope: a tagged
version ranks below the release with the same numbers and that is all.
"""

from __future__ import annotations

from typing import Final, NamedTuple

from cem_validator.exceptions import CemValidatorValidationError

__all__ = ["InvalidVersionError", "ParsedVersion", "is_at_least", "parse_version"]

PRERELEASE_SEPARATOR: Final[str] = "-"
RELEASE_COMPONENTS: Final[int] = 3


class InvalidVersionError(CemValidatorValidationError):
    """Raised when a version string has a non-numeric release component.

    Attributes:
        version: The rejected version text.
    """

    def __init__(self, version: str) -> None:
        """Initialize with the rejected version text.

        Args:
            version: Version string that could not be parsed.
        """
        self.version = version
        super().__init__(f"Invalid version string: {version!r}")


class ParsedVersion(NamedTuple):
    """Numeric release triple plus the optional pre-release tag."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    @property
    def release(self) -> tuple[int, int, int]:
        """Return the numeric components used for ordering."""
        return (self.major, self.minor, self.patch)


def parse_version(version: str) -> ParsedVersion:
    """Split ``version`` into its release numbers and pre-release tag.

    Missing trailing components count as zero (``"2.1"`` is ``2.1.0``) and
    components past the third are ignored.

    Args:
        version: Version text such as ``"2.1.0"`` or ``"2.1.0-beta.1"``.

    Returns:
        Parsed version.

    Raises:
        InvalidVersionError: If a release component is not a non-negative integer.
    """
    core, separator, tag = version.strip().partition(PRERELEASE_SEPARATOR)
    parts = core.split(".")[:RELEASE_COMPONENTS]
    if not all(part.isascii() and part.isdigit() for part in parts):
        raise InvalidVersionError(version)
    numbers = [int(part) for part in parts]
    numbers.extend([0] * (RELEASE_COMPONENTS - len(numbers)))
    return ParsedVersion(numbers[0], numbers[1], numbers[2], tag if separator else None)


def is_at_least(current: str, latest: str) -> bool:
    """Return whether ``current`` is the same as or newer than ``latest``.

    Major, minor and patch are compared in turn and the first difference
    decides. On a full tie a pre-release ``current`` loses, so
    ``"2.1.0-beta.1"`` is not at least ``"2.1.0"``.

    Args:
        current: Version being checked.
        latest: Reference version.

    Returns:
        True when ``current`` satisfies ``latest``.

    Raises:
        InvalidVersionError: If either version has a non-numeric component.
    """
    current_version = parse_version(current)
    latest_version = parse_version(latest)
    if current_version.release != latest_version.release:
        return current_version.release > latest_version.release
    return current_version.prerelease is None
