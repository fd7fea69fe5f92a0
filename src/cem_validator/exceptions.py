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

"""Common exception hierarchy for cem-validator."""

from __future__ import annotations

__all__ = [
    "CemValidatorError",
    "CemValidatorTypeError",
    "CemValidatorValidationError",
    "InvalidFilePathError",
    "PackageJsonReadError",
]


class CemValidatorError(Exception):
    """Base error for all cem-validator exceptions."""


class CemValidatorValidationError(CemValidatorError, ValueError):
    """Raised when input data fails validation checks."""


class CemValidatorTypeError(CemValidatorError, TypeError):
    """Raised when input data has an unexpected type."""


class InvalidFilePathError(CemValidatorValidationError):
    """Raised when a configured file path is not a plain filesystem path.

    Attributes:
        path: The rejected path text.
    """

    def __init__(self, path: str) -> None:
        """Initialize with the rejected path.

        Args:
            path: The path that failed lexical validation.
        """
        self.path = path
        super().__init__(f'"{path}" is not a valid file path.')


class PackageJsonReadError(CemValidatorError):
    """Raised when the package descriptor cannot be read or parsed.

    Attributes:
        path: Location of the descriptor.
        error: Underlying I/O or decoding error.
    """

    def __init__(self, path: str, error: Exception) -> None:
        """Initialize with the descriptor path and the underlying error.

        Args:
            path: Location of the descriptor.
            error: Underlying I/O or decoding error.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read package descriptor {path}: {error}")
