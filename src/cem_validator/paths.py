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

"""Lexical checks for path-like strings found in descriptors and manifests.

Nothing here touches the filesystem. A path is accepted when it is an optional
root marker (``/``, ``./``, ``../``, a drive letter, ``.\\`` or ``..\\``)
followed by plain name characters, which rules out glob patterns such as
``./src/**.js`` or ``{a,b}/index.js``.
"""

from __future__ import annotations

import re
from typing import Final

__all__ = ["is_valid_file_path", "strip_relative_prefix"]

_FILE_PATH_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(/|\./|\.\./|[a-zA-Z]:[\\/]|\.\\|\.\.\\)?([a-zA-Z0-9_\-./\\]+)",
)
CURRENT_DIRECTORY_PREFIX: Final[str] = "./"


def is_valid_file_path(path: object) -> bool:
    """Return whether ``path`` is a plain POSIX or Windows style file path.

    Args:
        path: Candidate value; anything that is not a string is rejected.

    Returns:
        True when the whole string matches the accepted path grammar.
    """
    if not isinstance(path, str):
        return False
    return _FILE_PATH_PATTERN.fullmatch(path) is not None


def strip_relative_prefix(path: str) -> str:
    """Drop one leading ``./`` from ``path``."""
    return path.removeprefix(CURRENT_DIRECTORY_PREFIX)
