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

"""Precedence chain for CLI-resolved settings: CLI > environment > config > default."""

from __future__ import annotations

import os
from typing import Final, TypeVar

__all__ = ["env_flag", "resolve_with_precedence"]

T = TypeVar("T")

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def resolve_with_precedence(
    *,
    cli_value: T | None = None,
    env_value: T | None = None,
    config_value: T | None = None,
    default: T,
) -> T:
    """Resolve a value using the standard precedence chain.

    Args:
        cli_value: Value from CLI argument.
        env_value: Value from environment variable.
        config_value: Value from config file.
        default: Fallback default value.

    Returns:
        The highest-precedence non-None value, or default.

    Example:
        >>> resolve_with_precedence(cli_value=None, env_value="lib.json", default="./package.json")
        'lib.json'
    """
    if cli_value is not None:
        return cli_value
    if env_value is not None:
        return env_value
    if config_value is not None:
        return config_value
    return default


def env_flag(name: str) -> bool | None:
    """Read a boolean environment variable.

    Args:
        name: Variable name.

    Returns:
        True or False for recognised spellings, None when unset or unrecognised.
    """
    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None
