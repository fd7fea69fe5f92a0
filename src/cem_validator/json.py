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

"""JSON value types and accessors for loosely typed input documents.

The package descriptor is decoded as plain JSON and never validated as a
whole, so rule code reads its fields through these accessors instead of
trusting the payload's shape.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = ["JSONValue", "as_str", "as_str_list", "normalize_enums_for_json"]

JSONValue: TypeAlias = JsonValue


def as_str(value: object, default: str = "") -> str:
    """Return ``value`` when it is a string, else ``default``."""
    return value if isinstance(value, str) else default


def as_str_list(value: object) -> list[str]:
    """Return the string members of a JSON array, skipping everything else.

    Args:
        value: Arbitrary decoded value, typically a descriptor's ``files``.

    Returns:
        String entries in their original order; empty for non-list input.
    """
    if not isinstance(value, list):
        return []
    return [item for item in cast("list[object]", value) if isinstance(item, str)]


def normalize_enums_for_json(value: object) -> JSONValue:
    """Replace enum members with their values throughout a nested structure.

    Used by the JSON log formatter, whose structured extras carry ``Severity``
    and ``RuleId`` members as values and as mapping keys.

    Args:
        value: Mapping, sequence or scalar that may contain enum members.

    Returns:
        A JSON-compatible copy; objects that are not JSON scalars are rendered
        with ``str``.
    """
    match value:
        case Enum():
            return cast("JSONValue", value.value)
        case dict():
            items = cast("dict[object, object]", value).items()
            return {
                str(key.value if isinstance(key, Enum) else key): normalize_enums_for_json(item)
                for key, item in items
            }
        case list() | tuple():
            return [normalize_enums_for_json(item) for item in cast("list[object] | tuple[object, ...]", value)]
        case str() | int() | float() | bool() | None:
            return value
        case _:
            return str(value)
