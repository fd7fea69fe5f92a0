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

"""Pydantic field helpers shared by the option and manifest models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

if TYPE_CHECKING:
    from collections.abc import Callable


def alias_field(
    camel_name: str,
    *,
    default: object = ...,
    default_factory: Callable[[], object] | None = None,
) -> Any:  # noqa: ANN401 # JUSTIFIED: Must return Any to work with Pydantic field annotations
    """Return a Field that reads and writes the camelCase key of a snake_case attribute.

    Args:
        camel_name: Key used in JSON/TOML payloads (e.g. ``tagName``).
        default: Default value for the field (use ... for required fields).
        default_factory: Factory function to generate default values.

    Returns:
        FieldInfo configured with matching validation and serialization aliases.
    """
    if default_factory is not None:
        return Field(
            default_factory=default_factory,
            validation_alias=camel_name,
            serialization_alias=camel_name,
        )
    return Field(
        default=default,
        validation_alias=camel_name,
        serialization_alias=camel_name,
    )


__all__ = ["alias_field"]
