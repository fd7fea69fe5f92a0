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

"""Member visibility helpers for manifest components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .models import DeclarationModel, MemberModel

__all__ = ["get_component_public_methods", "get_component_public_properties", "is_public_member"]

FIELD_KIND: Final[str] = "field"
METHOD_KIND: Final[str] = "method"
HIDDEN_PRIVACY: Final[frozenset[str]] = frozenset({"private", "protected"})
PRIVATE_NAME_PREFIX: Final[str] = "#"


def is_public_member(member: MemberModel) -> bool:
    """Return whether ``member`` is visible to consumers of the component."""
    if member.privacy in HIDDEN_PRIVACY:
        return False
    return not member.name.startswith(PRIVATE_NAME_PREFIX)


def get_component_public_properties(component: DeclarationModel) -> list[MemberModel]:
    """Return the public, non-static fields of ``component`` in manifest order."""
    return [
        member
        for member in component.members
        if member.kind == FIELD_KIND and not member.static and is_public_member(member)
    ]


def get_component_public_methods(component: DeclarationModel) -> list[MemberModel]:
    """Return the public methods of ``component`` in manifest order."""
    return [member for member in component.members if member.kind == METHOD_KIND and is_public_member(member)]
