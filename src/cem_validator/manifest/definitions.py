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

"""Index of custom element definitions across manifest modules.

A ``custom-element-definition`` export names the tag it registers and points
at the class it registers, so the index is keyed by both. The first module
defining a key wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .models import DeclarationModel, PackageManifestModel

__all__ = ["build_definitions_index", "lookup_definition_path"]


def build_definitions_index(manifest: PackageManifestModel) -> dict[str, str]:
    """Map tag names and declaration names to the module that defines them.

    Args:
        manifest: Validated manifest document.

    Returns:
        Mapping of definition key to module path.
    """
    index: dict[str, str] = {}
    for module in manifest.modules:
        for export in module.exports:
            if not export.is_custom_element_definition:
                continue
            for key in (export.name, export.declaration_name):
                if key:
                    index.setdefault(key, module.path)
    return index


def lookup_definition_path(index: Mapping[str, str], component: DeclarationModel) -> str | None:
    """Return the defining module path for ``component``, tag name first."""
    for key in (component.tag_name, component.name):
        if key and key in index:
            return index[key]
    return None
