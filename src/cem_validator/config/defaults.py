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

"""Built-in option and rule defaults."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from cem_validator.core.model_types import Severity

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_PACKAGE_JSON_PATH: Final[str] = "./package.json"
DEFAULT_CEM_FILE_NAME: Final[str] = "custom-elements.json"

PACKAGE_JSON_GROUP: Final[str] = "packageJson"
MANIFEST_GROUP: Final[str] = "manifest"

DEFAULT_RULES: Final[Mapping[str, Mapping[str, Severity]]] = MappingProxyType({
    PACKAGE_JSON_GROUP: MappingProxyType({
        "packageType": Severity.WARNING,
        "main": Severity.WARNING,
        "module": Severity.WARNING,
        "types": Severity.WARNING,
        "exports": Severity.WARNING,
        "customElementsProperty": Severity.ERROR,
        "publishedCem": Severity.ERROR,
    }),
    MANIFEST_GROUP: MappingProxyType({
        "schemaVersion": Severity.WARNING,
        "modulePath": Severity.WARNING,
        "definitionPath": Severity.WARNING,
        "typeDefinitionPath": Severity.WARNING,
        "exportTypes": Severity.ERROR,
        "tagName": Severity.ERROR,
    }),
})


def default_options() -> dict[str, object]:
    """Return a fresh, mutable copy of the default option mapping."""
    return {
        "packageJsonPath": DEFAULT_PACKAGE_JSON_PATH,
        "cemFileName": DEFAULT_CEM_FILE_NAME,
        "logErrors": False,
        "exclude": [],
        "debug": False,
        "skip": False,
        "rules": {group: dict(rules) for group, rules in DEFAULT_RULES.items()},
    }


__all__ = [
    "DEFAULT_CEM_FILE_NAME",
    "DEFAULT_PACKAGE_JSON_PATH",
    "DEFAULT_RULES",
    "MANIFEST_GROUP",
    "PACKAGE_JSON_GROUP",
    "default_options",
]
