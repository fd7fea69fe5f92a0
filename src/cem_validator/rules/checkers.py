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

"""Fact checkers: one pure function per rule.

Every checker receives raw values and returns a failure message or None (a
list of messages for the export-types rule). Severity is applied by the
caller, and no checker raises on malformed input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from cem_validator.json import as_str, as_str_list
from cem_validator.paths import is_valid_file_path, strip_relative_prefix
from cem_validator.typerefs import get_missing_exported_types
from cem_validator.versions import InvalidVersionError, is_at_least

if TYPE_CHECKING:
    from collections.abc import Collection

    from cem_validator.manifest.models import DeclarationModel

__all__ = [
    "CURRENT_CEM_VERSION",
    "check_cem_published",
    "check_component_definition_path",
    "check_component_export_types",
    "check_component_module_path",
    "check_component_tag_name",
    "check_component_type_definition_path",
    "check_custom_elements",
    "check_exports",
    "check_main",
    "check_module",
    "check_package_type",
    "check_schema_version",
    "check_types",
    "is_missing",
]

CURRENT_CEM_VERSION: Final[str] = "2.1.0"
MODULE_TYPE: Final[str] = "module"
SOURCE_SUFFIX: Final[str] = ".ts"
SOURCE_SEGMENT: Final[str] = "src/"

_NODE_PACKAGES_DOCS: Final[str] = "https://nodejs.org/api/packages.html"
_MODULE_PATH_DOCS: Final[str] = "https://wc-toolkit.com/documentation/module-path-resolver/"
_SCHEMA_VERSION_DOCS: Final[str] = (
    "https://github.com/webcomponents/custom-elements-manifest?tab=readme-ov-file#schema-versioning"
)


def is_missing(value: object) -> bool:
    """Return whether a JSON value counts as absent.

    ``None``, ``False``, ``0`` and ``""`` are missing. Empty objects and
    arrays are present.
    """
    if value is None or isinstance(value, bool):
        return not value
    if isinstance(value, int | float):
        return value == 0 or value != value
    if isinstance(value, str):
        return not value
    return False


def check_package_type(package_type: object) -> str | None:
    if package_type != MODULE_TYPE:
        return f"Package `type` is not 'module'. More information can be found at: {_NODE_PACKAGES_DOCS}#type."
    return None


def check_main(main: object) -> str | None:
    if is_missing(main):
        return "Missing `main` property."
    if not is_valid_file_path(main):
        return (
            "Invalid file path is set to `main` property. "
            f"More information can be found at: {_NODE_PACKAGES_DOCS}#main."
        )
    return None


def check_module(module: object) -> str | None:
    if is_missing(module):
        return "Missing `module` property."
    if not is_valid_file_path(module):
        return (
            "Invalid file path is set to `module` property. "
            f"More information can be found at: {_NODE_PACKAGES_DOCS}#module."
        )
    return None


def check_types(types: object) -> str | None:
    if is_missing(types):
        return (
            "The package.json is missing a `types` property. "
            f"More information can be found at: {_NODE_PACKAGES_DOCS}#community-conditions-definitions."
        )
    if not is_valid_file_path(types):
        return (
            "Invalid file path is set to `types` property in the package.json. "
            f"More information can be found at: {_NODE_PACKAGES_DOCS}#community-conditions-definitions"
        )
    return None


def check_exports(exports: object) -> str | None:
    if is_missing(exports):
        return (
            "The package.json is missing an `exports` property. "
            f"More information can be found at: {_NODE_PACKAGES_DOCS}#exports."
        )
    return None


def check_custom_elements(custom_elements: object) -> str | None:
    if is_missing(custom_elements):
        return (
            "The package.json is missing the `customElements` property. You can find more information at: "
            "https://github.com/webcomponents/custom-elements-manifest"
            "?tab=readme-ov-file#referencing-manifests-from-npm-packages"
        )
    if not is_valid_file_path(custom_elements):
        return "Invalid file path is set to `customElements` property."
    return None


def check_cem_published(files: object, custom_elements: object, cem_file_name: str) -> str | None:
    """Check that the published files include the manifest.

    The rule only applies when ``files`` lists something and
    ``customElements`` is set. It passes when a ``files`` entry ends with the
    manifest file name, or when the manifest sits in a subdirectory that a
    ``files`` entry covers.

    Args:
        files: The descriptor's ``files`` value.
        custom_elements: The descriptor's ``customElements`` value.
        cem_file_name: Expected manifest file name.

    Returns:
        Failure message, or None.
    """
    entries = as_str_list(files)
    if not entries:
        return None
    if any(entry.endswith(cem_file_name) for entry in entries):
        return None
    manifest_path = strip_relative_prefix(as_str(custom_elements))
    if not manifest_path:
        return None
    directory, separator, _ = manifest_path.rpartition("/")
    if separator:
        manifest_directory = f"{directory}/"
        if any(manifest_directory.startswith(strip_relative_prefix(entry)) for entry in entries):
            return None
    return (
        f"The package.json is missing the `{cem_file_name}` file in the `files` property. "
        "More information can be found at: https://docs.npmjs.com/cli/v10/configuring-npm/package-json?v=true#files."
    )


def check_schema_version(schema_version: object, current_version: str = CURRENT_CEM_VERSION) -> str | None:
    """Check that the manifest declares an up-to-date schema version.

    Args:
        schema_version: The manifest's ``schemaVersion`` value.
        current_version: Newest known schema version.

    Returns:
        Failure message, or None.
    """
    if is_missing(schema_version):
        return (
            "The manifest is missing the `schemaVersion` property. "
            f"For more information, check out: {_SCHEMA_VERSION_DOCS}"
        )
    try:
        up_to_date = is_at_least(str(schema_version), current_version)
    except InvalidVersionError:
        return (
            f"The manifest schema version `{schema_version}` is not a valid version. "
            f"The latest version is {current_version}. For more information, check out: {_SCHEMA_VERSION_DOCS}"
        )
    if not up_to_date:
        return (
            f"The manifest schema version is outdated. The latest version is {current_version}. "
            f"For more information, check out: {_SCHEMA_VERSION_DOCS}"
        )
    return None


def _looks_like_source(path: str) -> bool:
    return path.endswith(SOURCE_SUFFIX) or SOURCE_SEGMENT in path


def check_component_module_path(component_name: str, module_path: str | None) -> str | None:
    if not module_path:
        return f"{component_name} is missing a module path. For help updating this, check out: {_MODULE_PATH_DOCS}"
    if _looks_like_source(module_path):
        return (
            f"{component_name} module path does not appear to reference the output path. "
            f"For help updating this, check out: {_MODULE_PATH_DOCS}"
        )
    if not is_valid_file_path(module_path):
        return f"{module_path} module path is invalid. For help updating this, check out: {_MODULE_PATH_DOCS}"
    return None


def check_component_definition_path(component_name: str, definition_path: str | None) -> str | None:
    """Check the path of the module that registers the component.

    Definition paths are expected to point into ``src/``, so a path outside
    it fails, as does a ``.ts`` file.
    """
    if not definition_path:
        return (
            f"{component_name} is missing a definition path. "
            f"For help updating this, check out: {_MODULE_PATH_DOCS}"
        )
    if definition_path.endswith(SOURCE_SUFFIX) or SOURCE_SEGMENT not in definition_path:
        return (
            f"{component_name} definition path does not appear to reference the output path. "
            f"For help updating this, check out: {_MODULE_PATH_DOCS}"
        )
    if not is_valid_file_path(definition_path):
        return f"{definition_path} definition path is invalid. For help updating this, check out: {_MODULE_PATH_DOCS}"
    return None


def check_component_type_definition_path(component_name: str, type_definition_path: str | None) -> str | None:
    # optional field
    if not type_definition_path:
        return None
    if _looks_like_source(type_definition_path):
        return (
            f"{component_name} type definition path does not appear to reference the output path. "
            f"For help updating this, check out: {_MODULE_PATH_DOCS}"
        )
    if not is_valid_file_path(type_definition_path):
        return (
            f"{type_definition_path} type definition path is invalid. "
            f"For help updating this, check out: {_MODULE_PATH_DOCS}"
        )
    return None


def check_component_tag_name(component_name: str, tag_name: str | None) -> str | None:
    if not tag_name:
        return f"{component_name} is missing a tag name. You can add one by using the `@tag` and `@tagName` JSDoc tag."
    return None


def check_component_export_types(component: DeclarationModel, exported_names: Collection[str]) -> list[str]:
    """Return one message per referenced type the component's module does not export."""
    return [
        f'{component.name} is missing exported type "{type_name}".'
        for type_name in get_missing_exported_types(component, exported_names)
    ]
