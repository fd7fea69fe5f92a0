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

"""Option and rule-configuration models.

Raw option mappings are validated with pydantic models that reject unknown
keys, then converted to frozen dataclasses in which every rule severity is
resolved.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cem_validator.core.fields import alias_field
from cem_validator.core.model_types import RuleId, Severity
from cem_validator.exceptions import CemValidatorValidationError

from .defaults import (
    DEFAULT_CEM_FILE_NAME,
    DEFAULT_PACKAGE_JSON_PATH,
    DEFAULT_RULES,
    MANIFEST_GROUP,
    PACKAGE_JSON_GROUP,
)

if TYPE_CHECKING:
    from pathlib import Path

STRICT_MODEL_CONFIG: Final[ConfigDict] = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


def _package_default(key: str) -> Severity:
    return DEFAULT_RULES[PACKAGE_JSON_GROUP][key]


def _manifest_default(key: str) -> Severity:
    return DEFAULT_RULES[MANIFEST_GROUP][key]


class ConfigValidationError(CemValidatorValidationError):
    """Raised when configuration data contains invalid values."""


class InvalidOptionsError(ConfigValidationError):
    """Raised when validator options fail schema validation."""

    def __init__(self, error: Exception) -> None:
        """Initialize the exception with the underlying validation error.

        Args:
            error: The underlying validation exception.
        """
        self.error = error
        super().__init__(f"Invalid cem-validator options: {error}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid cem-validator configuration in {path}: {error}")


def _coerce_severity(value: object) -> object:
    if isinstance(value, str) and not isinstance(value, Severity):
        return Severity.from_str(value)
    return value


class PackageJsonRulesModel(BaseModel):
    """Pydantic model for the ``packageJson`` rule group."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    package_type: Severity = alias_field("packageType", default=_package_default("packageType"))
    main: Severity = _package_default("main")
    module: Severity = _package_default("module")
    types: Severity = _package_default("types")
    exports: Severity = _package_default("exports")
    custom_elements_property: Severity = alias_field(
        "customElementsProperty",
        default=_package_default("customElementsProperty"),
    )
    published_cem: Severity = alias_field("publishedCem", default=_package_default("publishedCem"))

    @field_validator("*", mode="before")
    @classmethod
    def _normalise_severity(cls, value: object) -> object:
        return _coerce_severity(value)


class ManifestRulesModel(BaseModel):
    """Pydantic model for the ``manifest`` rule group."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    schema_version: Severity = alias_field("schemaVersion", default=_manifest_default("schemaVersion"))
    module_path: Severity = alias_field("modulePath", default=_manifest_default("modulePath"))
    definition_path: Severity = alias_field("definitionPath", default=_manifest_default("definitionPath"))
    type_definition_path: Severity = alias_field(
        "typeDefinitionPath",
        default=_manifest_default("typeDefinitionPath"),
    )
    export_types: Severity = alias_field("exportTypes", default=_manifest_default("exportTypes"))
    tag_name: Severity = alias_field("tagName", default=_manifest_default("tagName"))

    @field_validator("*", mode="before")
    @classmethod
    def _normalise_severity(cls, value: object) -> object:
        return _coerce_severity(value)


class RulesModel(BaseModel):
    """Pydantic model for the full rule configuration."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    package_json: PackageJsonRulesModel = alias_field("packageJson", default_factory=PackageJsonRulesModel)
    manifest: ManifestRulesModel = Field(default_factory=ManifestRulesModel)


class ValidatorOptionsModel(BaseModel):
    """Pydantic model for validator options from code, TOML or the CLI.

    Attributes:
        package_json_path: Location of the package descriptor.
        cem_file_name: File name the published manifest is expected to have.
        log_errors: Report blocking findings instead of raising.
        exclude: Component class names to skip.
        debug: Emit verbose report output.
        skip: Skip the run entirely.
        rules: Per-rule severities.
    """

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    package_json_path: str = alias_field("packageJsonPath", default=DEFAULT_PACKAGE_JSON_PATH)
    cem_file_name: str = alias_field("cemFileName", default=DEFAULT_CEM_FILE_NAME)
    log_errors: bool = alias_field("logErrors", default=False)
    exclude: list[str] = Field(default_factory=list)
    debug: bool = False
    skip: bool = False
    rules: RulesModel = Field(default_factory=RulesModel)


@dataclass(slots=True, frozen=True)
class PackageJsonRules:
    """Resolved severities for package descriptor rules."""

    package_type: Severity = _package_default("packageType")
    main: Severity = _package_default("main")
    module: Severity = _package_default("module")
    types: Severity = _package_default("types")
    exports: Severity = _package_default("exports")
    custom_elements_property: Severity = _package_default("customElementsProperty")
    published_cem: Severity = _package_default("publishedCem")


@dataclass(slots=True, frozen=True)
class ManifestRules:
    """Resolved severities for manifest rules."""

    schema_version: Severity = _manifest_default("schemaVersion")
    module_path: Severity = _manifest_default("modulePath")
    definition_path: Severity = _manifest_default("definitionPath")
    type_definition_path: Severity = _manifest_default("typeDefinitionPath")
    export_types: Severity = _manifest_default("exportTypes")
    tag_name: Severity = _manifest_default("tagName")


_RULE_ATTRIBUTES: Final[dict[RuleId, tuple[str, str]]] = {
    RuleId.PACKAGE_TYPE: ("package_json", "package_type"),
    RuleId.MAIN: ("package_json", "main"),
    RuleId.MODULE: ("package_json", "module"),
    RuleId.TYPES: ("package_json", "types"),
    RuleId.EXPORTS: ("package_json", "exports"),
    RuleId.CUSTOM_ELEMENTS_PROPERTY: ("package_json", "custom_elements_property"),
    RuleId.PUBLISHED_CEM: ("package_json", "published_cem"),
    RuleId.SCHEMA_VERSION: ("manifest", "schema_version"),
    RuleId.MODULE_PATH: ("manifest", "module_path"),
    RuleId.DEFINITION_PATH: ("manifest", "definition_path"),
    RuleId.TYPE_DEFINITION_PATH: ("manifest", "type_definition_path"),
    RuleId.EXPORT_TYPES: ("manifest", "export_types"),
    RuleId.TAG_NAME: ("manifest", "tag_name"),
}


@dataclass(slots=True, frozen=True)
class RuleConfiguration:
    """Fully resolved rule severities, grouped like the option mapping."""

    package_json: PackageJsonRules = field(default_factory=PackageJsonRules)
    manifest: ManifestRules = field(default_factory=ManifestRules)

    def severity_for(self, rule: RuleId) -> Severity:
        """Return the configured severity for ``rule``.

        The ``packageJson`` descriptor rule is not configurable and is always
        an error.
        """
        if rule is RuleId.PACKAGE_JSON:
            return Severity.ERROR
        group, attribute = _RULE_ATTRIBUTES[rule]
        severity: Severity = getattr(getattr(self, group), attribute)
        return severity

    def to_mapping(self) -> dict[str, dict[str, str]]:
        """Return the configuration keyed the way option mappings are."""
        return RulesModel.model_validate({
            "package_json": asdict(self.package_json),
            "manifest": asdict(self.manifest),
        }).model_dump(mode="json", by_alias=True)


@dataclass(slots=True, frozen=True)
class ValidatorOptions:
    """Resolved options for one validation run."""

    package_json_path: str = DEFAULT_PACKAGE_JSON_PATH
    cem_file_name: str = DEFAULT_CEM_FILE_NAME
    log_errors: bool = False
    exclude: tuple[str, ...] = ()
    debug: bool = False
    skip: bool = False
    rules: RuleConfiguration = field(default_factory=RuleConfiguration)


def rules_from_model(model: RulesModel) -> RuleConfiguration:
    """Convert a validated rules model into its dataclass form."""
    return RuleConfiguration(
        package_json=PackageJsonRules(**model.package_json.model_dump()),
        manifest=ManifestRules(**model.manifest.model_dump()),
    )


def options_from_model(model: ValidatorOptionsModel) -> ValidatorOptions:
    """Convert a validated options model into its dataclass form."""
    return ValidatorOptions(
        package_json_path=model.package_json_path,
        cem_file_name=model.cem_file_name,
        log_errors=model.log_errors,
        exclude=tuple(model.exclude),
        debug=model.debug,
        skip=model.skip,
        rules=rules_from_model(model.rules),
    )


__all__ = [
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "InvalidOptionsError",
    "ManifestRules",
    "ManifestRulesModel",
    "PackageJsonRules",
    "PackageJsonRulesModel",
    "RuleConfiguration",
    "RulesModel",
    "ValidatorOptions",
    "ValidatorOptionsModel",
    "options_from_model",
    "rules_from_model",
]
