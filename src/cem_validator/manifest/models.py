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

"""Pydantic models for the subset of the Custom Elements Manifest the rules read.

The models are deliberately lenient: unknown keys are kept, every field has an
empty default that an explicit ``null`` also selects, and only structurally
impossible payloads (a ``modules`` value that is not a list, a ``tagName``
that is an object, ...) are rejected. Rule evaluation then decides what
counts as missing or malformed.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from cem_validator.core.fields import alias_field
from cem_validator.exceptions import CemValidatorValidationError

LENIENT_MODEL_CONFIG: ConfigDict = ConfigDict(
    extra="allow",
    populate_by_name=True,
    frozen=True,
    coerce_numbers_to_str=True,
)
CUSTOM_ELEMENT_DEFINITION: str = "custom-element-definition"


class ManifestValidationError(CemValidatorValidationError):
    """Raised when a manifest payload cannot be mapped onto the manifest models.

    Attributes:
        validation_error: The underlying pydantic error.
    """

    def __init__(self, validation_error: ValidationError) -> None:
        """Initialize with the pydantic validation error.

        Args:
            validation_error: Error raised while validating the payload.
        """
        self.validation_error = validation_error
        locations = ", ".join(
            ".".join(str(part) for part in err.get("loc", ())) or "<root>"
            for err in validation_error.errors()
        )
        super().__init__(f"Manifest payload is malformed at: {locations}")


class _LenientModel(BaseModel):
    """Base for manifest models; an explicit ``null`` reads as an absent key."""

    model_config: ClassVar[ConfigDict] = LENIENT_MODEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _drop_null_values(cls, data: object) -> object:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class TypeModel(_LenientModel):
    """Type annotation attached to a member, parameter or event."""

    text: str | None = None


class ParameterModel(_LenientModel):
    """A method parameter."""

    name: str = ""
    type: TypeModel | None = None


class MemberModel(_LenientModel):
    """A class member (field or method) of a declaration."""

    kind: str | None = None
    name: str = ""
    privacy: str | None = None
    static: bool = False
    type: TypeModel | None = None
    parameters: list[ParameterModel] = Field(default_factory=list)


class EventModel(_LenientModel):
    """An event dispatched by a component."""

    name: str = ""
    type: TypeModel | None = None


class ReferenceModel(_LenientModel):
    """Reference from an export to the declaration it exposes."""

    name: str = ""
    module: str | None = None
    package: str | None = None


class ExportModel(_LenientModel):
    """A JavaScript export or a custom element definition."""

    kind: str | None = None
    name: str = ""
    declaration: ReferenceModel | None = None

    @property
    def is_custom_element_definition(self) -> bool:
        """Return whether this export registers a custom element."""
        return self.kind == CUSTOM_ELEMENT_DEFINITION

    @property
    def declaration_name(self) -> str:
        """Return the name of the exported declaration, or an empty string."""
        return self.declaration.name if self.declaration else ""


class DeclarationModel(_LenientModel):
    """A module declaration; custom element classes are the components."""

    kind: str | None = None
    name: str = ""
    custom_element: bool = alias_field("customElement", default=False)
    tag_name: str | None = alias_field("tagName", default=None)
    members: list[MemberModel] = Field(default_factory=list)
    events: list[EventModel] = Field(default_factory=list)

    @property
    def is_component(self) -> bool:
        """Return whether the declaration carries the custom element marker."""
        return self.custom_element


class ModuleModel(_LenientModel):
    """A JavaScript module of the package."""

    kind: str | None = None
    path: str = ""
    type_definition_path: str | None = alias_field("typeDefinitionPath", default=None)
    exports: list[ExportModel] = Field(default_factory=list)
    declarations: list[DeclarationModel] = Field(default_factory=list)

    @property
    def components(self) -> list[DeclarationModel]:
        """Return declarations flagged as custom elements, in manifest order."""
        return [declaration for declaration in self.declarations if declaration.is_component]

    @property
    def exported_names(self) -> list[str]:
        """Return the declaration names referenced by this module's exports."""
        return [export.declaration_name for export in self.exports if export.declaration_name]


class PackageManifestModel(_LenientModel):
    """Top-level manifest document."""

    schema_version: str | None = alias_field("schemaVersion", default=None)
    modules: list[ModuleModel] = Field(default_factory=list)


def validate_manifest_payload(raw: Any) -> PackageManifestModel:  # noqa: ANN401  # JUSTIFIED: Accepts arbitrary input from JSON parsing, validated at runtime
    """Map a raw manifest payload onto the manifest models.

    Args:
        raw: Parsed manifest JSON, or an already validated model.

    Returns:
        The validated manifest model.

    Raises:
        ManifestValidationError: If the payload shape is not a manifest.
    """
    if isinstance(raw, PackageManifestModel):
        return raw
    try:
        return PackageManifestModel.model_validate(raw)
    except ValidationError as exc:
        raise ManifestValidationError(exc) from exc


__all__ = [
    "CUSTOM_ELEMENT_DEFINITION",
    "DeclarationModel",
    "EventModel",
    "ExportModel",
    "ManifestValidationError",
    "MemberModel",
    "ModuleModel",
    "PackageManifestModel",
    "ParameterModel",
    "ReferenceModel",
    "TypeModel",
    "validate_manifest_payload",
]
