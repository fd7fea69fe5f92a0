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

"""Custom Elements Manifest models and helpers."""

from __future__ import annotations

from .definitions import build_definitions_index, lookup_definition_path
from .loader import ManifestReadError, load_manifest, load_manifest_file
from .members import get_component_public_methods, get_component_public_properties
from .models import (
    DeclarationModel,
    EventModel,
    ExportModel,
    ManifestValidationError,
    MemberModel,
    ModuleModel,
    PackageManifestModel,
    validate_manifest_payload,
)

__all__ = [
    "DeclarationModel",
    "EventModel",
    "ExportModel",
    "ManifestReadError",
    "ManifestValidationError",
    "MemberModel",
    "ModuleModel",
    "PackageManifestModel",
    "build_definitions_index",
    "get_component_public_methods",
    "get_component_public_properties",
    "load_manifest",
    "load_manifest_file",
    "lookup_definition_path",
    "validate_manifest_payload",
]
