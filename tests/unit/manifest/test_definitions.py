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

"""Unit tests for the definitions index and member visibility helpers."""

from __future__ import annotations

import pytest

from cem_validator.manifest import (
    build_definitions_index,
    get_component_public_methods,
    get_component_public_properties,
    lookup_definition_path,
    validate_manifest_payload,
)
from tests.fixtures.builders import (
    build_component,
    build_definition_export,
    build_field,
    build_js_export,
    build_manifest,
    build_method,
    build_module,
)

pytestmark = pytest.mark.unit


def _manifest_with_definitions() -> dict[str, object]:
    return build_manifest(
        build_module("src/my-element.js", declarations=[build_component()], exports=[build_js_export("MyElement")]),
        build_module("src/define.js", exports=[build_definition_export("my-element", "MyElement")]),
        build_module("src/define-again.js", exports=[build_definition_export("my-element", "OtherElement")]),
    )


def test_index_keys_by_tag_and_class() -> None:
    index = build_definitions_index(validate_manifest_payload(_manifest_with_definitions()))
    assert index == {
        "my-element": "src/define.js",
        "MyElement": "src/define.js",
        "OtherElement": "src/define-again.js",
    }


def test_lookup_prefers_tag_name() -> None:
    index = {"my-element": "src/by-tag.js", "MyElement": "src/by-class.js"}
    component = validate_manifest_payload(
        build_manifest(build_module(declarations=[build_component()])),
    ).modules[0].components[0]
    assert lookup_definition_path(index, component) == "src/by-tag.js"


def test_lookup_falls_back_to_class_name() -> None:
    component = validate_manifest_payload(
        build_manifest(build_module(declarations=[build_component(tag_name=None)])),
    ).modules[0].components[0]
    assert lookup_definition_path({"MyElement": "src/by-class.js"}, component) == "src/by-class.js"
    assert lookup_definition_path({}, component) is None


def test_public_members_filter_visibility_and_kind() -> None:
    component = build_component(
        members=[
            build_field("value", "string"),
            build_field("count", "number", privacy="public"),
            build_field("secret", "string", privacy="private"),
            build_field("internal", "string", privacy="protected"),
            build_field("#hidden", "string"),
            build_field("styles", "CSSResultGroup", static=True),
            build_method("focus"),
            build_method("_reset", privacy="private"),
        ],
    )
    manifest = validate_manifest_payload(build_manifest(build_module(declarations=[component])))
    declaration = manifest.modules[0].components[0]
    assert [member.name for member in get_component_public_properties(declaration)] == ["value", "count"]
    assert [member.name for member in get_component_public_methods(declaration)] == ["focus"]
