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

"""Best-effort extraction of type names from TypeScript-like annotation text.

This is a lexical scanner, not a type parser. Quoted literals and object
literal bodies are blanked out, parameter labels are dropped and whatever
identifiers remain are reported. Object literals nested inside object
literals are only partially removed, and generic arguments are treated like
any other identifier.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from cem_validator.manifest.members import get_component_public_methods, get_component_public_properties

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from cem_validator.manifest.models import DeclarationModel

__all__ = [
    "NATIVE_EVENT_TYPES",
    "NATIVE_JS_GENERICS",
    "NATIVE_JS_TYPES",
    "NON_EXPORTABLE_TYPE_NAMES",
    "collect_referenced_types",
    "extract_custom_event_type",
    "extract_referenced_type_names",
    "get_missing_exported_types",
    "is_exportable_type_name",
    "is_native_type",
    "split_union",
]

NATIVE_EVENT_TYPES: Final[frozenset[str]] = frozenset({
    "MouseEvent",
    "KeyboardEvent",
    "FocusEvent",
    "InputEvent",
    "UIEvent",
    "WheelEvent",
    "DragEvent",
    "ClipboardEvent",
    "TouchEvent",
    "PointerEvent",
    "AnimationEvent",
    "TransitionEvent",
    "ProgressEvent",
    "Event",
    "ErrorEvent",
    "HashChangeEvent",
    "PageTransitionEvent",
    "PopStateEvent",
    "StorageEvent",
    "MessageEvent",
    "BeforeUnloadEvent",
    "CustomEvent",
})

NATIVE_JS_TYPES: Final[frozenset[str]] = frozenset({
    # primitives
    "string",
    "number",
    "boolean",
    "bigint",
    "symbol",
    "undefined",
    "null",
    "any",
    "unknown",
    "never",
    "void",
    "array",
    # language built-ins
    "Object",
    "Array",
    "Function",
    "Date",
    "RegExp",
    "Map",
    "Set",
    "WeakMap",
    "WeakSet",
    "Promise",
    "Error",
    "EvalError",
    "RangeError",
    "ReferenceError",
    "SyntaxError",
    "TypeError",
    "URIError",
    "AggregateError",
    # typed arrays
    "Int8Array",
    "Uint8Array",
    "Uint8ClampedArray",
    "Int16Array",
    "Uint16Array",
    "Int32Array",
    "Uint32Array",
    "Float32Array",
    "Float64Array",
    "BigInt64Array",
    "BigUint64Array",
    "ArrayBuffer",
    "SharedArrayBuffer",
    "DataView",
    "Math",
    "JSON",
    "Intl",
    "Reflect",
    "Proxy",
    "Iterator",
    "AsyncIterator",
    "Generator",
    "GeneratorFunction",
    "AsyncFunction",
    "AsyncGenerator",
    "AsyncGeneratorFunction",
    # web platform
    "File",
    "Blob",
    "FormData",
    "FileList",
    "FileReader",
    "Headers",
    "Request",
    "Response",
    "URL",
    "URLSearchParams",
    "AbortController",
    "AbortSignal",
    "ReadableStream",
    "WritableStream",
    "TransformStream",
    "WebSocket",
    "Worker",
    "SharedWorker",
    "MessageChannel",
    "MessagePort",
    "Notification",
    "BroadcastChannel",
    "ImageData",
    "ImageBitmap",
    "TextEncoder",
    "TextDecoder",
    "Crypto",
    "SubtleCrypto",
    "Performance",
    "PerformanceEntry",
    "PerformanceObserver",
    "IntersectionObserver",
    "MutationObserver",
    "ResizeObserver",
    "Window",
    "Document",
    "Element",
    "HTMLElement",
    "ShadowRoot",
    "Node",
    "EventTarget",
    "ScrollBehavior",
    "FocusOptions",
    "VirtualElement",
    "Keyframe",
    "KeyframeAnimationOptions",
    "CSSNumberish",
    "HTMLSlotElement",
    "FillMode",
    "PlaybackDirection",
    "CustomStateSet",
    "ElementInternals",
    "EventInit",
})

NATIVE_JS_GENERICS: Final[tuple[str, ...]] = (
    "Promise",
    "Iterator",
    "AsyncIterator",
    "Generator",
    "GeneratorFunction",
    "AsyncFunction",
    "AsyncGenerator",
    "AsyncGeneratorFunction",
    "Set",
    "Map",
    "WeakSet",
    "WeakMap",
)

_TYPE_KEYWORDS: Final[tuple[str, ...]] = (
    "object",
    "readonly",
    "readonlyarray",
    "promise",
    "record",
    "partial",
    "required",
    "pick",
    "omit",
    "exclude",
    "extract",
    "nonnullable",
    "parameters",
    "returntype",
    "instancetype",
    "thistype",
    "keyof",
    "typeof",
    "in",
    "infer",
    "as",
    "extends",
    "templateresult",
    "function",
    "true",
    "false",
    "this",
    "internals",
)

# Compared case-insensitively.
NON_EXPORTABLE_TYPE_NAMES: Final[frozenset[str]] = frozenset(
    name.lower() for name in (*NATIVE_JS_TYPES, *NATIVE_EVENT_TYPES, *_TYPE_KEYWORDS)
)
NON_EXPORTABLE_PREFIXES: Final[tuple[str, ...]] = ("html", "svg")
NATIVE_NAME_PREFIXES: Final[tuple[str, ...]] = ("HTML", "SVG")
_NATIVE_GENERIC_PREFIXES: Final[tuple[str, ...]] = tuple(name.lower() for name in NATIVE_JS_GENERICS)

_OPENERS: Final[str] = "<({["
_CLOSERS: Final[str] = ">)}]"
_ARRAY_SUFFIX: Final[str] = "[]"
_HEAD_PATTERN: Final[re.Pattern[str]] = re.compile(r"^([^<{(]+)")
_CUSTOM_EVENT_PATTERN: Final[re.Pattern[str]] = re.compile(r"CustomEvent<(.+)>")
_QUOTED_LITERAL_PATTERN: Final[re.Pattern[str]] = re.compile(r"'[^']*'|\"[^\"]*\"")
_OBJECT_LITERAL_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{[^}]*\}")
_LABEL_PATTERN: Final[re.Pattern[str]] = re.compile(r"\b[A-Za-z_$][A-Za-z0-9_$]*\??\s*:")
_TOKEN_SEPARATOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9_$]+")


def split_union(type_text: str) -> list[str]:
    """Split ``type_text`` on ``|`` separators that are not nested in brackets.

    Args:
        type_text: Annotation text such as ``"Foo<A | B> | null"``.

    Returns:
        Stripped, non-empty union branches in source order.
    """
    branches: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(type_text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
        elif char == "|" and depth == 0:
            branches.append(type_text[start:index])
            start = index + 1
    branches.append(type_text[start:])
    return [branch.strip() for branch in branches if branch.strip()]


def _head_symbol(branch: str) -> str:
    base = branch.replace(_ARRAY_SUFFIX, "").strip()
    match = _HEAD_PATTERN.match(base)
    return match.group(1).strip() if match else base


def _is_native_branch(branch: str) -> bool:
    if branch.startswith("("):
        return True
    head = _head_symbol(branch)
    lowered = head.lower()
    return (
        lowered.startswith(_NATIVE_GENERIC_PREFIXES)
        or head.startswith(NATIVE_NAME_PREFIXES)
        or lowered in NON_EXPORTABLE_TYPE_NAMES
    )


def is_native_type(type_text: str) -> bool:
    """Return whether ``type_text`` only refers to built-in types.

    Each union branch is reduced to its head symbol (``Set<Foo>[]`` becomes
    ``Set``) and the union is native only when every branch is.

    Args:
        type_text: Annotation text.

    Returns:
        True when no branch names a user-defined type. Empty text is not native.
    """
    branches = split_union(type_text)
    if not branches:
        return False
    return all(_is_native_branch(branch) for branch in branches)


def extract_custom_event_type(type_text: str | None) -> str:
    """Unwrap ``CustomEvent<X>`` to ``X``; other text passes through unchanged."""
    if not type_text:
        return ""
    match = _CUSTOM_EVENT_PATTERN.fullmatch(type_text)
    return match.group(1) if match else type_text


def extract_referenced_type_names(type_text: str | None) -> list[str]:
    """Return the identifiers referenced by an annotation, first occurrence first.

    Args:
        type_text: Annotation text such as ``"(option: WaOption) => void"``.

    Returns:
        De-duplicated identifier tokens. ``"WaOption[]"`` yields ``["WaOption"]``
        and ``"{ top: number } | undefined"`` yields ``["undefined"]``.
    """
    if not type_text:
        return []
    cleaned = _QUOTED_LITERAL_PATTERN.sub(" ", type_text)
    cleaned = _OBJECT_LITERAL_PATTERN.sub(" ", cleaned)
    cleaned = _LABEL_PATTERN.sub(" ", cleaned)
    names: dict[str, None] = {}
    for token in _TOKEN_SEPARATOR_PATTERN.split(cleaned):
        if token and not token[0].isdigit():
            names.setdefault(token, None)
    return list(names)


def is_exportable_type_name(type_name: str) -> bool:
    """Return whether ``type_name`` should be exported by the package."""
    lowered = type_name.lower()
    if lowered.startswith(NON_EXPORTABLE_PREFIXES) or lowered in NON_EXPORTABLE_TYPE_NAMES:
        return False
    return not any(char in type_name for char in ("'", '"', "{"))


def _event_type_texts(component: DeclarationModel) -> Iterable[str | None]:
    for event in component.events:
        text = event.type.text if event.type else None
        if not text or text in NATIVE_EVENT_TYPES:
            continue
        yield extract_custom_event_type(text)


def _member_type_texts(component: DeclarationModel) -> Iterable[str | None]:
    for prop in get_component_public_properties(component):
        yield prop.type.text if prop.type else None
    for method in get_component_public_methods(component):
        for parameter in method.parameters:
            yield parameter.type.text if parameter.type else None


def collect_referenced_types(component: DeclarationModel) -> list[str]:
    """Return exportable type names used by a component's public API.

    Event detail types come first, then public property types, then public
    method parameter types.

    Args:
        component: Custom element declaration.

    Returns:
        De-duplicated type names in first-seen order.
    """
    names: dict[str, None] = {}
    for text in (*_event_type_texts(component), *_member_type_texts(component)):
        for name in extract_referenced_type_names(text):
            if is_exportable_type_name(name):
                names.setdefault(name, None)
    return list(names)


def get_missing_exported_types(component: DeclarationModel, exported_names: Collection[str]) -> list[str]:
    """Return referenced type names of ``component`` absent from ``exported_names``.

    Args:
        component: Custom element declaration.
        exported_names: Names exported by the component's module.

    Returns:
        Missing type names in first-seen order.
    """
    return [name for name in collect_referenced_types(component) if name not in exported_names]
