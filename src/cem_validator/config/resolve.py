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

"""Layer caller-supplied options over the built-in defaults."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from cem_validator.core.model_types import LogComponent
from cem_validator.exceptions import CemValidatorTypeError
from cem_validator.logging import structured_extra

from .defaults import DEFAULT_RULES, default_options
from .models import (
    InvalidOptionsError,
    RuleConfiguration,
    RulesModel,
    ValidatorOptions,
    ValidatorOptionsModel,
    options_from_model,
    rules_from_model,
)

__all__ = ["deep_merge", "normalise_keys", "resolve_options", "resolve_rules", "to_camel_case"]

logger: logging.Logger = logging.getLogger("cem_validator.config")


def deep_merge(base: Mapping[str, object], override: Mapping[str, object]) -> dict[str, object]:
    """Return ``base`` with ``override`` merged in recursively.

    Keys present in both are merged when both values are mappings; otherwise
    the override value wins. Neither input is modified.

    Args:
        base: Lower-precedence mapping.
        override: Higher-precedence mapping.

    Returns:
        A new merged mapping.
    """
    merged: dict[str, object] = {key: _copy_value(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(_str_keyed(current), _str_keyed(value))
        else:
            merged[key] = _copy_value(value)
    return merged


def _str_keyed(value: Mapping[object, object]) -> dict[str, object]:
    return {str(key): item for key, item in value.items()}


def _copy_value(value: object) -> object:
    if isinstance(value, Mapping):
        return deep_merge({}, _str_keyed(value))
    if isinstance(value, list | tuple):
        return list(value)
    return value


def to_camel_case(key: str) -> str:
    """Convert ``snake_case`` keys to ``camelCase``; other keys are unchanged."""
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def normalise_keys(raw: Mapping[str, object]) -> dict[str, object]:
    """Recursively rewrite mapping keys to their camelCase spelling."""
    result: dict[str, object] = {}
    for key, value in raw.items():
        result[to_camel_case(str(key))] = normalise_keys(_str_keyed(value)) if isinstance(value, Mapping) else value
    return result


def _require_mapping(value: object, label: str) -> None:
    if value is not None and not isinstance(value, Mapping):
        message = f"{label} must be a mapping, got {type(value).__name__}"
        raise CemValidatorTypeError(message)


def resolve_rules(overrides: Mapping[str, object] | RuleConfiguration | None = None) -> RuleConfiguration:
    """Resolve a partial rule mapping into a complete rule configuration.

    Args:
        overrides: Partial ``{"packageJson": {...}, "manifest": {...}}``
            mapping, an already resolved configuration, or None for defaults.

    Returns:
        Configuration with a severity for every rule.

    Raises:
        InvalidOptionsError: If a severity or rule name is not recognised.
        CemValidatorTypeError: If ``overrides`` is not a mapping.
    """
    if isinstance(overrides, RuleConfiguration):
        return overrides
    _require_mapping(overrides, "rule overrides")
    defaults = {group: dict(rules) for group, rules in DEFAULT_RULES.items()}
    merged = deep_merge(defaults, normalise_keys(overrides or {}))
    try:
        model = RulesModel.model_validate(merged)
    except ValidationError as exc:
        raise InvalidOptionsError(exc) from exc
    return rules_from_model(model)


def resolve_options(raw: Mapping[str, object] | ValidatorOptions | None = None) -> ValidatorOptions:
    """Resolve caller options into fully populated validator options.

    Option keys may be given in camelCase (``packageJsonPath``) or snake_case
    (``package_json_path``).

    Args:
        raw: Partial option mapping, resolved options, or None for defaults.

    Returns:
        Options with every field and rule severity resolved.

    Raises:
        InvalidOptionsError: If the merged options fail validation.
        CemValidatorTypeError: If ``raw`` is not a mapping.
    """
    if isinstance(raw, ValidatorOptions):
        return raw
    _require_mapping(raw, "validator options")
    provided = normalise_keys(raw or {})
    rules = provided.get("rules")
    if isinstance(rules, RuleConfiguration):
        provided["rules"] = rules.to_mapping()
    merged = deep_merge(default_options(), provided)
    try:
        model = ValidatorOptionsModel.model_validate(merged)
    except ValidationError as exc:
        raise InvalidOptionsError(exc) from exc
    options = options_from_model(model)
    logger.debug(
        "Resolved validator options",
        extra=structured_extra(
            LogComponent.CONFIG,
            path=options.package_json_path,
            details={"rules": options.rules.to_mapping(), "exclude": list(options.exclude)},
        ),
    )
    return options
