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

"""Run the rule set against a package descriptor and a manifest.

Rules are evaluated in a fixed order and each finding is appended to the
run's collector as it is produced:

1. Package rules: type, then either main/module/types (no ``exports`` and no
   ``browser`` field) or exports, then customElements and the published
   manifest check.
2. Manifest rules: the schema version, then for each module in order and
   each component in declaration order the tag name, module path,
   definition path, type definition path and exported types.

A rule configured as ``off`` is skipped before its checker runs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from typing import Final

from cem_validator.config.defaults import DEFAULT_CEM_FILE_NAME
from cem_validator.config.models import RuleConfiguration
from cem_validator.core.model_types import LogComponent, RuleId, Severity
from cem_validator.logging import structured_extra
from cem_validator.manifest.definitions import build_definitions_index, lookup_definition_path
from cem_validator.manifest.models import DeclarationModel, ModuleModel, PackageManifestModel

from . import checkers
from .findings import Finding, FindingCollector

__all__ = ["RuleAggregator", "evaluate_rules"]

logger: logging.Logger = logging.getLogger("cem_validator.rules")

LEGACY_ENTRY_MARKERS: Final[tuple[str, ...]] = ("exports", "browser")
INVALID_DESCRIPTOR_MESSAGE: Final[str] = "The package.json file is missing or invalid."


def _empty_collector() -> FindingCollector:
    return FindingCollector()


@dataclass(slots=True)
class RuleAggregator:
    """Evaluates rules for one run and records findings in ``collector``.

    Attributes:
        rules: Resolved rule severities.
        cem_file_name: Manifest file name expected in the published files.
        exclude: Component class names that are skipped entirely.
        collector: Destination for findings.
    """

    rules: RuleConfiguration = field(default_factory=RuleConfiguration)
    cem_file_name: str = DEFAULT_CEM_FILE_NAME
    exclude: Collection[str] = ()
    collector: FindingCollector = field(default_factory=_empty_collector)

    def _apply(self, rule: RuleId, check: Callable[[], str | None]) -> None:
        severity = self.rules.severity_for(rule)
        if not severity.enabled:
            return
        message = check()
        if message is not None:
            self._record(rule, severity, message)

    def _apply_many(self, rule: RuleId, check: Callable[[], list[str]]) -> None:
        severity = self.rules.severity_for(rule)
        if not severity.enabled:
            return
        for message in check():
            self._record(rule, severity, message)

    def _record(self, rule: RuleId, severity: Severity, message: str) -> None:
        self.collector.add(rule, severity, message)
        logger.debug(
            "Rule %s failed",
            rule,
            extra=structured_extra(LogComponent.RULES, rule=rule, severity=severity),
        )

    def evaluate_package_json(self, package_json: object) -> None:
        """Evaluate the package descriptor rules.

        A descriptor that is not a JSON object produces a single ``packageJson``
        error and no other package findings.
        """
        if not isinstance(package_json, Mapping):
            self._record(RuleId.PACKAGE_JSON, Severity.ERROR, INVALID_DESCRIPTOR_MESSAGE)
            return
        descriptor: Mapping[str, object] = package_json
        self._apply(RuleId.PACKAGE_TYPE, lambda: checkers.check_package_type(descriptor.get("type")))
        if not any(marker in descriptor for marker in LEGACY_ENTRY_MARKERS):
            self._apply(RuleId.MAIN, lambda: checkers.check_main(descriptor.get("main")))
            self._apply(RuleId.MODULE, lambda: checkers.check_module(descriptor.get("module")))
            self._apply(RuleId.TYPES, lambda: checkers.check_types(descriptor.get("types")))
        else:
            self._apply(RuleId.EXPORTS, lambda: checkers.check_exports(descriptor.get("exports")))
        self._apply(
            RuleId.CUSTOM_ELEMENTS_PROPERTY,
            lambda: checkers.check_custom_elements(descriptor.get("customElements")),
        )
        self._apply(
            RuleId.PUBLISHED_CEM,
            lambda: checkers.check_cem_published(
                descriptor.get("files"),
                descriptor.get("customElements"),
                self.cem_file_name,
            ),
        )

    def evaluate_manifest(self, manifest: PackageManifestModel) -> None:
        """Evaluate the schema version and every non-excluded component."""
        self._apply(RuleId.SCHEMA_VERSION, lambda: checkers.check_schema_version(manifest.schema_version))
        definitions = build_definitions_index(manifest)
        for module in manifest.modules:
            components = module.components
            if not components:
                continue
            exported_names = module.exported_names
            for component in components:
                if component.name in self.exclude:
                    logger.debug(
                        "Skipping excluded component %s",
                        component.name,
                        extra=structured_extra(LogComponent.RULES, path=module.path),
                    )
                    continue
                definition_path = lookup_definition_path(definitions, component)
                self._evaluate_component(module, component, definition_path, exported_names)

    def _evaluate_component(
        self,
        module: ModuleModel,
        component: DeclarationModel,
        definition_path: str | None,
        exported_names: list[str],
    ) -> None:
        name = component.name
        self._apply(RuleId.TAG_NAME, lambda: checkers.check_component_tag_name(name, component.tag_name))
        self._apply(RuleId.MODULE_PATH, lambda: checkers.check_component_module_path(name, module.path))
        self._apply(
            RuleId.DEFINITION_PATH,
            lambda: checkers.check_component_definition_path(name, definition_path),
        )
        self._apply(
            RuleId.TYPE_DEFINITION_PATH,
            lambda: checkers.check_component_type_definition_path(name, module.type_definition_path),
        )
        self._apply_many(
            RuleId.EXPORT_TYPES,
            lambda: checkers.check_component_export_types(component, exported_names),
        )


def evaluate_rules(
    package_json: object,
    manifest: PackageManifestModel,
    rules: RuleConfiguration | None = None,
    *,
    cem_file_name: str = DEFAULT_CEM_FILE_NAME,
    exclude: Collection[str] = (),
) -> tuple[Finding, ...]:
    """Evaluate every rule and return the findings in evaluation order.

    Args:
        package_json: Decoded package descriptor.
        manifest: Validated manifest.
        rules: Resolved severities; defaults when omitted.
        cem_file_name: Manifest file name expected in the published files.
        exclude: Component class names to skip.

    Returns:
        Ordered findings. Nothing is retained between calls.
    """
    aggregator = RuleAggregator(
        rules=rules or RuleConfiguration(),
        cem_file_name=cem_file_name,
        exclude=exclude,
    )
    aggregator.evaluate_package_json(package_json)
    aggregator.evaluate_manifest(manifest)
    return aggregator.collector.drain()
