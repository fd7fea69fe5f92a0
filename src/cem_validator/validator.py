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

"""Validation entry points."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from cem_validator.config.resolve import resolve_options
from cem_validator.core.model_types import LogComponent
from cem_validator.logging import LoggingSink, ReportSink, structured_extra
from cem_validator.manifest.models import validate_manifest_payload
from cem_validator.package_json import read_package_json
from cem_validator.reporting import LOG_PREFIX, SKIPPED_MESSAGE, ValidationReport, report_findings
from cem_validator.rules.aggregator import RuleAggregator
from cem_validator.rules.findings import FindingCollector

if TYPE_CHECKING:
    from cem_validator.config.models import ValidatorOptions

__all__ = ["CemValidator", "validate"]

logger: logging.Logger = logging.getLogger("cem_validator.validator")

STARTED_MESSAGE: Final[str] = f"{LOG_PREFIX} Validating Custom Elements Manifest..."
COMPLETED_MESSAGE: Final[str] = f"{LOG_PREFIX} Custom Elements Manifest validation complete."


def _empty_collector() -> FindingCollector:
    return FindingCollector()


@dataclass(slots=True)
class CemValidator:
    """One validator configuration with its sink and finding collector.

    Runs on the same instance reuse the options and sink; the collector is
    drained by every run, so no finding leaks from one run into the next.

    Attributes:
        options: Resolved options.
        sink: Destination for report output.
        collector: Accumulator for the current run.
    """

    options: ValidatorOptions
    sink: ReportSink
    collector: FindingCollector = field(default_factory=_empty_collector)

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, object] | ValidatorOptions | None = None,
        *,
        sink: ReportSink | None = None,
    ) -> CemValidator:
        """Build a validator from raw or resolved options.

        Args:
            options: Option mapping (camelCase or snake_case keys), resolved
                options, or None for defaults.
            sink: Report sink; a ``LoggingSink`` honouring ``debug`` by default.

        Returns:
            Configured validator.
        """
        resolved = resolve_options(options)
        return cls(options=resolved, sink=sink or LoggingSink(debug=resolved.debug))

    def validate(self, manifest: object, *, package_json: object | None = None) -> ValidationReport:
        """Validate ``manifest`` against the package descriptor.

        Args:
            manifest: Manifest JSON payload or validated manifest model.
            package_json: Decoded descriptor. When omitted the descriptor is
                read from ``options.package_json_path``.

        Returns:
            Report of the run.

        Raises:
            InvalidFilePathError: If the descriptor path is malformed.
            PackageJsonReadError: If the descriptor cannot be read.
            ManifestValidationError: If the manifest is structurally invalid.
            ValidationFailedError: If blocking findings were produced and
                ``log_errors`` is off.
        """
        if self.options.skip:
            self.sink.info(SKIPPED_MESSAGE, force=True)
            return ValidationReport(skipped=True)

        _ = self.collector.drain()
        descriptor = read_package_json(self.options.package_json_path) if package_json is None else package_json
        model = validate_manifest_payload(manifest)

        self.sink.info(STARTED_MESSAGE)
        aggregator = RuleAggregator(
            rules=self.options.rules,
            cem_file_name=self.options.cem_file_name,
            exclude=frozenset(self.options.exclude),
            collector=self.collector,
        )
        aggregator.evaluate_package_json(descriptor)
        aggregator.evaluate_manifest(model)
        findings = self.collector.drain()
        logger.debug(
            "Evaluated %d module(s)",
            len(model.modules),
            extra=structured_extra(
                LogComponent.VALIDATOR,
                path=self.options.package_json_path,
                details={"findings": len(findings)},
            ),
        )
        report = report_findings(findings, self.sink, log_errors=self.options.log_errors)
        self.sink.success(COMPLETED_MESSAGE)
        return report


def validate(
    manifest: object,
    options: Mapping[str, object] | ValidatorOptions | None = None,
    *,
    package_json: object | None = None,
    sink: ReportSink | None = None,
) -> ValidationReport:
    """Validate a Custom Elements Manifest in a single call.

    Args:
        manifest: Manifest JSON payload or validated manifest model.
        options: Validator options; see ``CemValidator.from_options``.
        package_json: Decoded descriptor; read from disk when omitted.
        sink: Report sink; defaults to a ``LoggingSink``.

    Returns:
        Report of the run.
    """
    validator = CemValidator.from_options(options, sink=sink)
    return validator.validate(manifest, package_json=package_json)
