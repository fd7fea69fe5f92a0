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

"""Partition findings by severity, report them and escalate blocking ones."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from cem_validator.core.model_types import LogComponent, Severity
from cem_validator.exceptions import CemValidatorError
from cem_validator.logging import structured_extra

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cem_validator.logging import ReportSink
    from cem_validator.rules.findings import Finding

__all__ = [
    "LOG_PREFIX",
    "ValidationFailedError",
    "ValidationReport",
    "format_error_summary",
    "format_warning_summary",
    "report_findings",
]

logger: logging.Logger = logging.getLogger("cem_validator.reporting")

LOG_PREFIX: Final[str] = "[cem-validator] -"
PASSED_MESSAGE: Final[str] = f"{LOG_PREFIX} All rules passed. No issues found."
SKIPPED_MESSAGE: Final[str] = f"{LOG_PREFIX} Skipped"


@dataclass(slots=True, frozen=True)
class ValidationReport:
    """Outcome of one validation run.

    Attributes:
        findings: Every finding, in evaluation order.
        skipped: True when the run was skipped and nothing was evaluated.
    """

    findings: tuple[Finding, ...] = ()
    skipped: bool = False

    @property
    def warnings(self) -> tuple[Finding, ...]:
        return tuple(finding for finding in self.findings if finding.severity is Severity.WARNING)

    @property
    def errors(self) -> tuple[Finding, ...]:
        return tuple(finding for finding in self.findings if finding.severity is Severity.ERROR)

    @property
    def passed(self) -> bool:
        """True when no blocking finding was produced."""
        return not self.errors

    def counts(self) -> dict[Severity, int]:
        """Return the number of findings per severity."""
        return dict(Counter(finding.severity for finding in self.findings))


def _finding_line(finding: Finding) -> str:
    return f"  - {finding.render()}"


def format_error_summary(errors: Sequence[Finding]) -> str:
    """Return the aggregated message listing every blocking finding."""
    lines = [f"{LOG_PREFIX} {len(errors)} error(s) found."]
    lines.extend(_finding_line(error) for error in errors)
    return "\n".join(lines)


def format_warning_summary(warnings: Sequence[Finding]) -> str:
    return f"{LOG_PREFIX} {len(warnings)} warning(s) found."


class ValidationFailedError(CemValidatorError):
    """Raised once per run when blocking findings were produced.

    Attributes:
        errors: The error-severity findings, in evaluation order.
    """

    def __init__(self, errors: Sequence[Finding]) -> None:
        """Initialize with the blocking findings.

        Args:
            errors: Error-severity findings of the run.
        """
        self.errors = tuple(errors)
        super().__init__(format_error_summary(self.errors))


def report_findings(findings: Sequence[Finding], sink: ReportSink, *, log_errors: bool = False) -> ValidationReport:
    """Report ``findings`` through ``sink`` and escalate errors.

    Warnings never fail the run: their count is always reported and each one
    is listed only in verbose mode. Errors are always listed, then raised as
    one ``ValidationFailedError`` unless ``log_errors`` is set.

    Args:
        findings: Findings of the run, in evaluation order.
        sink: Destination for report output.
        log_errors: Report errors without raising.

    Returns:
        The run's report.

    Raises:
        ValidationFailedError: If errors were found and ``log_errors`` is False.
    """
    report = ValidationReport(findings=tuple(findings))
    logger.debug(
        "Reporting %d finding(s)",
        len(report.findings),
        extra=structured_extra(LogComponent.REPORTING, counts=report.counts()),
    )
    if not report.findings:
        sink.success(PASSED_MESSAGE)
        return report

    warnings = report.warnings
    if warnings:
        sink.warning(format_warning_summary(warnings), force=True)
        for warning in warnings:
            sink.warning(_finding_line(warning))

    errors = report.errors
    if errors:
        sink.error(format_error_summary(errors), force=True)
        if not log_errors:
            raise ValidationFailedError(errors)
    return report
