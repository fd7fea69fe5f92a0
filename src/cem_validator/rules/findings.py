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

"""Findings and the per-run collector that accumulates them."""

from __future__ import annotations

from dataclasses import dataclass, field

from cem_validator.core.model_types import RuleId, Severity
from cem_validator.exceptions import CemValidatorValidationError

__all__ = ["Finding", "FindingCollector", "OffSeverityFindingError"]


class OffSeverityFindingError(CemValidatorValidationError):
    """Raised when a finding is constructed with the ``off`` severity."""

    def __init__(self, rule: RuleId) -> None:
        """Initialize with the offending rule.

        Args:
            rule: Rule the finding was created for.
        """
        self.rule = rule
        super().__init__(f"Finding for {rule} cannot have severity 'off'")


@dataclass(slots=True, frozen=True)
class Finding:
    """One rule violation.

    Attributes:
        rule: Identifier of the violated rule.
        severity: Configured severity; never ``off``.
        message: Human-readable description.
    """

    rule: RuleId
    severity: Severity
    message: str

    def __post_init__(self) -> None:
        if self.severity is Severity.OFF:
            raise OffSeverityFindingError(self.rule)

    def render(self) -> str:
        """Return ``"<rule>: <message>"``."""
        return f"{self.rule}: {self.message}"


def _empty_findings() -> list[Finding]:
    return []


@dataclass(slots=True)
class FindingCollector:
    """Ordered accumulator for the findings of one validation run."""

    _findings: list[Finding] = field(default_factory=_empty_findings)

    def add(self, rule: RuleId, severity: Severity, message: str) -> Finding | None:
        """Record a finding unless ``severity`` is ``off``.

        Returns:
            The recorded finding, or None when nothing was recorded.
        """
        if not severity.enabled:
            return None
        finding = Finding(rule=rule, severity=severity, message=message)
        self._findings.append(finding)
        return finding

    def drain(self) -> tuple[Finding, ...]:
        """Return every recorded finding in order and empty the collector."""
        drained = tuple(self._findings)
        self._findings.clear()
        return drained

    def __len__(self) -> int:
        return len(self._findings)

    @property
    def findings(self) -> tuple[Finding, ...]:
        """Findings recorded so far, without clearing them."""
        return tuple(self._findings)
