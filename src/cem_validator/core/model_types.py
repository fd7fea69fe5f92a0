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

"""Model types and enumerations for cem-validator.

This module defines the enumerations shared by the rule engine, the reporting
layer and the logging setup:

- Severity levels configurable per rule
- Stable rule identifiers used on findings
- Logging components and output formats
"""

from __future__ import annotations

from enum import StrEnum


class Severity(StrEnum):
    """Configurable severity of a validation rule.

    Attributes:
        OFF: The rule is suppressed and never produces findings.
        WARNING: Findings are reported but never fail the run.
        ERROR: Findings fail the run unless errors are only logged.
    """

    OFF = "off"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def from_str(cls, raw: str) -> Severity:
        """Create a Severity enum from a string value.

        Args:
            raw: String representation of the severity.

        Returns:
            Severity enum value.

        Raises:
            ValueError: If the string does not match any Severity value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown severity '{raw}'"
            raise ValueError(msg) from exc

    @property
    def enabled(self) -> bool:
        """Return whether findings may be produced at this severity."""
        return self is not Severity.OFF


class RuleId(StrEnum):
    """Stable identifiers attached to findings.

    Identifiers follow ``<group>.<rule>`` where the rule part matches the
    configuration key for the rule. ``PACKAGE_JSON`` is reserved for a
    descriptor that is missing or not an object.
    """

    PACKAGE_JSON = "packageJson"
    PACKAGE_TYPE = "packageJson.packageType"
    MAIN = "packageJson.main"
    MODULE = "packageJson.module"
    TYPES = "packageJson.types"
    EXPORTS = "packageJson.exports"
    CUSTOM_ELEMENTS_PROPERTY = "packageJson.customElementsProperty"
    PUBLISHED_CEM = "packageJson.publishedCem"
    SCHEMA_VERSION = "manifest.schemaVersion"
    MODULE_PATH = "manifest.modulePath"
    DEFINITION_PATH = "manifest.definitionPath"
    TYPE_DEFINITION_PATH = "manifest.typeDefinitionPath"
    EXPORT_TYPES = "manifest.exportTypes"
    TAG_NAME = "manifest.tagName"


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable system components."""

    CLI = "cli"
    CONFIG = "config"
    MANIFEST = "manifest"
    RULES = "rules"
    REPORTING = "reporting"
    VALIDATOR = "validator"


__all__ = ["LogComponent", "LogFormat", "RuleId", "Severity"]
