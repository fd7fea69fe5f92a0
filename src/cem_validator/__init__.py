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

"""cem-validator: lint a Custom Elements Manifest against its package.json."""

from __future__ import annotations

__version__ = "0.1.0"

from .config import RuleConfiguration, ValidatorOptions, resolve_options, resolve_rules
from .core.model_types import RuleId, Severity
from .exceptions import CemValidatorError, InvalidFilePathError, PackageJsonReadError
from .logging import LoggingSink, ReportSink, configure_logging
from .plugin import CemValidatorPlugin, cem_validator_plugin
from .reporting import ValidationFailedError, ValidationReport
from .rules import Finding, FindingCollector, evaluate_rules
from .validator import CemValidator, validate

__all__ = [
    "CemValidator",
    "CemValidatorError",
    "CemValidatorPlugin",
    "Finding",
    "FindingCollector",
    "InvalidFilePathError",
    "LoggingSink",
    "PackageJsonReadError",
    "ReportSink",
    "RuleConfiguration",
    "RuleId",
    "Severity",
    "ValidationFailedError",
    "ValidationReport",
    "ValidatorOptions",
    "__version__",
    "cem_validator_plugin",
    "evaluate_rules",
    "resolve_options",
    "resolve_rules",
    "validate",
]
