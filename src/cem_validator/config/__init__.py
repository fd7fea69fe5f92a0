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

"""Configuration defaults, models and loaders for cem-validator."""

from __future__ import annotations

from .defaults import DEFAULT_CEM_FILE_NAME, DEFAULT_PACKAGE_JSON_PATH, DEFAULT_RULES
from .loader import CONFIG_FILENAMES, LoadedOptions, load_options_file
from .models import (
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    InvalidOptionsError,
    ManifestRules,
    PackageJsonRules,
    RuleConfiguration,
    ValidatorOptions,
)
from .resolve import deep_merge, resolve_options, resolve_rules

__all__ = [
    "CONFIG_FILENAMES",
    "DEFAULT_CEM_FILE_NAME",
    "DEFAULT_PACKAGE_JSON_PATH",
    "DEFAULT_RULES",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "InvalidOptionsError",
    "LoadedOptions",
    "ManifestRules",
    "PackageJsonRules",
    "RuleConfiguration",
    "ValidatorOptions",
    "deep_merge",
    "load_options_file",
    "resolve_options",
    "resolve_rules",
]
