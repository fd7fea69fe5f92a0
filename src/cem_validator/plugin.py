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

"""Adapter for the custom elements manifest analyzer plugin lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .validator import CemValidator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .config.models import ValidatorOptions
    from .logging import ReportSink
    from .reporting import ValidationReport

__all__ = ["PLUGIN_NAME", "CemValidatorPlugin", "cem_validator_plugin"]

PLUGIN_NAME: Final[str] = "@wc-toolkit/cem-validator"


@dataclass(slots=True)
class CemValidatorPlugin:
    """Analyzer plugin that validates the manifest once packages are linked."""

    validator: CemValidator
    name: str = PLUGIN_NAME

    def package_link_phase(self, custom_elements_manifest: object) -> ValidationReport:
        """Validate the linked manifest.

        Args:
            custom_elements_manifest: Manifest produced by the analyzer.

        Returns:
            Report of the run.
        """
        return self.validator.validate(custom_elements_manifest)


def cem_validator_plugin(
    options: Mapping[str, object] | ValidatorOptions | None = None,
    *,
    sink: ReportSink | None = None,
) -> CemValidatorPlugin:
    """Return a plugin instance configured with ``options``.

    Options are resolved eagerly so configuration mistakes surface when the
    plugin is registered.
    """
    return CemValidatorPlugin(validator=CemValidator.from_options(options, sink=sink))
