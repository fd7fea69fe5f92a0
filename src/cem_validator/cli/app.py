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

"""Command-line entry point for cem-validator."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from cem_validator import __version__
from cem_validator.config.defaults import DEFAULT_CEM_FILE_NAME, DEFAULT_PACKAGE_JSON_PATH
from cem_validator.config.loader import load_options_file
from cem_validator.config.models import ValidatorOptions
from cem_validator.config.resolve import deep_merge, resolve_options, to_camel_case
from cem_validator.core.model_types import LogComponent, Severity
from cem_validator.error_codes import error_code_for
from cem_validator.exceptions import CemValidatorError
from cem_validator.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from cem_validator.manifest.loader import load_manifest_file
from cem_validator.precedence import env_flag, resolve_with_precedence
from cem_validator.reporting import ValidationFailedError
from cem_validator.validator import CemValidator

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger: logging.Logger = logging.getLogger("cem_validator.cli")

CEM_VALIDATOR_VERSION: Final[str] = __version__
PACKAGE_JSON_ENV: Final[str] = "CEM_VALIDATOR_PACKAGE_JSON"
LOG_ERRORS_ENV: Final[str] = "CEM_VALIDATOR_LOG_ERRORS"
DEBUG_ENV: Final[str] = "CEM_VALIDATOR_DEBUG"
SKIP_ENV: Final[str] = "CEM_VALIDATOR_SKIP"
CLI_PREFIX: Final[str] = "[cem-validator]"


class RuleOverrideError(ValueError):
    """Raised when a ``--rule`` token is not ``GROUP.RULE=SEVERITY``."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid rule override '{token}'; expected GROUP.RULE=SEVERITY")


def echo(message: str, *, err: bool = False) -> None:
    """Write a line to stdout or stderr."""
    stream = sys.stderr if err else sys.stdout
    stream.write(f"{message}\n")


def parse_rule_override(token: str) -> tuple[str, str, Severity]:
    """Split a ``--rule`` token into group, rule and severity.

    Args:
        token: Text such as ``"manifest.tagName=warning"``; snake_case names
            are accepted.

    Returns:
        camelCase group and rule names with the parsed severity.

    Raises:
        RuleOverrideError: If the token is malformed or the severity unknown.
    """
    target, separator, raw_severity = token.partition("=")
    group, dot, rule = target.strip().partition(".")
    if not (separator and dot and group and rule):
        raise RuleOverrideError(token)
    try:
        severity = Severity.from_str(raw_severity)
    except ValueError as exc:
        raise RuleOverrideError(token) from exc
    return to_camel_case(group), to_camel_case(rule), severity


def _rule_overrides(tokens: Sequence[str]) -> dict[str, object]:
    overrides: dict[str, dict[str, object]] = {}
    for token in tokens:
        group, rule, severity = parse_rule_override(token)
        overrides.setdefault(group, {})[rule] = severity.value
    return dict(overrides)


def _env_text(name: str) -> str | None:
    value = os.getenv(name)
    return value or None


def build_options(args: argparse.Namespace, config: Mapping[str, object]) -> ValidatorOptions:
    """Combine CLI flags, environment variables and file options.

    Args:
        args: Parsed CLI arguments.
        config: camelCase options loaded from a configuration file.

    Returns:
        Resolved validator options.
    """
    config_rules = config.get("rules")
    rules = deep_merge(
        dict(config_rules) if isinstance(config_rules, dict) else {},
        _rule_overrides(args.rule or []),
    )
    raw: dict[str, Any] = {
        "packageJsonPath": resolve_with_precedence(
            cli_value=args.package_json,
            env_value=_env_text(PACKAGE_JSON_ENV),
            config_value=config.get("packageJsonPath"),
            default=DEFAULT_PACKAGE_JSON_PATH,
        ),
        "cemFileName": resolve_with_precedence(
            cli_value=args.cem_file_name,
            config_value=config.get("cemFileName"),
            default=DEFAULT_CEM_FILE_NAME,
        ),
        "logErrors": resolve_with_precedence(
            cli_value=args.log_errors,
            env_value=env_flag(LOG_ERRORS_ENV),
            config_value=config.get("logErrors"),
            default=False,
        ),
        "debug": resolve_with_precedence(
            cli_value=args.debug,
            env_value=env_flag(DEBUG_ENV),
            config_value=config.get("debug"),
            default=False,
        ),
        "skip": resolve_with_precedence(
            cli_value=args.skip,
            env_value=env_flag(SKIP_ENV),
            config_value=config.get("skip"),
            default=False,
        ),
        "exclude": resolve_with_precedence(
            cli_value=args.exclude,
            config_value=config.get("exclude"),
            default=[],
        ),
        "rules": rules,
    }
    return resolve_options(raw)


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: 0 when the manifest passes, 1 on blocking findings or errors.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"cem-validator {CEM_VALIDATOR_VERSION}")
        return 0
    _ = configure_logging(args.log_format, log_level=args.log_level)
    try:
        loaded = load_options_file(args.config)
        options = build_options(args, loaded.options)
    except RuleOverrideError as exc:
        parser.error(str(exc))
    except CemValidatorError as exc:
        return _report_failure(exc)
    return _run(args.manifest, options)


def _run(manifest_path: Path, options: ValidatorOptions) -> int:
    validator = CemValidator.from_options(options)
    try:
        manifest = None if options.skip else load_manifest_file(manifest_path)
        report = validator.validate(manifest)
    except ValidationFailedError as exc:
        code = error_code_for(exc)
        echo(f"{CLI_PREFIX} {code} {len(exc.errors)} blocking finding(s).", err=True)
        return 1
    except CemValidatorError as exc:
        return _report_failure(exc)
    logger.debug(
        "Validation finished",
        extra=structured_extra(
            LogComponent.CLI,
            path=manifest_path,
            counts=report.counts(),
            outcome="skipped" if report.skipped else "completed",
        ),
    )
    return 0


def _report_failure(exc: CemValidatorError) -> int:
    code = error_code_for(exc)
    echo(f"{CLI_PREFIX} {code} {exc}", err=True)
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cem-validator",
        description="Validate a Custom Elements Manifest against its package.json.",
    )
    parser.add_argument(
        "manifest",
        nargs="?",
        type=Path,
        default=Path(DEFAULT_CEM_FILE_NAME),
        help="Path to the manifest to validate (default: %(default)s).",
    )
    parser.add_argument("--package-json", default=None, help="Path to the package descriptor.")
    parser.add_argument("--cem-file-name", default=None, help="Manifest file name expected in `files`.")
    parser.add_argument("--config", type=Path, default=None, help="Read options from this TOML file.")
    parser.add_argument(
        "--exclude",
        nargs="+",
        action="extend",
        default=None,
        metavar="NAME",
        help="Component class names to skip.",
    )
    parser.add_argument(
        "--rule",
        action="append",
        default=None,
        metavar="GROUP.RULE=SEVERITY",
        help="Override a rule severity, e.g. manifest.tagName=warning.",
    )
    parser.add_argument(
        "--log-errors",
        action="store_true",
        default=None,
        help="Report blocking findings without failing.",
    )
    parser.add_argument("--debug", action="store_true", default=None, help="Print verbose report output.")
    parser.add_argument("--skip", action="store_true", default=None, help="Skip validation entirely.")
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Select logging output format (human-readable text or structured JSON).",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None, help="Set verbosity of logged events.")
    parser.add_argument("--version", action="store_true", help="Print the cem-validator version and exit.")
    return parser


__all__ = ["build_options", "main", "parse_rule_override"]
