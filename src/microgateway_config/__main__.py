#!/usr/bin/env python3
# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Command line entry point for microgateway-config."""

import argparse
import json
import logging
import sys

from .exceptions import ConfigFileError, ConfigValidationError
from .loader import load_config_file
from .settings import settings
from .validator import ConfigValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def configure_logging() -> None:
    """Send log output to stderr at the configured level."""
    logging.basicConfig(
        level=settings.logging.level,
        stream=sys.stderr,
        format=settings.logging.format,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="microgateway-config",
        description="Validate gateway configuration files.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="validate a configuration file")
    validate_parser.add_argument("path", help="YAML or JSON gateway configuration")
    validate_parser.add_argument(
        "--json",
        action="store_true",
        help="print the outcome as a JSON object",
    )

    settings_parser = subparsers.add_parser("settings", help="print the effective settings")
    settings_parser.add_argument("--format", choices=("json", "yaml"), default="json")

    return parser


def run_validate(path: str, as_json: bool = False) -> int:
    """Validate one configuration file and print the outcome.

    Returns:
        Process exit status
    """
    try:
        config = load_config_file(path)
    except ConfigFileError as e:
        logger.error("%s", e)
        _emit({"valid": False, "error_code": e.error_code, "message": str(e)}, str(e), as_json)
        return EXIT_UNREADABLE

    result = ConfigValidator().check(config)
    if result:
        _emit({"valid": True, "path": path}, f"{path}: configuration is valid", as_json)
        return EXIT_OK

    _emit(
        {
            "valid": False,
            "error_code": ConfigValidationError.ERROR_CODES[result.kind],
            "kind": result.kind.value,
            "field": result.path,
            "message": result.message,
        },
        f"{path}: {result.message}",
        as_json,
    )
    return EXIT_INVALID


def _emit(payload: dict, text: str, as_json: bool) -> None:
    print(json.dumps(payload) if as_json else text)


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface."""
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.command == "validate":
        return run_validate(args.path, as_json=args.json)

    print(settings.export_config(args.format))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
