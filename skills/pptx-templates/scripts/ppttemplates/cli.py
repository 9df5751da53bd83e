"""CLI orchestration for PPTX template filling."""

from __future__ import annotations

import argparse
import logging
import traceback
from pathlib import Path
from typing import Optional, Sequence

from pptx import Presentation

from .api import fill_template_file
from .errors import DataValidationError
from .inspection import list_template_variables


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill a PPTX template containing $/variable/ placeholders with JSON data"
    )
    parser.add_argument("--template", required=True, help="Path to the .pptx template file")
    parser.add_argument("--data", default=None, help="Path to the JSON data file (text, hide, style, images)")
    parser.add_argument("--output", default=None, help="Output PPTX file path")
    parser.add_argument(
        "--list-variables",
        action="store_true",
        help="Print the variables found in the template and exit",
    )
    parser.add_argument("--verbose", action="store_true", help="Log each hidden shape and replaced picture")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full traceback for unexpected errors",
    )
    return parser


def _print_variables(template_path: Path) -> None:
    prs = Presentation(str(template_path))
    for occurrence in list_template_variables(prs):
        variable = occurrence.variable
        arg1 = "" if variable.arg1 is None else variable.arg1
        print(f"{occurrence.slide_number}\t{occurrence.channel}\t{occurrence.shape_name}\t{variable.name}\t{arg1}")


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        # Only this package's records; Pillow and python-pptx stay quiet.
        package_logger = logging.getLogger("ppttemplates")
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
            package_logger.addHandler(handler)
        package_logger.setLevel(logging.DEBUG)

    try:
        template_path = Path(args.template).resolve()
        if not template_path.is_file():
            raise SystemExit(f"Template not found: {template_path}")

        if args.list_variables:
            _print_variables(template_path)
            return

        if not args.data or not args.output:
            parser.error("--data and --output are required unless --list-variables is given")

        saved = fill_template_file(
            template_path=template_path,
            data_path=Path(args.data).resolve(),
            output_path=Path(args.output).resolve(),
        )
        print(f"✅ PPTX saved to {saved}")
    except DataValidationError as e:
        raise SystemExit(str(e)) from e
    except SystemExit:
        raise
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"PPTX template filling failed: {e}") from e
