"""Fill a PPTX template with JSON data.

Usage:
    python scripts/fill_pptx_template.py --template deck.pptx --data data.json --output out.pptx
    python scripts/fill_pptx_template.py --template deck.pptx --list-variables
"""

from __future__ import annotations

from ppttemplates.cli import run_cli


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
