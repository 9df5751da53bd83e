from __future__ import annotations

import json
import logging
import subprocess
import sys
from pathlib import Path

import pytest
from pptx import Presentation

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from conftest import add_textbox  # noqa: E402
from ppttemplates import run_cli  # noqa: E402


def _write_template(deck, path: Path) -> Path:
    prs, slide = deck
    add_textbox(slide, [("Client: $/client/", None)], [("draft note", "$/draft/")])
    prs.save(str(path))
    return path


def test_cli_shows_clean_validation_error(deck, tmp_path: Path) -> None:
    template = _write_template(deck, tmp_path / "template.pptx")
    bad_data = tmp_path / "bad.json"
    bad_data.write_text('{"text": "oops"}', encoding="utf-8")

    script = SCRIPT_DIR / "fill_pptx_template.py"
    output = tmp_path / "out.pptx"

    result = subprocess.run(
        [
            sys.executable,
            str(script),
            "--template",
            str(template),
            "--data",
            str(bad_data),
            "--output",
            str(output),
        ],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 1
    assert "Template data validation failed" in result.stderr
    assert "Traceback" not in result.stderr
    assert not output.exists()


def test_cli_fills_template(deck, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    template = _write_template(deck, tmp_path / "template.pptx")
    data = tmp_path / "data.json"
    data.write_text(json.dumps({"text": {"client": "ACME"}, "hide": {"draft": True}}), encoding="utf-8")
    output = tmp_path / "nested" / "out.pptx"

    run_cli(["--template", str(template), "--data", str(data), "--output", str(output)])

    assert "PPTX saved to" in capsys.readouterr().out
    filled = Presentation(str(output))
    assert filled.slides[0].shapes[0].text_frame.text == "Client: ACME"


def test_cli_lists_variables(deck, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    template = _write_template(deck, tmp_path / "template.pptx")

    run_cli(["--template", str(template), "--list-variables"])

    lines = capsys.readouterr().out.strip().splitlines()
    assert [line.split("\t")[1::2] for line in lines] == [["text", "client"], ["run-link", "draft"]]


def test_cli_verbose_enables_package_debug_logging_only(deck, tmp_path: Path) -> None:
    template = _write_template(deck, tmp_path / "template.pptx")
    package_logger = logging.getLogger("ppttemplates")
    root_level = logging.getLogger().level

    try:
        run_cli(["--template", str(template), "--list-variables", "--verbose"])
        run_cli(["--template", str(template), "--list-variables", "--verbose"])

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert logging.getLogger().level == root_level
        assert logging.getLogger("PIL").getEffectiveLevel() == logging.getLogger().getEffectiveLevel()
    finally:
        package_logger.handlers.clear()
        package_logger.setLevel(logging.NOTSET)


def test_cli_requires_data_and_output(deck, tmp_path: Path) -> None:
    template = _write_template(deck, tmp_path / "template.pptx")

    with pytest.raises(SystemExit) as exc:
        run_cli(["--template", str(template)])
    assert exc.value.code == 2


def test_cli_reports_missing_template(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        run_cli(["--template", str(tmp_path / "missing.pptx"), "--list-variables"])
    assert "Template not found" in str(exc.value.code)
