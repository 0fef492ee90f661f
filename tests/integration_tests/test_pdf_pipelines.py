"""Integration tests running the PDF pipelines against stand-in programs."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

import litconvert
from litconvert.errors import ExternalToolFailure

pytestmark = pytest.mark.skipif(
    sys.platform.startswith("win"), reason="stand-in tools are POSIX shell scripts"
)

FAKE_RST2PDF = """#!/bin/sh
# rst2pdf SOURCE -o OUTPUT [options]
printf '%%PDF-1.4\\n' > "$3"
"""

FAKE_LATEX = """#!/bin/sh
for last; do :; done
printf '%s\\n' "$0 $*" >> calls.log
printf '%%PDF-1.4\\n' > "${last%.tex}.pdf"
"""

BROKEN_TOOL = """#!/bin/sh
exit 0
"""


def _install(bin_dir: Path, name: str, script: str) -> None:
    bin_dir.mkdir(exist_ok=True)
    tool = bin_dir / name
    tool.write_text(script)
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def tool_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    for name in ("LITCONVERT_RST2PDF", "LITCONVERT_PDFLATEX", "PDFLATEX"):
        monkeypatch.delenv(name, raising=False)
    return bin_dir


def test_rst_document_compiles_next_to_source(
    tool_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Infer rst2pdf for .rst and restore the caller's directory."""
    _install(tool_dir, "rst2pdf", FAKE_RST2PDF)
    docs = tmp_path / "docs"
    docs.mkdir()
    source = docs / "doc.rst"
    source.write_text("Title\n=====\n")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    out = litconvert.render_pdf(source)

    assert out == docs / "doc.pdf"
    assert out.read_text().startswith("%PDF")
    assert Path.cwd() == elsewhere


def test_rst2pdf_reports_missing_output(tool_dir: Path, tmp_path: Path) -> None:
    """Fail when the program exits cleanly without writing the PDF."""
    _install(tool_dir, "rst2pdf", BROKEN_TOOL)
    source = tmp_path / "doc.rst"
    source.write_text("x")

    with pytest.raises(ExternalToolFailure, match="conversion by rst2pdf failed!"):
        litconvert.rst2pdf(source)


def test_latex_engine_comes_from_scoped_variable(tool_dir: Path, tmp_path: Path) -> None:
    """Run the requested engine through PDFLATEX and unset it afterwards."""
    _install(tool_dir, "fakelatex", FAKE_LATEX)
    source = tmp_path / "paper.tex"
    source.write_text("\\documentclass{article}")

    out = litconvert.render_pdf(source, compiler="fakelatex")

    assert out == tmp_path / "paper.pdf"
    assert out.exists()
    calls = (tmp_path / "calls.log").read_text().splitlines()
    assert len(calls) == 2
    assert calls[0].endswith("fakelatex -interaction=nonstopmode paper.tex")
    assert "PDFLATEX" not in os.environ


def test_missing_program_is_a_conversion_failure(tool_dir: Path, tmp_path: Path) -> None:
    """Treat an absent program like any other run without output."""
    source = tmp_path / "doc.rst"
    source.write_text("x")

    with pytest.raises(ExternalToolFailure):
        litconvert.rst2pdf(source, command="definitely-not-installed-rst2pdf")
