"""Unit tests for the scoped environment guard."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from litconvert.infrastructure.environment import scoped_environment

VARIABLE = "LITCONVERT_TEST_COMPILER"


def test_sets_and_restores_existing_value(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Restore the previous value and directory after a successful block."""
    monkeypatch.setenv(VARIABLE, "pdflatex")
    before = Path.cwd()

    with scoped_environment(VARIABLE, "xelatex", cwd=tmp_path) as scope:
        assert os.environ[VARIABLE] == "xelatex"
        assert Path.cwd() == tmp_path.resolve()
        assert scope.original_value == "pdflatex"
        assert scope.original_cwd == before

    assert os.environ[VARIABLE] == "pdflatex"
    assert Path.cwd() == before


def test_unset_variable_is_unset_again(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Re-unset a variable that did not exist before the block."""
    monkeypatch.delenv(VARIABLE, raising=False)

    with scoped_environment(VARIABLE, "lualatex", cwd=tmp_path):
        assert os.environ[VARIABLE] == "lualatex"

    assert VARIABLE not in os.environ


def test_restores_on_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Restore variable and directory when the wrapped work raises."""
    monkeypatch.setenv(VARIABLE, "pdflatex")
    before = Path.cwd()

    with pytest.raises(RuntimeError, match="boom"):
        with scoped_environment(VARIABLE, "xelatex", cwd=tmp_path):
            raise RuntimeError("boom")

    assert os.environ[VARIABLE] == "pdflatex"
    assert Path.cwd() == before


def test_changes_inside_block_are_reverted(monkeypatch: pytest.MonkeyPatch) -> None:
    """Undo modifications the wrapped work makes to the guarded variable."""
    monkeypatch.delenv(VARIABLE, raising=False)

    with scoped_environment(VARIABLE):
        os.environ[VARIABLE] = "changed-by-tool"

    assert VARIABLE not in os.environ


def test_directory_is_restored_when_chdir_target_is_missing(tmp_path: Path) -> None:
    """Leave the process untouched when the target directory does not exist."""
    before = Path.cwd()

    with pytest.raises(FileNotFoundError):
        with scoped_environment(cwd=tmp_path / "missing"):
            pass

    assert Path.cwd() == before
