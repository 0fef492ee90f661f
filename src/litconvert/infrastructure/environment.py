"""Scoped process-environment handling for compiler runs."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentScope:
    """Process state captured on guard entry.

    Parameters
    ----------
    variable : str | None
        Name of the guarded environment variable, if any.
    original_value : str | None
        Value seen on entry; ``None`` means the variable was unset.
    original_cwd : Path
        Working directory seen on entry.
    """

    variable: str | None
    original_value: str | None
    original_cwd: Path

    def restore(self) -> None:
        """Put the captured variable and working directory back.

        Both restorations are attempted; the first error is re-raised after
        the second one has run.
        """
        try:
            if self.variable is not None:
                if self.original_value is None:
                    os.environ.pop(self.variable, None)
                else:
                    os.environ[self.variable] = self.original_value
        finally:
            os.chdir(self.original_cwd)
        logger.debug(
            "restored %s=%r and cwd=%s",
            self.variable,
            self.original_value,
            self.original_cwd,
        )


@contextmanager
def scoped_environment(
    variable: str | None = None,
    value: str | None = None,
    cwd: Path | str | None = None,
) -> Iterator[EnvironmentScope]:
    """Temporarily set an environment variable and/or working directory.

    Parameters
    ----------
    variable : str | None, default=None
        Environment variable to guard. It is only overwritten when ``value``
        is given, but it is always restored on exit.
    value : str | None, default=None
        New value for ``variable`` inside the block.
    cwd : Path | str | None, default=None
        Directory to switch to inside the block.

    Yields
    ------
    EnvironmentScope
        The captured pre-state.
    """
    scope = EnvironmentScope(
        variable=variable,
        original_value=os.environ.get(variable) if variable is not None else None,
        original_cwd=Path.cwd(),
    )
    logger.debug("captured %s=%r in %s", variable, scope.original_value, scope.original_cwd)
    try:
        if variable is not None and value is not None:
            os.environ[variable] = value
        if cwd is not None:
            os.chdir(cwd)
        yield scope
    finally:
        scope.restore()
