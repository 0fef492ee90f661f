"""External tool invocation with artifact-based success detection."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from litconvert.errors import ExternalToolFailure
from litconvert.types import ToolOptions

logger = logging.getLogger(__name__)


def sub_ext(path: Path | str, ext: str) -> Path:
    """Return ``path`` with its extension replaced by ``ext``.

    Parameters
    ----------
    path : Path | str
        Source path.
    ext : str
        New extension, with or without the leading dot.

    Returns
    -------
    Path
        Path with the same base name and the new extension.
    """
    suffix = ext if ext.startswith(".") else f".{ext}"
    return Path(path).with_suffix(suffix)


def split_options(options: ToolOptions | None) -> list[str]:
    """Normalize extra tool options into an argument list."""
    if not options:
        return []
    if isinstance(options, str):
        return shlex.split(options)
    return [str(item) for item in options]


def resolve_command(command: str) -> str:
    """Resolve ``command`` through ``PATH`` unless it is already a path."""
    if Path(command).is_absolute():
        return command
    return shutil.which(command) or command


def run_external_tool(
    command: str,
    args: Sequence[str],
    expected_output: Path,
    *,
    description: str | None = None,
) -> Path:
    """Run an external program and verify its output artifact.

    The exit status of the program is not used to decide success; only the
    presence of ``expected_output`` after the program finished is.

    Parameters
    ----------
    command : str
        Program name or absolute path.
    args : Sequence[str]
        Program arguments, passed without shell interpretation.
    expected_output : Path
        Artifact the program is expected to write.
    description : str | None, default=None
        Tool name used in the failure message; defaults to ``command``.

    Returns
    -------
    Path
        ``expected_output`` when it exists.

    Raises
    ------
    ExternalToolFailure
        If ``expected_output`` does not exist after the run.
    """
    tool = description or Path(command).name
    argv = [resolve_command(command), *[str(arg) for arg in args]]
    logger.debug("running %s", shlex.join(argv))
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as exc:
        logger.debug("could not start %s: %s", tool, exc)
    else:
        logger.debug("%s exited with status %s", tool, completed.returncode)

    if expected_output.exists():
        return expected_output
    raise ExternalToolFailure(tool, expected_output)


def rst2pdf(
    input_path: Path | str,
    command: str = "rst2pdf",
    options: ToolOptions | None = None,
) -> Path:
    """Convert a reST document to PDF with the ``rst2pdf`` program.

    Parameters
    ----------
    input_path : Path | str
        The ``.rst`` document.
    command : str, default="rst2pdf"
        Program name or full path of ``rst2pdf``.
    options : str | Sequence[str] | None, default=None
        Extra command-line options, e.g. ``"-v"``.

    Returns
    -------
    Path
        The ``.pdf`` path next to the input, when it was produced.
    """
    source = Path(input_path)
    output = sub_ext(source, "pdf")
    return run_external_tool(
        command,
        [str(source), "-o", str(output), *split_options(options)],
        output,
        description="rst2pdf",
    )
