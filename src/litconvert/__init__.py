"""Top-level API for literate-document conversion."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from threading import Event

from litconvert.application.results import PublishResult
from litconvert.types import OptionValue, PublishAction, ToolOptions

__version__ = "0.1.0"


def rst2pdf(
    input_path: Path | str,
    command: str | None = None,
    options: ToolOptions | None = None,
) -> Path:
    """Convert a reST file to PDF with the ``rst2pdf`` program.

    Parameters
    ----------
    input_path : Path | str
        The ``.rst`` document.
    command : str, optional
        Program name or full path; defaults to ``LITCONVERT_RST2PDF`` or
        ``rst2pdf``.
    options : str | Sequence[str], optional
        Extra command-line options, e.g. ``"-v"``.

    Returns
    -------
    Path
        Path of the produced ``.pdf`` file.
    """
    from .api import rst2pdf as _impl

    return _impl(input_path, command=command, options=options)


def render_pdf(
    input_path: Path | str,
    output_path: Path | str | None = None,
    compiler: str | None = None,
    **kwargs: object,
) -> Path:
    """Render a literate document and compile it to PDF.

    Parameters
    ----------
    input_path : Path | str
        Literate source (``.Rnw``, ``.Rrst``, ``.tex``, ``.rst`` ...).
    output_path : Path | str, optional
        Intermediate document path handed to the renderer.
    compiler : str, optional
        LaTeX engine (``xelatex``, ``lualatex`` ...) or ``"rst2pdf"``.
        Inferred as ``rst2pdf`` for rendered ``.rst`` documents.
    **kwargs
        ``renderer``, ``render_command``, ``pdf_compiler``, ``rst_command``,
        ``options`` and ``encoding``.

    Returns
    -------
    Path
        Path to the generated PDF.
    """
    from .api import render_pdf as _impl

    return _impl(input_path, output_path, compiler, **kwargs)  # type: ignore[arg-type]


def render_html(
    input_path: Path | str | None = None,
    output_path: Path | str | None = None,
    **kwargs: object,
) -> Path | str:
    """Render a literate markdown document and convert it to HTML.

    Returns
    -------
    Path | str
        The HTML file path, or the HTML itself when ``text=`` is given.
    """
    from .api import render_html as _impl

    return _impl(input_path, output_path, **kwargs)  # type: ignore[arg-type]


def publish(
    input_path: Path | str,
    title: str = "A post from litconvert",
    *,
    action: PublishAction = "newPost",
    post_id: int | str | None = None,
    shortcode: bool | Sequence[bool] = False,
    **kwargs: OptionValue,
) -> PublishResult:
    """Render a document and post it to WordPress."""
    from .api import publish as _impl

    return _impl(
        input_path,
        title,
        action=action,
        post_id=post_id,
        shortcode=shortcode,
        **kwargs,
    )


def watch(
    inputs: Path | str | Iterable[Path | str],
    compile_fn: Callable[..., object],
    interval: float = 1.0,
    *,
    stop: Event | None = None,
    continue_on_error: bool = False,
    **options: object,
) -> int:
    """Recompile ``inputs`` with ``compile_fn`` whenever they change.

    Runs until interrupted, or until ``stop`` is set.
    """
    from .watcher import watch as _impl

    return _impl(
        inputs,
        compile_fn,
        interval,
        stop=stop,
        continue_on_error=continue_on_error,
        **options,
    )


__all__ = [
    "rst2pdf",
    "render_pdf",
    "render_html",
    "publish",
    "watch",
]
