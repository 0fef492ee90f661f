"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from litconvert.adapters.renderers import CommandRenderer, PassthroughRenderer
from litconvert.application.ports import PdfCompiler, Publisher, Renderer
from litconvert.application.results import ConversionResult, PublishResult
from litconvert.application.use_cases import build_html_options
from litconvert.application.use_cases import build_pdf_options
from litconvert.application.use_cases import convert_to_html
from litconvert.application.use_cases import convert_to_pdf
from litconvert.application.use_cases import publish_post
from litconvert.config import Settings
from litconvert.infrastructure import process
from litconvert.types import OptionValue, PublishAction, ToolOptions


def _resolve_renderer(
    renderer: Optional[Renderer], render_command: Optional[str]
) -> Renderer:
    if renderer is not None:
        return renderer
    if render_command:
        return CommandRenderer(render_command)
    return PassthroughRenderer()


def rst2pdf(
    input_path: Path | str,
    command: Optional[str] = None,
    options: Optional[ToolOptions] = None,
) -> Path:
    """Convert a ``.rst`` file to PDF with ``rst2pdf``."""
    settings = Settings.from_env()
    return process.rst2pdf(
        input_path, command=command or settings.rst2pdf_command, options=options
    )


def render_pdf(
    input_path: Path | str,
    output_path: Optional[Path | str] = None,
    compiler: Optional[str] = None,
    *,
    renderer: Optional[Renderer] = None,
    render_command: Optional[str] = None,
    pdf_compiler: Optional[PdfCompiler] = None,
    rst_command: Optional[str] = None,
    options: Optional[ToolOptions] = None,
    encoding: Optional[str] = None,
) -> Path:
    """Render a literate document and compile the result to PDF."""
    settings = Settings.from_env()
    pdf_options = build_pdf_options(
        compiler=compiler or settings.pdf_compiler,
        rst_command=rst_command or settings.rst2pdf_command,
        tool_options=options,
    )
    result = convert_to_pdf(
        input_path=Path(input_path),
        renderer=_resolve_renderer(renderer, render_command),
        options=pdf_options,
        output_path=Path(output_path) if output_path is not None else None,
        pdf_compiler=pdf_compiler,
        encoding=encoding or settings.encoding,
    )
    return result.output_path


def render_html(
    input_path: Optional[Path | str] = None,
    output_path: Optional[Path | str] = None,
    *,
    text: Optional[str] = None,
    renderer: Optional[Renderer] = None,
    render_command: Optional[str] = None,
    force_v1: bool = False,
    strict: Optional[bool] = None,
    encoding: Optional[str] = None,
    **markdown_options: OptionValue,
) -> Path | str:
    """Render a literate markdown document and convert it to HTML.

    Returns the HTML file path, or the HTML string when ``text`` is given.
    """
    settings = Settings.from_env()
    html_options = build_html_options(
        force_v1=force_v1,
        strict=settings.strict if strict is None else strict,
        markdown_options=markdown_options,
    )
    result = convert_to_html(
        renderer=_resolve_renderer(renderer, render_command),
        options=html_options,
        input_path=Path(input_path) if input_path is not None else None,
        text=text,
        output_path=Path(output_path) if output_path is not None else None,
        encoding=encoding or settings.encoding,
    )
    if isinstance(result, ConversionResult):
        return result.output_path
    return result


def publish(
    input_path: Path | str,
    title: str = "A post from litconvert",
    *,
    action: PublishAction = "newPost",
    post_id: Optional[int | str] = None,
    publish: bool = True,
    shortcode: bool | Sequence[bool] = False,
    renderer: Optional[Renderer] = None,
    render_command: Optional[str] = None,
    publisher: Optional[Publisher] = None,
    encoding: Optional[str] = None,
    **metadata: OptionValue,
) -> PublishResult:
    """Render a document and create or update a WordPress post or page."""
    settings = Settings.from_env()
    if publisher is None:
        from litconvert.adapters.wordpress import WordPressPublisher

        publisher = WordPressPublisher.from_settings(settings.wordpress)
    return publish_post(
        input_path=Path(input_path),
        renderer=_resolve_renderer(renderer, render_command),
        publisher=publisher,
        title=title,
        action=action,
        post_id=post_id,
        publish=publish,
        shortcode=shortcode,
        metadata=metadata,
        encoding=encoding or settings.encoding,
    )
