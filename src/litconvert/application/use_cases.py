"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import logging
import os
import re
import warnings
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from litconvert.adapters.compilers import LatexPdfCompiler
from litconvert.adapters.markdown import Markdown2Converter
from litconvert.application.options import HtmlOptions, PdfOptions
from litconvert.application.ports import (
    MarkdownConverter,
    PdfCompiler,
    Publisher,
    Renderer,
)
from litconvert.application.results import ConversionResult, PublishResult
from litconvert.errors import (
    ConversionError,
    DialectMismatchError,
    ExternalToolFailure,
    InvalidCompilerForInput,
    PublishPreconditionError,
    VersionMismatchWarning,
)
from litconvert.infrastructure.environment import scoped_environment
from litconvert.infrastructure.process import rst2pdf, split_options, sub_ext
from litconvert.schemas import ConversionJob, HtmlJob, PublishRequest
from litconvert.shortcodes import apply_shortcodes, to_utf8
from litconvert.types import OptionValue, PublishAction

logger = logging.getLogger(__name__)

RST_COMPILER = "rst2pdf"
COMPILER_VARIABLE = "PDFLATEX"
_FRONT_MATTER = re.compile(r"^---\s*$")


def convert_to_pdf(
    *,
    input_path: Path,
    renderer: Renderer,
    options: PdfOptions,
    output_path: Path | None = None,
    pdf_compiler: PdfCompiler | None = None,
    encoding: str = "utf-8",
) -> ConversionResult:
    """Use-case: render a literate document and typeset it to PDF.

    Parameters
    ----------
    input_path : Path
        Literate source document.
    renderer : Renderer
        Render collaborator producing the intermediate document.
    options : PdfOptions
        Compiler selection and extra tool options.
    output_path : Path | None, default=None
        Intermediate document path passed to the renderer (e.g. the ``.tex``
        file), not the PDF path.
    pdf_compiler : PdfCompiler | None, default=None
        Generic typesetting collaborator; defaults to ``LatexPdfCompiler``.
    encoding : str, default="utf-8"
        Source encoding forwarded to the renderer.

    Returns
    -------
    ConversionResult
        Result whose ``output_path`` is the rendered path with a ``.pdf``
        extension.

    Raises
    ------
    InvalidCompilerForInput
        If ``rst2pdf`` is requested for a document that is not ``.rst``.
    ExternalToolFailure
        If no PDF exists next to the rendered document once the compiler
        returned.
    """
    try:
        job = ConversionJob(
            input_path=input_path,
            output_path=output_path,
            compiler=options.compiler,
            options=options.tool_options,
        )
    except ValidationError as exc:
        raise ConversionError(f"Invalid PDF conversion parameters: {exc}") from exc

    rendered = Path(renderer.render(job.input_path, job.output_path, encoding))
    logger.info("rendered %s -> %s", job.input_path, rendered)

    compiler = job.compiler
    if compiler is None and rendered.suffix == ".rst":
        compiler = RST_COMPILER

    if compiler == RST_COMPILER:
        if rendered.suffix.lower() != ".rst":
            raise InvalidCompilerForInput(
                f"for {RST_COMPILER} compiler input must be a .rst file, got {rendered.name}"
            )
        with scoped_environment(cwd=rendered.parent):
            rst2pdf(rendered.name, command=options.rst_command, options=job.options)
    else:
        pdf_compiler = pdf_compiler or LatexPdfCompiler()
        with scoped_environment(COMPILER_VARIABLE, compiler, cwd=rendered.parent):
            compiler = os.environ.get(COMPILER_VARIABLE, LatexPdfCompiler.default_engine)
            logger.info("typesetting %s with %s", rendered.name, compiler)
            pdf_compiler.compile(rendered.name, {"options": list(job.options)})

    output = sub_ext(rendered, "pdf")
    if not output.exists():
        raise ExternalToolFailure(compiler, output)

    return ConversionResult(
        output_path=output,
        compiler=compiler,
        source_path=job.input_path,
        rendered_path=rendered,
    )


def check_dialect(input_path: Path, *, strict: bool, encoding: str = "utf-8") -> None:
    """Warn (or fail in strict mode) when a markdown source has front matter.

    A leading ``---`` line means the document targets the newer front-matter
    dialect that the plain markdown pipeline does not understand.
    """
    with input_path.open(encoding=encoding) as handle:
        first_line = handle.readline()
    if not _FRONT_MATTER.match(first_line.rstrip("\n")):
        return
    message = (
        f"{input_path} appears to be a front-matter (v2) document; "
        "render it with a v2-aware tool instead of the markdown pipeline."
    )
    if strict:
        raise DialectMismatchError(message)
    warnings.warn(message, VersionMismatchWarning, stacklevel=3)


def convert_to_html(
    *,
    renderer: Renderer,
    options: HtmlOptions,
    input_path: Path | None = None,
    text: str | None = None,
    output_path: Path | None = None,
    markdown: MarkdownConverter | None = None,
    encoding: str = "utf-8",
) -> ConversionResult | str:
    """Use-case: render a literate markdown document and convert it to HTML.

    Returns the written file's result in file mode, or the HTML string when
    ``text`` is given.
    """
    try:
        job = HtmlJob(
            input_path=input_path,
            text=text,
            output_path=output_path,
            force_v1=options.force_v1,
        )
    except ValidationError as exc:
        raise ConversionError(f"Invalid HTML conversion parameters: {exc}") from exc

    markdown = markdown or Markdown2Converter()

    if job.text is not None:
        rendered_text = renderer.render_text(job.text, encoding)
        return markdown.to_html(rendered_text, options=options.markdown_options)

    source = cast(Path, job.input_path)
    if not job.force_v1:
        check_dialect(source, strict=options.strict, encoding=encoding)

    rendered = Path(renderer.render(source, None, encoding))
    target = sub_ext(job.output_path or rendered, "html")
    html = markdown.to_html(
        rendered.read_text(encoding=encoding), options=options.markdown_options
    )
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding=encoding)
    logger.info("wrote %s", target)
    return ConversionResult(
        output_path=target,
        compiler="markdown",
        source_path=source,
        rendered_path=rendered,
    )


def publish_post(
    *,
    input_path: Path,
    renderer: Renderer,
    publisher: Publisher,
    title: str = "A post from litconvert",
    action: PublishAction = "newPost",
    post_id: int | str | None = None,
    publish: bool = True,
    shortcode: bool | Sequence[bool] = False,
    metadata: Mapping[str, OptionValue] | None = None,
    markdown: MarkdownConverter | None = None,
    encoding: str = "utf-8",
) -> PublishResult:
    """Use-case: render a document and publish it as a blog post or page.

    The request is validated before rendering, so an ``editPost`` without
    ``post_id`` fails before anything is sent to the backend.
    """
    try:
        request = PublishRequest(
            title=title,
            action=action,
            post_id=post_id,
            publish=publish,
            shortcode=shortcode,
            metadata=dict(metadata or {}),
        )
    except ValidationError as exc:
        raise PublishPreconditionError(f"Invalid publish request: {exc}") from exc

    markdown = markdown or Markdown2Converter()
    rendered = Path(renderer.render(input_path, None, encoding))
    try:
        content = to_utf8(rendered.read_bytes(), encoding)
    finally:
        if rendered.resolve() != Path(input_path).resolve():
            rendered.unlink(missing_ok=True)

    body = markdown.to_html(content, fragment_only=True)
    body = apply_shortcodes(body, *request.shortcode)

    payload: dict[str, object] = {
        "content": {
            "description": to_utf8(body),
            "title": to_utf8(request.title),
            **request.metadata,
        },
        "publish": request.publish,
    }
    if request.action == "editPost":
        payload = {"post_id": request.post_id, **payload}

    logger.info("publishing %s via %s", input_path, request.action)
    return getattr(publisher, request.action)(**payload)


def build_pdf_options(
    *,
    compiler: str | None = None,
    rst_command: str = "rst2pdf",
    tool_options: Sequence[str] | str | None = None,
) -> PdfOptions:
    """Build typed PDF options from command/API params."""
    return PdfOptions(
        compiler=compiler,
        rst_command=rst_command,
        tool_options=tuple(split_options(tool_options)),
    )


def build_html_options(
    *,
    force_v1: bool = False,
    strict: bool = False,
    markdown_options: Mapping[str, OptionValue] | None = None,
) -> HtmlOptions:
    """Build typed HTML options from command/API params."""
    return HtmlOptions(
        force_v1=force_v1,
        strict=strict,
        markdown_options=dict(markdown_options or {}),
    )
