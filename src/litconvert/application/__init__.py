"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from litconvert.application.options import HtmlOptions, PdfOptions
from litconvert.application.ports import (
    MarkdownConverter,
    PdfCompiler,
    Publisher,
    Renderer,
)
from litconvert.application.results import ConversionResult, PublishResult
from litconvert.types import OptionValue, PublishAction


def convert_to_pdf(
    *,
    input_path: Path,
    renderer: Renderer,
    options: PdfOptions,
    output_path: Path | None = None,
    pdf_compiler: PdfCompiler | None = None,
    encoding: str = "utf-8",
) -> ConversionResult:
    """Render and typeset a document via lazy use-case import."""
    from litconvert.application.use_cases import convert_to_pdf as _impl

    return _impl(
        input_path=input_path,
        renderer=renderer,
        options=options,
        output_path=output_path,
        pdf_compiler=pdf_compiler,
        encoding=encoding,
    )


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
    """Render and convert a document to HTML via lazy use-case import."""
    from litconvert.application.use_cases import convert_to_html as _impl

    return _impl(
        renderer=renderer,
        options=options,
        input_path=input_path,
        text=text,
        output_path=output_path,
        markdown=markdown,
        encoding=encoding,
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
    """Render and publish a document via lazy use-case import."""
    from litconvert.application.use_cases import publish_post as _impl

    return _impl(
        input_path=input_path,
        renderer=renderer,
        publisher=publisher,
        title=title,
        action=action,
        post_id=post_id,
        publish=publish,
        shortcode=shortcode,
        metadata=metadata,
        markdown=markdown,
        encoding=encoding,
    )


__all__ = [
    "HtmlOptions",
    "PdfOptions",
    "ConversionResult",
    "PublishResult",
    "convert_to_pdf",
    "convert_to_html",
    "publish_post",
]
