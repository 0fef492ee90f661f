"""Application ports for the external collaborators of each pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from litconvert.application.results import PublishResult
from litconvert.types import OptionMap, OptionValue


class Renderer(Protocol):
    """Evaluate a literate source into an intermediate markup document."""

    def render(
        self,
        input_path: Path,
        output_path: Path | None = None,
        encoding: str = "utf-8",
    ) -> Path:
        """Render ``input_path`` and return the intermediate document path."""

    def render_text(self, text: str, encoding: str = "utf-8") -> str:
        """Render inline source text and return the intermediate text."""


class PdfCompiler(Protocol):
    """Typeset a document to PDF from within its own directory.

    Implementations read the ``PDFLATEX`` environment variable to select the
    underlying engine.
    """

    def compile(self, document: str, options: OptionMap | None = None) -> None:
        """Compile ``document`` (a base file name) in the current directory."""


class MarkdownConverter(Protocol):
    """Convert markdown text to HTML in-process."""

    def to_html(
        self,
        text: str,
        *,
        fragment_only: bool = False,
        options: OptionMap | None = None,
    ) -> str:
        """Return HTML for ``text``."""


class Publisher(Protocol):
    """Create or update items on a blog backend."""

    def newPost(  # noqa: N802
        self, content: Mapping[str, OptionValue], publish: bool = True
    ) -> PublishResult:
        """Create a post."""

    def editPost(  # noqa: N802
        self,
        post_id: int | str,
        content: Mapping[str, OptionValue],
        publish: bool = True,
    ) -> PublishResult:
        """Update an existing post."""

    def newPage(  # noqa: N802
        self, content: Mapping[str, OptionValue], publish: bool = True
    ) -> PublishResult:
        """Create a page."""
