"""Markdown-to-HTML collaborator backed by markdown2."""

from __future__ import annotations

import re
from collections.abc import Mapping
from html import escape

from markdown2 import Markdown

DEFAULT_EXTRAS = ("fenced-code-blocks", "tables", "footnotes")

# markdown2 tags fenced blocks as class="LANG language-LANG" under highlightjs-lang
_HIGHLIGHTJS_CLASS = re.compile(r'<code class="([^"\s]+) language-\1">')


class _UnhighlightedMarkdown(Markdown):
    """markdown2 without pygments colouring, so fenced blocks keep plain markup."""

    def _get_pygments_lexer(self, lexer_name: str) -> None:
        del lexer_name
        return None


def _wrap_document(fragment: str, title: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        f'<html><head><title>{escape(title)}</title><meta charset="utf-8"></head>\n'
        f"<body>\n{fragment}</body></html>\n"
    )


def _with_language_tags(extras: list[str]) -> list[str]:
    if "fenced-code-blocks" in extras and "highlightjs-lang" not in extras:
        return [*extras, "highlightjs-lang"]
    return extras


class Markdown2Converter:
    """Convert markdown to HTML in-process.

    Fenced blocks with a language come out as ``<pre><code class="LANG">``,
    whether or not pygments is installed.
    """

    def __init__(self, extras: tuple[str, ...] = DEFAULT_EXTRAS) -> None:
        self.extras = extras

    def to_html(
        self,
        text: str,
        *,
        fragment_only: bool = False,
        options: Mapping[str, object] | None = None,
    ) -> str:
        """Return HTML for ``text``.

        ``options`` may carry ``extras`` (replaces the default markdown2
        extras) and ``title`` (used for full documents).
        """
        options = options or {}
        raw_extras = options.get("extras")
        extras = list(raw_extras) if isinstance(raw_extras, (list, tuple)) else list(self.extras)
        converted = str(_UnhighlightedMarkdown(extras=_with_language_tags(extras)).convert(text))
        fragment = _HIGHLIGHTJS_CLASS.sub(r'<code class="\1">', converted)
        if fragment_only:
            return fragment
        title = options.get("title")
        return _wrap_document(fragment, str(title) if title else "Document")
