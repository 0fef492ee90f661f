"""WordPress shortcode rewriting for rendered HTML fragments."""

from __future__ import annotations

import re
from collections.abc import Sequence

_TAGGED_BLOCK = re.compile(
    r'<pre><code class="([A-Za-z]+)">(.+?)</code></pre>', re.DOTALL
)
_PLAIN_BLOCK = re.compile(
    r'<pre><code( class="no-highlight"|)>(.+?)</code></pre>', re.DOTALL
)


def normalize_shortcode(value: bool | Sequence[bool]) -> tuple[bool, bool]:
    """Expand a shortcode flag into ``(source, output)``.

    A single flag applies to both; a one-item sequence is recycled.
    """
    if isinstance(value, bool):
        return value, value
    flags = [bool(item) for item in value]
    if not flags or len(flags) > 2:
        raise ValueError("shortcode must be a bool or a sequence of one or two bools.")
    if len(flags) == 1:
        flags.append(flags[0])
    return flags[0], flags[1]


def apply_shortcodes(html: str, source: bool = False, output: bool = False) -> str:
    """Rewrite ``<pre><code>`` blocks of an HTML fragment.

    Parameters
    ----------
    html : str
        HTML fragment produced by the markdown converter.
    source : bool, default=False
        Turn language-tagged blocks into ``[sourcecode language="..."]``.
    output : bool, default=False
        Turn untagged (or ``no-highlight``) blocks into ``[sourcecode]``;
        when ``False`` they become plain ``<pre>`` blocks.

    Returns
    -------
    str
        Rewritten fragment.

    Notes
    -----
    Language-tagged blocks are rewritten first; the second rule only matches
    untagged or ``no-highlight`` blocks.
    """
    if source:
        html = _TAGGED_BLOCK.sub(r'[sourcecode language="\1"]\2[/sourcecode]', html)
    replacement = r"[sourcecode]\2[/sourcecode]" if output else r"<pre>\2</pre>"
    return _PLAIN_BLOCK.sub(replacement, html)


def to_utf8(value: str | bytes, encoding: str = "utf-8") -> str:
    """Return ``value`` as text that is guaranteed to encode as UTF-8."""
    if isinstance(value, bytes):
        value = value.decode(encoding, errors="replace")
    return value.encode("utf-8", errors="replace").decode("utf-8")
