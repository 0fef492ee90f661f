"""Render collaborators producing intermediate markup documents."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from litconvert.errors import ConversionError
from litconvert.infrastructure.process import run_external_tool

logger = logging.getLogger(__name__)

_TARGET_SUFFIXES = {
    ".rnw": ".tex",
    ".rtex": ".tex",
    ".rrst": ".rst",
    ".rmd": ".md",
    ".rmarkdown": ".md",
    ".rhtml": ".html",
}


def default_output_path(input_path: Path) -> Path:
    """Return the intermediate document path for a literate source."""
    suffix = _TARGET_SUFFIXES.get(input_path.suffix.lower())
    if suffix is None:
        return input_path
    return input_path.with_suffix(suffix)


class PassthroughRenderer:
    """Renderer for documents that need no evaluation step."""

    def render(
        self,
        input_path: Path,
        output_path: Path | None = None,
        encoding: str = "utf-8",
    ) -> Path:
        if output_path is None or Path(output_path) == Path(input_path):
            return Path(input_path)
        text = Path(input_path).read_text(encoding=encoding)
        Path(output_path).write_text(text, encoding=encoding)
        return Path(output_path)

    def render_text(self, text: str, encoding: str = "utf-8") -> str:
        del encoding
        return text


class CommandRenderer:
    """Render by running an external command template.

    The template is formatted with ``input`` and ``output`` and split with
    shell rules, e.g. ``Rscript -e "knitr::knit('{input}', '{output}')"``.
    """

    def __init__(self, template: str) -> None:
        if "{input}" not in template:
            raise ConversionError("render command template must reference {input}.")
        self.template = template

    def render(
        self,
        input_path: Path,
        output_path: Path | None = None,
        encoding: str = "utf-8",
    ) -> Path:
        del encoding
        source = Path(input_path)
        target = Path(output_path) if output_path is not None else default_output_path(source)
        argv = shlex.split(self.template.format(input=source, output=target))
        if not argv:
            raise ConversionError("render command template is empty.")
        logger.info("rendering %s with %s", source, argv[0])
        return run_external_tool(argv[0], argv[1:], target, description=argv[0])

    def render_text(self, text: str, encoding: str = "utf-8") -> str:
        raise ConversionError("CommandRenderer cannot render inline text.")
