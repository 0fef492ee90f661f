"""PDF typesetting collaborators implementing application ports."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from litconvert.infrastructure.process import run_external_tool, split_options, sub_ext


class LatexPdfCompiler:
    """Typeset a LaTeX document with the engine named by ``PDFLATEX``."""

    default_engine = "pdflatex"

    def __init__(self, passes: int = 2) -> None:
        self.passes = max(1, passes)

    def compile(
        self,
        document: str,
        options: Mapping[str, object] | None = None,
    ) -> None:
        """Run the LaTeX engine on ``document`` in the current directory.

        Parameters
        ----------
        document : str
            Base file name of the ``.tex`` document.
        options : Mapping[str, object] | None, default=None
            ``options`` holds extra engine arguments.

        Raises
        ------
        ExternalToolFailure
            If no PDF exists after the last pass.
        """
        engine = os.environ.get("PDFLATEX") or self.default_engine
        raw_extra = (options or {}).get("options")
        extra = split_options(raw_extra) if isinstance(raw_extra, (str, list, tuple)) else []
        expected = sub_ext(Path(document), "pdf")
        # cross references need more than one pass
        for _ in range(self.passes):
            run_external_tool(
                engine,
                ["-interaction=nonstopmode", *extra, document],
                expected,
                description=Path(engine).name,
            )
