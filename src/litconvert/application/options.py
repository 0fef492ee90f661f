"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from litconvert.types import OptionValue


@dataclass(frozen=True)
class PdfOptions:
    """PDF pipeline configuration."""

    compiler: str | None = None
    rst_command: str = "rst2pdf"
    tool_options: tuple[str, ...] = ()


@dataclass(frozen=True)
class HtmlOptions:
    """HTML pipeline configuration."""

    force_v1: bool = False
    strict: bool = False
    markdown_options: Mapping[str, OptionValue] = field(default_factory=dict)
