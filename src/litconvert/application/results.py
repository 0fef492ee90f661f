"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome."""

    output_path: Path
    compiler: str
    source_path: Path
    rendered_path: Path


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a create/update call against the publishing backend."""

    action: str
    post_id: int | str
    link: str | None = None
