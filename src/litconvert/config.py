"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class WordPressSettings:
    """Connection settings for the WordPress publishing backend."""

    url: str | None = None
    user: str | None = None
    password: str | None = None
    timeout_seconds: float = 30.0


@dataclass(slots=True)
class Settings:
    """Application settings with CLI-overridable defaults."""

    rst2pdf_command: str = "rst2pdf"
    pdf_compiler: str | None = None
    watch_interval: float = 1.0
    strict: bool = False
    encoding: str = "utf-8"
    wordpress: WordPressSettings = field(default_factory=WordPressSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from ``LITCONVERT_*`` environment variables."""
        return cls(
            rst2pdf_command=os.getenv("LITCONVERT_RST2PDF", "rst2pdf"),
            pdf_compiler=os.getenv("LITCONVERT_PDFLATEX") or None,
            watch_interval=float(os.getenv("LITCONVERT_WATCH_INTERVAL", "1.0")),
            strict=_env_bool("LITCONVERT_STRICT"),
            encoding=os.getenv("LITCONVERT_ENCODING", "utf-8"),
            wordpress=WordPressSettings(
                url=os.getenv("LITCONVERT_WP_URL") or None,
                user=os.getenv("LITCONVERT_WP_USER") or None,
                password=os.getenv("LITCONVERT_WP_PASSWORD") or None,
                timeout_seconds=float(os.getenv("LITCONVERT_WP_TIMEOUT", "30")),
            ),
        )
