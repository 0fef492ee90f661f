"""Unit tests for environment settings and request schemas."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from litconvert.config import Settings
from litconvert.schemas import ConversionJob, HtmlJob, PublishRequest, WatchConfig


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fall back to built-in defaults without LITCONVERT_* variables."""
    for name in (
        "LITCONVERT_RST2PDF",
        "LITCONVERT_PDFLATEX",
        "LITCONVERT_WATCH_INTERVAL",
        "LITCONVERT_STRICT",
        "LITCONVERT_ENCODING",
        "LITCONVERT_WP_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.rst2pdf_command == "rst2pdf"
    assert settings.pdf_compiler is None
    assert settings.watch_interval == 1.0
    assert settings.strict is False
    assert settings.encoding == "utf-8"
    assert settings.wordpress.url is None


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Read every supported variable."""
    monkeypatch.setenv("LITCONVERT_RST2PDF", "/opt/bin/rst2pdf")
    monkeypatch.setenv("LITCONVERT_PDFLATEX", "xelatex")
    monkeypatch.setenv("LITCONVERT_WATCH_INTERVAL", "2.5")
    monkeypatch.setenv("LITCONVERT_STRICT", "yes")
    monkeypatch.setenv("LITCONVERT_ENCODING", "latin-1")
    monkeypatch.setenv("LITCONVERT_WP_URL", "https://blog.example")
    monkeypatch.setenv("LITCONVERT_WP_USER", "me")
    monkeypatch.setenv("LITCONVERT_WP_PASSWORD", "secret")
    monkeypatch.setenv("LITCONVERT_WP_TIMEOUT", "5")

    settings = Settings.from_env()

    assert settings.rst2pdf_command == "/opt/bin/rst2pdf"
    assert settings.pdf_compiler == "xelatex"
    assert settings.watch_interval == 2.5
    assert settings.strict is True
    assert settings.encoding == "latin-1"
    assert settings.wordpress.url == "https://blog.example"
    assert settings.wordpress.user == "me"
    assert settings.wordpress.password == "secret"
    assert settings.wordpress.timeout_seconds == 5.0


def test_conversion_job_rejects_blank_compiler() -> None:
    """Reject compilers that are empty after stripping."""
    assert ConversionJob(input_path=Path("a.tex"), compiler=" xelatex ").compiler == "xelatex"
    with pytest.raises(ValidationError):
        ConversionJob(input_path=Path("a.tex"), compiler="  ")


def test_html_job_requires_a_source() -> None:
    """Require either a file or inline text."""
    assert HtmlJob(text="x").input_path is None
    with pytest.raises(ValidationError):
        HtmlJob()


@pytest.mark.parametrize(
    ("shortcode", "expected"),
    [
        (True, (True, True)),
        ([False], (False, False)),
        ((True, False), (True, False)),
    ],
)
def test_publish_request_normalizes_shortcode(
    shortcode: object, expected: tuple[bool, bool]
) -> None:
    """Accept a flag, a single-item sequence or a pair."""
    assert PublishRequest(shortcode=shortcode).shortcode == expected


def test_publish_request_rejects_bad_input() -> None:
    """Reject id mismatches, reserved metadata and unknown actions."""
    with pytest.raises(ValidationError, match="post_id is required"):
        PublishRequest(action="editPost")
    with pytest.raises(ValidationError, match="not accepted"):
        PublishRequest(action="newPage", post_id=4)
    with pytest.raises(ValidationError, match="reserved"):
        PublishRequest(metadata={"title": "x"})
    with pytest.raises(ValidationError):
        PublishRequest(action="deletePost")
    with pytest.raises(ValidationError):
        PublishRequest(shortcode=[True, False, True])


def test_watch_config_validation() -> None:
    """Require at least one input and a non-negative interval."""
    assert WatchConfig(inputs=(Path("a"),), interval=0).interval == 0.0
    with pytest.raises(ValidationError):
        WatchConfig(inputs=())
    with pytest.raises(ValidationError):
        WatchConfig(inputs=(Path("a"),), interval=-1)
