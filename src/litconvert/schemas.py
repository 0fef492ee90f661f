"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from litconvert.shortcodes import normalize_shortcode


class ConversionJob(BaseModel):
    """Validated input for one PDF pipeline run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_path: Path
    output_path: Path | None = None
    compiler: str | None = None
    options: tuple[str, ...] = ()

    @field_validator("compiler")
    @classmethod
    def _validate_compiler(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("compiler cannot be an empty string.")
        return value


class HtmlJob(BaseModel):
    """Validated input for one HTML pipeline run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_path: Path | None = None
    text: str | None = None
    output_path: Path | None = None
    force_v1: bool = False

    @model_validator(mode="after")
    def _require_source(self) -> HtmlJob:
        if self.input_path is None and self.text is None:
            raise ValueError("either input_path or text must be given.")
        return self


class PublishRequest(BaseModel):
    """Validated publish request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = "A post from litconvert"
    action: Literal["newPost", "editPost", "newPage"] = "newPost"
    post_id: int | str | None = None
    publish: bool = True
    shortcode: tuple[bool, bool] = (False, False)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("shortcode", mode="before")
    @classmethod
    def _normalize_shortcode(cls, value: object) -> tuple[bool, bool]:
        if isinstance(value, bool):
            return normalize_shortcode(value)
        if isinstance(value, (list, tuple)):
            return normalize_shortcode([bool(item) for item in value])
        raise ValueError("shortcode must be a bool or a sequence of one or two bools.")

    @field_validator("metadata")
    @classmethod
    def _reserved_metadata(cls, value: dict[str, Any]) -> dict[str, Any]:
        reserved = {"description", "title"} & value.keys()
        if reserved:
            raise ValueError(
                f"metadata cannot override reserved keys: {', '.join(sorted(reserved))}."
            )
        return value

    @model_validator(mode="after")
    def _check_post_id(self) -> PublishRequest:
        if self.action == "editPost" and self.post_id is None:
            raise ValueError("post_id is required when action is 'editPost'.")
        if self.action != "editPost" and self.post_id is not None:
            raise ValueError(f"post_id is not accepted when action is '{self.action}'.")
        return self


class WatchConfig(BaseModel):
    """Validated input for the watch loop."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    inputs: tuple[Path, ...]
    interval: float = Field(default=1.0, ge=0.0)
    continue_on_error: bool = False

    @field_validator("inputs")
    @classmethod
    def _validate_inputs(cls, value: tuple[Path, ...]) -> tuple[Path, ...]:
        if not value:
            raise ValueError("at least one input file must be watched.")
        return value
