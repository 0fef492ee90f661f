"""Shared type aliases for conversion and publishing modules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Literal

type PublishAction = Literal["newPost", "editPost", "newPage"]

type OptionScalar = str | int | float | bool | None | Path
type OptionValue = (
    OptionScalar
    | tuple["OptionValue", ...]
    | list["OptionValue"]
    | dict[str, "OptionValue"]
)
type OptionMap = Mapping[str, OptionValue]
type ToolOptions = str | Sequence[str]
