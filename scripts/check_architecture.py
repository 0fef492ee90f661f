#!/usr/bin/env python3
"""Layering checks for the litconvert package."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/litconvert"

# Application code may reach third-party clients only through litconvert.adapters
# (default collaborators); it never imports them itself. typer stays in the CLI.
LAYER_RULES: dict[str, list[str]] = {
    "application": ["import typer", "from typer", "import requests", "import markdown2", "from markdown2"],
    "infrastructure": [
        "import typer",
        "from typer",
        "import requests",
        "from litconvert.application",
        "from litconvert.adapters",
    ],
    "cli": ["import requests", "from markdown2", "import subprocess"],
}


def check_package(package: Path) -> list[str]:
    """Return one message per banned import found under ``package``."""
    problems: list[str] = []
    for layer, banned in LAYER_RULES.items():
        for path in sorted((package / layer).glob("*.py")):
            text = path.read_text(encoding="utf-8")
            problems.extend(
                f"{path.relative_to(package)}: found '{token}'" for token in banned if token in text
            )
    return problems


def main() -> None:
    """Fail when a layer imports something it should not depend on."""
    problems = check_package(PACKAGE)
    if problems:
        raise SystemExit("Architecture violations:\n" + "\n".join(problems))
    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
