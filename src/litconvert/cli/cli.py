#!/usr/bin/env python3
"""
litconvert.cli.cli

Typer-based CLI for rendering literate documents to PDF/HTML, publishing them
to WordPress and watching them for changes.

Examples
--------
Install core + CLI:

    uv pip install -e ".[cli]"

Compile a reST file:

    litconvert rst2pdf report.rst --option -v

Recompile two documents whenever they change:

    litconvert watch a.Rnw b.Rnw --render-command "Rscript -e \"knitr::knit('{input}')\""
"""

from __future__ import annotations

import logging
import shutil
import sys
import traceback
from functools import partial
from pathlib import Path
from typing import Any

import typer

from litconvert.errors import LitConvertError

app = typer.Typer(
    name="litconvert",
    help="Render literate documents and compile them to PDF, HTML or WordPress posts.",
    no_args_is_help=True,
)

RENDER_COMMAND_HELP = (
    "Render command template with {input} and {output} placeholders. "
    "Without it the input is used as the rendered document."
)
OPTION_HELP = "Extra option passed to the compiler (repeatable)."
TOOLS = ("rst2pdf", "pdflatex", "xelatex", "lualatex", "Rscript")
LIBRARIES = ("pydantic", "markdown2", "requests", "typer")


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _coerce_option_value(raw: str) -> object:
    """Best-effort coercion for CLI key/value options."""
    lowered = raw.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        return raw


def _parse_metadata(metadata_items: list[str] | None) -> dict[str, object]:
    """Parse repeated KEY=VALUE metadata entries.

    Repeating a key collects its values into a list (e.g. categories).
    """
    parsed: dict[str, object] = {}
    for item in metadata_items or []:
        if "=" not in item:
            raise typer.BadParameter(
                f"Invalid metadata entry '{item}'. Use KEY=VALUE format."
            )
        key, raw_value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter("Metadata key cannot be empty.")
        value = _coerce_option_value(raw_value)
        if key in parsed:
            existing = parsed[key]
            parsed[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            parsed[key] = value
    return parsed


def _debug(ctx: typer.Context) -> bool:
    return bool((ctx.obj or {}).get("debug", False))


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline steps."),
) -> None:
    """Initialize shared CLI state and logging.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log at DEBUG level.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("rst2pdf")
def rst2pdf_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., exists=True, readable=True, help="The .rst file."),
    command: str | None = typer.Option(
        None, "--command", help="rst2pdf program name or full path."
    ),
    option: list[str] | None = typer.Option(None, "--option", help=OPTION_HELP),
) -> None:
    """Convert a reST file to PDF with rst2pdf."""
    try:
        from litconvert.api import rst2pdf

        out = rst2pdf(input_path, command=command, options=option or None)
        typer.echo(f"[green]✓ Saved:[/green] {out}")
    except LitConvertError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))


@app.command("pdf")
def pdf_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(
        ..., exists=True, readable=True, help="Literate source (.Rnw, .Rrst, .tex, .rst)."
    ),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Intermediate document path (e.g. the .tex file)."
    ),
    compiler: str | None = typer.Option(
        None, "--compiler", help="LaTeX engine (xelatex, lualatex, ...) or rst2pdf."
    ),
    render_command: str | None = typer.Option(
        None, "--render-command", help=RENDER_COMMAND_HELP
    ),
    option: list[str] | None = typer.Option(None, "--option", help=OPTION_HELP),
) -> None:
    """Render a document and compile it to PDF."""
    kwargs: dict[str, Any] = {}
    if output_path is not None:
        kwargs["output_path"] = output_path
    if compiler:
        kwargs["compiler"] = compiler
    if render_command:
        kwargs["render_command"] = render_command
    if option:
        kwargs["options"] = option

    try:
        from litconvert.api import render_pdf

        out = render_pdf(input_path, **kwargs)
        typer.echo(f"[green]✓ Saved:[/green] {out}")
    except LitConvertError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))


@app.command("html")
def html_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., exists=True, readable=True, help="Markdown source."),
    output_path: Path | None = typer.Option(None, "--output", "-o", help="HTML output path."),
    render_command: str | None = typer.Option(
        None, "--render-command", help=RENDER_COMMAND_HELP
    ),
    force_v1: bool = typer.Option(
        False, "--force-v1", help="Skip the front-matter (v2) document check."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail instead of warning on front-matter documents."
    ),
) -> None:
    """Render a markdown document and convert it to HTML."""
    kwargs: dict[str, Any] = {"force_v1": force_v1}
    if output_path is not None:
        kwargs["output_path"] = output_path
    if render_command:
        kwargs["render_command"] = render_command
    if strict:
        kwargs["strict"] = True

    try:
        from litconvert.api import render_html

        out = render_html(input_path, **kwargs)
        typer.echo(f"[green]✓ Saved:[/green] {out}")
    except LitConvertError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))


@app.command("publish")
def publish_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., exists=True, readable=True, help="Markdown source."),
    title: str = typer.Option("A post from litconvert", "--title", help="Post title."),
    action: str = typer.Option(
        "newPost", "--action", help="One of newPost, editPost, newPage."
    ),
    post_id: str | None = typer.Option(
        None, "--post-id", help="Id of the post to update (editPost only)."
    ),
    draft: bool = typer.Option(False, "--draft", help="Save as draft instead of publishing."),
    shortcode_source: bool = typer.Option(
        False, "--shortcode-source", help="Use [sourcecode language] for tagged code."
    ),
    shortcode_output: bool = typer.Option(
        False, "--shortcode-output", help="Use [sourcecode] for untagged output."
    ),
    render_command: str | None = typer.Option(
        None, "--render-command", help=RENDER_COMMAND_HELP
    ),
    meta: list[str] | None = typer.Option(
        None, "--meta", help="Extra post field KEY=VALUE (repeatable)."
    ),
) -> None:
    """Render a document and publish it to WordPress."""
    if action not in {"newPost", "editPost", "newPage"}:
        raise typer.BadParameter(
            f"Unknown action '{action}'. Use newPost, editPost or newPage."
        )
    metadata = _parse_metadata(meta)

    try:
        from litconvert.api import publish

        result = publish(
            input_path,
            title,
            action=action,  # type: ignore[arg-type]
            post_id=_coerce_option_value(post_id) if post_id is not None else None,  # type: ignore[arg-type]
            publish=not draft,
            shortcode=(shortcode_source, shortcode_output),
            render_command=render_command,
            **metadata,  # type: ignore[arg-type]
        )
        typer.echo(f"[green]✓ {result.action}:[/green] id={result.post_id} {result.link or ''}")
    except LitConvertError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))


@app.command("watch")
def watch_cmd(
    ctx: typer.Context,
    inputs: list[Path] = typer.Argument(..., exists=True, readable=True, help="Files to watch."),
    to: str = typer.Option("pdf", "--to", help="Target format: pdf or html."),
    interval: float | None = typer.Option(
        None, "--interval", min=0.0, help="Seconds between polls."
    ),
    compiler: str | None = typer.Option(None, "--compiler", help="PDF compiler."),
    render_command: str | None = typer.Option(
        None, "--render-command", help=RENDER_COMMAND_HELP
    ),
    continue_on_error: bool = typer.Option(
        False, "--continue-on-error", help="Keep watching after a failed compile."
    ),
) -> None:
    """Compile files now and again every time they are modified (Ctrl+C to stop)."""
    from litconvert.api import render_html, render_pdf
    from litconvert.config import Settings
    from litconvert.watcher import watch

    if to not in {"pdf", "html"}:
        raise typer.BadParameter(f"Unknown target '{to}'. Use pdf or html.")

    options: dict[str, Any] = {}
    if render_command:
        options["render_command"] = render_command
    if to == "pdf":
        compile_fn = partial(render_pdf, compiler=compiler) if compiler else render_pdf
    else:
        compile_fn = render_html

    typer.echo(f"[watch] Watching {', '.join(str(p) for p in inputs)}. Ctrl+C to stop.")
    try:
        watch(
            inputs,
            compile_fn,
            interval if interval is not None else Settings.from_env().watch_interval,
            continue_on_error=continue_on_error,
            **options,
        )
    except KeyboardInterrupt:
        typer.echo("\n[watch] Stopped.")
    except LitConvertError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, _debug(ctx)))


@app.command("doctor")
def doctor_cmd() -> None:
    """Print Python, library and external tool availability."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for library in LIBRARIES:
        try:
            typer.echo(f"{library}: {metadata.version(library)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{library}: <not installed>")

    for tool in TOOLS:
        typer.echo(f"{tool}: {shutil.which(tool) or '<not found>'}")


if __name__ == "__main__":
    app()
