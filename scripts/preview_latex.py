#!/usr/bin/env python3
"""
LaTeX Preview CLI

Renders the approximate HTML preview of a LaTeX resume, the same markup the
editor shows while typing.

Examples:\n

    preview_latex.py render resume.tex                        # Paper page to resume.html

    preview_latex.py render resume.tex --out out/preview.html # Custom output path

    preview_latex.py render resume.tex --preset a4            # A4 page geometry

    preview_latex.py render resume.tex --fragment             # Bare markup to stdout
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from texdesk.contexts.preview import latex_to_html
from texdesk.contexts.preview.page import PageRenderer
from texdesk.contexts.preview.logger import _log_info, setup_preview_logger

load_dotenv()

app = typer.Typer(
    help="Render the approximate HTML preview of a LaTeX resume",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    tex_file: Annotated[
        Path,
        typer.Argument(help="LaTeX source file", exists=True, dir_okay=False, readable=True),
    ],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output HTML path (default: next to the source)"),
    ] = None,
    preset: Annotated[
        str,
        typer.Option("--preset", "-p", help="Page preset from page_presets.yaml"),
    ] = "letter",
    fragment: Annotated[
        bool,
        typer.Option("--fragment", "-f", help="Print bare preview markup to stdout"),
    ] = False,
):
    """
    Render a LaTeX file to an HTML preview page.

    Examples:\n

        $ preview_latex.py render resume.tex

        $ preview_latex.py render resume.tex --preset a4
    """
    markup = latex_to_html(tex_file.read_text(encoding="utf-8"))

    if fragment:
        typer.echo(markup)
        raise typer.Exit(code=0)

    setup_preview_logger(console=False)

    try:
        html = PageRenderer().render(markup, preset=preset, title=tex_file.stem)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    out = out or tex_file.with_suffix(".html")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(html, encoding="utf-8")
    _log_info(f"Preview written to {out}")

    typer.secho("✓ Preview rendered", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  HTML: {out}")
    raise typer.Exit(code=0)


if __name__ == "__main__":
    app()
