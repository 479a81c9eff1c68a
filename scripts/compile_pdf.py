#!/usr/bin/env python3
"""
PDF Compilation CLI

Compiles a LaTeX resume to PDF through a CompilationSession, the same path the
editor's export button takes.

Examples:\n

    compile_pdf.py compile resume.tex                     # PDF next to the source

    compile_pdf.py compile resume.tex --out out/cv.pdf    # Custom output path

    compile_pdf.py compile resume.tex --verbose           # Full engine log in the render log
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from texdesk.contexts.rendering import (
    CompilationSession,
    CompilationStatus,
    subprocess_engine_factory,
)
from texdesk.contexts.rendering.logger import setup_rendering_logger

load_dotenv()
LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")

app = typer.Typer(
    help="Compile LaTeX resumes to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


async def _compile(source: str, num_passes: int, verbose: bool) -> tuple:
    async with CompilationSession(
        subprocess_engine_factory(num_passes=num_passes), verbose=verbose
    ) as session:
        await session.wait_until_loaded()
        await session.compile(source)
        return session.status, session.artifact, session.artifact_bytes(), session.diagnostic_log


@app.command("compile")
def compile_command(
    tex_file: Annotated[
        Path,
        typer.Argument(help="LaTeX source file", exists=True, dir_okay=False, readable=True),
    ],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output PDF path (default: next to the source)"),
    ] = None,
    num_passes: Annotated[
        int,
        typer.Option(
            "--passes",
            "-p",
            help="Number of compiler passes (default: 2 for cross-references)",
            min=1,
            max=5,
        ),
    ] = 2,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed compilation output"),
    ] = False,
):
    """
    Compile a LaTeX file to PDF.

    Examples:\n

        $ compile_pdf.py compile resume.tex

        $ compile_pdf.py compile resume.tex --passes 3
    """
    typer.secho(f"\nCompiling: {tex_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Compiler: {LATEX_COMPILER}")
    typer.echo(f"Passes: {num_passes}")
    typer.echo("")

    log_file = setup_rendering_logger()

    source = tex_file.read_text(encoding="utf-8")
    status, artifact, pdf, diagnostic_log = asyncio.run(_compile(source, num_passes, verbose))

    typer.echo("")
    if status is CompilationStatus.READY:
        out = out or tex_file.with_suffix(".pdf")
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(pdf)

        typer.secho("✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {artifact.page_count if artifact.page_count is not None else '?'}")
        typer.echo(f"  Warnings: {len(artifact.warnings)}")
        if verbose and artifact.warnings:
            for warning in artifact.warnings[:10]:
                typer.echo(f"  - {warning}")
            if len(artifact.warnings) > 10:
                typer.echo(f"  ... and {len(artifact.warnings) - 10} more")
        typer.echo(f"  PDF: {out}")
    else:
        typer.secho("✗ Compilation failed", fg=typer.colors.RED, bold=True)
        # Last lines of the log carry the fatal error
        tail = diagnostic_log.strip().splitlines()[-15:]
        for line in tail:
            typer.secho(f"  {line}", fg=typer.colors.RED)

    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    raise typer.Exit(code=0 if status is CompilationStatus.READY else 1)


if __name__ == "__main__":
    app()
