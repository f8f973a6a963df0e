"""CLI entrypoints for pdfweaver."""

from __future__ import annotations

from pathlib import Path

import typer

from pdfweaver.codec import DocumentError
from pdfweaver.config import load_settings
from pdfweaver.logging import configure_logging, get_logger
from pdfweaver.orchestrator.runner import compress_files, merge_files
from pdfweaver.utils.paths import with_pdf_extension

app = typer.Typer(add_completion=False, help="Merge and compress PDF documents")
logger = get_logger(__name__)

EXIT_DOCUMENT_ERROR = 1
EXIT_NO_OUTPUT = 3


@app.command()
def merge(
    pdfs: list[str] = typer.Argument(
        None,
        help="PDFs to merge, in order. A missing .pdf extension is appended.",
        show_default=False,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF file (default: output.pdf, overridable via PDFWEAVER_DEFAULT_OUTPUT)",
    ),
) -> None:
    """Merge multiple PDFs into a single output PDF."""

    if not pdfs:
        raise typer.BadParameter("No pdfs found", param_hint="PDFS")

    settings = load_settings()
    configure_logging(settings.log_level, library_level=settings.library_log_level)

    target = output if output is not None else settings.default_output
    logger.info("CLI merge requested for %d inputs", len(pdfs))
    try:
        result = merge_files(pdfs, target, settings=settings)
    except DocumentError as exc:
        typer.echo(f"Failed to merge pdfs: {exc}", err=True)
        raise typer.Exit(code=EXIT_DOCUMENT_ERROR) from exc

    if not result.ok:
        typer.echo(f"No output written: {result.summary.message}", err=True)
        raise typer.Exit(code=EXIT_NO_OUTPUT)

    typer.echo(str(with_pdf_extension(target)))


@app.command()
def compress(
    pdfs: list[str] = typer.Argument(
        None,
        help="PDFs to compress. Each is written to <name>_compressed.pdf.",
        show_default=False,
    ),
) -> None:
    """Compress PDFs to save disk space or make them easier to attach."""

    if not pdfs:
        raise typer.BadParameter("No pdfs found", param_hint="PDFS")

    settings = load_settings()
    configure_logging(settings.log_level, library_level=settings.library_log_level)

    try:
        written = compress_files(pdfs, settings=settings)
    except DocumentError as exc:
        typer.echo(f"Failed to compress pdfs: {exc}", err=True)
        raise typer.Exit(code=EXIT_DOCUMENT_ERROR) from exc

    for path in written:
        typer.echo(str(path))


if __name__ == "__main__":
    app()
