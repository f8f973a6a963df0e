"""Path utilities."""

from __future__ import annotations

from pathlib import Path

PDF_SUFFIX = ".pdf"


def with_pdf_extension(path: str | Path) -> Path:
    """Append ``.pdf`` unless the path already ends with it.

    The check is on the literal text, so ``report.v2`` becomes ``report.v2.pdf``.
    """

    text = str(path)
    if text.endswith(PDF_SUFFIX):
        return Path(text)
    return Path(text + PDF_SUFFIX)


def compressed_output_path(path: str | Path, suffix: str = "_compressed") -> Path:
    """Return ``<name><suffix>.pdf`` next to ``path``.

    Example:
        ``docs/a.pdf`` -> ``docs/a_compressed.pdf``
    """

    p = with_pdf_extension(path)
    return p.with_name(p.name[: -len(PDF_SUFFIX)] + suffix + PDF_SUFFIX)
