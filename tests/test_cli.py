"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfReader
from typer.testing import CliRunner

from pdfweaver.cli import EXIT_DOCUMENT_ERROR, EXIT_NO_OUTPUT, app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PDFWEAVER_ENV_FILE", raising=False)
    monkeypatch.setenv("PDFWEAVER_LOG_LEVEL", "WARNING")


def test_merge_writes_output_with_extension(tmp_path: Path, write_pdf) -> None:
    """Inputs and output without .pdf get the extension appended."""

    write_pdf("a", 3)
    write_pdf("b", 2)

    result = runner.invoke(app, ["merge", "a", "b.pdf", "-o", "combined"])

    assert result.exit_code == 0, result.output
    out = tmp_path / "combined.pdf"
    assert out.exists()
    reader = PdfReader(out)
    assert len(reader.pages) == 5
    assert [item.title for item in reader.outline] == ["Page_1", "Page_2"]


def test_merge_default_output(tmp_path: Path, write_pdf) -> None:
    write_pdf("a", 1)

    result = runner.invoke(app, ["merge", "a"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "output.pdf").exists()


def test_merge_requires_inputs() -> None:
    result = runner.invoke(app, ["merge"])
    assert result.exit_code == 2
    assert "No pdfs found" in result.output


def test_merge_missing_input_writes_nothing(tmp_path: Path, write_pdf) -> None:
    write_pdf("a", 1)

    result = runner.invoke(app, ["merge", "a", "missing"])

    assert result.exit_code == EXIT_DOCUMENT_ERROR
    assert not (tmp_path / "output.pdf").exists()


def test_merge_malformed_input_exits_with_document_error(tmp_path: Path, write_pdf) -> None:
    write_pdf("a", 1)
    (tmp_path / "bad.pdf").write_bytes(b"this is not a pdf at all")

    result = runner.invoke(app, ["merge", "a", "bad"])

    assert result.exit_code == EXIT_DOCUMENT_ERROR
    assert "Failed to merge pdfs" in result.output
    assert not (tmp_path / "output.pdf").exists()


def test_merge_without_page_tree_writes_nothing(tmp_path: Path, write_pdf) -> None:
    """A merge with no page-tree root is reported and produces no file."""

    write_pdf("empty", 0, page_tree=False)

    result = runner.invoke(app, ["merge", "empty", "-o", "out.pdf"])

    assert result.exit_code == EXIT_NO_OUTPUT
    assert not (tmp_path / "out.pdf").exists()


def test_compress_writes_suffixed_files(tmp_path: Path, write_pdf) -> None:
    write_pdf("a", 2)
    write_pdf("b", 1)

    result = runner.invoke(app, ["compress", "a", "b.pdf"])

    assert result.exit_code == 0, result.output
    for name, pages in (("a", 2), ("b", 1)):
        out = tmp_path / f"{name}_compressed.pdf"
        assert out.exists()
        assert len(PdfReader(out).pages) == pages


def test_compress_missing_input() -> None:
    result = runner.invoke(app, ["compress", "nope"])
    assert result.exit_code == EXIT_DOCUMENT_ERROR
