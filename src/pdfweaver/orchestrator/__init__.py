"""File-level pipelines."""

from __future__ import annotations

from pdfweaver.orchestrator.runner import compress_files, load_inputs, merge_files

__all__ = ["compress_files", "load_inputs", "merge_files"]
