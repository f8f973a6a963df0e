"""End-to-end file pipelines: load, merge or compress, save."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Sequence

from pdfweaver.codec import DocumentError, compress, load, save
from pdfweaver.config import Settings
from pdfweaver.graph.document import Graph
from pdfweaver.logging import document_context, get_logger, log_exception, run_context, set_step
from pdfweaver.merge import MergeResult, merge_graphs
from pdfweaver.utils.paths import compressed_output_path, with_pdf_extension

logger = get_logger(__name__)


def _new_run_id(kind: str) -> str:
    return f"{kind}-{uuid.uuid4().hex[:8]}"


def _compress(graph: Graph, settings: Settings) -> Graph:
    return compress(
        graph,
        level=settings.compression_level,
        streams=settings.compress_streams,
        prune=settings.prune_unreachable,
    )


def load_inputs(paths: Sequence[str | Path], *, settings: Settings) -> list[Graph]:
    """Load every input before any merge work starts.

    Paths without a ``.pdf`` suffix get one appended. The first failure aborts the whole
    operation.
    """

    set_step("load")
    graphs: list[Graph] = []
    for raw in paths:
        path = with_pdf_extension(raw)
        with document_context(path):
            logger.debug("Loading %s", path)
            graphs.append(load(path, strict=settings.strict_parsing))
    return graphs


def merge_files(
    inputs: Sequence[str | Path],
    output: str | Path,
    *,
    settings: Settings,
) -> MergeResult:
    """Merge ``inputs`` (in order) into ``output``.

    Nothing is written when the merge produces no composite (see
    :class:`pdfweaver.models.MergeOutcome`).

    Raises:
        ValueError: If ``inputs`` is empty.
        DocumentError: If an input cannot be loaded or the output cannot be written.
    """

    if not inputs:
        raise ValueError("No pdfs found")

    output = with_pdf_extension(output)
    with run_context(run_id=_new_run_id("merge"), step="validate"):
        logger.info("Checking input validity...")
        logger.info("Loading PDFs into memory...")
        graphs = load_inputs(inputs, settings=settings)

        set_step("merge")
        logger.info("Merging %d PDFs into %s...", len(graphs), output)
        result = merge_graphs(
            graphs,
            label_template=settings.bookmark_label_template,
            color=settings.bookmark_color,
            version=settings.pdf_version,
        )
        if not result.ok or result.graph is None:
            return result

        set_step("compress")
        graph = _compress(result.graph, settings)
        result.summary.objects = len(graph)

        set_step("save")
        logger.info("Writing output file...")
        try:
            save(graph, output)
        except DocumentError:
            log_exception(logger, "Saving merged document failed", output=str(output))
            raise
        result.graph = graph
        logger.info("All done! %d pages, %d bookmarks", result.summary.pages, result.summary.bookmarks)
        return result


def compress_files(inputs: Sequence[str | Path], *, settings: Settings) -> list[Path]:
    """Compress each input into ``<name><suffix>.pdf`` beside it.

    Every input is loaded before the first one is written.

    Returns:
        Written output paths, in input order.
    """

    if not inputs:
        raise ValueError("No pdfs found")

    written: list[Path] = []
    with run_context(run_id=_new_run_id("compress"), step="validate"):
        logger.info("Checking input validity...")
        logger.info("Loading PDFs into memory...")
        graphs = load_inputs(inputs, settings=settings)

        logger.info("Compressing PDFs...")
        for raw, graph in zip(inputs, graphs):
            source = with_pdf_extension(raw)
            target = compressed_output_path(source, settings.compressed_suffix)
            logger.info("Compressing %s to %s", source, target)
            with document_context(source):
                set_step("compress")
                smaller = _compress(graph, settings)
                set_step("save")
                written.append(save(smaller, target))

        logger.info("All done!")
    return written
