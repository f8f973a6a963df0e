"""Logging utilities.

Records carry the operation id, its stage and the input document being processed, so a
failure in a long merge points at the file that caused it.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from pathlib import Path
from typing import Any, Iterator

from rich.logging import RichHandler


_run_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("pdfweaver_run_id", default="-")
_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("pdfweaver_step", default="-")
_document_var: contextvars.ContextVar[str] = contextvars.ContextVar("pdfweaver_document", default="-")

# pypdf reports every recoverable syntax problem as a warning
_LIBRARY_LOGGERS = ("pypdf",)


class _ContextFilter(logging.Filter):
    """Inject operation and document context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.run_id = _run_id_var.get()  # type: ignore[attr-defined]
        record.step = _step_var.get()  # type: ignore[attr-defined]
        record.document = _document_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def run_context(*, run_id: str, step: str | None = None) -> Any:
    """Temporarily bind operation context for structured logging.

    Args:
        run_id: Operation identifier (e.g. ``merge-3f2a``).
        step: Optional pipeline stage (``load``, ``merge``, ``compress``, ``save``).
    """

    token_run = _run_id_var.set(run_id)
    token_step = _step_var.set(step or _step_var.get())
    try:
        yield
    finally:
        _run_id_var.reset(token_run)
        _step_var.reset(token_step)


@contextlib.contextmanager
def document_context(path: str | Path) -> Iterator[None]:
    """Tag records emitted inside the block with the file name of ``path``."""

    token = _document_var.set(Path(path).name)
    try:
        yield
    finally:
        _document_var.reset(token)


def set_step(step: str) -> None:
    """Update current pipeline stage in context."""

    _step_var.set(step)


def configure_logging(level: str = "INFO", *, library_level: str = "ERROR") -> None:
    """Configure application logging.

    Args:
        level: Logging level name for pdfweaver.
        library_level: Level for the PDF library's own loggers. Damaged inputs that still
            load make pypdf warn once per repaired object.
    """

    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="run=%(run_id)s step=%(step)s doc=%(document)s %(name)s: %(message)s",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level.upper())
    # configure_logging may run once per CLI invocation in the same process (tests)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                h.addFilter(_ContextFilter())
                h.setFormatter(formatter)

    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level.upper())


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log an exception with optional structured context."""

    if context:
        logger.exception("%s | context=%s", msg, context)
    else:
        logger.exception("%s", msg)
