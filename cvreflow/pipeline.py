"""
User actions as plain commands.

The GUI turns widget events into one of these and hands it to
``handle``; nothing here depends on UI state.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from cvreflow.generator_pdf import emit
from cvreflow.parser_llm import extract_cv
from cvreflow.schema_resume import CvRecord


@dataclass(frozen=True)
class UploadRequested:
    pdf_bytes: bytes
    api_key: str


@dataclass(frozen=True)
class ExportRequested:
    record: CvRecord


Command = Union[UploadRequested, ExportRequested]


def handle(command: Command):
    if isinstance(command, UploadRequested):
        # A new upload replaces the whole record, edits to the previous one are dropped
        return extract_cv(command.pdf_bytes, command.api_key)
    if isinstance(command, ExportRequested):
        return emit(command.record)
    raise TypeError(f"Unknown command: {type(command).__name__}")


@dataclass
class UploadTracker:
    """Remembers which uploaded file was last sent for extraction.

    The GUI script reruns on every widget change, so without this the same
    file would be sent again and again. Files are told apart by their
    upload id, not their name: picking a corrected ``cv.pdf`` is a new
    upload. A file whose extraction failed can be resent with ``retry``.
    """
    handled_id: Optional[str] = None
    failed: bool = False

    def needs_extraction(self, file_id: Optional[str], retry: bool = False) -> bool:
        if file_id is None:
            return False
        if file_id != self.handled_id:
            return True
        return retry and self.failed

    def started(self, file_id: str) -> None:
        self.handled_id = file_id
        self.failed = False

    def finished(self, ok: bool) -> None:
        self.failed = not ok

    def reset(self) -> None:
        self.handled_id = None
        self.failed = False
