from __future__ import annotations


class InsightFlowError(Exception):
    """Base class for errors raised by insightflow."""


class IngestError(InsightFlowError):
    """The uploaded file could not be turned into a table."""


class UnsupportedFileTypeError(IngestError):
    def __init__(self, filename: str):
        super().__init__(f"Unsupported file type: {filename!r}. Please upload CSV or Excel.")
        self.filename = filename


class EmptyFileError(IngestError):
    """Parsing succeeded but produced zero rows."""


class UnparseableFileError(IngestError):
    """The CSV/Excel parser rejected the file."""


class ReportGenerationError(InsightFlowError):
    """The LLM call for a detailed report failed or returned invalid JSON."""
