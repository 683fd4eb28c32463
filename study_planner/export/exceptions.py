"""Exceptions raised inside the export pipeline."""


class PlanExportError(Exception):
    """Base class for study plan export errors."""


class NoTableDataError(PlanExportError):
    """Raised when a plan contains no pipe-table data rows."""


class WorkbookSerializationError(PlanExportError):
    """Raised when a workbook cannot be built or written."""
