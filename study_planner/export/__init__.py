"""
Study Plan Export

Turns AI-generated study plan text into a downloadable Excel workbook.
"""

from .plan_exporter import PlanExporter
from .data_models import ExportResult, ExportStatus, TabularDataset
from .exceptions import NoTableDataError, PlanExportError, WorkbookSerializationError

__all__ = [
    "PlanExporter",
    "ExportResult",
    "ExportStatus",
    "TabularDataset",
    "PlanExportError",
    "NoTableDataError",
    "WorkbookSerializationError",
]
