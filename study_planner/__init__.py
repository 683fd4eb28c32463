"""
Smart Study Planner - plan export

Parses the Markdown schedule table returned by the AI planner and
exports it as a single-sheet Excel workbook.
"""

__version__ = "1.0.0"

from .export.plan_exporter import PlanExporter
from .export.components.table_extractor import TableExtractor, extract_table
from .export.components.workbook_writer import WorkbookWriter
from .export.data_models import ExportResult, ExportStatus, TabularDataset
from .export.filenames import build_export_basename

__all__ = [
    "PlanExporter",
    "TableExtractor",
    "WorkbookWriter",
    "ExportResult",
    "ExportStatus",
    "TabularDataset",
    "build_export_basename",
    "extract_table",
]
