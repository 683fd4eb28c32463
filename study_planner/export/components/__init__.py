"""
Components for the study plan export pipeline.

This package contains the modular pieces that turn AI-generated plan
text into a downloadable spreadsheet.
"""

from .plan_file_reader import PlanFileReader
from .table_extractor import TableExtractor, extract_table
from .workbook_writer import WorkbookWriter

__all__ = [
    "PlanFileReader",
    "TableExtractor",
    "WorkbookWriter",
    "extract_table",
]
