#!/usr/bin/env python3
"""
PlanExporter - Orchestrator for the study plan export pipeline.

Coordinates the components that turn AI plan text into an .xlsx workbook.
"""

import logging
import time
from pathlib import Path
from datetime import date
from typing import Optional

from .data_models import ExportResult, TabularDataset
from .components.plan_file_reader import PlanFileReader
from .components.table_extractor import TableExtractor
from .components.workbook_writer import WorkbookWriter
from .filenames import build_export_basename
from ..utils.config import config

logger = logging.getLogger(__name__)


class PlanExporter:
    """
    Orchestrates plan export.

    Coordinates components to:
    1. Load plan text (from a string or a file)
    2. Extract the pipe table into a TabularDataset
    3. Serialize the dataset to a single-sheet workbook
    4. Optionally write the workbook into the output directory
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        sheet_name: Optional[str] = None,
        default_filename: Optional[str] = None
    ):
        """
        Initialize exporter with configuration.

        Args:
            output_dir: Output directory (default: EXPORT_OUTPUT_DIR or exports/)
            sheet_name: Worksheet title (default: EXPORT_SHEET_NAME or "Study Plan")
            default_filename: Base filename used when none is given
        """
        self.output_dir = Path(output_dir) if output_dir else config.get_output_dir()
        self.sheet_name = sheet_name or config.get_sheet_name()
        self.default_filename = default_filename or config.get_default_filename()

        self.extractor = TableExtractor()
        self.writer = WorkbookWriter(self.output_dir, sheet_name=self.sheet_name)

    def extract(self, text: str) -> TabularDataset:
        """
        Extract the plan table.

        Args:
            text: Raw plan text

        Returns:
            TabularDataset (possibly empty)
        """
        dataset = self.extractor.extract(text)
        if dataset.is_empty:
            logger.warning("No table data found in plan")
        else:
            logger.debug(f"Extracted {len(dataset)} rows with columns {list(dataset.columns)}")
        return dataset

    def export_text(
        self,
        text: str,
        filename: Optional[str] = None,
        created_at: Optional[date] = None
    ) -> ExportResult:
        """
        Export plan text to an in-memory workbook.

        Args:
            text: Raw plan text
            filename: Base filename without extension
            created_at: Plan creation date, used for the default filename

        Returns:
            ExportResult with workbook bytes on success
        """
        start_time = time.time()
        dataset = self.extract(text)
        result = self.writer.export(dataset, self.resolve_filename(filename, created_at))
        self._log_result(result, start_time)
        return result

    def export_text_to_file(
        self,
        text: str,
        filename: Optional[str] = None,
        created_at: Optional[date] = None
    ) -> ExportResult:
        """
        Export plan text and write the workbook into the output directory.

        Args:
            text: Raw plan text
            filename: Base filename without extension
            created_at: Plan creation date, used for the default filename

        Returns:
            ExportResult with path set on success
        """
        start_time = time.time()
        dataset = self.extract(text)
        result = self.writer.write(dataset, self.resolve_filename(filename, created_at))
        self._log_result(result, start_time)
        return result

    def export_file(
        self,
        plan_file: str | Path,
        filename: Optional[str] = None,
        created_at: Optional[date] = None
    ) -> ExportResult:
        """
        Export a saved plan file.

        Args:
            plan_file: Path to a UTF-8 plan text file
            filename: Base filename (default: derived from created_at,
                otherwise the plan file's stem)
            created_at: Plan creation date, used for the default filename

        Returns:
            ExportResult with path set on success

        Raises:
            FileNotFoundError: If plan_file does not exist
            IOError: If plan_file cannot be read
        """
        reader = PlanFileReader(plan_file)
        text = reader.read_text()
        logger.info(f"Loaded {reader.get_line_count()} lines from {reader.file_path}")
        if filename is None and created_at is None:
            filename = reader.file_path.stem
        return self.export_text_to_file(text, filename, created_at)

    def resolve_filename(
        self,
        filename: Optional[str] = None,
        created_at: Optional[date] = None
    ) -> str:
        """
        Pick the base download filename.

        An explicit filename wins; otherwise the plan's creation date is
        appended to the default name, e.g. 'StudyPlan_Thursday,_December_19,_2024'.
        """
        if filename:
            return filename
        if created_at is not None:
            return build_export_basename(created_at, prefix=self.default_filename)
        return self.default_filename

    def _log_result(self, result: ExportResult, start_time: float) -> None:
        elapsed = time.time() - start_time
        if result.success:
            logger.info(f"Exported {result.row_count} rows to {result.filename} in {elapsed:.3f}s")
        elif result.error_details:
            logger.error(f"Export of {result.filename} failed: {result.error_details}")
        else:
            logger.warning(f"Export of {result.filename} skipped: {result.error_message}")
