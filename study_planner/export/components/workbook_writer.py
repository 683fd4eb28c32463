"""
WorkbookWriter component for study plan export.

Serializes a TabularDataset into a single-sheet .xlsx workbook and
optionally writes it into an output directory.
"""

import io
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from ..data_models import ExportResult, ExportStatus, TabularDataset
from ..exceptions import NoTableDataError, WorkbookSerializationError

logger = logging.getLogger(__name__)


class WorkbookWriter:
    """
    Builds Excel workbooks from extracted plan tables.

    Features:
    - One worksheet, header row taken from the dataset columns
    - Absent row fields rendered as blank cells
    - Empty datasets rejected before any file is produced
    - Files written through a temporary sibling, never left half-written
    """

    EXTENSION = ".xlsx"
    MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    DEFAULT_SHEET_NAME = "Study Plan"

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        sheet_name: Optional[str] = None
    ):
        """
        Initialize workbook writer.

        Args:
            output_dir: Directory where workbooks are written by write()
            sheet_name: Worksheet title (default: "Study Plan")
        """
        self.output_dir = Path(output_dir) if output_dir is not None else Path("exports")
        self.sheet_name = sheet_name or self.DEFAULT_SHEET_NAME

    def generate_filename(self, filename: str) -> str:
        """
        Append the spreadsheet extension to a base filename.

        Directory parts are stripped so the workbook always lands
        directly inside output_dir.

        Example: 'My_Study_Plan' -> 'My_Study_Plan.xlsx'
                 '../../My_Study_Plan' -> 'My_Study_Plan.xlsx'
        """
        return f"{Path(filename).name}{self.EXTENSION}"

    def build_workbook(self, dataset: TabularDataset) -> bytes:
        """
        Serialize dataset to .xlsx bytes.

        Args:
            dataset: Extracted table rows

        Returns:
            Workbook file content

        Raises:
            NoTableDataError: If dataset has no rows
            WorkbookSerializationError: If the workbook cannot be built
        """
        if dataset.is_empty:
            raise NoTableDataError("No table data found in plan")

        columns = list(dataset.columns)
        df = pd.DataFrame(dataset.to_records(), columns=columns)

        buffer = io.BytesIO()
        try:
            with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
                df.to_excel(writer, index=False, sheet_name=self.sheet_name)
                self._mark_text_cells(writer.sheets[self.sheet_name])
        except Exception as e:
            raise WorkbookSerializationError(f"Failed to build workbook: {e}") from e

        content = buffer.getvalue()
        logger.debug(
            f"Built workbook: {len(dataset)} rows x {len(columns)} columns, "
            f"{len(content)} bytes"
        )
        return content

    def export(self, dataset: TabularDataset, filename: str) -> ExportResult:
        """
        Export dataset as an in-memory workbook.

        Never raises for empty data or serialization problems; both are
        reported through the returned ExportResult.

        Args:
            dataset: Extracted table rows
            filename: Base filename without extension

        Returns:
            ExportResult with workbook bytes on success
        """
        full_name = self.generate_filename(filename)

        if dataset.is_empty:
            logger.warning(f"Nothing to export for {full_name}: no table data")
            return ExportResult.empty(full_name)

        try:
            content = self.build_workbook(dataset)
        except WorkbookSerializationError as e:
            logger.error(f"Error exporting {full_name}: {e}")
            return ExportResult.failure(full_name, str(e))

        return ExportResult(
            status=ExportStatus.OK,
            filename=full_name,
            content=content,
            row_count=len(dataset)
        )

    def write(self, dataset: TabularDataset, filename: str) -> ExportResult:
        """
        Export dataset and write the workbook into the output directory.

        Args:
            dataset: Extracted table rows
            filename: Base filename without extension

        Returns:
            ExportResult with path set on success
        """
        result = self.export(dataset, filename)
        if not result.success:
            return result

        output_path = self.output_dir / result.filename
        try:
            self._write_bytes(output_path, result.content)
        except OSError as e:
            logger.error(f"Error writing {output_path}: {e}")
            return ExportResult.failure(result.filename, str(e))

        logger.info(f"Wrote workbook: {output_path} ({result.row_count} rows)")
        result.path = output_path
        return result

    def _mark_text_cells(self, worksheet) -> None:
        """
        Store every string cell as plain text.

        openpyxl treats strings starting with '=' as formulas; plan cells
        are always text.
        """
        for row in worksheet.iter_rows():
            for cell in row:
                if isinstance(cell.value, str) and cell.value:
                    cell.data_type = "s"

    def _write_bytes(self, output_path: Path, content: bytes) -> None:
        """Write content via a temporary file renamed into place."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = output_path.with_name(output_path.name + ".part")
        try:
            tmp_path.write_bytes(content)
            tmp_path.replace(output_path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
