#!/usr/bin/env python3
"""
Tests for WorkbookWriter component.

Tests workbook layout, empty-data handling, failure reporting and
writing workbooks to disk.
"""

import io
import pytest
from pathlib import Path
from unittest.mock import patch

from openpyxl import load_workbook

from study_planner.export.components.table_extractor import TableExtractor
from study_planner.export.components.workbook_writer import WorkbookWriter
from study_planner.export.data_models import (
    ExportStatus,
    TabularDataset,
    NO_TABLE_DATA_MESSAGE,
    EXPORT_FAILED_MESSAGE,
)
from study_planner.export.exceptions import NoTableDataError, WorkbookSerializationError


@pytest.fixture
def temp_output_dir(tmp_path):
    """Create temporary output directory path."""
    return tmp_path / "exports"


@pytest.fixture
def sample_dataset():
    """Two-row plan dataset."""
    text = """Here is your plan:
| Date | Day | Subject | Hours |
|---|---|---|---|
| 2024-12-19 | Thursday | Math | 2h |
| 2024-12-20 | Friday | Physics | 3h |
Good luck!"""
    return TableExtractor().extract(text)


@pytest.fixture
def ragged_dataset():
    """Dataset whose second row is missing trailing fields."""
    return TabularDataset.from_rows(
        ["Date", "Day", "Subject", "Hours"],
        [
            {"Date": "2024-12-19", "Day": "Thursday", "Subject": "Math", "Hours": "2h"},
            {"Date": "2024-12-20", "Day": "Friday"},
        ]
    )


def read_sheet(content: bytes):
    """Load workbook bytes and return (sheet titles, active sheet rows)."""
    workbook = load_workbook(io.BytesIO(content))
    rows = list(workbook.active.iter_rows(values_only=True))
    return workbook.sheetnames, rows


class TestWorkbookWriterInitialization:
    """Test initialization and setup."""

    def test_initialization(self, temp_output_dir):
        writer = WorkbookWriter(temp_output_dir)
        assert writer.output_dir == temp_output_dir
        assert writer.sheet_name == "Study Plan"

    def test_initialization_with_string_path(self, tmp_path):
        writer = WorkbookWriter(str(tmp_path / "out"), sheet_name="Plan")
        assert isinstance(writer.output_dir, Path)
        assert writer.sheet_name == "Plan"

    def test_generate_filename_appends_extension(self, temp_output_dir):
        writer = WorkbookWriter(temp_output_dir)
        assert writer.generate_filename("My_Study_Plan") == "My_Study_Plan.xlsx"

    def test_generate_filename_drops_directory_parts(self, temp_output_dir):
        writer = WorkbookWriter(temp_output_dir)
        assert writer.generate_filename("../../My_Study_Plan") == "My_Study_Plan.xlsx"
        assert writer.generate_filename("nested/Plan") == "Plan.xlsx"


class TestWorkbookWriterBuildWorkbook:
    """Test workbook content."""

    def test_single_sheet_with_header_and_rows(self, temp_output_dir, sample_dataset):
        writer = WorkbookWriter(temp_output_dir)

        sheetnames, rows = read_sheet(writer.build_workbook(sample_dataset))

        assert sheetnames == ["Study Plan"]
        assert rows == [
            ("Date", "Day", "Subject", "Hours"),
            ("2024-12-19", "Thursday", "Math", "2h"),
            ("2024-12-20", "Friday", "Physics", "3h"),
        ]

    def test_absent_fields_are_blank_cells(self, temp_output_dir, ragged_dataset):
        writer = WorkbookWriter(temp_output_dir)

        _, rows = read_sheet(writer.build_workbook(ragged_dataset))

        assert rows[2] == ("2024-12-20", "Friday", None, None)

    def test_duplicate_header_names_become_one_column(self, temp_output_dir):
        dataset = TableExtractor().extract("| A | B | A |\n| 1 | 2 | 3 |")
        writer = WorkbookWriter(temp_output_dir)

        _, rows = read_sheet(writer.build_workbook(dataset))

        assert rows == [("A", "B"), ("3", "2")]

    def test_formula_like_text_stays_text(self, temp_output_dir):
        dataset = TableExtractor().extract("| Subject | Note |\n| Math | =Review ch.1 |")
        writer = WorkbookWriter(temp_output_dir)

        workbook = load_workbook(io.BytesIO(writer.build_workbook(dataset)))
        cell = workbook.active.cell(row=2, column=2)

        assert cell.data_type == "s"
        assert cell.value == "=Review ch.1"

    def test_custom_sheet_name(self, temp_output_dir, sample_dataset):
        writer = WorkbookWriter(temp_output_dir, sheet_name="December")

        sheetnames, _ = read_sheet(writer.build_workbook(sample_dataset))

        assert sheetnames == ["December"]

    def test_build_does_not_mutate_dataset(self, temp_output_dir, ragged_dataset):
        before = ragged_dataset.to_records()
        WorkbookWriter(temp_output_dir).build_workbook(ragged_dataset)
        assert ragged_dataset.to_records() == before

    def test_build_empty_raises(self, temp_output_dir):
        writer = WorkbookWriter(temp_output_dir)
        with pytest.raises(NoTableDataError, match="No table data found"):
            writer.build_workbook(TabularDataset())

    def test_build_wraps_serialization_errors(self, temp_output_dir, sample_dataset):
        writer = WorkbookWriter(temp_output_dir)
        with patch(
            "study_planner.export.components.workbook_writer.pd.ExcelWriter",
            side_effect=OSError("disk full")
        ):
            with pytest.raises(WorkbookSerializationError, match="disk full"):
                writer.build_workbook(sample_dataset)


class TestWorkbookWriterExport:
    """Test the in-memory export boundary."""

    def test_export_success(self, temp_output_dir, sample_dataset):
        writer = WorkbookWriter(temp_output_dir)

        result = writer.export(sample_dataset, "My_Study_Plan")

        assert result.status is ExportStatus.OK
        assert result.success is True
        assert result.filename == "My_Study_Plan.xlsx"
        assert result.row_count == 2
        assert result.content
        assert result.path is None

    def test_export_empty_dataset(self, temp_output_dir):
        writer = WorkbookWriter(temp_output_dir)

        result = writer.export(TabularDataset(), "My_Study_Plan")

        assert result.status is ExportStatus.EMPTY
        assert result.content == b""
        assert result.user_message == NO_TABLE_DATA_MESSAGE

    def test_export_failure_is_reported_not_raised(self, temp_output_dir, sample_dataset):
        writer = WorkbookWriter(temp_output_dir)
        with patch(
            "study_planner.export.components.workbook_writer.pd.ExcelWriter",
            side_effect=RuntimeError("engine unavailable")
        ):
            result = writer.export(sample_dataset, "My_Study_Plan")

        assert result.status is ExportStatus.FAILURE
        assert result.user_message == EXPORT_FAILED_MESSAGE
        assert "engine unavailable" in result.error_details


class TestWorkbookWriterFileWriting:
    """Test writing workbooks to the output directory."""

    def test_write_creates_file(self, temp_output_dir, sample_dataset):
        writer = WorkbookWriter(temp_output_dir)

        assert not temp_output_dir.exists()
        result = writer.write(sample_dataset, "My_Study_Plan")

        assert result.success
        assert result.path == temp_output_dir / "My_Study_Plan.xlsx"
        assert result.path.read_bytes() == result.content
        assert list(temp_output_dir.iterdir()) == [result.path]

    def test_write_empty_produces_no_file(self, temp_output_dir):
        writer = WorkbookWriter(temp_output_dir)

        result = writer.write(TabularDataset(), "My_Study_Plan")

        assert result.status is ExportStatus.EMPTY
        assert result.path is None
        assert not temp_output_dir.exists()

    def test_write_io_error_is_reported(self, tmp_path, sample_dataset):
        """An output directory that is actually a file cannot be written."""
        blocker = tmp_path / "exports"
        blocker.write_text("not a directory", encoding="utf-8")
        writer = WorkbookWriter(blocker)

        result = writer.write(sample_dataset, "My_Study_Plan")

        assert result.status is ExportStatus.FAILURE
        assert result.path is None
        assert blocker.read_text(encoding="utf-8") == "not a directory"

    def test_write_overwrites_existing_file(self, temp_output_dir, sample_dataset, ragged_dataset):
        writer = WorkbookWriter(temp_output_dir)

        writer.write(sample_dataset, "plan")
        result = writer.write(ragged_dataset, "plan")

        _, rows = read_sheet(result.path.read_bytes())
        assert rows[2] == ("2024-12-20", "Friday", None, None)
        assert sorted(p.name for p in temp_output_dir.iterdir()) == ["plan.xlsx"]

    def test_write_stays_inside_output_dir(self, tmp_path, sample_dataset):
        output_dir = tmp_path / "exports"
        writer = WorkbookWriter(output_dir)

        result = writer.write(sample_dataset, "../escape")

        assert result.path == output_dir / "escape.xlsx"
        assert result.path.exists()
        assert not (tmp_path / "escape.xlsx").exists()
