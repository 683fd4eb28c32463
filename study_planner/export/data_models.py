"""
Data models for study plan export.

This module defines the core data structures used throughout the
extract -> export pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple


NO_TABLE_DATA_MESSAGE = "No table data found in plan"
EXPORT_FAILED_MESSAGE = "Failed to export to Excel"

# One parsed table line: header field name -> cell text
Row = Mapping[str, str]


@dataclass(frozen=True)
class TabularDataset:
    """
    Ordered rows parsed from a single logical pipe table.

    Attributes:
        header: Header cells exactly as written (duplicates preserved)
        rows: Read-only row mappings in source line order
    """
    header: Tuple[str, ...] = ()
    rows: Tuple[Row, ...] = ()

    @classmethod
    def from_rows(
        cls,
        header: Sequence[str],
        rows: Sequence[Dict[str, str]]
    ) -> "TabularDataset":
        """Freeze accumulated header and rows into a dataset."""
        return cls(
            header=tuple(header),
            rows=tuple(MappingProxyType(dict(row)) for row in rows)
        )

    @property
    def columns(self) -> Tuple[str, ...]:
        """Header names de-duplicated in first-seen order."""
        return tuple(dict.fromkeys(self.header))

    @property
    def is_empty(self) -> bool:
        """True when no data rows were found."""
        return len(self.rows) == 0

    def to_records(self) -> list:
        """Plain-dict copies of the rows, safe to mutate."""
        return [dict(row) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)


class ExportStatus(Enum):
    """Outcome of an export attempt."""
    OK = "ok"
    EMPTY = "empty"
    FAILURE = "failure"


@dataclass
class ExportResult:
    """
    Result of exporting one dataset.

    Attributes:
        status: OK, EMPTY (no table rows) or FAILURE (serialization/I/O)
        filename: Download filename including the .xlsx extension
        content: Workbook bytes (OK only)
        path: Location on disk when the workbook was written to a file
        row_count: Number of data rows written
        error_message: User-facing message for EMPTY/FAILURE
        error_details: Underlying exception text for FAILURE
    """
    status: ExportStatus
    filename: str
    content: bytes = b""
    path: Optional[Path] = None
    row_count: int = 0
    error_message: Optional[str] = None
    error_details: Optional[str] = field(default=None, repr=False)

    @classmethod
    def empty(cls, filename: str) -> "ExportResult":
        return cls(
            status=ExportStatus.EMPTY,
            filename=filename,
            error_message=NO_TABLE_DATA_MESSAGE
        )

    @classmethod
    def failure(cls, filename: str, details: str) -> "ExportResult":
        return cls(
            status=ExportStatus.FAILURE,
            filename=filename,
            error_message=EXPORT_FAILED_MESSAGE,
            error_details=details
        )

    @property
    def success(self) -> bool:
        """Whether a complete workbook was produced."""
        return self.status is ExportStatus.OK

    @property
    def user_message(self) -> str:
        """Human-readable summary suitable for showing to the end user."""
        if self.success:
            return f"Exported {self.row_count} rows to {self.filename}"
        return self.error_message or EXPORT_FAILED_MESSAGE
