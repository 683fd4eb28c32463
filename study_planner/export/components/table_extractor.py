"""
TableExtractor Component

Extracts the pipe table embedded in AI-generated study plan text.
Prose, headings and separator lines are skipped; the first table line
becomes the header and every later table line becomes a data row.
"""

import logging
from typing import Dict, List

from ..data_models import TabularDataset

logger = logging.getLogger(__name__)


class TableExtractor:
    """Parses pipe-delimited table lines into a TabularDataset."""

    PIPE = "|"
    SEPARATOR_MARKER = "---"

    def extract(self, text: str) -> TabularDataset:
        """
        Extract table rows from raw plan text.

        Lines that do not start with a pipe (after trimming) are ignored
        and do not interrupt the scan, so disjoint pipe blocks are read as
        one table under the first header seen.

        Args:
            text: Raw plan text, possibly surrounded by prose

        Returns:
            TabularDataset (empty when no header or data rows were found)
        """
        header: List[str] = []
        rows: List[Dict[str, str]] = []
        lines = (text or "").split("\n")
        separators_skipped = 0

        for line in lines:
            trimmed = line.strip()
            if not self.is_table_line(trimmed):
                continue
            if self.is_separator_line(trimmed):
                separators_skipped += 1
                continue

            cells = self.split_cells(trimmed)
            if not header:
                header = cells
            else:
                rows.append(self.build_row(header, cells))

        logger.debug(
            f"Scanned {len(lines)} lines: header={header}, "
            f"{len(rows)} rows, {separators_skipped} separators skipped"
        )
        if not rows:
            return TabularDataset(header=tuple(header))
        return TabularDataset.from_rows(header, rows)

    def is_table_line(self, line: str) -> bool:
        """A trimmed line belongs to the table when it starts with a pipe."""
        return line.startswith(self.PIPE)

    def is_separator_line(self, line: str) -> bool:
        """
        Check if a table line is a header/body separator.

        Any table line containing '---' counts, with or without alignment
        colons or surrounding spaces.
        """
        return self.SEPARATOR_MARKER in line

    def split_cells(self, line: str) -> List[str]:
        """
        Split a table line into trimmed cells.

        The first and last pieces of the split are dropped positionally;
        they sit outside the outer pipes and never hold cell data.

        Example:
            Input:  "| 2024-12-19 |  Thursday | Math | 2h |"
            Output: ["2024-12-19", "Thursday", "Math", "2h"]
        """
        pieces = line.split(self.PIPE)
        return [cell.strip() for cell in pieces[1:-1]]

    def build_row(self, header: List[str], cells: List[str]) -> Dict[str, str]:
        """
        Map cells onto header names by position.

        Cells beyond the header are dropped; header fields beyond the last
        cell are left out of the row. A repeated header name keeps the
        value of its last occurrence.
        """
        row: Dict[str, str] = {}
        for name, cell in zip(header, cells):
            row[name] = cell
        return row


def extract_table(text: str) -> TabularDataset:
    """Convenience function: extract a dataset with a fresh extractor."""
    return TableExtractor().extract(text)
