"""
PlanFileReader Component

Reads saved study plan text files (the raw AI output) for export.
"""

from pathlib import Path
from typing import List


class PlanFileReader:
    """Reads study plan text files."""

    def __init__(self, file_path: str | Path):
        """
        Initialize reader with a plan file path.

        Args:
            file_path: Path to the plan text file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {self.file_path}")
        self._text: str | None = None

    def read_text(self) -> str:
        """
        Read the entire plan. Results are cached so subsequent calls
        don't re-read the file.

        Raises:
            IOError: If the file cannot be read
        """
        if self._text is None:
            try:
                with open(self.file_path, "r", encoding="utf-8") as f:
                    self._text = f.read()
            except IOError as e:
                raise IOError(f"Failed to read file {self.file_path}: {e}")
        return self._text

    def read_lines(self) -> List[str]:
        """Return the plan split into lines, without newline characters."""
        return self.read_text().splitlines()

    def get_line_count(self) -> int:
        return len(self.read_lines())
