"""
import_engine.report - Structured result of a contact/account import run.

Every processed row yields one RowResult; the report keeps the counters
and the error list the CLI and API print.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RowStatus(str, Enum):
    IMPORTED = "imported"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class RowResult:
    file: str           # "accounts" | "contacts"
    row: int            # 1-based line number, header = 1
    status: RowStatus
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "row": self.row,
            "status": self.status.value,
            "reason": self.reason,
        }


@dataclass
class ImportReport:
    total_rows: int = 0
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[dict] = field(default_factory=list)   # [{file, row, reason}]
    results: list[RowResult] = field(default_factory=list)

    def add_imported(self, file: str, row: int):
        self._add(RowResult(file, row, RowStatus.IMPORTED))

    def add_skipped(self, file: str, row: int, reason: str):
        self._add(RowResult(file, row, RowStatus.SKIPPED, reason))

    def add_error(self, file: str, row: int, reason: str):
        self._add(RowResult(file, row, RowStatus.ERROR, reason))

    def add_reference_error(self, file: str, row: int, reason: str):
        """Record a problem found after the row itself was imported."""
        self.errors.append({"file": file, "row": row, "reason": reason})

    def _add(self, result: RowResult):
        self.results.append(result)
        self.total_rows += 1
        if result.status is RowStatus.IMPORTED:
            self.imported += 1
        elif result.status is RowStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.errors.append(
                {"file": result.file, "row": result.row, "reason": result.reason})

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "imported": self.imported,
            "skipped": self.skipped,
            "failed": self.failed,
            "errors": self.errors,
        }
