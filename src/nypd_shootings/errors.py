"""Exceptions raised by the report pipeline."""

from __future__ import annotations

from typing import Sequence


class ReportError(Exception):
    """Base class for pipeline failures."""


class SourceUnavailable(ReportError):
    """The dataset could not be fetched, parsed, or did not match the schema."""


class _MalformedRows(ReportError, ValueError):
    kind = "value"

    def __init__(self, rows: Sequence, column: str):
        self.rows = list(rows)
        self.column = column
        sample = ", ".join(str(r) for r in self.rows[:5])
        more = "" if len(self.rows) <= 5 else f" (+{len(self.rows) - 5} more)"
        super().__init__(
            f"{len(self.rows)} row(s) with malformed {self.kind} in '{column}': {sample}{more}"
        )


class MalformedDate(_MalformedRows):
    kind = "date"


class MalformedTime(_MalformedRows):
    kind = "time"


class InsufficientData(ReportError):
    """Too few grouped observations to fit the trend model."""


__all__ = [
    "ReportError",
    "SourceUnavailable",
    "MalformedDate",
    "MalformedTime",
    "InsufficientData",
]
