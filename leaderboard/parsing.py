"""
Row parsing — raw Sheets rows into Student records.

The values API returns ragged lists of strings: trailing blank cells are
dropped, numbers may carry separators or a percent sign, and free-text rows
sneak in. Every field is decoded defensively; only a missing name skips a row.
"""

import logging
import math
import re
from dataclasses import dataclass

from leaderboard.models import Student, Trend, WEEK_SLOTS

log = logging.getLogger("leaderboard-live")

# First-row name cells that mark a header row rather than a student
_HEADER_LABELS = {"name", "names", "student", "student name"}

# Comma as thousands separator only
_THOUSANDS = re.compile(r"^[-+]?\d{1,3}(,\d{3})+(\.\d+)?$")


@dataclass(frozen=True)
class RowLayout:
    """Column positions (0-indexed) inside one fetched row."""
    name_column: int
    slot_columns: tuple
    total_column: int


# Name, Week 1..Week 5, Total
WEEKLY_LAYOUT = RowLayout(name_column=0, slot_columns=(1, 2, 3, 4, 5), total_column=6)
# Name, <unit>, <unit>, Total — no per-week granularity
TOTALS_LAYOUT = RowLayout(name_column=0, slot_columns=(), total_column=3)

LAYOUTS = {
    "weekly": WEEKLY_LAYOUT,
    "totals": TOTALS_LAYOUT,
}


def to_number(value):
    """Coerce a cell to float. Anything unparseable (or NaN/inf) becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            clean = str(value).replace("%", "").strip()
            if not clean or clean == "-":
                return 0.0
            if "," in clean:
                # "1,234.5" only; a comma decimal like "12,5" is not a number here
                if not _THOUSANDS.match(clean):
                    return 0.0
                clean = clean.replace(",", "")
            number = float(clean)
    except (ValueError, TypeError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _cell(row, index):
    return row[index] if 0 <= index < len(row) else None


def parse_row(row, index, cohort, layout=WEEKLY_LAYOUT):
    """Decode one row. Returns None when the name cell is missing or blank."""
    if not isinstance(row, (list, tuple)):
        raise TypeError(f"expected a list of cells, got {type(row).__name__}")

    raw_name = _cell(row, layout.name_column)
    name = str(raw_name).strip() if raw_name is not None else ""
    if not name:
        return None

    if layout.slot_columns:
        weekly = tuple(to_number(_cell(row, col)) for col in layout.slot_columns)
    else:
        weekly = (0.0,) * WEEK_SLOTS

    total = to_number(_cell(row, layout.total_column)) or float(sum(weekly))

    return Student(
        id=f"{cohort}-{index + 1}",
        name=name,
        weekly_scores=weekly,
        total_score=total,
        rank=0,
        trend=Trend.STABLE,
    )


def _is_header(row, layout):
    label = _cell(row, layout.name_column)
    return isinstance(label, str) and label.strip().lower() in _HEADER_LABELS


def parse_rows(rows, cohort, layout=WEEKLY_LAYOUT, starts_at_row_one=False):
    """
    Parse every row, dropping blank-name rows and rows that fail to decode.

    When the rows were read from sheet row 1 the first row is the column
    header and is always dropped; otherwise it is dropped only if its name
    cell reads like a header label.
    """
    rows = list(rows or [])
    if rows:
        looks_like_header = isinstance(rows[0], (list, tuple)) and _is_header(rows[0], layout)
        if starts_at_row_one or looks_like_header:
            rows = rows[1:]

    students = []
    for index, row in enumerate(rows):
        try:
            student = parse_row(row, index, cohort, layout)
        except Exception as e:
            log.warning(f"Skipping {cohort} row {index + 1}: {e}")
            continue
        if student is not None:
            students.append(student)
    return students
