"""
Per-student category breakdown.

The marks sheet has a header row of category labels (subjects, units) over
a wide column span. A student's row is found by name and zipped against
that header; blank labels become "Category N".
"""

import logging

from leaderboard.models import CategoryScore, DetailRecord
from leaderboard.parsing import to_number
from leaderboard.sheets import quote_sheet_name

log = logging.getLogger("leaderboard-live")

DETAIL_COLUMNS = ("A", "Z")
NAME_COLUMNS = (0, 1)                # primary, then secondary name column
TOTAL_LABELS = {"total", "total score", "total marks"}


def _text(row, index):
    if 0 <= index < len(row) and row[index] is not None:
        return str(row[index]).strip()
    return ""


def _find_row(rows, name, column):
    wanted = name.strip().lower()
    for row in rows:
        if isinstance(row, (list, tuple)) and _text(row, column).lower() == wanted:
            return row
    return None


def build_detail(header, rows, name, name_columns=NAME_COLUMNS):
    """Match a row by name and pair its trailing cells with header labels.

    Returns None when no row matches in any name column.
    """
    if not name or not name.strip():
        return None

    header = header or []
    match, column = None, None
    for column in name_columns:
        match = _find_row(rows or [], name, column)
        if match is not None:
            break
    if match is None:
        return None

    start = column + 1
    width = max(len(header), len(match))
    categories = []
    total = None
    for position, col in enumerate(range(start, width)):
        label = _text(header, col)
        cell = _text(match, col)
        if not label and not cell:
            continue
        if label.lower() in TOTAL_LABELS:
            total = to_number(cell)
            continue
        categories.append(CategoryScore(label or f"Category {position + 1}", to_number(cell)))

    return DetailRecord(
        name=_text(match, column),
        categories=tuple(categories),
        total_score=total,
    )


async def fetch_detail(client, cohort, name):
    """Two reads (header row, data block) then build_detail. None = not found."""
    sheet = client.require_config(cohort)
    first, last = DETAIL_COLUMNS
    tab = quote_sheet_name(sheet.sheet_name)

    header_rows = await client.get_values(sheet.spreadsheet_id, f"{tab}!{first}1:{last}1")
    rows = await client.get_values(
        sheet.spreadsheet_id, f"{tab}!{first}2:{last}{client.config.max_row}"
    )

    header = header_rows[0] if header_rows else []
    detail = build_detail(header, rows, name)
    if detail is None:
        log.info(f"No {cohort} detail row for '{name}'")
    return detail
