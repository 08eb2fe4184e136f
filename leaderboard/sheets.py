"""
Google Sheets values API — cohort fetch with ordered range fallbacks.

Sheet tabs get renamed and ranges drift, so a cohort is read by trying a
short list of range expressions in order and keeping the first that answers.
There is no delay, retry or backoff between attempts.
"""

import asyncio
import logging
import re
from urllib.parse import quote

import requests

from leaderboard.config import SHEETS_API_BASE, validate_config
from leaderboard.errors import ConfigurationError, EmptySheetError, TransportError
from leaderboard.parsing import LAYOUTS, WEEKLY_LAYOUT, parse_rows
from leaderboard.ranking import rank_students

log = logging.getLogger("leaderboard-live")

_HTTP_HEADERS = {"User-Agent": "LeaderboardLive/1.0", "Accept": "application/json"}

# Widest column of the weekly layout (Name, Week 1-5, Total)
_LAST_COLUMN = "G"

# First cell of an A1 range; the row number is absent for whole columns
_A1_START = re.compile(r"^\$?[A-Za-z]+\$?(\d*)$")


def build_values_url(spreadsheet_id, cell_range):
    """Values endpoint for one range. The range is URL-encoded as a path segment."""
    return f"{SHEETS_API_BASE}/{spreadsheet_id}/values/{quote(cell_range, safe='')}"


def quote_sheet_name(name):
    """A1-notation sheet qualifier: 'Plus One' (embedded quotes doubled)."""
    return "'" + name.replace("'", "''") + "'"


def range_starts_at_row_one(cell_range):
    """True when an A1 range reads from sheet row 1 (A:G, A1:G50, 'Tab'!A:G)."""
    cells = cell_range.rpartition("!")[2]
    match = _A1_START.match(cells.split(":", 1)[0].strip())
    if match is None:
        return False
    return not match.group(1) or int(match.group(1)) == 1


def _error_message(resp):
    try:
        payload = resp.json()
    except ValueError:
        return "Unknown error"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return "Unknown error"


class SheetsClient:
    """Reads cohort leaderboards. Config and the HTTP getter are injected."""

    def __init__(self, config, http_get=None):
        self.config = config
        self._http_get = http_get or requests.get

    # ─── Single read ───

    def _get_values_blocking(self, spreadsheet_id, cell_range):
        url = build_values_url(spreadsheet_id, cell_range)
        try:
            resp = self._http_get(
                url,
                params={"key": self.config.api_key},
                headers=_HTTP_HEADERS,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Range \"{cell_range}\": {e}")

        if not resp.ok:
            raise TransportError(
                f"Range \"{cell_range}\": {resp.status_code} - {_error_message(resp)}",
                status=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError:
            raise TransportError(f"Range \"{cell_range}\": response is not JSON", status=resp.status_code)

        if not isinstance(payload, dict):
            raise TransportError(f"Range \"{cell_range}\": malformed payload", status=resp.status_code)

        # The API omits "values" entirely when the range is empty
        values = payload.get("values", [])
        if not isinstance(values, list):
            raise TransportError(f"Range \"{cell_range}\": malformed payload", status=resp.status_code)
        return values

    async def get_values(self, spreadsheet_id, cell_range):
        """Fetch one range. Raises TransportError on any transport or payload failure."""
        return await asyncio.to_thread(self._get_values_blocking, spreadsheet_id, cell_range)

    # ─── Cohort leaderboard ───

    def candidate_ranges(self, cohort):
        """Ranges to try for a cohort, override first, without duplicates."""
        sheet = self.config.cohort(cohort)
        max_row = self.config.max_row
        quoted = quote_sheet_name(sheet.sheet_name)

        ranges = [
            sheet.range_override,
            f"{quoted}!A2:{_LAST_COLUMN}{max_row}",
            f"{sheet.sheet_name}!A2:{_LAST_COLUMN}{max_row}",
            f"{quoted}!A:{_LAST_COLUMN}",
            f"A2:{_LAST_COLUMN}{max_row}",
        ]
        seen = set()
        ordered = []
        for cell_range in ranges:
            if cell_range and cell_range not in seen:
                seen.add(cell_range)
                ordered.append(cell_range)
        return ordered

    def require_config(self, cohort):
        if self.config.cohort(cohort) is None:
            raise ConfigurationError([f"Unknown cohort '{cohort}'"])
        status = validate_config(self.config, cohort)
        if not status.is_valid:
            raise ConfigurationError(status.errors)
        return self.config.cohort(cohort)

    async def fetch_cohort(self, cohort):
        """Fetch, parse and rank one cohort's leaderboard."""
        sheet = self.require_config(cohort)

        rows = None
        used_range = None
        last_error = None
        last_status = None
        for cell_range in self.candidate_ranges(cohort):
            log.info(f"Fetching {cohort} leaderboard, range {cell_range}")
            try:
                rows = await self.get_values(sheet.spreadsheet_id, cell_range)
            except TransportError as e:
                last_error, last_status = e.detail, e.status
                log.warning(f"Range attempt failed: {last_error}")
                continue
            log.info(f"Success with range {cell_range}")
            used_range = cell_range
            break

        if rows is None:
            raise TransportError(
                f"Failed to fetch data from any range. Last error: {last_error}",
                status=last_status,
            )

        if not rows:
            if sheet.empty_means_not_started:
                log.info(f"No rows for {cohort} yet, treating as not started")
                return []
            raise EmptySheetError(f"No data found in Google Sheets for {cohort}")

        layout = LAYOUTS.get(sheet.layout)
        if layout is None:
            log.warning(f"Unknown layout '{sheet.layout}' for {cohort}, using weekly")
            layout = WEEKLY_LAYOUT
        students = rank_students(
            parse_rows(rows, cohort, layout, starts_at_row_one=range_starts_at_row_one(used_range))
        )
        log.info(f"Loaded {len(students)} students for {cohort} ({len(rows)} rows)")
        return students
