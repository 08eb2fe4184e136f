"""
Leaderboard Live — Configuration
Edit the constants here to point the leaderboard at different sheets.
Credentials and spreadsheet ids come from the environment (or a .env file).
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, NamedTuple, Optional

# ═══════════════════════════════════════
# GOOGLE SHEETS API
# ═══════════════════════════════════════

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
REQUEST_TIMEOUT = None               # seconds; None = wait for the API
DEFAULT_MAX_ROW = 200                # last sheet row read by the fallback ranges


# ═══════════════════════════════════════
# COHORTS
# ═══════════════════════════════════════

PLUS_ONE = "plus-one"
PLUS_TWO = "plus-two"
COHORTS = (PLUS_ONE, PLUS_TWO)

# Tab name inside each spreadsheet
DEFAULT_SHEET_NAMES = {
    PLUS_ONE: "Plus One",
    PLUS_TWO: "Plus Two",
}

# Plus Two has not sat its first exam yet, an empty sheet is expected
NOT_STARTED_WHEN_EMPTY = {PLUS_TWO}

DEFAULT_LAYOUT = "weekly"            # "weekly" = Name, Week 1-5, Total / "totals" = Name, -, -, Total


# ═══════════════════════════════════════
# SERVER
# ═══════════════════════════════════════

SERVER_HOST = "0.0.0.0"
SERVER_PORT = 5000
DEBUG = True


# ═══════════════════════════════════════
# RUNTIME CONFIG (built once at startup)
# ═══════════════════════════════════════

_ENV_PREFIX = {
    PLUS_ONE: "GOOGLE_SHEET_PLUS_ONE",
    PLUS_TWO: "GOOGLE_SHEET_PLUS_TWO",
}


@dataclass(frozen=True)
class CohortSheet:
    """Where one cohort's scores live."""
    spreadsheet_id: Optional[str]
    sheet_name: str
    range_override: Optional[str] = None
    layout: str = DEFAULT_LAYOUT
    empty_means_not_started: bool = False


@dataclass(frozen=True)
class SheetsConfig:
    api_key: Optional[str]
    cohorts: Mapping[str, CohortSheet] = field(default_factory=dict)
    max_row: int = DEFAULT_MAX_ROW
    request_timeout: Optional[float] = REQUEST_TIMEOUT

    def cohort(self, cohort):
        """Return the CohortSheet for a cohort id, or None if unknown."""
        return self.cohorts.get(cohort)


class ConfigStatus(NamedTuple):
    is_valid: bool
    errors: list


def _clean(value):
    value = (value or "").strip()
    return value or None


def load_config(environ=None):
    """Build a SheetsConfig from environment variables.

    GOOGLE_SHEET_ID is a shared fallback when a cohort has no id of its own.
    """
    env = os.environ if environ is None else environ
    shared_id = _clean(env.get("GOOGLE_SHEET_ID"))

    cohorts = {}
    for cohort in COHORTS:
        prefix = _ENV_PREFIX[cohort]
        cohorts[cohort] = CohortSheet(
            spreadsheet_id=_clean(env.get(f"{prefix}_ID")) or shared_id,
            sheet_name=_clean(env.get(f"{prefix}_TAB")) or DEFAULT_SHEET_NAMES[cohort],
            range_override=_clean(env.get(f"{prefix}_RANGE")),
            layout=(_clean(env.get(f"{prefix}_LAYOUT")) or DEFAULT_LAYOUT).lower(),
            empty_means_not_started=cohort in NOT_STARTED_WHEN_EMPTY,
        )

    return SheetsConfig(
        api_key=_clean(env.get("GOOGLE_SHEETS_API_KEY")),
        cohorts=cohorts,
    )


def validate_config(config, cohort=None):
    """Check the config before any network call.

    Every missing item is reported, not just the first. With a cohort only
    that cohort's spreadsheet id is checked.
    """
    errors = []
    if not config.api_key:
        errors.append("GOOGLE_SHEETS_API_KEY is not set")

    names = [cohort] if cohort else list(config.cohorts)
    for name in names:
        sheet = config.cohort(name)
        if sheet is None:
            errors.append(f"Unknown cohort '{name}'")
        elif not sheet.spreadsheet_id:
            errors.append(f"{_ENV_PREFIX.get(name, name.upper())}_ID is not set")

    return ConfigStatus(is_valid=not errors, errors=errors)


def _mask(value):
    return f"{value[:8]}..." if value else "Not set"


def config_status(config):
    """Configuration summary safe to show in the UI (secrets masked)."""
    status = validate_config(config)
    return {
        "isConfigured": status.is_valid,
        "errors": status.errors,
        "apiKey": _mask(config.api_key),
        "sheets": {
            name: {
                "sheetId": _mask(sheet.spreadsheet_id),
                "tab": sheet.sheet_name,
                "range": sheet.range_override or "default",
                "layout": sheet.layout,
            }
            for name, sheet in config.cohorts.items()
        },
    }
