"""Errors raised by the fetch pipeline. Row-level problems never raise."""


class LeaderboardError(Exception):
    """Base class for leaderboard failures surfaced to the caller."""


class ConfigurationError(LeaderboardError):
    """Credential or spreadsheet id missing. Raised before any network call."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("Google Sheets is not configured: " + "; ".join(self.errors))


class TransportError(LeaderboardError):
    """A Sheets API read failed (HTTP error, network error, bad payload)."""

    def __init__(self, detail, status=None):
        self.detail = detail
        self.status = status
        super().__init__(detail)


class EmptySheetError(LeaderboardError):
    """The sheet answered with no rows for a cohort that should have data."""
