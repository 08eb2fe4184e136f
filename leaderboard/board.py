"""
Current leaderboard state per cohort, as seen by the dashboard.

Each refresh builds a complete CohortView and swaps it in with a single
assignment, so readers get either the previous view or the new one.
Overlapping refreshes are not deduplicated; the dashboard disables its
refresh button while one is in flight.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from leaderboard.config import COHORTS, validate_config
from leaderboard.details import fetch_detail
from leaderboard.errors import LeaderboardError
from leaderboard.sheets import SheetsClient

log = logging.getLogger("leaderboard-live")

NOT_CONFIGURED_MESSAGE = "Google Sheets is not configured. Please check your environment variables."


@dataclass(frozen=True)
class CohortView:
    cohort: str
    students: tuple = ()
    loading: bool = False
    error: Optional[str] = None
    is_configured: bool = True
    empty_means_not_started: bool = False
    updated_at: Optional[datetime] = None

    @property
    def not_started(self):
        """Loaded fine, no rows, and this cohort reads empty as 'exam not started'."""
        return (
            self.empty_means_not_started
            and self.is_configured
            and self.updated_at is not None
            and not self.loading
            and self.error is None
            and not self.students
        )

    def to_dict(self):
        return {
            "cohort": self.cohort,
            "students": [s.to_dict() for s in self.students],
            "count": len(self.students),
            "loading": self.loading,
            "error": self.error,
            "isConfigured": self.is_configured,
            "notStarted": self.not_started,
            "lastUpdated": self.updated_at.isoformat() if self.updated_at else None,
        }


class Leaderboard:
    """Holds one CohortView per cohort and refreshes them from Sheets."""

    def __init__(self, config, client=None):
        self.config = config
        self.client = client or SheetsClient(config)
        self._views = {}
        for cohort in COHORTS:
            sheet = config.cohort(cohort)
            self._views[cohort] = CohortView(
                cohort=cohort,
                is_configured=validate_config(config, cohort).is_valid,
                empty_means_not_started=bool(sheet and sheet.empty_means_not_started),
            )

    @property
    def cohorts(self):
        return tuple(self._views)

    def view(self, cohort):
        return self._views[cohort]

    async def refresh(self, cohort):
        current = self._views[cohort]

        if not current.is_configured:
            self._views[cohort] = replace(current, loading=False, error=NOT_CONFIGURED_MESSAGE)
            return self._views[cohort]

        self._views[cohort] = replace(current, loading=True, error=None)
        try:
            students = await self.client.fetch_cohort(cohort)
        except Exception as e:
            if isinstance(e, LeaderboardError):
                log.warning(f"Refresh of {cohort} failed: {e}")
            else:
                log.exception(f"Refresh of {cohort} failed unexpectedly")
            # keep the last good rows on screen next to the error
            self._views[cohort] = replace(current, loading=False, error=str(e) or type(e).__name__)
        else:
            self._views[cohort] = replace(
                current,
                students=tuple(students),
                loading=False,
                error=None,
                updated_at=datetime.now(timezone.utc),
            )
            log.info(f"Refreshed {cohort}: {len(students)} students")
        return self._views[cohort]

    async def refresh_all(self):
        for cohort in self.cohorts:
            if self._views[cohort].is_configured:
                await self.refresh(cohort)

    async def detail(self, cohort, name):
        return await fetch_detail(self.client, cohort, name)
