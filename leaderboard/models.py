"""
Typed records produced by the pipeline.

Student      — one ranked row of a cohort leaderboard
DetailRecord — per-category breakdown for one student, fetched on demand
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Trend(Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


WEEK_SLOTS = 5


@dataclass(frozen=True)
class Student:
    """
    A ranked entity. Built by the row parser with rank 0 ("unranked") and
    STABLE trend; the ranking engine returns new instances with both filled.
    """
    id: str
    name: str
    weekly_scores: tuple
    total_score: float
    rank: int = 0
    trend: Trend = Trend.STABLE

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "totalScore": self.total_score,
            "weeklyScores": list(self.weekly_scores),
            "rank": self.rank,
            "trend": self.trend.value,
        }


@dataclass(frozen=True)
class CategoryScore:
    label: str
    score: float


@dataclass(frozen=True)
class DetailRecord:
    name: str
    categories: tuple = ()
    total_score: Optional[float] = None

    def to_dict(self):
        return {
            "name": self.name,
            "totalScore": self.total_score,
            "categories": [{"label": c.label, "score": c.score} for c in self.categories],
        }


@dataclass
class ValidationResult:
    valid: bool
    violations: list = field(default_factory=list)
