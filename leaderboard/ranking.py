"""
Ranking — sort a cohort by total score and derive rank and trend.

Ranks are positional: ties get distinct ranks in their original row order,
so [457, 452, 450, 444, 444, 441] ranks as 1..6.
"""

from dataclasses import replace

from leaderboard.models import Trend


def compute_trend(scores):
    """Compare the last two strictly positive weekly scores."""
    played = [s for s in scores if s > 0]
    if len(played) < 2:
        return Trend.STABLE

    previous, last = played[-2], played[-1]
    if last > previous:
        return Trend.UP
    if last < previous:
        return Trend.DOWN
    return Trend.STABLE


def rank_students(students):
    """Return a new, fully ranked list. The input records are left untouched."""
    # sorted() is stable, so equal totals keep their sheet order
    ordered = sorted(students, key=lambda s: -s.total_score)
    return [
        replace(s, rank=i + 1, trend=compute_trend(s.weekly_scores))
        for i, s in enumerate(ordered)
    ]
