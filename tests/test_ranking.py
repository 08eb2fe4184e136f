"""
Tests for the ranking engine.

These tests verify:
1. Positional ranking after a stable descending sort
2. Trend from the last two positive weekly scores
3. Input records are never mutated
4. Parse-then-rank end to end
"""

import pytest

from leaderboard.models import Student, Trend
from leaderboard.parsing import parse_rows
from leaderboard.ranking import compute_trend, rank_students


# =============================================================================
# TEST FIXTURES
# =============================================================================

def make_student(name, total, weekly=(0, 0, 0, 0, 0), index=0):
    """Helper to create an unranked Student."""
    return Student(
        id=f"plus-one-{index + 1}",
        name=name,
        weekly_scores=tuple(float(w) for w in weekly),
        total_score=float(total),
    )


# =============================================================================
# TREND
# =============================================================================

class TestComputeTrend:
    """Test trend derivation from weekly slots."""

    @pytest.mark.parametrize("scores, expected", [
        ([90, 85], Trend.DOWN),
        ([85, 90], Trend.UP),
        ([0, 0, 77], Trend.STABLE),
        ([60, 60], Trend.STABLE),
        ([], Trend.STABLE),
        ([50], Trend.STABLE),
        ([95, 88, 92, 97, 85], Trend.DOWN),
        ([70, 80, 0, 0, 0], Trend.UP),
        ([70, 0, 65, 0, 0], Trend.DOWN),
        ([-5, 10, -3, 12], Trend.UP),
    ])
    def test_trend(self, scores, expected):
        assert compute_trend(scores) == expected


# =============================================================================
# RANKING
# =============================================================================

class TestRankStudents:
    """Test sorting and positional rank assignment."""

    def test_ties_get_distinct_positional_ranks(self):
        totals = [457, 452, 450, 444, 444, 441]
        students = [make_student(f"S{i}", t, index=i) for i, t in enumerate(totals)]

        ranked = rank_students(students)

        assert [s.rank for s in ranked] == [1, 2, 3, 4, 5, 6]
        assert [s.total_score for s in ranked] == totals

    def test_ties_keep_input_order(self):
        students = [
            make_student("First", 80, index=0),
            make_student("Top", 99, index=1),
            make_student("Second", 80, index=2),
        ]
        ranked = rank_students(students)
        assert [s.name for s in ranked] == ["Top", "First", "Second"]

    def test_rank_one_has_maximum_score(self):
        students = [make_student(n, t) for n, t in [("a", 3), ("b", 17), ("c", 9), ("d", 17)]]
        ranked = rank_students(students)

        assert ranked[0].rank == 1
        assert ranked[0].total_score == max(s.total_score for s in students)

    def test_output_length_matches_input(self):
        students = [make_student(str(i), i % 4) for i in range(25)]
        assert len(rank_students(students)) == 25

    def test_input_is_not_mutated(self):
        students = [make_student("a", 1, (10, 20)), make_student("b", 2)]
        rank_students(students)

        assert all(s.rank == 0 for s in students)
        assert all(s.trend == Trend.STABLE for s in students)

    def test_trend_is_assigned(self):
        ranked = rank_students([make_student("a", 1, (10, 20, 0, 0, 0))])
        assert ranked[0].trend == Trend.UP

    def test_empty(self):
        assert rank_students([]) == []


# =============================================================================
# END TO END
# =============================================================================

class TestParseThenRank:
    """Raw sheet rows through parser and ranking engine."""

    def test_blank_row_dropped_and_ranked_by_sum(self):
        rows = [["Alice", "10", "20"], ["", "5", "5"], ["Bob", "30", "30"]]

        ranked = rank_students(parse_rows(rows, "plus-one"))

        assert len(ranked) == 2
        by_name = {s.name: s for s in ranked}
        assert by_name["Bob"].rank == 1
        assert by_name["Alice"].rank == 2
        assert by_name["Bob"].total_score == 60
        assert by_name["Alice"].total_score == 30
