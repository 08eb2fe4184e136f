"""
Tests for the CSV export.
"""

from datetime import date

from leaderboard.export import CSV_HEADER, export_filename, students_to_csv
from leaderboard.models import Student


def make_student(name, total, weekly, rank):
    return Student(id=f"plus-one-{rank}", name=name, weekly_scores=weekly, total_score=total, rank=rank)


class TestStudentsToCsv:
    """Test the export layout."""

    def test_header(self):
        assert CSV_HEADER == [
            "Rank", "Name", "Total Score", "Week 1", "Week 2", "Week 3", "Week 4", "Week 5",
        ]
        assert students_to_csv([]) == "Rank,Name,Total Score,Week 1,Week 2,Week 3,Week 4,Week 5"

    def test_lines(self):
        students = [
            make_student("Arjun Sharma", 457.0, (95.0, 88.0, 92.0, 97.0, 85.0), 1),
            make_student("Priya Patel", 90.5, (90.5, 0.0, 0.0, 0.0, 0.0), 2),
        ]

        lines = students_to_csv(students).split("\n")

        assert lines[1] == "1,Arjun Sharma,457,95,88,92,97,85"
        assert lines[2] == "2,Priya Patel,90.5,90.5,0,0,0,0"

    def test_short_weeks_are_padded(self):
        csv = students_to_csv([make_student("Rohan", 12.0, (12.0,), 1)])
        assert csv.split("\n")[1] == "1,Rohan,12,12,0,0,0,0"

    def test_commas_are_not_escaped(self):
        csv = students_to_csv([make_student("Kumar, Rohan", 1.0, (1.0, 0, 0, 0, 0), 1)])
        assert csv.split("\n")[1] == "1,Kumar, Rohan,1,1,0,0,0,0"


class TestExportFilename:

    def test_filename(self):
        assert export_filename("plus-one", date(2026, 3, 20)) == "leaderboard-plus-one-2026-03-20.csv"
