"""
CSV export of a ranked cohort.

Fields are comma-joined with no quoting, so a name containing a comma
shifts its line's columns. Known limitation.
"""

from leaderboard.models import WEEK_SLOTS

CSV_HEADER = ["Rank", "Name", "Total Score"] + [f"Week {i}" for i in range(1, WEEK_SLOTS + 1)]


def _fmt(number):
    number = number or 0
    return str(int(number)) if float(number).is_integer() else str(number)


def student_line(student):
    weeks = list(student.weekly_scores)[:WEEK_SLOTS]
    weeks += [0] * (WEEK_SLOTS - len(weeks))
    fields = [str(student.rank), student.name, _fmt(student.total_score)]
    fields += [_fmt(w) for w in weeks]
    return ",".join(fields)


def students_to_csv(students):
    lines = [",".join(CSV_HEADER)]
    lines += [student_line(s) for s in students]
    return "\n".join(lines)


def export_filename(cohort, day):
    """leaderboard-plus-one-2026-03-20.csv"""
    return f"leaderboard-{cohort}-{day.isoformat()}.csv"
