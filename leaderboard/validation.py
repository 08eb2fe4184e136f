"""Post-hoc checks over a ranked cohort. Diagnostic only; never blocks display."""

from leaderboard.models import ValidationResult, WEEK_SLOTS


def validate_students(students, expected_slots=WEEK_SLOTS):
    """
    Collect every invariant violation in a ranked collection.

    Pass expected_slots=None to skip the slot-count check (layouts without
    per-week columns). Never raises.
    """
    violations = []

    for index, student in enumerate(students or ()):
        try:
            _check_student(student, index, expected_slots, violations)
        except (TypeError, ValueError) as e:
            violations.append(f"Student at index {index} is malformed: {e}")

    return ValidationResult(valid=not violations, violations=violations)


def _check_student(student, index, expected_slots, violations):
    name = str(getattr(student, "name", "") or "").strip()
    label = name or f"at index {index}"

    if not name:
        violations.append(f"Student at index {index} has no name")

    if getattr(student, "total_score", 0) < 0:
        violations.append(f"Student {label} has negative total score")

    scores = tuple(getattr(student, "weekly_scores", ()) or ())
    if expected_slots is not None and len(scores) != expected_slots:
        violations.append(
            f"Student {label} does not have exactly {expected_slots} weekly scores"
        )
    if any(score < 0 for score in scores):
        violations.append(f"Student {label} has negative weekly scores")

    if getattr(student, "rank", 0) < 1:
        violations.append(f"Student {label} has invalid rank")
