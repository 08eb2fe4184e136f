import asyncio, sys

from dotenv import load_dotenv

from leaderboard.config import load_config, validate_config
from leaderboard.details import fetch_detail
from leaderboard.sheets import SheetsClient
from leaderboard.validation import validate_students

load_dotenv()
cohort = sys.argv[1] if len(sys.argv) > 1 else "plus-one"
cfg = load_config()

status = validate_config(cfg, cohort)
if not status.is_valid:
    print("=== CONFIG ERRORS ===")
    for e in status.errors:
        print(f"  {e}")
    sys.exit(1)

client = SheetsClient(cfg)
print(f"=== RANGES FOR {cohort} ===")
for r in client.candidate_ranges(cohort):
    print(f"  {r}")

students = asyncio.run(client.fetch_cohort(cohort))
print(f"\n=== {len(students)} STUDENTS ===")
for s in students[:10]:
    weeks = ", ".join(f"{w:g}" for w in s.weekly_scores)
    print(f"  #{s.rank:<3} {s.name:30s} total={s.total_score:g}  weeks=[{weeks}]  {s.trend.value}")

result = validate_students(students)
print(f"\n=== VALIDATION: {'OK' if result.valid else 'VIOLATIONS'} ===")
for v in result.violations:
    print(f"  {v}")

# Detail breakdown for the leader
if students:
    top = students[0].name
    detail = asyncio.run(fetch_detail(client, cohort, top))
    print(f"\n=== DETAIL FOR {top} ===")
    if detail is None:
        print("  NOT FOUND")
    else:
        for c in detail.categories:
            print(f"  {c.label:30s} {c.score:g}")
        print(f"  total: {detail.total_score}")
