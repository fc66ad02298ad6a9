#!/usr/bin/env python3
"""
DayPlan CLI — plan a day's task assignments from a JSON request.

The request file holds members, tasks, skills, member_skills, weekly_schedule,
explicit_rules, manager_settings, order_set_items, prior assignments and the
target_date (see dayplan/schemas.py).

Usage:
  # Check the request for bad references and malformed times
  python run_planner.py check --input request.json

  # Plan the target day and print the report
  python run_planner.py generate --input request.json

  # Plan 7 days from a given date, save JSON and a workbook
  python run_planner.py generate --input request.json --date 2024-06-03 --days 7 \
      --json plan.json --out plan.xlsx
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from pydantic import ValidationError

from dayplan.engine import generate_range
from dayplan.report import format_summary
from dayplan.schemas import AssignmentRequestIn, AssignmentResultOut
from dayplan.validate import check_inputs, clock_issues, validate_assignments
from dayplan.write_plan import write_plan


def _load(path: str):
    p = Path(path)
    if not p.exists():
        print(f"Input not found: {p}")
        sys.exit(1)
    try:
        return AssignmentRequestIn.model_validate_json(p.read_text(encoding="utf-8")).to_request()
    except ValidationError as e:
        print(f"Invalid request file {p}:")
        print(e)
        sys.exit(1)


def cmd_check(args):
    """Validate request references without planning."""
    request = _load(args.input)
    if args.date:
        request.target_date = args.date
    print(f"  Members: {len(request.members)}")
    print(f"  Tasks: {len(request.tasks)}")
    print(f"  Roster days: {len(request.weekly_schedule)}")

    ok, msgs = check_inputs(request)
    if ok:
        print("\nInput check: OK")
    else:
        print("\nInput check issues:")
        for m in msgs:
            print(f"  {m}")
        sys.exit(1)


def cmd_generate(args):
    """Run the allocator for one or more days."""
    request = _load(args.input)
    start = args.date or request.target_date
    try:
        date.fromisoformat(start)
    except ValueError:
        print(f"Start date must be YYYY-MM-DD, got {start!r}")
        sys.exit(1)
    bad_times = clock_issues(request)
    if bad_times:
        print("Unreadable times in request:")
        for m in bad_times:
            print(f"  {m}")
        sys.exit(1)
    print(f"Planning {args.days} day(s) from {start}")

    ok, msgs = check_inputs(request)
    if not ok:
        print("Warning — input issues (will plan anyway):")
        for m in msgs[:15]:
            print(f"  {m}")

    results = generate_range(request, args.days, start_date=start)

    for day, result in results.items():
        print()
        for line in format_summary(result, request.members, request.tasks, date=day):
            print(line)
        request.target_date = day
        valid, violations = validate_assignments(result, request)
        if not valid:
            print(f"  Validation: {len(violations)} issue(s)")
            for v in violations[:15]:
                print(f"    {v}")

    if args.json:
        payload = {d: AssignmentResultOut.from_result(r).model_dump() for d, r in results.items()}
        Path(args.json).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"\nJSON written to: {args.json}")

    if args.out:
        write_plan(args.out, results, request.members, request.tasks)
        print(f"Workbook written to: {args.out}")
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="DayPlan — daily task assignment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each assignment decision")
    sub = parser.add_subparsers(dest="command", help="Command")

    p_check = sub.add_parser("check", help="Check a request file")
    p_check.add_argument("--input", required=True, help="Request JSON path")
    p_check.add_argument("--date", default=None, help="Override target_date (YYYY-MM-DD)")

    p_gen = sub.add_parser("generate", help="Plan assignments")
    p_gen.add_argument("--input", required=True, help="Request JSON path")
    p_gen.add_argument("--date", default=None, help="First day to plan (default: target_date)")
    p_gen.add_argument("--days", type=int, default=1, help="Number of consecutive days")
    p_gen.add_argument("--json", default=None, help="Write results as JSON")
    p_gen.add_argument("--out", default=None, help="Write results as an .xlsx workbook")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    dispatch = {
        "check": cmd_check,
        "generate": cmd_generate,
    }
    dispatch[args.command](args)


if __name__ == "__main__":
    main()
