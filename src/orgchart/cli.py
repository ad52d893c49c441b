"""orgchart CLI — read-only payroll queries over the company roster.

Usage:
    python -m orgchart.cli list
    python -m orgchart.cli salary --id 2 --date 2023-04-01
    python -m orgchart.cli breakdown --id 5 --date 2023-04-01
    python -m orgchart.cli total --date 2023-04-01
    python -m orgchart.cli check-invariants
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from orgchart.config import DEFAULT_CONFIG_DIR, configure_logging
from orgchart.directory import StaffDirectory
from orgchart.errors import InvalidDateError
from orgchart.payroll.policy import PayrollPolicy
from orgchart.roster import ROSTER_FILENAME, load_roster

logger = logging.getLogger(__name__)


def _make_directory(config_dir: Path) -> StaffDirectory:
    """Load the payroll policy and the roster from ``config_dir``."""
    policy = PayrollPolicy.from_config_dir(config_dir)
    return load_roster(config_dir / ROSTER_FILENAME, policy)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date (expected YYYY-MM-DD): {value}") from None


def cmd_list(args: argparse.Namespace) -> int:
    directory = _make_directory(args.config)
    print(json.dumps([v.to_dict() for v in directory.views()], indent=2))
    return 0


def cmd_salary(args: argparse.Namespace) -> int:
    directory = _make_directory(args.config)
    try:
        statement = directory.salary_statement(args.id, args.date)
    except (KeyError, InvalidDateError) as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(statement.to_dict(), indent=2))
    return 0


def cmd_breakdown(args: argparse.Namespace) -> int:
    directory = _make_directory(args.config)
    try:
        breakdown = directory.breakdown(args.id, args.date)
    except (KeyError, InvalidDateError) as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(breakdown.to_dict(), indent=2))
    return 0


def cmd_total(args: argparse.Namespace) -> int:
    directory = _make_directory(args.config)
    print(json.dumps(directory.total_salary_on(args.date).to_dict(), indent=2))
    return 0


def cmd_check_invariants(args: argparse.Namespace) -> int:
    """Validate the payroll policy and the roster in the config directory."""
    tools_dir = Path(__file__).resolve().parents[2] / "tools"
    sys.path.insert(0, str(tools_dir))
    from check_invariants import check
    return check(args.config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgchart",
        description="Company hierarchy payroll CLI",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_DIR,
        help="Path to config directory (default: config/)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: ORGCHART_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    # list
    sub.add_parser("list", help="List all employees")

    # salary
    p_salary = sub.add_parser("salary", help="Net salary of one employee on a date")
    p_salary.add_argument("--id", type=int, required=True, help="Employee ID")
    p_salary.add_argument("--date", type=_iso_date, required=True, help="Payroll date (YYYY-MM-DD)")

    # breakdown
    p_breakdown = sub.add_parser("breakdown", help="Salary breakdown of one employee on a date")
    p_breakdown.add_argument("--id", type=int, required=True, help="Employee ID")
    p_breakdown.add_argument("--date", type=_iso_date, required=True, help="Payroll date (YYYY-MM-DD)")

    # total
    p_total = sub.add_parser("total", help="Total of all net salaries on a date")
    p_total.add_argument("--date", type=_iso_date, required=True, help="Payroll date (YYYY-MM-DD)")

    # check-invariants
    sub.add_parser("check-invariants", help="Validate payroll policy and roster")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return 1

    commands = {
        "list": cmd_list,
        "salary": cmd_salary,
        "breakdown": cmd_breakdown,
        "total": cmd_total,
        "check-invariants": cmd_check_invariants,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    logger.debug("Running %s with config %s", args.command, args.config)
    try:
        return handler(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
