#!/usr/bin/env python3
"""orgchart invariant checks against the config directory.

Runs the same loaders the library uses, so a config that passes here is one
the payroll engine and the staff directory will accept.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional


ROOT = Path(__file__).resolve().parents[1]
CONFIG_DIR = ROOT / "config"

sys.path.insert(0, str(ROOT / "src"))

from orgchart.payroll.policy import PayrollPolicy  # noqa: E402
from orgchart.roster import ROSTER_FILENAME, build_directory  # noqa: E402


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def check_policy(policy: Any, errors: list[str]) -> Optional[PayrollPolicy]:
    """Validate the role table through PayrollPolicy.from_dict."""
    try:
        return PayrollPolicy.from_dict(policy)
    except ValueError as exc:
        errors.append(f"payroll policy: {exc}")
        return None


def check_roster(
    roster: Any,
    errors: list[str],
    policy: Optional[PayrollPolicy] = None,
) -> int:
    """Build the roster into a directory; returns the number of employees."""
    try:
        directory = build_directory(roster, policy)
    except ValueError as exc:
        errors.append(f"roster: {exc}")
        return 0
    if not len(directory):
        errors.append("roster: must list at least one employee")
    return len(directory)


def check(config_dir: Optional[Path] = None) -> int:
    config_dir = CONFIG_DIR if config_dir is None else Path(config_dir)
    errors: list[str] = []

    policy = None
    try:
        policy = check_policy(load_json(config_dir / PayrollPolicy.POLICY_FILENAME), errors)
    except (OSError, ValueError) as exc:
        errors.append(f"payroll policy: {exc}")

    count = 0
    try:
        count = check_roster(load_json(config_dir / ROSTER_FILENAME), errors, policy)
    except (OSError, ValueError) as exc:
        errors.append(f"roster: {exc}")

    if errors:
        print("Invariant check failed:")
        for err in errors:
            print(f"- {err}")
        return 1

    print(f"Invariant check passed ({count} employees).")
    return 0


if __name__ == "__main__":
    raise SystemExit(check())
