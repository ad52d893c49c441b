"""Roster loading — builds a staff directory from a JSON bootstrap file.

Format:
    {
      "employees": [
        {"name": "Clara Dyer", "role": "manager", "hire_date": "2007-10-26", "salary": "500"},
        {"name": "Dawud Daniel", "role": "employee", "hire_date": "2010-08-30",
         "salary": "250", "superior": 1}
      ]
    }

``superior`` is the 1-based position of an earlier entry, so a roster can
never describe a cycle. ``salary`` defaults to the standard base salary.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

from orgchart.models.employee import DEFAULT_SALARY, Employee
from orgchart.models.roles import Role
from orgchart.models.superior import Manager, Sales
from orgchart.directory import StaffDirectory
from orgchart.payroll.policy import PayrollPolicy

ROSTER_FILENAME = "roster.json"

ROLE_CLASSES: dict[Role, type[Employee]] = {
    Role.EMPLOYEE: Employee,
    Role.MANAGER: Manager,
    Role.SALES: Sales,
}


def build_directory(
    data: dict[str, Any],
    policy: Optional[PayrollPolicy] = None,
) -> StaffDirectory:
    """Construct every roster entry and register it, in file order.

    Raises:
        ValueError: If an entry is malformed or references a superior that
            is not an earlier manager or sales entry.
    """
    if not isinstance(data, dict):
        raise ValueError("Roster must be a dict with an 'employees' list")
    entries = data.get("employees")
    if not isinstance(entries, list):
        raise ValueError("Roster 'employees' must be a list")

    directory = StaffDirectory(policy)
    for position, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            raise ValueError(f"Roster entry {position} must be a dict")
        try:
            role = Role(entry.get("role", Role.EMPLOYEE.value))
        except ValueError:
            raise ValueError(
                f"Roster entry {position} has unknown role: {entry.get('role')!r}"
            ) from None
        if "hire_date" not in entry:
            raise ValueError(f"Roster entry {position} missing 'hire_date'")
        try:
            hire_date = date.fromisoformat(entry["hire_date"])
        except (TypeError, ValueError):
            raise ValueError(
                f"Roster entry {position} has invalid hire_date: {entry['hire_date']!r}"
            ) from None

        superior = None
        superior_ref = entry.get("superior")
        if superior_ref is not None:
            if not isinstance(superior_ref, int) or not 1 <= superior_ref < position:
                raise ValueError(
                    f"Roster entry {position} must reference an earlier entry "
                    f"as superior, got {superior_ref!r}"
                )
            superior = directory.get(superior_ref)
            if not superior.holds_subordinates:
                raise ValueError(
                    f"Roster entry {position} reports to {superior}, "
                    f"who cannot hold subordinates"
                )

        employee = ROLE_CLASSES[role](
            entry.get("name", ""),
            hire_date,
            str(entry.get("salary", DEFAULT_SALARY)),
            superior,
        )
        directory.add(employee)
    return directory


def load_roster(path: Path, policy: Optional[PayrollPolicy] = None) -> StaffDirectory:
    """Load a roster file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the roster is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Roster not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return build_directory(data, policy)
