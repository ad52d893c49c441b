"""Error taxonomy for the reporting hierarchy and payroll computation.

Only InvalidDateError is ever absorbed internally, and only while summing
subordinate salaries: a subordinate hired after the payroll date simply
contributes nothing. Every other failure reaches the caller.
"""

from __future__ import annotations

from datetime import date
from typing import Any


class OrgChartError(Exception):
    """Base class for all hierarchy and payroll errors."""


class InvalidNameError(OrgChartError, ValueError):
    """Raised when an employee is constructed with a blank name."""

    def __init__(self, name: Any) -> None:
        super().__init__(f"Employee's name can't be empty, got {name!r}")
        self.name = name


class InvalidDateError(OrgChartError, ValueError):
    """Raised when a salary is requested for a date before the hire date."""

    def __init__(self, employee_name: str, hire_date: date, on_date: date) -> None:
        super().__init__(
            f"Payroll date {on_date.isoformat()} precedes the hire date "
            f"{hire_date.isoformat()} of {employee_name}"
        )
        self.employee_name = employee_name
        self.hire_date = hire_date
        self.on_date = on_date


class DuplicateRelationError(OrgChartError):
    """Raised when adding an employee who already reports to this superior."""


class NotSubordinateError(OrgChartError):
    """Raised when removing an employee who does not report to this superior."""


class HierarchyCycleError(OrgChartError):
    """Raised when an attachment would make a node its own ancestor."""
