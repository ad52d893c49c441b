"""Staff directory — stable identifiers and read-only views over the hierarchy.

Nodes reference each other directly; the directory adds an arena of stable
1-based ids on top so that callers outside the core (the CLI, a web layer)
can address employees without holding references. Removing a node from a
superior never invalidates its id.

Views expose only what a presentation layer needs: identity fields and the
superior's display name, never the superior's capabilities.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any, Iterator, Optional

from orgchart.errors import InvalidDateError
from orgchart.models.employee import Employee
from orgchart.models.roles import Role
from orgchart.payroll.engine import PayrollEngine, SalaryBreakdown
from orgchart.payroll.policy import PayrollPolicy

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class EmployeeView:
    """Read-only snapshot of one registered employee."""
    employee_id: int
    name: str
    role: Role
    hire_date: date
    base_salary: Decimal
    superior_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.employee_id,
            "name": self.name,
            "role": self.role.value,
            "hire_date": self.hire_date.isoformat(),
            "base_salary": str(self.base_salary),
            "superior_name": self.superior_name,
        }


@dataclass(frozen=True)
class SalaryStatement:
    """A salary figure for a payroll date, rounded to cents.

    ``employee`` is None for company-wide totals.
    """
    payroll_date: date
    salary: Decimal
    employee: Optional[EmployeeView] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "payroll_date": self.payroll_date.isoformat(),
            "salary": str(self.salary),
            "employee": self.employee.to_dict() if self.employee else None,
        }


class StaffDirectory:
    """Registry of employees under stable integer ids.

    Usage:
        directory = StaffDirectory()
        boss_id = directory.add(Manager("Clara Dyer", date(2007, 10, 26), 500))
        statement = directory.salary_statement(boss_id, date(2023, 4, 1))
        total = directory.total_salary_on(date(2023, 4, 1))
    """

    def __init__(self, policy: Optional[PayrollPolicy] = None) -> None:
        self._engine = PayrollEngine(policy)
        self._employees: list[Employee] = []
        self._ids: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._employees)

    def __iter__(self) -> Iterator[Employee]:
        return iter(self._employees)

    def __contains__(self, employee: object) -> bool:
        return id(employee) in self._ids

    def add(self, employee: Employee) -> int:
        """Register ``employee`` and return its id. Idempotent per node."""
        existing = self._ids.get(id(employee))
        if existing is not None:
            return existing
        self._employees.append(employee)
        employee_id = len(self._employees)
        self._ids[id(employee)] = employee_id
        logger.debug("Registered %s as employee %d", employee, employee_id)
        return employee_id

    def get(self, employee_id: int) -> Employee:
        if not 1 <= employee_id <= len(self._employees):
            raise KeyError(f"Unknown employee: {employee_id}")
        return self._employees[employee_id - 1]

    def id_of(self, employee: Employee) -> int:
        try:
            return self._ids[id(employee)]
        except KeyError:
            raise KeyError(f"Employee not registered: {employee}") from None

    def view(self, employee_id: int) -> EmployeeView:
        employee = self.get(employee_id)
        return EmployeeView(
            employee_id=employee_id,
            name=employee.name,
            role=employee.role,
            hire_date=employee.hire_date,
            base_salary=employee.base_salary,
            superior_name=employee.superior_name or "",
        )

    def views(self) -> list[EmployeeView]:
        return [self.view(i) for i in range(1, len(self._employees) + 1)]

    # ------------------------------------------------------------------
    # Payroll
    # ------------------------------------------------------------------

    def breakdown(self, employee_id: int, on_date: date) -> SalaryBreakdown:
        return self._engine.breakdown(self.get(employee_id), on_date)

    def salary_statement(self, employee_id: int, on_date: date) -> SalaryStatement:
        """Net salary of one employee on ``on_date``, rounded to cents.

        Raises:
            KeyError: If ``employee_id`` is unknown.
            InvalidDateError: If ``on_date`` precedes the employee's hire date.
        """
        salary = self._engine.net_salary(self.get(employee_id), on_date)
        return SalaryStatement(
            payroll_date=on_date,
            salary=_round_cents(salary),
            employee=self.view(employee_id),
        )

    def total_salary_on(self, on_date: date) -> SalaryStatement:
        """Sum of every registered employee's net salary on ``on_date``.

        Employees not yet hired on ``on_date`` contribute zero.
        """
        total = Decimal("0")
        for employee in self._employees:
            try:
                total += self._engine.net_salary(employee, on_date)
            except InvalidDateError as exc:
                logger.debug("Excluding %s from salary total: %s", employee, exc)
        return SalaryStatement(payroll_date=on_date, salary=_round_cents(total))


def _round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_EVEN)
