"""Employee entity and the single routine that mutates reporting lines.

Reporting lines are non-owning cross-references: a superior never owns its
subordinates and an employee may be held anywhere independently of its
position in the hierarchy.

Bidirectional invariant:
    e.superior is m  <=>  e appears exactly once in m.subordinates

Both public entry points (superior assignment on the employee side,
add/remove on the superior side) funnel into _relink(), which updates both
sides under one lock. _relink() is module-private; nothing outside
orgchart.models may call it.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, ClassVar, Optional, Union

from orgchart.errors import HierarchyCycleError, InvalidNameError
from orgchart.models.roles import Role

if TYPE_CHECKING:
    from orgchart.models.superior import Superior
    from orgchart.payroll.policy import PayrollPolicy

logger = logging.getLogger(__name__)

DEFAULT_SALARY = Decimal("100")

Amount = Union[Decimal, int, str, float]

# Serialises every reporting-line change across the process.
_HIERARCHY_LOCK = threading.RLock()


def _to_amount(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Invalid salary amount: {value!r}") from None


def _relink(employee: Employee, superior: Optional[Superior]) -> None:
    """Move ``employee`` under ``superior`` (or orphan it when None).

    Callers hold _HIERARCHY_LOCK and have already run their own
    precondition checks.
    """
    current = employee._superior
    if current is superior:
        return
    if superior is not None:
        _ensure_acyclic(employee, superior)
    if current is not None:
        current._subordinates.remove(employee)
    employee._superior = superior
    if superior is not None:
        superior._subordinates.append(employee)
    logger.debug(
        "Reporting line changed: %s moved from %s to %s",
        employee, current, superior,
    )


def _ensure_acyclic(employee: Employee, superior: Superior) -> None:
    node: Optional[Employee] = superior
    while node is not None:
        if node is employee:
            raise HierarchyCycleError(
                f"Cannot place {employee} under {superior}: "
                f"{employee} would become its own superior"
            )
        node = node._superior


class Employee:
    """A company employee with a tenure-based salary.

    Usage:
        boss = Manager("Clara Dyer", date(2007, 10, 26), 500)
        emp = Employee("Dawud Daniel", date(2010, 8, 30), 250, superior=boss)
        emp.get_net_salary_on_date(date(2023, 4, 1))
    """

    role: ClassVar[Role] = Role.EMPLOYEE
    holds_subordinates: ClassVar[bool] = False

    def __init__(
        self,
        name: str,
        hire_date: date,
        base_salary: Amount = DEFAULT_SALARY,
        superior: Optional[Superior] = None,
    ) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidNameError(name)
        salary = _to_amount(base_salary)
        if not salary.is_finite() or salary < Decimal("0"):
            raise ValueError(f"Base salary must be non-negative, got {salary}")

        self._name = name
        self._hire_date = hire_date
        self._base_salary = salary
        self._superior: Optional[Superior] = None
        if superior is not None:
            self.set_superior(superior)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def hire_date(self) -> date:
        return self._hire_date

    @property
    def base_salary(self) -> Decimal:
        return self._base_salary

    # ------------------------------------------------------------------
    # Reporting line
    # ------------------------------------------------------------------

    @property
    def superior(self) -> Optional[Superior]:
        return self._superior

    @superior.setter
    def superior(self, new_superior: Optional[Superior]) -> None:
        self.set_superior(new_superior)

    @property
    def superior_name(self) -> Optional[str]:
        """Name of the current superior, or None for a top-level node."""
        if self._superior is None:
            return None
        return self._superior.name

    def set_superior(self, new_superior: Optional[Superior]) -> None:
        """Report to ``new_superior``, or to nobody when None.

        Detaches from the current superior first. Assigning the current
        superior again is a no-op.

        Raises:
            TypeError: If ``new_superior`` cannot hold subordinates.
            HierarchyCycleError: If this node is an ancestor of ``new_superior``.
        """
        if new_superior is not None and not getattr(
            new_superior, "holds_subordinates", False
        ):
            raise TypeError(
                f"{new_superior!r} cannot hold subordinates"
            )
        with _HIERARCHY_LOCK:
            _relink(self, new_superior)

    # ------------------------------------------------------------------
    # Payroll
    # ------------------------------------------------------------------

    def get_net_salary_on_date(
        self,
        on_date: date,
        policy: Optional[PayrollPolicy] = None,
    ) -> Decimal:
        """Net salary on ``on_date`` under ``policy`` (default role table).

        Raises:
            InvalidDateError: If ``on_date`` precedes the hire date.
        """
        from orgchart.payroll.engine import PayrollEngine

        return PayrollEngine(policy).net_salary(self, on_date)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        if self.role is Role.EMPLOYEE:
            return self._name
        return f"{self.role.label}: {self._name}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, "
            f"hire_date={self._hire_date.isoformat()!r}, "
            f"base_salary={self._base_salary!s})"
        )
