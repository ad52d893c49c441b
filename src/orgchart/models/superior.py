"""Superior capability and the two roles that carry it.

A Superior keeps an ordered, duplicate-free list of direct reports. The list
is only ever changed through orgchart.models.employee._relink(), so
add_subordinate(), remove_subordinate() and Employee.set_superior() all
leave the hierarchy in the same consistent state.

Manager and Sales differ from each other (and from a plain Employee) only
by their role tag; the salary constants and premium scope for each role are
in orgchart.models.roles.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Iterable, Iterator, Optional

from orgchart.errors import DuplicateRelationError, NotSubordinateError
from orgchart.models.employee import (
    DEFAULT_SALARY,
    Amount,
    Employee,
    _HIERARCHY_LOCK,
    _relink,
)
from orgchart.models.roles import Role


class Superior(Employee):
    """An employee that can have subordinate employees.

    Base class only: instantiate Manager or Sales, whose role selects a
    premium scope.
    """

    holds_subordinates: ClassVar[bool] = True

    def __init__(
        self,
        name: str,
        hire_date: date,
        base_salary: Amount = DEFAULT_SALARY,
        superior: Optional[Superior] = None,
    ) -> None:
        if type(self) is Superior:
            raise TypeError("Superior is a base class; instantiate Manager or Sales")
        self._subordinates: list[Employee] = []
        super().__init__(name, hire_date, base_salary, superior)

    @property
    def subordinates(self) -> tuple[Employee, ...]:
        """Direct reports in the order they were added."""
        return tuple(self._subordinates)

    def add_subordinate(self, employee: Employee) -> None:
        """Make ``employee`` a direct report, detaching it from any other superior.

        Raises:
            DuplicateRelationError: If ``employee`` already reports here.
            HierarchyCycleError: If ``employee`` is this node or one of its
                ancestors.
        """
        with _HIERARCHY_LOCK:
            if employee.superior is self:
                raise DuplicateRelationError(
                    f"The employee {employee} is already subordinated to {self}"
                )
            _relink(employee, self)

    def add_subordinates(self, employees: Optional[Iterable[Employee]]) -> None:
        """Add each employee in order. ``None`` adds nothing."""
        if employees is None:
            return
        for employee in employees:
            self.add_subordinate(employee)

    def remove_subordinate(self, employee: Employee) -> None:
        """Orphan ``employee``.

        Raises:
            NotSubordinateError: If ``employee`` does not report here.
        """
        with _HIERARCHY_LOCK:
            if employee.superior is not self:
                raise NotSubordinateError(
                    f"The employee {employee} isn't subordinated to {self}"
                )
            _relink(employee, None)

    def iter_downline(self) -> Iterator[Employee]:
        """Every descendant, depth-first pre-order, following add order."""
        stack = list(reversed(self._subordinates))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Superior):
                stack.extend(reversed(node._subordinates))


class Manager(Superior):
    """Manager-level employee; earns a premium on direct reports' salaries."""

    role: ClassVar[Role] = Role.MANAGER


class Sales(Superior):
    """Sales employee; earns a premium on the whole downline's salaries."""

    role: ClassVar[Role] = Role.SALES
