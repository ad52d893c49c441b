"""Payroll engine — computes an employee's net salary on a given date.

The formula is fully determined by the node's role policy:

    years          = whole calendar years from hire_date to the payroll date
    premium        = min(years × yearly_premium_percent, maximum_premium_percent)
    tenure_salary  = base_salary × (100 + premium) / 100
    net_salary     = tenure_salary + pool × subordinate_premium_percent / 100

where pool depends on the role's premium scope:
- NONE: zero.
- DIRECT_REPORTS: sum of each direct report's own net salary (which, for a
  report that is itself a superior, already includes its own premium).
- DOWNLINE: sum of each descendant's tenure salary at any depth; deeper
  levels are reached by traversal, never by nested aggregation.

A subordinate hired after the payroll date contributes zero to the pool.
That is the only failure ever absorbed; the queried node's own date
violation always reaches the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional

from orgchart.dates import years_between
from orgchart.errors import InvalidDateError
from orgchart.models.employee import Employee
from orgchart.models.roles import PremiumScope, Role
from orgchart.payroll.policy import PayrollPolicy

logger = logging.getLogger(__name__)

_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class SalaryBreakdown:
    """Every intermediate figure of one net-salary computation.

    Invariant: tenure_salary + subordinate_premium == net_salary
    """
    employee_name: str
    role: Role
    payroll_date: date
    base_salary: Decimal
    years_of_employment: int
    premium_percent: Decimal
    tenure_salary: Decimal
    scope: PremiumScope
    subordinate_pool: Decimal
    subordinate_premium: Decimal
    contributing_subordinates: int
    skipped_subordinates: int
    net_salary: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_name": self.employee_name,
            "role": self.role.value,
            "payroll_date": self.payroll_date.isoformat(),
            "base_salary": str(self.base_salary),
            "years_of_employment": self.years_of_employment,
            "premium_percent": str(self.premium_percent),
            "tenure_salary": str(self.tenure_salary),
            "scope": self.scope.value,
            "subordinate_pool": str(self.subordinate_pool),
            "subordinate_premium": str(self.subordinate_premium),
            "contributing_subordinates": self.contributing_subordinates,
            "skipped_subordinates": self.skipped_subordinates,
            "net_salary": str(self.net_salary),
        }


_DEFAULT_POLICY = PayrollPolicy.default()


class PayrollEngine:
    """Computes net salaries under a payroll policy.

    Usage:
        engine = PayrollEngine(policy)
        engine.net_salary(manager, date(2023, 4, 1))
        engine.breakdown(manager, date(2023, 4, 1)).subordinate_pool
    """

    def __init__(self, policy: Optional[PayrollPolicy] = None) -> None:
        self._policy = policy if policy is not None else _DEFAULT_POLICY

    @property
    def policy(self) -> PayrollPolicy:
        return self._policy

    def tenure_salary(self, employee: Employee, on_date: date) -> Decimal:
        """Base salary plus the role's capped tenure premium.

        Raises:
            InvalidDateError: If ``on_date`` precedes the hire date.
        """
        _, _, salary = self._tenure(employee, on_date)
        return salary

    def net_salary(self, employee: Employee, on_date: date) -> Decimal:
        """Tenure salary plus the role's subordinate premium.

        Raises:
            InvalidDateError: If ``on_date`` precedes the hire date.
        """
        return self.breakdown(employee, on_date).net_salary

    def breakdown(self, employee: Employee, on_date: date) -> SalaryBreakdown:
        """Compute the full salary breakdown for ``employee`` on ``on_date``.

        Raises:
            InvalidDateError: If ``on_date`` precedes the hire date.
        """
        years, premium_percent, tenure_salary = self._tenure(employee, on_date)
        role_policy = self._policy.for_role(employee.role)

        if role_policy.scope is PremiumScope.DIRECT_REPORTS:
            pool, contributing, skipped = self._pool(
                employee.subordinates, self.net_salary, on_date,
            )
        elif role_policy.scope is PremiumScope.DOWNLINE:
            pool, contributing, skipped = self._pool(
                employee.iter_downline(), self.tenure_salary, on_date,
            )
        else:
            pool, contributing, skipped = Decimal("0"), 0, 0

        subordinate_premium = pool * role_policy.subordinate_premium_percent / _HUNDRED

        return SalaryBreakdown(
            employee_name=employee.name,
            role=employee.role,
            payroll_date=on_date,
            base_salary=employee.base_salary,
            years_of_employment=years,
            premium_percent=premium_percent,
            tenure_salary=tenure_salary,
            scope=role_policy.scope,
            subordinate_pool=pool,
            subordinate_premium=subordinate_premium,
            contributing_subordinates=contributing,
            skipped_subordinates=skipped,
            net_salary=tenure_salary + subordinate_premium,
        )

    def _tenure(self, employee: Employee, on_date: date) -> tuple[int, Decimal, Decimal]:
        if on_date < employee.hire_date:
            raise InvalidDateError(employee.name, employee.hire_date, on_date)
        years = years_between(employee.hire_date, on_date)
        premium_percent = self._policy.for_role(employee.role).premium_percent(years)
        salary = employee.base_salary * (_HUNDRED + premium_percent) / _HUNDRED
        return years, premium_percent, salary

    def _pool(
        self,
        subordinates: Iterable[Employee],
        salary_of: Callable[[Employee, date], Decimal],
        on_date: date,
    ) -> tuple[Decimal, int, int]:
        pool = Decimal("0")
        contributing = skipped = 0
        for subordinate in subordinates:
            try:
                pool += salary_of(subordinate, on_date)
            except InvalidDateError as exc:
                # Not hired yet on the payroll date.
                logger.debug("Skipping %s in premium pool: %s", subordinate, exc)
                skipped += 1
                continue
            contributing += 1
        return pool, contributing, skipped
