"""Role models — the constant table behind every salary computation.

A role varies only two things about the salary formula:
- the tenure constants (yearly premium percent and its cap);
- which subordinates feed the premium pool, and at what rate.

The tenure formula itself lives in one place (payroll.engine); roles never
override it.

Default table:
    EMPLOYEE   3% / year, capped at 30%, no subordinate premium
    MANAGER    5% / year, capped at 40%, 0.5% of direct reports' net salaries
    SALES      1% / year, capped at 35%, 0.3% of the downline's tenure salaries
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict


class Role(str, enum.Enum):
    """Role tag carried by every node in the hierarchy."""
    EMPLOYEE = "employee"
    MANAGER = "manager"
    SALES = "sales"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class PremiumScope(str, enum.Enum):
    """Which subordinates contribute to a role's premium pool.

    NONE: the role holds no subordinates.
    DIRECT_REPORTS: one level only; each report counts with its full net salary.
    DOWNLINE: every descendant at any depth; each counts with its own
        tenure salary, without nested aggregation.
    """
    NONE = "none"
    DIRECT_REPORTS = "direct_reports"
    DOWNLINE = "downline"


@dataclass(frozen=True)
class RolePolicy:
    """Salary constants for a single role. All rates are percentages."""
    yearly_premium_percent: Decimal
    maximum_premium_percent: Decimal
    subordinate_premium_percent: Decimal = Decimal("0")
    scope: PremiumScope = PremiumScope.NONE

    def premium_percent(self, years: int) -> Decimal:
        """Tenure premium for ``years`` whole years, clamped at the role maximum."""
        return min(years * self.yearly_premium_percent, self.maximum_premium_percent)


DEFAULT_ROLE_POLICIES: Dict[Role, RolePolicy] = {
    Role.EMPLOYEE: RolePolicy(
        yearly_premium_percent=Decimal("3"),
        maximum_premium_percent=Decimal("30"),
    ),
    Role.MANAGER: RolePolicy(
        yearly_premium_percent=Decimal("5"),
        maximum_premium_percent=Decimal("40"),
        subordinate_premium_percent=Decimal("0.5"),
        scope=PremiumScope.DIRECT_REPORTS,
    ),
    Role.SALES: RolePolicy(
        yearly_premium_percent=Decimal("1"),
        maximum_premium_percent=Decimal("35"),
        subordinate_premium_percent=Decimal("0.3"),
        scope=PremiumScope.DOWNLINE,
    ),
}
