"""Hierarchy models for orgchart."""

from orgchart.models.roles import (
    DEFAULT_ROLE_POLICIES,
    PremiumScope,
    Role,
    RolePolicy,
)
from orgchart.models.employee import DEFAULT_SALARY, Employee
from orgchart.models.superior import Manager, Sales, Superior

__all__ = [
    "DEFAULT_ROLE_POLICIES",
    "DEFAULT_SALARY",
    "Employee",
    "Manager",
    "PremiumScope",
    "Role",
    "RolePolicy",
    "Sales",
    "Superior",
]
