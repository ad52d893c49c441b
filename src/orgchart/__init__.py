"""orgchart — company reporting hierarchy and date-based net salaries."""

from orgchart.dates import years_between
from orgchart.directory import EmployeeView, SalaryStatement, StaffDirectory
from orgchart.errors import (
    DuplicateRelationError,
    HierarchyCycleError,
    InvalidDateError,
    InvalidNameError,
    NotSubordinateError,
    OrgChartError,
)
from orgchart.models import Employee, Manager, Role, Sales, Superior
from orgchart.payroll import PayrollEngine, PayrollPolicy, SalaryBreakdown

__all__ = [
    "DuplicateRelationError",
    "Employee",
    "EmployeeView",
    "HierarchyCycleError",
    "InvalidDateError",
    "InvalidNameError",
    "Manager",
    "NotSubordinateError",
    "OrgChartError",
    "PayrollEngine",
    "PayrollPolicy",
    "Role",
    "SalaryBreakdown",
    "SalaryStatement",
    "Sales",
    "StaffDirectory",
    "Superior",
    "years_between",
]
