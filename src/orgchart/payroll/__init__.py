"""Payroll subsystem — role policy table and net-salary engine."""

from orgchart.payroll.engine import PayrollEngine, SalaryBreakdown
from orgchart.payroll.policy import PayrollPolicy

__all__ = [
    "PayrollEngine",
    "PayrollPolicy",
    "SalaryBreakdown",
]
