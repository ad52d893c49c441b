"""Tests for the staff directory — ids, views, statements, totals."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from orgchart.directory import StaffDirectory
from orgchart.errors import InvalidDateError
from orgchart.models import Employee, Manager, Role


TODAY = date(2023, 4, 1)


@pytest.fixture
def directory() -> StaffDirectory:
    directory = StaffDirectory()
    boss = Manager("Clara Dyer", date(2022, 4, 1), 500)
    directory.add(boss)
    directory.add(Employee("Dawud Daniel", TODAY, 250, boss))
    directory.add(Employee("Future Hire", date(2024, 1, 1), 300, boss))
    return directory


class TestRegistry:
    def test_ids_are_one_based_and_stable(self, directory: StaffDirectory) -> None:
        assert len(directory) == 3
        assert directory.get(1).name == "Clara Dyer"
        assert directory.get(3).name == "Future Hire"

    def test_add_is_idempotent(self, directory: StaffDirectory) -> None:
        boss = directory.get(1)
        assert directory.add(boss) == 1
        assert len(directory) == 3
        assert boss in directory
        assert directory.id_of(boss) == 1

    @pytest.mark.parametrize("employee_id", [0, -1, 4])
    def test_unknown_id(self, directory: StaffDirectory, employee_id: int) -> None:
        with pytest.raises(KeyError, match="Unknown employee"):
            directory.get(employee_id)

    def test_unregistered_node(self, directory: StaffDirectory) -> None:
        with pytest.raises(KeyError, match="not registered"):
            directory.id_of(Employee("Stranger", TODAY))

    def test_ids_survive_orphaning(self, directory: StaffDirectory) -> None:
        boss = directory.get(1)
        dawud = directory.get(2)
        boss.remove_subordinate(dawud)
        assert directory.get(2) is dawud
        assert directory.view(2).superior_name == ""


class TestViews:
    def test_view_fields(self, directory: StaffDirectory) -> None:
        view = directory.view(2)
        assert view.employee_id == 2
        assert view.name == "Dawud Daniel"
        assert view.role is Role.EMPLOYEE
        assert view.hire_date == TODAY
        assert view.base_salary == Decimal("250")
        assert view.superior_name == "Clara Dyer"

    def test_top_level_has_empty_superior_name(self, directory: StaffDirectory) -> None:
        assert directory.view(1).superior_name == ""

    def test_views_in_id_order(self, directory: StaffDirectory) -> None:
        assert [v.employee_id for v in directory.views()] == [1, 2, 3]

    def test_view_to_dict(self, directory: StaffDirectory) -> None:
        assert directory.view(1).to_dict() == {
            "id": 1,
            "name": "Clara Dyer",
            "role": "manager",
            "hire_date": "2022-04-01",
            "base_salary": "500",
            "superior_name": "",
        }


class TestStatements:
    def test_salary_statement(self, directory: StaffDirectory) -> None:
        # 500 * 1.05 = 525, plus 0.5% of Dawud's 250; the future hire is skipped.
        statement = directory.salary_statement(1, TODAY)
        assert statement.salary == Decimal("526.25")
        assert statement.payroll_date == TODAY
        assert statement.employee == directory.view(1)

    def test_statement_rounds_half_even(self) -> None:
        directory = StaffDirectory()
        directory.add(Employee("Half Cent", TODAY, "100.005"))
        directory.add(Employee("Odd Half Cent", TODAY, "100.015"))
        assert directory.salary_statement(1, TODAY).salary == Decimal("100.00")
        assert directory.salary_statement(2, TODAY).salary == Decimal("100.02")

    def test_statement_before_hire_propagates(self, directory: StaffDirectory) -> None:
        with pytest.raises(InvalidDateError):
            directory.salary_statement(3, TODAY)

    def test_total_skips_future_hires(self, directory: StaffDirectory) -> None:
        total = directory.total_salary_on(TODAY)
        assert total.employee is None
        assert total.salary == Decimal("776.25")

    def test_total_to_dict(self, directory: StaffDirectory) -> None:
        assert directory.total_salary_on(TODAY).to_dict() == {
            "payroll_date": "2023-04-01",
            "salary": "776.25",
            "employee": None,
        }

    def test_breakdown_by_id(self, directory: StaffDirectory) -> None:
        b = directory.breakdown(1, TODAY)
        assert b.skipped_subordinates == 1
        assert b.contributing_subordinates == 1
