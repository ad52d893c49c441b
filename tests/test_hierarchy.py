"""Tests for hierarchy invariants shared by every Superior.

Proves:
- e.superior is m  <=>  e appears exactly once in m.subordinates,
  whichever entry point changed the reporting line.
- The superior relation never contains a cycle.
- Concurrent reassignments never leave a torn state.
"""

from __future__ import annotations

import threading
from datetime import date

import pytest

from orgchart.errors import HierarchyCycleError
from orgchart.models import Employee, Manager, Sales, Superior


TODAY = date(2023, 4, 1)


def _assert_consistent(superiors: list[Superior], employees: list[Employee]) -> None:
    for employee in employees:
        for superior in superiors:
            count = superior.subordinates.count(employee)
            if employee.superior is superior:
                assert count == 1, f"{employee} listed {count} times under {superior}"
            else:
                assert count == 0, f"{employee} dangling under {superior}"


@pytest.fixture
def org() -> dict[str, Employee]:
    """ceo → (head_of_sales → (rep → intern), accountant)."""
    ceo = Manager("CEO", TODAY)
    head_of_sales = Sales("Head of Sales", TODAY, superior=ceo)
    accountant = Employee("Accountant", TODAY, superior=ceo)
    rep = Sales("Rep", TODAY, superior=head_of_sales)
    intern = Employee("Intern", TODAY, superior=rep)
    return {
        "ceo": ceo,
        "head_of_sales": head_of_sales,
        "accountant": accountant,
        "rep": rep,
        "intern": intern,
    }


class TestBidirectionalInvariant:
    def test_constructor_superior_equivalent_to_assignment(self) -> None:
        manager = Manager("Manager", TODAY)
        a = Employee("A", TODAY, superior=manager)
        b = Employee("B", TODAY)
        b.set_superior(manager)
        assert manager.subordinates == (a, b)

    def test_reassigning_same_superior_is_noop(self) -> None:
        manager = Manager("Manager", TODAY)
        employee = Employee("Employee", TODAY, superior=manager)
        employee.superior = manager
        employee.set_superior(manager)
        assert manager.subordinates == (employee,)

    def test_add_moves_employee_from_previous_superior(self) -> None:
        first = Manager("First", TODAY)
        second = Sales("Second", TODAY)
        employee = Employee("Employee", TODAY, superior=first)
        second.add_subordinate(employee)
        assert employee.superior is second
        assert first.subordinates == ()
        assert second.subordinates == (employee,)

    def test_round_trip_across_entry_points(self) -> None:
        m1 = Manager("M1", TODAY)
        m2 = Sales("M2", TODAY)
        employees = [Employee(f"E{i}", TODAY) for i in range(4)]

        m1.add_subordinates(employees)
        employees[0].superior = m2
        m2.add_subordinate(employees[1])
        m1.remove_subordinate(employees[2])
        employees[3].set_superior(None)
        _assert_consistent([m1, m2], employees)
        assert m1.subordinates == ()
        assert m2.subordinates == (employees[0], employees[1])

    def test_orphaned_node_keeps_identity(self) -> None:
        manager = Manager("Manager", TODAY)
        employee = Employee("Employee", TODAY, 250, manager)
        manager.remove_subordinate(employee)
        assert employee.name == "Employee"
        assert employee.hire_date == TODAY
        assert employee.base_salary == 250


class TestAcyclicity:
    def test_cannot_report_to_self(self) -> None:
        manager = Manager("Manager", TODAY)
        with pytest.raises(HierarchyCycleError):
            manager.add_subordinate(manager)
        assert manager.superior is None
        assert manager.subordinates == ()

    def test_cannot_report_to_own_descendant(self, org: dict[str, Employee]) -> None:
        with pytest.raises(HierarchyCycleError, match="its own superior"):
            org["rep"].add_subordinate(org["ceo"])
        assert org["ceo"].superior is None
        assert org["ceo"] not in org["rep"].subordinates

    def test_setter_also_checks_cycles(self, org: dict[str, Employee]) -> None:
        with pytest.raises(HierarchyCycleError):
            org["head_of_sales"].superior = org["rep"]
        # Failed attachment leaves the previous reporting line intact.
        assert org["head_of_sales"].superior is org["ceo"]
        assert org["head_of_sales"] in org["ceo"].subordinates

    def test_moving_subtree_sideways_allowed(self, org: dict[str, Employee]) -> None:
        other = Manager("Other", TODAY)
        org["rep"].superior = other
        assert org["rep"] in other.subordinates
        assert org["intern"].superior is org["rep"]


class TestDownline:
    def test_depth_first_preorder(self, org: dict[str, Employee]) -> None:
        downline = list(org["ceo"].iter_downline())
        assert downline == [
            org["head_of_sales"],
            org["rep"],
            org["intern"],
            org["accountant"],
        ]

    def test_leaf_superior_has_empty_downline(self) -> None:
        assert list(Sales("Alone", TODAY).iter_downline()) == []


class TestConcurrentMutation:
    def test_concurrent_reassignment_stays_consistent(self) -> None:
        superiors: list[Superior] = [Manager(f"M{i}", TODAY) for i in range(3)]
        employees = [Employee(f"E{i}", TODAY) for i in range(12)]

        def worker(offset: int) -> None:
            for step in range(300):
                employee = employees[(offset + step) % len(employees)]
                target = superiors[(offset * step) % len(superiors)]
                employee.superior = target if step % 5 else None

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        _assert_consistent(superiors, employees)


class TestSuperiorBase:
    def test_direct_instantiation_rejected(self) -> None:
        with pytest.raises(TypeError, match="base class"):
            Superior("Nobody", TODAY)

    @pytest.mark.parametrize("cls", [Manager, Sales])
    def test_concrete_roles_hold_subordinates(self, cls) -> None:
        superior = cls("Somebody", TODAY)
        assert isinstance(superior, Superior)
        assert superior.holds_subordinates
