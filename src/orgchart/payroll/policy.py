"""Payroll policy — the role table used by the payroll engine.

The built-in table (PayrollPolicy.default()) carries the company's standard
constants. A deployment may ship its own table as payroll_policy.json in the
config directory:

    {
      "version": 1,
      "roles": {
        "employee": {"yearly_premium_percent": "3", "maximum_premium_percent": "30"},
        "manager": {"yearly_premium_percent": "5", "maximum_premium_percent": "40",
                    "subordinate_premium_percent": "0.5", "scope": "direct_reports"},
        "sales": {"yearly_premium_percent": "1", "maximum_premium_percent": "35",
                  "subordinate_premium_percent": "0.3", "scope": "downline"}
      }
    }

Rates are read as decimal strings so that no float ever touches money.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping

from orgchart.models.roles import (
    DEFAULT_ROLE_POLICIES,
    PremiumScope,
    Role,
    RolePolicy,
)


class PayrollPolicy:
    """Validated mapping of every role to its RolePolicy.

    Usage:
        policy = PayrollPolicy.from_config_dir(Path("config"))
        policy.for_role(Role.MANAGER).yearly_premium_percent
    """

    POLICY_FILENAME = "payroll_policy.json"

    def __init__(self, roles: Mapping[Role, RolePolicy]) -> None:
        self._roles = dict(roles)
        self._validate()

    @classmethod
    def default(cls) -> PayrollPolicy:
        return cls(DEFAULT_ROLE_POLICIES)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PayrollPolicy:
        """Build a policy from its JSON representation.

        Raises:
            ValueError: If the data is structurally invalid.
        """
        if not isinstance(data, dict):
            raise ValueError("Payroll policy must be a dict")
        if "version" not in data:
            raise ValueError("Payroll policy missing 'version' field")
        raw_roles = data.get("roles")
        if not isinstance(raw_roles, dict):
            raise ValueError("Payroll policy 'roles' must be a dict")

        roles: dict[Role, RolePolicy] = {}
        for role_name, raw in raw_roles.items():
            try:
                role = Role(role_name)
            except ValueError:
                raise ValueError(f"Unknown role in payroll policy: {role_name!r}") from None
            if not isinstance(raw, dict):
                raise ValueError(f"Role '{role_name}' must be a dict")
            try:
                scope = PremiumScope(raw.get("scope", PremiumScope.NONE.value))
            except ValueError:
                raise ValueError(
                    f"Role '{role_name}' has unknown scope: {raw.get('scope')!r}"
                ) from None
            roles[role] = RolePolicy(
                yearly_premium_percent=_rate(raw, "yearly_premium_percent", role_name),
                maximum_premium_percent=_rate(raw, "maximum_premium_percent", role_name),
                subordinate_premium_percent=_rate(
                    raw, "subordinate_premium_percent", role_name, default="0",
                ),
                scope=scope,
            )
        return cls(roles)

    @classmethod
    def from_config_dir(cls, config_dir: Path) -> PayrollPolicy:
        """Load payroll_policy.json from ``config_dir``.

        Raises:
            FileNotFoundError: If payroll_policy.json does not exist.
            ValueError: If the policy is structurally invalid.
        """
        path = config_dir / cls.POLICY_FILENAME
        if not path.exists():
            raise FileNotFoundError(f"Payroll policy not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": 1,
            "roles": {
                role.value: {
                    "yearly_premium_percent": str(p.yearly_premium_percent),
                    "maximum_premium_percent": str(p.maximum_premium_percent),
                    "subordinate_premium_percent": str(p.subordinate_premium_percent),
                    "scope": p.scope.value,
                }
                for role, p in self._roles.items()
            },
        }

    def for_role(self, role: Role) -> RolePolicy:
        return self._roles[role]

    def _validate(self) -> None:
        missing = [r.value for r in Role if r not in self._roles]
        if missing:
            raise ValueError(f"Payroll policy missing roles: {', '.join(missing)}")

        for role, p in self._roles.items():
            for field_name in (
                "yearly_premium_percent",
                "maximum_premium_percent",
                "subordinate_premium_percent",
            ):
                if getattr(p, field_name) < Decimal("0"):
                    raise ValueError(f"{role.value}.{field_name} must be >= 0")
            if p.yearly_premium_percent > p.maximum_premium_percent:
                raise ValueError(
                    f"{role.value}.yearly_premium_percent cannot exceed "
                    f"maximum_premium_percent"
                )
            # Only roles that can hold subordinates may earn a premium on them.
            if role is Role.EMPLOYEE and p.scope is not PremiumScope.NONE:
                raise ValueError("employee role cannot have a subordinate premium scope")
            if p.scope is PremiumScope.NONE and p.subordinate_premium_percent != 0:
                raise ValueError(
                    f"{role.value}.subordinate_premium_percent requires a premium scope"
                )


def _rate(raw: dict[str, Any], key: str, role_name: str, default: Any = None) -> Decimal:
    value = raw.get(key, default)
    if value is None:
        raise ValueError(f"Role '{role_name}' missing '{key}'")
    if isinstance(value, float):
        value = str(value)
    try:
        rate = Decimal(value)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Role '{role_name}' has invalid {key}: {value!r}") from None
    if not rate.is_finite():
        raise ValueError(f"Role '{role_name}' has invalid {key}: {value!r}")
    return rate
