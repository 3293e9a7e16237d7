"""
Codeloom Backend - Plan Catalog
================================

What:  Static catalog of subscription plans and their entitlements.
Who:   Used by practice_service for plan lookups and plan changes.

Any stored plan key that is not in the catalog reads as 'plan_a', so a
practice always resolves to a concrete plan.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_PLAN_KEY = "plan_a"


@dataclass(frozen=True)
class Plan:
    key: str
    name: str
    max_providers: int
    max_encounters_per_month: int
    training_enabled: bool
    analytics_enabled: bool
    exports_enabled: bool


PLANS: Dict[str, Plan] = {
    "plan_a": Plan(
        key="plan_a",
        name="Core",
        max_providers=3,
        max_encounters_per_month=200,
        training_enabled=False,
        analytics_enabled=True,
        exports_enabled=True,
    ),
    "plan_b": Plan(
        key="plan_b",
        name="Plus",
        max_providers=10,
        max_encounters_per_month=1000,
        training_enabled=True,
        analytics_enabled=True,
        exports_enabled=True,
    ),
    "plan_c": Plan(
        key="plan_c",
        name="Education",
        max_providers=3,
        max_encounters_per_month=100,
        training_enabled=True,
        analytics_enabled=False,
        exports_enabled=False,
    ),
}


def plan_keys() -> List[str]:
    return list(PLANS)


def is_valid_plan_key(key: Optional[str]) -> bool:
    return key in PLANS


def get_plan(key: Optional[str]) -> Plan:
    """Returns the plan for `key`, falling back to the default plan."""
    if key and key in PLANS:
        return PLANS[key]
    return PLANS[DEFAULT_PLAN_KEY]
