"""Subscription plan rules.

Single source of truth for what each plan allows. Handlers ask this module
instead of comparing plan strings inline.
"""

from enum import StrEnum

from tenantnotes.core.config import get_settings


class SubscriptionPlan(StrEnum):
    FREE = "free"
    PRO = "pro"


# Plans a tenant may move to from a given plan. Downgrades are not offered.
UPGRADE_PATHS: dict[SubscriptionPlan, tuple[SubscriptionPlan, ...]] = {
    SubscriptionPlan.FREE: (SubscriptionPlan.PRO,),
    SubscriptionPlan.PRO: (),
}


def note_limit(plan: SubscriptionPlan) -> int | None:
    """Maximum notes a tenant on ``plan`` may hold, or None when uncapped."""
    if plan == SubscriptionPlan.FREE:
        return get_settings().free_plan_note_limit
    return None


def can_upgrade(current: SubscriptionPlan, target: SubscriptionPlan) -> bool:
    return target in UPGRADE_PATHS.get(current, ())
