# =============================================================================
# lib/entitlements.py - Plan Feature Gating
# =============================================================================

from core.models.entitlement import Feature, Plan

FEATURE_PLANS: dict[Feature, tuple[Plan, ...]] = {
    Feature.VIEW_PROFILE_VIEWERS_LIST: (Plan.ARTIST_PRO, Plan.COLLECTOR_PRO),
    Feature.VIEW_ARTWORK_VIEWERS_LIST: (Plan.ARTIST_PRO, Plan.COLLECTOR_PRO),
}


def has_feature(plan: Plan | str, feature: Feature | str) -> bool:
    """True when `plan` unlocks `feature`; unknown plans or features never do."""
    try:
        plan = Plan(plan)
        feature = Feature(feature)
    except ValueError:
        return False
    return plan in FEATURE_PLANS.get(feature, ())


def features_for(plan: Plan | str) -> list[Feature]:
    return [feature for feature in Feature if has_feature(plan, feature)]
