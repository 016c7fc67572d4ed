"""
Subscription plan catalogue: default resource limits and feature flags.
"""

from typing import Dict

from tenancy.domain.entities.enums import SubscriptionPlan
from tenancy.domain.errors import ValidationError

PLAN_LIMITS: Dict[SubscriptionPlan, Dict[str, int]] = {
    SubscriptionPlan.Kisan_Basic: {
        "max_farmers": 1000,
        "max_dealers": 50,
        "max_products": 100,
        "max_storage_gb": 10,
        "max_api_calls_per_day": 10000,
    },
    SubscriptionPlan.Shakti_Growth: {
        "max_farmers": 5000,
        "max_dealers": 200,
        "max_products": 500,
        "max_storage_gb": 50,
        "max_api_calls_per_day": 50000,
    },
    SubscriptionPlan.AI_Enterprise: {
        "max_farmers": 20000,
        "max_dealers": 1000,
        "max_products": 2000,
        "max_storage_gb": 200,
        "max_api_calls_per_day": 200000,
    },
    SubscriptionPlan.Custom_Enterprise: {
        "max_farmers": 50000,
        "max_dealers": 2000,
        "max_products": 5000,
        "max_storage_gb": 500,
        "max_api_calls_per_day": 500000,
    },
}

ALL_FEATURES = (
    "farmer_management",
    "dealer_network",
    "data_import",
    "basic_analytics",
    "weather_alerts",
    "advanced_analytics",
    "marketplace",
    "api_access",
    "ai_advisory",
    "white_label",
)

# Features that can mutate tenant data; switched off while suspended
WRITE_FEATURES = frozenset(
    {
        "farmer_management",
        "dealer_network",
        "data_import",
        "marketplace",
        "api_access",
        "ai_advisory",
    }
)

_PLAN_FEATURES = {
    SubscriptionPlan.Kisan_Basic: {
        "farmer_management",
        "dealer_network",
        "data_import",
        "basic_analytics",
        "weather_alerts",
    },
    SubscriptionPlan.Shakti_Growth: {
        "farmer_management",
        "dealer_network",
        "data_import",
        "basic_analytics",
        "weather_alerts",
        "advanced_analytics",
        "marketplace",
        "api_access",
    },
    SubscriptionPlan.AI_Enterprise: set(ALL_FEATURES) - {"white_label"},
    SubscriptionPlan.Custom_Enterprise: set(ALL_FEATURES),
}


def default_limits(plan: SubscriptionPlan) -> Dict[str, int]:
    return dict(PLAN_LIMITS[plan])


def default_features(plan: SubscriptionPlan) -> Dict[str, bool]:
    enabled = _PLAN_FEATURES[plan]
    return {feature: feature in enabled for feature in ALL_FEATURES}


def without_write_features(flags: Dict[str, bool]) -> Dict[str, bool]:
    return {
        feature: (False if feature in WRITE_FEATURES else enabled)
        for feature, enabled in flags.items()
    }


def all_features_disabled() -> Dict[str, bool]:
    return {feature: False for feature in ALL_FEATURES}


def parse_plan(value) -> SubscriptionPlan:
    """Coerce a plan name, rejecting anything outside the catalogue"""
    try:
        return SubscriptionPlan(value)
    except ValueError:
        raise ValidationError(
            "Invalid subscription plan",
            field_errors={
                "subscription_plan": [
                    f"Must be one of: {', '.join(p.value for p in SubscriptionPlan)}"
                ]
            },
        )
