"""
Unit tests for tenant input validation, plans and temporary credentials.
"""

import pytest

from tenancy.domain.entities import SubscriptionPlan
from tenancy.domain.errors import ValidationError
from tenancy.domain.plans import (
    WRITE_FEATURES,
    default_features,
    default_limits,
    parse_plan,
    without_write_features,
)
from tenancy.domain.services.credentials import generate_temp_password, meets_complexity
from tenancy.domain.services.validation import slug_errors, validate_tenant_fields


@pytest.mark.parametrize("slug", ["acme", "green-farms-2", "abc"])
def test_valid_slugs(slug):
    assert slug_errors(slug) == []


@pytest.mark.parametrize(
    "slug,message",
    [
        ("ab", "Slug must be at least 3 characters long"),
        ("Acme", "Slug must contain only lowercase letters, numbers, and hyphens"),
        ("-acme", "Slug cannot start or end with a hyphen"),
        ("ac--me", "Slug cannot contain consecutive hyphens"),
        ("admin", "This slug is reserved and cannot be used"),
        ("", "Slug is required"),
    ],
)
def test_invalid_slugs(slug, message):
    assert message in slug_errors(slug)


def test_slug_only_failure_uses_invalid_slug_code():
    with pytest.raises(ValidationError) as exc_info:
        validate_tenant_fields(name="Acme", slug="api", owner_email="a@acme.com")

    assert exc_info.value.code == "INVALID_SLUG"
    assert "slug" in exc_info.value.field_errors


def test_multiple_field_failures_collected():
    with pytest.raises(ValidationError) as exc_info:
        validate_tenant_fields(
            name="A",
            slug="ok-slug",
            owner_email="not-an-email",
            limits={"max_farmers": -1},
        )

    error = exc_info.value
    assert error.code == "VALIDATION_ERROR"
    assert set(error.field_errors) == {"name", "owner_email", "max_farmers"}
    assert error.to_error().details["fields"]["max_farmers"] == ["max_farmers must be non-negative"]


def test_missing_required_fields():
    with pytest.raises(ValidationError) as exc_info:
        validate_tenant_fields(require=("name", "slug"))

    assert set(exc_info.value.field_errors) == {"name", "slug"}


def test_plan_defaults():
    assert default_limits(SubscriptionPlan.Kisan_Basic)["max_farmers"] == 1000
    features = default_features(SubscriptionPlan.Kisan_Basic)
    assert features["farmer_management"] is True
    assert features["white_label"] is False


def test_parse_plan_rejects_unknown_plan():
    assert parse_plan("Shakti_Growth") == SubscriptionPlan.Shakti_Growth
    with pytest.raises(ValidationError) as exc_info:
        parse_plan("Gold")
    assert "subscription_plan" in exc_info.value.field_errors


def test_without_write_features_keeps_read_features():
    flags = without_write_features(default_features(SubscriptionPlan.Custom_Enterprise))

    assert all(flags[f] is False for f in WRITE_FEATURES)
    assert flags["basic_analytics"] is True


def test_temp_password_meets_complexity():
    for _ in range(20):
        password = generate_temp_password(12)
        assert len(password) == 12
        assert meets_complexity(password)


def test_temp_password_has_minimum_length():
    assert len(generate_temp_password(4)) == 12
    assert len(generate_temp_password(20)) == 20
