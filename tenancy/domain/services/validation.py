"""
Input validation rules for tenant data.
"""

import re
from typing import Dict, List, Optional

from tenancy.domain.errors import ValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

RESERVED_SLUGS = frozenset(
    {
        "api", "www", "admin", "app", "dashboard", "mail", "ftp",
        "localhost", "support", "help", "docs", "blog", "status",
        "dev", "staging", "test", "demo",
    }
)


def slug_errors(slug: Optional[str]) -> List[str]:
    if not slug or not slug.strip():
        return ["Slug is required"]

    errors = []
    if len(slug) < 3:
        errors.append("Slug must be at least 3 characters long")
    if len(slug) > 50:
        errors.append("Slug must be no more than 50 characters long")
    if not SLUG_PATTERN.match(slug):
        errors.append("Slug must contain only lowercase letters, numbers, and hyphens")
    if slug.startswith("-") or slug.endswith("-"):
        errors.append("Slug cannot start or end with a hyphen")
    if "--" in slug:
        errors.append("Slug cannot contain consecutive hyphens")
    if slug in RESERVED_SLUGS:
        errors.append("This slug is reserved and cannot be used")
    return errors


def name_errors(name: Optional[str]) -> List[str]:
    if not name or not name.strip():
        return ["Tenant name is required"]
    errors = []
    if len(name.strip()) < 2:
        errors.append("Tenant name must be at least 2 characters long")
    if len(name) > 100:
        errors.append("Tenant name must be no more than 100 characters long")
    return errors


def email_errors(email: Optional[str]) -> List[str]:
    if not email or not email.strip():
        return ["Email is required"]
    if not EMAIL_PATTERN.match(email.strip()):
        return ["Invalid email format"]
    return []


def validate_tenant_fields(
    name: Optional[str] = None,
    slug: Optional[str] = None,
    owner_email: Optional[str] = None,
    limits: Optional[Dict[str, Optional[int]]] = None,
    require: tuple = (),
) -> None:
    """
    Collect field-level errors and raise one ValidationError.

    Fields that are None are skipped unless listed in `require`.
    """
    field_errors: Dict[str, List[str]] = {}

    for field_name, value, check in (
        ("name", name, name_errors),
        ("slug", slug, slug_errors),
        ("owner_email", owner_email, email_errors),
    ):
        if value is None and field_name not in require:
            continue
        errors = check(value)
        if errors:
            field_errors[field_name] = errors

    for field_name, value in (limits or {}).items():
        if value is not None and value < 0:
            field_errors[field_name] = [f"{field_name} must be non-negative"]

    if field_errors:
        code = "INVALID_SLUG" if list(field_errors) == ["slug"] else "VALIDATION_ERROR"
        raise ValidationError("Invalid tenant data", code=code, field_errors=field_errors)
