"""Lead conversion use cases."""

from .convert_lead_to_tenant_use_case import ConvertLeadToTenantUseCase

__all__ = ["ConvertLeadToTenantUseCase"]
