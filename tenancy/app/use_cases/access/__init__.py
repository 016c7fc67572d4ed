"""Access validation and RBAC context use cases."""

from .create_user_tenant_relationship_use_case import CreateUserTenantRelationshipUseCase
from .load_rbac_context_use_case import LoadRBACContextUseCase
from .validate_multiple_tenants_use_case import ValidateMultipleTenantsUseCase
from .validate_tenant_access_use_case import ValidateTenantAccessUseCase

__all__ = [
    "ValidateTenantAccessUseCase",
    "ValidateMultipleTenantsUseCase",
    "CreateUserTenantRelationshipUseCase",
    "LoadRBACContextUseCase",
]
