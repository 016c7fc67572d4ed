"""
Route-level permission checks.

Each dependency resolves the caller's RBAC context for the targeted tenant,
then requires a permission and, for tenant-scoped routes, tenant access.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, status

from tenancy.api.error import ClientError
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.access import LoadRBACContextUseCase
from tenancy.depends import get_current_user_id, get_unit_of_work
from tenancy.domain.permissions import Permission, RBACContext
from tenancy.libs.result import Error


async def authorize(
    uow: UnitOfWork,
    user_id: UUID,
    permission: Permission,
    tenant_id: Optional[UUID] = None,
) -> RBACContext:
    result = await LoadRBACContextUseCase(uow).execute(user_id, tenant_id)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    context = result.value
    if not context.has_permission(permission):
        raise ClientError(
            Error(
                "INSUFFICIENT_PERMISSION",
                f"Missing permission {permission.value}",
            ),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    if tenant_id is not None and not context.can_access_tenant(tenant_id):
        raise ClientError(
            Error("TENANT_ACCESS_DENIED", "No access to this tenant"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return context


def require_permission(permission: Permission):
    """Permission check for routes that are not scoped to one tenant"""

    async def dependency(
        user_id: UUID = Depends(get_current_user_id),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RBACContext:
        return await authorize(uow, user_id, permission)

    return dependency


def require_tenant_permission(permission: Permission):
    """Permission + tenant access check for /.../{tenant_id}/... routes"""

    async def dependency(
        tenant_id: UUID,
        user_id: UUID = Depends(get_current_user_id),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RBACContext:
        return await authorize(uow, user_id, permission, tenant_id)

    return dependency


def require_workflow_permission(permission: Permission):
    """Permission + tenant access check for /onboarding/workflows/{workflow_id}/... routes"""

    async def dependency(
        workflow_id: UUID,
        user_id: UUID = Depends(get_current_user_id),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RBACContext:
        async with uow:
            workflow = await uow.workflows.get_by_id(workflow_id)
        if workflow is None:
            raise ClientError(
                Error("WORKFLOW_NOT_FOUND", "Onboarding workflow not found"),
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return await authorize(uow, user_id, permission, workflow.tenant_id)

    return dependency
