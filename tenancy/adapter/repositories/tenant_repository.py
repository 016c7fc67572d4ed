from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenancy.app.repositories.tenant_repository import ITenantRepository
from tenancy.domain.entities import Tenant, TenantStatus
from tenancy.domain.errors import ConflictError

LAPSABLE_STATUSES = (
    TenantStatus.pending_approval,
    TenantStatus.trial,
    TenantStatus.active,
    TenantStatus.suspended,
)


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        """Get tenant by slug"""
        stmt = select(Tenant).where(Tenant.slug == slug)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant; a duplicate slug raises SLUG_CONFLICT"""
        self.session.add(tenant)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Slug '{tenant.slug}' is already taken", code="SLUG_CONFLICT"
            ) from e
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def compare_and_set_status(
        self, tenant_id: UUID, expected: TenantStatus, values: Dict[str, Any]
    ) -> Optional[Tenant]:
        """
        Conditional UPDATE ... WHERE id = :id AND status = :expected.

        A row count of zero means the status moved underneath us.
        """
        stmt = (
            update(Tenant)
            .where(Tenant.id == tenant_id, Tenant.status == expected)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.session.get(Tenant, tenant_id, populate_existing=True)

    async def list_lapsed(self, now: datetime) -> List[Tenant]:
        """
        Non-terminal tenants past trial_ends_at or subscription_end_date.

        Activation clears trial_ends_at, so a lapsed trial date only matters
        for tenants that never left trial (including suspended and pending ones).
        """
        stmt = select(Tenant).where(
            Tenant.status.in_(LAPSABLE_STATUSES),
            or_(Tenant.trial_ends_at < now, Tenant.subscription_end_date < now),
        )
        result = await self.session.exec(stmt)
        return list(result.all())
