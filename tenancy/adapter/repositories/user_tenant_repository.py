from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenancy.app.repositories.user_tenant_repository import IUserTenantRepository
from tenancy.domain.base import utcnow
from tenancy.domain.entities import UserRole, UserTenant


class UserTenantRepository(IUserTenantRepository):
    """UserTenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[UserTenant]:
        """Get relationship by user and tenant"""
        stmt = (
            select(UserTenant)
            .where(UserTenant.user_id == user_id, UserTenant.tenant_id == tenant_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> List[UserTenant]:
        """Get all relationships for a user"""
        stmt = select(UserTenant).where(UserTenant.user_id == user_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def upsert(
        self,
        user_id: UUID,
        tenant_id: UUID,
        role: UserRole,
        is_active: bool = True,
        metadata: Optional[dict] = None,
    ) -> UserTenant:
        """INSERT ... ON CONFLICT (user_id, tenant_id) DO UPDATE"""
        dialect = self.session.get_bind().dialect.name
        insert = postgresql_insert if dialect == "postgresql" else sqlite_insert

        now = utcnow()
        stmt = insert(UserTenant).values(
            id=uuid4(),
            user_id=user_id,
            tenant_id=tenant_id,
            role=role,
            is_active=is_active,
            relationship_metadata=dict(metadata or {}),
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "tenant_id"],
            set_={
                "role": stmt.excluded.role,
                "is_active": stmt.excluded.is_active,
                "relationship_metadata": stmt.excluded.relationship_metadata,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        return await self.get_by_user_and_tenant(user_id, tenant_id)
