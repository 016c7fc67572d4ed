from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenancy.app.repositories.lead_repository import ILeadRepository
from tenancy.domain.entities import Lead, LeadStatus


class LeadRepository(ILeadRepository):
    """Lead repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, lead_id: UUID) -> Optional[Lead]:
        """Get lead by ID"""
        stmt = select(Lead).where(Lead.id == lead_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_converted(
        self, lead_id: UUID, tenant_id: UUID, converted_at: datetime
    ) -> bool:
        """Conditional UPDATE ... WHERE id = :id AND status = 'qualified'"""
        stmt = (
            update(Lead)
            .where(Lead.id == lead_id, Lead.status == LeadStatus.qualified)
            .values(
                status=LeadStatus.converted,
                converted_tenant_id=tenant_id,
                converted_at=converted_at,
                updated_at=converted_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
