"""
Access Use Case DTOs
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class TenantAccessStatus(BaseModel):
    """Outcome of validating one user's access to one tenant"""

    tenant_id: str
    user_exists_in_auth: bool = False
    relationship_exists: bool = False
    relationship_active: bool = False
    role: Optional[str] = None
    is_super_admin: bool = False
    is_valid: bool = False
    can_auto_fix: bool = False
    issues: List[str] = Field(default_factory=list)

    @classmethod
    def unvalidatable(cls, tenant_id, issue: str) -> "TenantAccessStatus":
        return cls(tenant_id=str(tenant_id), issues=[issue])


class MultipleTenantAccessResponse(BaseModel):
    results: Dict[str, TenantAccessStatus]
    valid_count: int
    invalid_count: int


class RelationshipResponse(BaseModel):
    user_id: str
    tenant_id: str
    role: str
    is_active: bool
