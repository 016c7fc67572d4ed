"""
Lead Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel


class ConvertLeadCommand(BaseModel):
    tenant_name: str
    tenant_slug: str
    subscription_plan: str = "Kisan_Basic"
    admin_email: Optional[str] = None
    admin_name: Optional[str] = None


class ConvertLeadResponse(BaseModel):
    """
    temp_password is set only when credentials were issued: a new admin
    identity, or a reissue for this tenant's unchanged temporary password.
    admin_provisioning_status tells the caller whether the identity step
    needs a retry (POST /tenants/{id}/provision-admin).
    """

    tenant_id: str
    tenant_slug: str
    workflow_id: str
    temp_password: Optional[str] = None
    admin_user_id: Optional[str] = None
    admin_provisioning_status: str
