"""Tenant schemas — payloads returned by the external tenant service."""
from typing import Optional

from pydantic import BaseModel


class Tenant(BaseModel):
    """Tenant as reported by the tenant service."""
    id: str
    name: str


class TenantLookupResponse(BaseModel):
    """Envelope: {"success": true, "data": {"id": ..., "name": ...}}."""
    success: bool = False
    data: Optional[Tenant] = None
