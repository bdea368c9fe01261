"""
Tenant isolation.

Requests carry a ``TenantContext`` taken from the access token. The session
binder records it on the database session and mirrors it into transaction
local PostgreSQL settings read by the row-level security policies, while the
repositories filter every query they build by the bound restaurant.
"""

from app.tenancy.context import TenantContext
from app.tenancy.binder import (
    bind_tenant_session,
    bound_context,
    require_bound_context,
    acting_for_tenant,
    tenant_session,
)
from app.tenancy.policies import TENANT_TABLES, tenant_clause

__all__ = [
    "TenantContext",
    "bind_tenant_session",
    "bound_context",
    "require_bound_context",
    "acting_for_tenant",
    "tenant_session",
    "TENANT_TABLES",
    "tenant_clause",
]
