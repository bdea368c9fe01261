"""
Data access for tenant-scoped tables.

Every function takes a session bound with ``bind_tenant_session`` and scopes
its statements to the bound restaurant. A lookup of another tenant's row
returns ``None`` exactly like a missing row.
"""
