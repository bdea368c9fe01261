"""
Row-level security policy set.

One predicate guards every tenant table:

    restaurant_id = <bound restaurant>
    OR (restaurant_id = <platform organization> AND <bound role> IN ('KAM', 'Admin'))

The PostgreSQL policies are generated here and applied by the
``002_row_level_security`` migration. Independently of them, the
repositories add ``tenant_clause`` to every query they build, so either
layer alone keeps tenants apart.
"""

from typing import List

from app.models.restaurant import PLATFORM_ORGANIZATION_ID
from app.models.user import PLATFORM_ROLES
from app.tenancy.context import TenantContext

# Session settings written by the binder and read by the policies
RESTAURANT_SETTING = "app.current_restaurant"
ROLE_SETTING = "app.current_user_role"

APP_ROLE = "restaurant_app_user"

TENANT_TABLES = (
    "users",
    "menu_categories",
    "menu_items",
    "reservations",
    "orders",
    "order_items",
)


def policy_name(table: str) -> str:
    return f"isolate_{table}"


def policy_predicate() -> str:
    """SQL predicate shared by the USING and WITH CHECK clauses.

    ``current_setting(..., true)`` yields NULL when the binder never ran, so an
    unbound session matches no rows instead of failing or matching all.
    """
    roles = ", ".join(f"'{role.value}'" for role in sorted(PLATFORM_ROLES, key=lambda r: r.value))
    return (
        f"(restaurant_id = NULLIF(current_setting('{RESTAURANT_SETTING}', true), '')::integer) "
        f"OR (restaurant_id = {PLATFORM_ORGANIZATION_ID} "
        f"AND current_setting('{ROLE_SETTING}', true) IN ({roles}))"
    )


def enable_rls_statements(tables=TENANT_TABLES) -> List[str]:
    return [f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY" for table in tables]


def disable_rls_statements(tables=TENANT_TABLES) -> List[str]:
    return [f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY" for table in reversed(tables)]


def app_role_statements(role: str = APP_ROLE) -> List[str]:
    """Create the role request transactions switch to, and grant it DML"""
    return [
        f"""
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT FROM pg_roles WHERE rolname = '{role}') THEN
                CREATE ROLE {role};
            END IF;
        END
        $$;
        """,
        f"GRANT {role} TO CURRENT_USER",
        f"GRANT USAGE ON SCHEMA public TO {role}",
        f"GRANT SELECT, INSERT, UPDATE, DELETE ON ALL TABLES IN SCHEMA public TO {role}",
        f"GRANT USAGE, SELECT ON ALL SEQUENCES IN SCHEMA public TO {role}",
        f"ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT SELECT, INSERT, UPDATE, DELETE ON TABLES TO {role}",
        f"ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT USAGE, SELECT ON SEQUENCES TO {role}",
    ]


def create_policy_statements(tables=TENANT_TABLES, role: str = APP_ROLE) -> List[str]:
    """One permissive FOR ALL policy per table, same predicate for read and write"""
    predicate = policy_predicate()
    statements = []
    for table in tables:
        name = policy_name(table)
        statements.append(f"DROP POLICY IF EXISTS {name} ON {table}")
        statements.append(
            f"CREATE POLICY {name} ON {table} FOR ALL TO {role} "
            f"USING ({predicate}) WITH CHECK ({predicate})"
        )
    return statements


def drop_policy_statements(tables=TENANT_TABLES) -> List[str]:
    return [f"DROP POLICY IF EXISTS {policy_name(table)} ON {table}" for table in reversed(tables)]


def tenant_clause(model, ctx: TenantContext):
    """Application-side tenant filter for ``model``.

    Strictly the bound restaurant. The platform organization exception of the
    database policy is left to the database: platform staff are themselves
    bound to the platform organization, and ordinary tenants never need its
    rows.
    """
    return model.restaurant_id == ctx.restaurant_id
