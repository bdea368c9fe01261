"""Row-level security

Revision ID: 002
Revises: 001
Create Date: 2024-01-02 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op

from app.tenancy.policies import (
    app_role_statements,
    create_policy_statements,
    disable_rls_statements,
    drop_policy_statements,
    enable_rls_statements,
)

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Role first: policies are attached to it
    for statement in app_role_statements():
        op.execute(statement)
    for statement in enable_rls_statements():
        op.execute(statement)
    for statement in create_policy_statements():
        op.execute(statement)


def downgrade() -> None:
    for statement in drop_policy_statements():
        op.execute(statement)
    for statement in disable_rls_statements():
        op.execute(statement)
