"""Helpers shared by the tenant-scoped repositories"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.tenancy.binder import require_bound_context
from app.tenancy.policies import tenant_clause


def scoped_select(db: AsyncSession, model):
    """``SELECT model`` restricted to the restaurant bound on ``db``"""
    ctx = require_bound_context(db)
    return select(model).where(tenant_clause(model, ctx))


def add_scoped(db: AsyncSession, instance):
    """Stage ``instance`` under the bound restaurant.

    Any ``restaurant_id`` set by the caller is overwritten.
    """
    ctx = require_bound_context(db)
    instance.restaurant_id = ctx.restaurant_id
    db.add(instance)
    return instance


def apply_changes(instance, changes: dict):
    """Copy ``changes`` onto ``instance``, never moving it to another tenant"""
    for field, value in changes.items():
        if field in ("id", "restaurant_id"):
            continue
        setattr(instance, field, value)
    return instance
