#!/usr/bin/env python3
"""
Seed script to create a demo restaurant with menu data.

Expects a migrated database (``alembic upgrade head``).
"""

import asyncio

DEMO_EMAIL = "hello@marios-kitchen.example.com"
DEMO_ADMIN_PASSWORD = "mario12345"

DEMO_MENU = {
    "Pizza": [
        ("Margherita", "Tomato, mozzarella, basil", 12.50),
        ("Diavola", "Spicy salami, mozzarella", 14.00),
    ],
    "Pasta": [
        ("Carbonara", "Guanciale, egg, pecorino", 13.00),
        ("Arrabbiata", "Tomato, garlic, chili", 11.00),
    ],
    "Drinks": [
        ("Lemonade", "House made", 3.50),
    ],
}


async def seed_demo_data():
    """Seed demo data for development"""
    from app.config import settings
    from app.database import SessionLocal
    from app.models.menu import MenuCategory, MenuItem
    from app.models.restaurant import Restaurant, RestaurantStatus
    from app.models.user import User, UserRole
    from app.repositories import categories as categories_repo
    from app.repositories import menu_items as menu_items_repo
    from app.repositories import restaurants as restaurants_repo
    from app.repositories import users as users_repo
    from app.security import get_password_hash
    from app.services.platform import bootstrap_platform
    from app.tenancy import TenantContext, tenant_session

    async with SessionLocal() as db:
        await bootstrap_platform(db, settings)

        existing = await restaurants_repo.get_restaurant_by_email(db, DEMO_EMAIL)
        if existing:
            print("Demo data already exists. Skipping...")
            return

        restaurant = await restaurants_repo.create_restaurant(
            db,
            Restaurant(
                name="Mario's Italian Kitchen",
                description="Neighbourhood trattoria",
                address="1 Demo Street",
                email=DEMO_EMAIL,
                status=RestaurantStatus.ACTIVE,
                is_active=True,
                contact_name="Mario Rossi",
                contact_email="mario@marios-kitchen.example.com",
            ),
        )
        await db.commit()
        restaurant_id = restaurant.id

    print(f"Created restaurant: Mario's Italian Kitchen (ID: {restaurant_id})")

    item_count = 0
    async with tenant_session(TenantContext(user_id=None, restaurant_id=restaurant_id, role=UserRole.ADMIN)) as db:
        await users_repo.create_user(
            db,
            User(
                email="mario@marios-kitchen.example.com",
                hashed_password=get_password_hash(DEMO_ADMIN_PASSWORD),
                first_name="Mario",
                last_name="Rossi",
                role=UserRole.ADMIN,
                is_active=True,
            ),
        )

        for order, (category_name, items) in enumerate(DEMO_MENU.items()):
            category = await categories_repo.create_category(
                db, MenuCategory(name=category_name, display_order=order)
            )
            for position, (name, description, price) in enumerate(items):
                await menu_items_repo.create_menu_item(
                    db,
                    MenuItem(
                        category_id=category.id,
                        name=name,
                        description=description,
                        price=price,
                        display_order=position,
                    ),
                )
                item_count += 1

    print(f"""
Demo data created successfully!

Restaurant: Mario's Italian Kitchen
  ID: {restaurant_id}

Restaurant Admin:
  Email: mario@marios-kitchen.example.com
  Password: {DEMO_ADMIN_PASSWORD}

Menu: {item_count} items created
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
