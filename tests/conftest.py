"""Test configuration and fixtures"""

from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base, get_db
from app.main import app
from app.models.menu import MenuCategory, MenuItem
from app.models.restaurant import Restaurant, RestaurantStatus
from app.models.user import User, UserRole
from app.security import create_access_token, get_password_hash
from app.services.email import BaseEmailSender, get_email_sender
from app.services.platform import bootstrap_platform


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

KAM_EMAIL = "kam@platform.example.com"
KAM_PASSWORD = "kam-password-1"
ADMIN_PASSWORD = "admin-password-1"


class RecordingEmailSender(BaseEmailSender):
    """Collects messages instead of sending them"""

    def __init__(self, fail: bool = False):
        self.sent: List[dict] = []
        self.fail = fail

    async def send_template(self, template_id, to_email, to_name=None, params=None):
        if self.fail:
            raise RuntimeError("provider unavailable")
        self.sent.append(
            {"template_id": template_id, "to_email": to_email, "to_name": to_name, "params": params or {}}
        )


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "development",
        "bootstrap_admin_email": KAM_EMAIL,
        "bootstrap_admin_password": KAM_PASSWORD,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
async def engine():
    """One in-memory database shared by every session of a test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    """Unbound session for arranging test data"""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def platform_kam(test_db) -> User:
    """Platform organization plus its bootstrap KAM; tenants created later get ids >= 2"""
    return await bootstrap_platform(test_db, make_settings())


async def create_restaurant(
    db: AsyncSession,
    name: str,
    email: str,
    status: RestaurantStatus = RestaurantStatus.ACTIVE,
    contact_email: Optional[str] = None,
) -> Restaurant:
    restaurant = Restaurant(
        name=name,
        email=email,
        status=status,
        is_active=status == RestaurantStatus.ACTIVE,
        contact_name=f"{name} Owner",
        contact_email=contact_email or f"owner@{email.split('@')[1]}",
    )
    db.add(restaurant)
    await db.commit()
    return restaurant


async def create_user(
    db: AsyncSession,
    restaurant: Restaurant,
    email: str,
    role: UserRole = UserRole.ADMIN,
    password: str = ADMIN_PASSWORD,
) -> User:
    user = User(
        restaurant_id=restaurant.id,
        email=email,
        hashed_password=get_password_hash(password),
        first_name="Test",
        last_name=role.value,
        role=role,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    return user


async def create_menu(db: AsyncSession, restaurant: Restaurant, items) -> List[MenuItem]:
    category = MenuCategory(restaurant_id=restaurant.id, name="Mains", display_order=0)
    db.add(category)
    await db.flush()

    created = []
    for name, price, available in items:
        item = MenuItem(
            restaurant_id=restaurant.id,
            category_id=category.id,
            name=name,
            price=price,
            is_available=available,
        )
        db.add(item)
        created.append(item)
    await db.commit()
    return created


@pytest.fixture
async def restaurant_a(test_db, platform_kam) -> Restaurant:
    return await create_restaurant(test_db, "Trattoria A", "a@trattoria-a.example.com")


@pytest.fixture
async def restaurant_b(test_db, platform_kam) -> Restaurant:
    return await create_restaurant(test_db, "Bistro B", "b@bistro-b.example.com")


@pytest.fixture
async def admin_a(test_db, restaurant_a) -> User:
    return await create_user(test_db, restaurant_a, "admin@trattoria-a.example.com")


@pytest.fixture
async def admin_b(test_db, restaurant_b) -> User:
    return await create_user(test_db, restaurant_b, "admin@bistro-b.example.com")


@pytest.fixture
async def staff_a(test_db, restaurant_a) -> User:
    return await create_user(test_db, restaurant_a, "staff@trattoria-a.example.com", role=UserRole.STAFF)


@pytest.fixture
async def menu_a(test_db, restaurant_a) -> List[MenuItem]:
    return await create_menu(
        test_db,
        restaurant_a,
        [("Margherita", 12.50, True), ("Lasagna", 15.00, True), ("Tiramisu", 6.00, False)],
    )


@pytest.fixture
async def menu_b(test_db, restaurant_b) -> List[MenuItem]:
    return await create_menu(test_db, restaurant_b, [("Steak Frites", 24.00, True)])


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
async def client(session_factory, email_sender):
    """Create test client; every request gets its own session, like production"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
