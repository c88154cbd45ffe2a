# tests/conftest.py
import os

# Must be set before shopkeep modules create the engine or cache settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("ADMIN_PASSWORD", "")

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shopkeep import models  # noqa: F401
from shopkeep.core.enums import UserRole
from shopkeep.core.security import hash_password
from shopkeep.database import Base
from shopkeep.models.location import Location
from shopkeep.models.product import Product
from shopkeep.models.user import User

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "correct-horse"


@pytest.fixture(scope="function")
async def test_engine():
    """In-memory database with all tables, recreated for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
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
async def db_session(test_engine):
    """Provide a database session for tests"""
    async_session_local = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session_local() as session:
        yield session
        await session.rollback()


async def _add_user(session: AsyncSession, username: str, role: UserRole) -> User:
    user = User(username=username, password_hash=hash_password(TEST_PASSWORD), role=role)
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def admin_user(db_session):
    return await _add_user(db_session, "admin", UserRole.ADMIN)


@pytest.fixture
async def clerk_user(db_session):
    return await _add_user(db_session, "clerk", UserRole.USER)


@pytest.fixture
async def shop_location(db_session):
    location = Location(name="Main Street", created_by="admin", last_updated_by="admin")
    db_session.add(location)
    await db_session.commit()
    return location


@pytest.fixture
async def make_product(db_session):
    """Factory for stored products"""
    async def _make(code: str, stock: int = 10, retail: str = "10.00", wholesale: str = "6.00",
                    low_stock_alert: int = 2, name: str = None) -> Product:
        product = Product(
            code=code,
            name=name or f"Product {code}",
            retail_price=Decimal(retail),
            wholesale_price=Decimal(wholesale),
            stock=stock,
            low_stock_alert=low_stock_alert,
            created_by="admin",
            last_updated_by="admin",
        )
        db_session.add(product)
        await db_session.commit()
        return product

    return _make


def make_actor(user_id: int = 1, username: str = "admin", role: UserRole = UserRole.ADMIN) -> User:
    """Detached User for tests that never touch the database"""
    return User(id=user_id, username=username, password_hash="not-a-hash", role=role)
