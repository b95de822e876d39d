"""
Pytest fixtures for API and service tests.

Every test gets its own in-memory SQLite database; the app's session
dependency is overridden to use it.
"""

import itertools
import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENV", "test")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from app.core.database import build_engine, get_async_session
from app.core.security import create_access_token, hash_password
from app.main import app
from app.models import Category, Product, User, UserRole
from app.models.slug import slugify

DEFAULT_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def engine():
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(session_maker):
    """Insert a user directly; returns the persisted row."""
    counter = itertools.count(1)

    async def _create(role=UserRole.USER, password=DEFAULT_PASSWORD, **overrides):
        n = next(counter)
        data = {
            "username": f"user{n}",
            "email": f"user{n}@example.com",
            "password": hash_password(password),
            "fullName": f"User {n}",
            "phone": "0900000000",
            "role": role,
        }
        data.update(overrides)
        async with session_maker() as session:
            user = User(**data)
            session.add(user)
            await session.commit()
            await session.refresh(user)
        return user

    return _create


@pytest.fixture
def create_category(session_maker):
    async def _create(name, active=True):
        async with session_maker() as session:
            category = Category(name=name, slug=slugify(name), isActive=active)
            session.add(category)
            await session.commit()
            await session.refresh(category)
        return category

    return _create


@pytest.fixture
def create_product(session_maker):
    """Insert a product directly, bypassing the API."""
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = itertools.count(1)

    async def _create(seller, name, price, categories=(), **overrides):
        n = next(counter)
        data = {
            "name": name,
            "slug": slugify(name),
            "price": Decimal(str(price)),
            "stock": 5,
            "sellerId": seller.id,
            "createdAt": base_time + timedelta(minutes=n),
        }
        data.update(overrides)
        async with session_maker() as session:
            product = Product(**data)
            if categories:
                merged = [await session.merge(c) for c in categories]
                product.categories = merged
            session.add(product)
            await session.commit()
            await session.refresh(product)
        return product

    return _create


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token(user.id, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def seller(create_user):
    return await create_user(role=UserRole.SALE, username="seller_a", email="seller_a@example.com")


@pytest_asyncio.fixture
async def other_seller(create_user):
    return await create_user(role=UserRole.SALE, username="seller_b", email="seller_b@example.com")


@pytest_asyncio.fixture
async def admin(create_user):
    return await create_user(role=UserRole.ADMIN, username="admin", email="admin@example.com")
