"""
Tests for table defaults and timestamp handling.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.dao.user_dao import user_dao
from app.models import Category, Product, User


def assert_aware_utc(value: datetime):
    assert value.tzinfo is not None
    assert value.utcoffset() == timezone.utc.utcoffset(value)


@pytest.mark.parametrize("row", [
    lambda: User(username="u", email="u@example.com", password="x", fullName="U", phone="1"),
    lambda: Category(name="Shoes", slug="shoes"),
    lambda: Product(name="Shoe", slug="shoe", price=Decimal("1"), sellerId="seller"),
])
def test_timestamps_default_to_aware_utc(row):
    instance = row()

    assert_aware_utc(instance.createdAt)
    assert_aware_utc(instance.updatedAt)


class RecordingSession:
    """Stands in for AsyncSession and keeps whatever was added."""

    def __init__(self):
        self.added = []

    def add(self, obj):
        self.added.append(obj)

    async def commit(self):
        pass

    async def refresh(self, obj):
        pass

    async def rollback(self):
        pass


async def test_save_stamps_aware_updated_at():
    user = User(username="u", email="u@example.com", password="x", fullName="U", phone="1")
    user.updatedAt = datetime(2020, 1, 1, tzinfo=timezone.utc)
    session = RecordingSession()

    saved = await user_dao.save(session, user)

    assert session.added == [user]
    assert_aware_utc(saved.updatedAt)
    assert saved.updatedAt > datetime(2020, 1, 1, tzinfo=timezone.utc)


async def test_every_write_path_persists(client, admin, seller, auth_headers):
    register = await client.post("/api/v1/auth/register", json={
        "username": "carol", "email": "carol@example.com", "password": "secret123",
        "fullName": "Carol", "phone": "0900",
    })
    category = await client.post("/api/v1/categories", json={"name": "Shoes"}, headers=auth_headers(admin))
    product = await client.post(
        "/api/v1/products",
        json={"name": "Runner", "price": 10, "stock": 1, "categories": [category.json()["data"]["id"]]},
        headers=auth_headers(seller),
    )
    product_id = product.json()["data"]["id"]
    update = await client.put(
        f"/api/v1/products/{product_id}", json={"stock": 3}, headers=auth_headers(seller)
    )
    delete = await client.delete(f"/api/v1/products/{product_id}", headers=auth_headers(seller))

    assert [r.status_code for r in (register, category, product, update, delete)] == [201, 201, 201, 200, 200]
