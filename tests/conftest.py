"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import os
import sys

# Test environment must be in place before config is imported anywhere
os.environ.setdefault("RUNTIME_ENVIRONMENT", "TEST")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEFAULT_LANGUAGE", "ar")
os.environ.setdefault("SENDGRID_API_KEY", "SG.test-key")
os.environ.setdefault("SENDGRID_STATUS_TEMPLATE_ID", "d-test-template")
os.environ.setdefault("CHECKOUT_APPLY_SHIPPING_SETTINGS", "false")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from models.base import Base
from models.bilingual import BilingualText
from models.cartItem import CartItemDTO
from models.product import ProductDTO, ProductSizeDTO
from stores.storage import MemoryStateStorage


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """In-memory SQLite shared by every connection of the test."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Sync session; repositories and services accept it in place of AsyncSession."""
    session = Session(engine, expire_on_commit=False)
    yield session
    session.rollback()
    session.close()


# ============================================================================
# Client State Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def storage():
    return MemoryStateStorage()


# ============================================================================
# Catalog Data Helpers
# ============================================================================

def make_cart_item(product_id: str = "p1", size: str = "50ml", price: float = 100.0,
                   quantity: int = 1, name_en: str = "Oud Royal", name_ar: str = "عود ملكي") -> CartItemDTO:
    return CartItemDTO(id=product_id, name=BilingualText(en=name_en, ar=name_ar), price=price,
                       image="", quantity=quantity, size=size)


def make_product(product_id: str, name_en: str = "", name_ar: str = "", description_en: str = "",
                 description_ar: str = "", category_id: str | None = None,
                 prices: tuple = (100.0,)) -> ProductDTO:
    return ProductDTO(
        id=product_id,
        name=BilingualText(en=name_en, ar=name_ar),
        description=BilingualText(en=description_en, ar=description_ar),
        category_id=category_id,
        sizes=[ProductSizeDTO(size=f"{50 * (index + 1)}ml", price=price, stock=10)
               for index, price in enumerate(prices)],
    )


@pytest.fixture
def cart_item_factory():
    return make_cart_item


@pytest.fixture
def product_factory():
    return make_product
