"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock

# Set test environment variables
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from gomarket.cart import CartStore, MemoryKeyValueStore, ProductSelection, reset_cart_store


@pytest.fixture
def memory_storage():
    """Empty in-memory key-value store"""
    return MemoryKeyValueStore()


@pytest.fixture
def store(memory_storage):
    """Cart store over in-memory storage (not loaded yet)"""
    return CartStore(memory_storage, key="@GoMarketplace:products")


@pytest.fixture
def keyboard():
    """Sample product selection"""
    return ProductSelection(
        id="p1",
        title="Mechanical Keyboard",
        image_url="https://cdn.example.com/keyboard.png",
        price=10.0,
    )


@pytest.fixture
def mouse():
    """Second sample product selection"""
    return ProductSelection(
        id="p2",
        title="Wireless Mouse",
        image_url="https://cdn.example.com/mouse.png",
        price=5.0,
    )


@pytest.fixture
def mock_redis():
    """Mock Upstash async Redis client"""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    return redis


@pytest.fixture(autouse=True)
def clean_registry():
    """Make sure no test leaks the process-wide cart store"""
    reset_cart_store()
    yield
    reset_cart_store()
