"""Tests for the redis-backed key-value store"""
import asyncio

import fakeredis.aioredis
import pytest

from app.services.store.redis_store import RedisConnectionService, RedisKeyValueStore


@pytest.fixture
def redis_connection():
    connection = RedisConnectionService()
    connection.redis = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield connection
    connection.redis = None


@pytest.fixture
def store(redis_connection):
    return RedisKeyValueStore("orders", connection=redis_connection)


@pytest.mark.asyncio
async def test_keys_are_namespaced(store, redis_connection):
    other = RedisKeyValueStore("keys", connection=redis_connection)

    await store.set("123", "order")
    await other.set("123", "key")

    assert await redis_connection.redis.get("orders:123") == "order"
    assert await redis_connection.redis.get("keys:123") == "key"
    assert await store.get("123") == "order"
    assert await other.get("123") == "key"


@pytest.mark.asyncio
async def test_pop_has_single_winner(store):
    await store.set("INV1", "order")

    results = await asyncio.gather(*(store.pop("INV1") for _ in range(10)))

    assert results.count("order") == 1
    assert await store.exists("INV1") is False


@pytest.mark.asyncio
async def test_set_if_absent(store):
    assert await store.set_if_absent("KEY", "first") is True
    assert await store.set_if_absent("KEY", "second") is False
    assert await store.get("KEY") == "first"


@pytest.mark.asyncio
async def test_delete(store):
    await store.set("123", "order")
    assert await store.delete("123") is True
    assert await store.delete("123") is False
    assert await store.get("123") is None


@pytest.mark.asyncio
async def test_requires_connection():
    store = RedisKeyValueStore("orders", connection=RedisConnectionService())
    with pytest.raises(RuntimeError):
        await store.get("123")
