"""
Unit Tests: client-state persistence adapters and the favorites/language stores.
"""

import asyncio
import json
from contextlib import asynccontextmanager

import pytest

from enums.language import Language
from exceptions import ClientStateBusyException
from stores.cart import CART_STORAGE_KEY, CartStore
from stores.favorites import FavoritesStore, FAVORITES_STORAGE_KEY
from stores.language import LanguageStore, LANGUAGE_STORAGE_KEY
from stores.storage import MemoryStateStorage, RedisStateStorage
from web.dependencies import get_cart


class TestRedisStateStorage:

    @pytest.mark.asyncio
    async def test_keys_are_namespaced_per_client(self, redis_client):
        first = RedisStateStorage(redis_client, "client-a")
        second = RedisStateStorage(redis_client, "client-b")

        await first.save("cart", "[]")

        assert await first.load("cart") == "[]"
        assert await second.load("cart") is None
        assert await redis_client.get("store:client:client-a:cart") == "[]"

    @pytest.mark.asyncio
    async def test_ttl_is_set_on_save(self, redis_client):
        storage = RedisStateStorage(redis_client, "client-a", ttl_seconds=3600)

        await storage.save("language", "en")

        ttl = await redis_client.ttl("store:client:client-a:language")
        assert 0 < ttl <= 3600

    @pytest.mark.asyncio
    async def test_delete(self, redis_client):
        storage = RedisStateStorage(redis_client, "client-a")
        await storage.save("cart", "[]")

        await storage.delete("cart")

        assert await storage.load("cart") is None

    @pytest.mark.asyncio
    async def test_cart_round_trip_through_redis(self, redis_client, cart_item_factory):
        storage = RedisStateStorage(redis_client, "client-a")
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory("p1", "50ml", quantity=2))

        restored = await CartStore.load(RedisStateStorage(redis_client, "client-a"))

        assert restored.item_count == 2


class TestFavoritesStore:

    @pytest.mark.asyncio
    async def test_toggle(self, storage):
        favorites = await FavoritesStore.load(storage)

        assert await favorites.toggle("p1") is True
        assert favorites.contains("p1")
        assert await favorites.toggle("p1") is False
        assert favorites.product_ids == []

    @pytest.mark.asyncio
    async def test_add_is_idempotent_and_persisted(self, storage):
        favorites = await FavoritesStore.load(storage)

        await favorites.add("p1")
        await favorites.add("p1")
        await favorites.add("p2")

        assert json.loads(storage.data[FAVORITES_STORAGE_KEY]) == ["p1", "p2"]

    @pytest.mark.asyncio
    async def test_non_list_data_loads_empty(self):
        favorites = await FavoritesStore.load(MemoryStateStorage({FAVORITES_STORAGE_KEY: '{"p1": true}'}))

        assert favorites.product_ids == []


class TestLanguageStore:

    @pytest.mark.asyncio
    async def test_default_is_arabic(self, storage):
        store = await LanguageStore.load(storage)

        assert store.language == Language.AR
        assert store.direction == "rtl"

    @pytest.mark.asyncio
    async def test_toggle_persists(self, storage):
        store = await LanguageStore.load(storage)

        assert await store.toggle() == Language.EN
        assert storage.data[LANGUAGE_STORAGE_KEY] == "en"
        assert (await LanguageStore.load(storage)).direction == "ltr"

    @pytest.mark.asyncio
    async def test_unknown_saved_value_falls_back_to_default(self):
        store = await LanguageStore.load(MemoryStateStorage({LANGUAGE_STORAGE_KEY: "fr"}))

        assert store.language == Language.AR


class TestClientStateLocking:
    """Requests of one client go through get_cart, which holds the cart lock from load to save."""

    @staticmethod
    async def add_through_dependency(storage, item):
        async with asynccontextmanager(get_cart)(storage) as cart:
            await cart.add(item)

    @pytest.mark.asyncio
    async def test_concurrent_adds_through_redis_sum_up(self, redis_client, cart_item_factory):
        await asyncio.gather(
            self.add_through_dependency(RedisStateStorage(redis_client, "client-1"),
                                        cart_item_factory("p1", "50ml", quantity=2)),
            self.add_through_dependency(RedisStateStorage(redis_client, "client-1"),
                                        cart_item_factory("p1", "50ml", quantity=3)),
        )

        cart = await CartStore.load(RedisStateStorage(redis_client, "client-1"))
        assert [(item.id, item.size, item.quantity) for item in cart.items] == [("p1", "50ml", 5)]
        assert await redis_client.get("store:client:client-1:cart:lock") is None

    @pytest.mark.asyncio
    async def test_concurrent_adds_in_memory_sum_up(self, storage, cart_item_factory):
        await asyncio.gather(*[
            self.add_through_dependency(storage, cart_item_factory("p1", "50ml", quantity=quantity))
            for quantity in (1, 2, 3, 4)
        ])

        assert (await CartStore.load(storage)).item_count == 10

    @pytest.mark.asyncio
    async def test_other_clients_are_not_blocked(self, redis_client):
        first = RedisStateStorage(redis_client, "client-a", lock_wait_seconds=0.2)
        second = RedisStateStorage(redis_client, "client-b", lock_wait_seconds=0.2)

        async with first.lock(CART_STORAGE_KEY):
            async with second.lock(CART_STORAGE_KEY):
                await second.save(CART_STORAGE_KEY, "[]")

        assert await second.load(CART_STORAGE_KEY) == "[]"

    @pytest.mark.asyncio
    async def test_held_lock_reports_busy(self, redis_client):
        holder = RedisStateStorage(redis_client, "client-1")
        waiter = RedisStateStorage(redis_client, "client-1", lock_wait_seconds=0.2)

        async with holder.lock(CART_STORAGE_KEY):
            with pytest.raises(ClientStateBusyException) as exc_info:
                async with waiter.lock(CART_STORAGE_KEY):
                    pass

        assert exc_info.value.key == "cart"
        assert exc_info.value.client_id == "client-1"

    @pytest.mark.asyncio
    async def test_lock_released_when_request_fails(self, redis_client):
        storage = RedisStateStorage(redis_client, "client-1", lock_wait_seconds=0.2)

        with pytest.raises(RuntimeError):
            async with storage.lock(CART_STORAGE_KEY):
                raise RuntimeError("handler failed")

        async with storage.lock(CART_STORAGE_KEY):
            await storage.save(CART_STORAGE_KEY, "[]")
