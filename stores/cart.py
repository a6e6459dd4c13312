"""
Client cart.

A CartStore is created per client and owns one list of CartItemDTO. Line
items are identified by (product id, size); adding the same pair again
merges quantities. Every mutation is written through to the StateStorage
under the "cart" key, so the cart survives page reloads and restarts.
"""

import json
import logging

from pydantic import ValidationError

from models.cartItem import CartItemDTO, CartSummaryDTO
from stores.storage import StateStorage

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart"


def cart_total(items: list[CartItemDTO]) -> float:
    return sum(item.line_total for item in items)


def cart_item_count(items: list[CartItemDTO]) -> int:
    return sum(item.quantity for item in items)


class CartStore:

    def __init__(self, storage: StateStorage, items: list[CartItemDTO] | None = None):
        self.storage = storage
        self._items: list[CartItemDTO] = list(items or [])

    @classmethod
    async def load(cls, storage: StateStorage) -> "CartStore":
        """
        Restore the cart saved under the "cart" key.

        Missing, unparsable or non-list data gives an empty cart. So does a
        list with any invalid entry: a half-restored cart would show wrong totals.
        """
        raw = await storage.load(CART_STORAGE_KEY)
        if raw is None:
            return cls(storage)
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unparsable saved cart: {e}")
            return cls(storage)
        if not isinstance(data, list):
            logger.warning(f"Discarding saved cart: expected a list, got {type(data).__name__}")
            return cls(storage)
        try:
            items = [CartItemDTO.model_validate(entry) for entry in data]
        except ValidationError as e:
            logger.warning(f"Discarding saved cart with invalid items: {e.error_count()} error(s)")
            return cls(storage)
        return cls(storage, items)

    @property
    def items(self) -> list[CartItemDTO]:
        return list(self._items)

    @property
    def total(self) -> float:
        return cart_total(self._items)

    @property
    def item_count(self) -> int:
        return cart_item_count(self._items)

    def summary(self) -> CartSummaryDTO:
        return CartSummaryDTO(items=self.items, total=self.total, item_count=self.item_count)

    def _find(self, product_id: str, size: str) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == product_id and item.size == size:
                return index
        return None

    async def _save(self) -> None:
        await self.storage.save(
            CART_STORAGE_KEY,
            json.dumps([item.model_dump() for item in self._items], ensure_ascii=False)
        )

    async def add(self, item: CartItemDTO) -> None:
        """
        Add a line item. An existing (id, size) entry gets item.quantity added to it.

        Stock is not checked here; over-ordering is only caught by the shop.
        """
        index = self._find(item.id, item.size)
        if index is None:
            self._items.append(item.model_copy())
        else:
            existing = self._items[index]
            self._items[index] = existing.model_copy(update={'quantity': existing.quantity + item.quantity})
        await self._save()

    async def remove(self, product_id: str, size: str) -> None:
        index = self._find(product_id, size)
        if index is None:
            return
        del self._items[index]
        await self._save()

    async def update_quantity(self, product_id: str, size: str, quantity: int) -> None:
        # Quantities below 1 are ignored, removal goes through remove()
        if quantity < 1:
            return
        index = self._find(product_id, size)
        if index is None:
            return
        self._items[index] = self._items[index].model_copy(update={'quantity': quantity})
        await self._save()

    async def clear(self) -> None:
        self._items = []
        await self._save()
