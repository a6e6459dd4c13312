import json
import logging

from stores.storage import StateStorage

logger = logging.getLogger(__name__)

FAVORITES_STORAGE_KEY = "favorites"


class FavoritesStore:
    """Product ids the visitor hearted, kept on the client (no account needed)."""

    def __init__(self, storage: StateStorage, product_ids: list[str] | None = None):
        self.storage = storage
        self._product_ids: list[str] = list(product_ids or [])

    @classmethod
    async def load(cls, storage: StateStorage) -> "FavoritesStore":
        raw = await storage.load(FAVORITES_STORAGE_KEY)
        if raw is None:
            return cls(storage)
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unparsable saved favorites: {e}")
            return cls(storage)
        if not isinstance(data, list):
            logger.warning(f"Discarding saved favorites: expected a list, got {type(data).__name__}")
            return cls(storage)
        # Keep first occurrence order, drop anything that is not an id
        product_ids = list(dict.fromkeys(str(entry) for entry in data if isinstance(entry, (str, int))))
        return cls(storage, product_ids)

    @property
    def product_ids(self) -> list[str]:
        return list(self._product_ids)

    def contains(self, product_id: str) -> bool:
        return product_id in self._product_ids

    async def _save(self) -> None:
        await self.storage.save(FAVORITES_STORAGE_KEY, json.dumps(self._product_ids))

    async def add(self, product_id: str) -> None:
        if product_id in self._product_ids:
            return
        self._product_ids.append(product_id)
        await self._save()

    async def remove(self, product_id: str) -> None:
        if product_id not in self._product_ids:
            return
        self._product_ids.remove(product_id)
        await self._save()

    async def toggle(self, product_id: str) -> bool:
        """Returns True when the product is a favorite afterwards."""
        if self.contains(product_id):
            await self.remove(product_id)
            return False
        await self.add(product_id)
        return True
