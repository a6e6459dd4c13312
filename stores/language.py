import logging

import config
from enums.language import Language
from stores.storage import StateStorage

logger = logging.getLogger(__name__)

LANGUAGE_STORAGE_KEY = "language"


class LanguageStore:

    def __init__(self, storage: StateStorage, language: Language | None = None):
        self.storage = storage
        self.language = language or config.DEFAULT_LANGUAGE

    @classmethod
    async def load(cls, storage: StateStorage) -> "LanguageStore":
        raw = await storage.load(LANGUAGE_STORAGE_KEY)
        if raw is None:
            return cls(storage)
        try:
            return cls(storage, Language(raw))
        except ValueError:
            logger.warning(f"Ignoring unknown saved language '{raw}'")
            return cls(storage)

    @property
    def direction(self) -> str:
        return self.language.direction

    async def set(self, language: Language | str) -> None:
        self.language = Language(language)
        await self.storage.save(LANGUAGE_STORAGE_KEY, self.language.value)

    async def toggle(self) -> Language:
        await self.set(self.language.toggled())
        return self.language
