import json
from functools import lru_cache
from pathlib import Path

import config
from enums.language import Language
from enums.ui_entity import UIEntity

L10N_DIR = Path(__file__).resolve().parent.parent / "l10n"


class Localizator:

    @staticmethod
    @lru_cache(maxsize=None)
    def _load(language: str) -> dict:
        with open(L10N_DIR / f"{language}.json", "r", encoding="UTF-8") as f:
            return json.loads(f.read())

    @staticmethod
    def get_text(entity: UIEntity, key: str, lang: Language | str | None = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Entity type (ADMIN, USER, COMMON)
            key: Localization key
            lang: Optional language code ("en" or "ar").
                  If None, uses config.DEFAULT_LANGUAGE.
                  Routes always pass the request language explicitly.

        Returns:
            Localized text string

        Example:
            text = Localizator.get_text(UIEntity.USER, "order_placed", lang="en")
        """
        language = Language(lang) if lang is not None else config.DEFAULT_LANGUAGE
        data = Localizator._load(language.value)
        if entity == UIEntity.ADMIN:
            return data["admin"][key]
        elif entity == UIEntity.USER:
            return data["user"][key]
        else:
            return data["common"][key]

    @staticmethod
    def get_currency_symbol(currency: str, lang: Language | str | None = None) -> str:
        """Currency symbol for the store currency code, e.g. 'AED' -> 'د.إ' in Arabic."""
        return Localizator.get_text(UIEntity.COMMON, f"{currency.lower()}_symbol", lang=lang)
