from enum import Enum


class MediaEntity(Enum):
    CATEGORY = "categories"
    PRODUCT = "products"
    SETTINGS_HERO = "settings/hero"
    SETTINGS_ABOUT = "settings/about"

    @property
    def timestamped(self) -> bool:
        """Catalog uploads get a millisecond prefix, settings images keep their name."""
        return self in (MediaEntity.CATEGORY, MediaEntity.PRODUCT)
