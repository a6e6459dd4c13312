"""
Store settings (settings/general).

The document keeps the admin form's flat layout: bilingual fields are
split into "<name>_en" / "<name>_ar" keys, nested groups (socialMedia,
shipping, hero, about) are maps. Saving deep-merges into the stored
document, so keys the form does not know about survive.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from models.bilingual import BilingualText
from models.store_settings import (
    StoreSettingsDTO,
    SocialMediaDTO,
    ShippingSettingsDTO,
    HeroSectionDTO,
    AboutSectionDTO,
)
from repositories.store_settings import StoreSettingsRepository


def _flat(prefix: str, value: BilingualText) -> dict:
    return {f"{prefix}_en": value.en, f"{prefix}_ar": value.ar}


def _deep_merge(existing: dict, incoming: dict) -> dict:
    merged = dict(existing)
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def settings_to_document(settings: StoreSettingsDTO) -> dict:
    return {
        **_flat("storeName", settings.store_name),
        **_flat("storeDescription", settings.store_description),
        "contactEmail": settings.contact_email,
        "contactPhone": settings.contact_phone,
        **_flat("address", settings.address),
        "socialMedia": settings.social_media.model_dump(),
        "shipping": {
            "freeShippingThreshold": settings.shipping.free_shipping_threshold,
            "shippingCost": settings.shipping.shipping_cost,
        },
        "currency": settings.currency,
        "taxRate": settings.tax_rate,
        "maintenanceMode": settings.maintenance_mode,
        "hero": {
            **_flat("title", settings.hero.title),
            **_flat("subtitle", settings.hero.subtitle),
            **_flat("buttonText", settings.hero.button_text),
            "image": settings.hero.image,
        },
        "about": {
            **_flat("title", settings.about.title),
            **_flat("content", settings.about.content),
            "image": settings.about.image,
        },
    }


def settings_from_document(document: dict | None) -> StoreSettingsDTO:
    """Missing keys fall back to the DTO defaults (currency AED, tax rate 5)."""
    document = document or {}
    social = document.get("socialMedia") or {}
    shipping = document.get("shipping") or {}
    hero = document.get("hero") or {}
    about = document.get("about") or {}
    defaults = StoreSettingsDTO()
    tax_rate = document.get("taxRate")
    return StoreSettingsDTO(
        store_name=BilingualText.from_flat(document, "storeName"),
        store_description=BilingualText.from_flat(document, "storeDescription"),
        contact_email=document.get("contactEmail") or "",
        contact_phone=document.get("contactPhone") or "",
        address=BilingualText.from_flat(document, "address"),
        social_media=SocialMediaDTO(**{key: social.get(key) or "" for key in ("facebook", "instagram", "twitter")}),
        shipping=ShippingSettingsDTO(
            free_shipping_threshold=shipping.get("freeShippingThreshold") or 0,
            shipping_cost=shipping.get("shippingCost") or 0,
        ),
        currency=document.get("currency") or defaults.currency,
        tax_rate=defaults.tax_rate if tax_rate is None else tax_rate,
        maintenance_mode=bool(document.get("maintenanceMode", False)),
        hero=HeroSectionDTO(
            title=BilingualText.from_flat(hero, "title"),
            subtitle=BilingualText.from_flat(hero, "subtitle"),
            button_text=BilingualText.from_flat(hero, "buttonText"),
            image=hero.get("image") or "",
        ),
        about=AboutSectionDTO(
            title=BilingualText.from_flat(about, "title"),
            content=BilingualText.from_flat(about, "content"),
            image=about.get("image") or "",
        ),
    )


class SettingsService:

    @staticmethod
    async def get_settings(session: AsyncSession | Session) -> StoreSettingsDTO:
        document = await StoreSettingsRepository.get(session)
        return settings_from_document(document)

    @staticmethod
    async def merge_settings(settings: StoreSettingsDTO, session: AsyncSession | Session) -> None:
        """Deep-merge the form into the stored document. Does not commit."""
        existing = await StoreSettingsRepository.get(session) or {}
        await StoreSettingsRepository.set(_deep_merge(existing, settings_to_document(settings)), session)

    @staticmethod
    async def merge_section_image(section: str, url: str, session: AsyncSession | Session) -> None:
        """Record an uploaded hero/about image without touching the other fields. Does not commit."""
        existing = await StoreSettingsRepository.get(session) or {}
        await StoreSettingsRepository.set(_deep_merge(existing, {section: {"image": url}}), session)
