"""
Unit Tests: store settings document (flat layout, deep merge, defaults)
"""

import pytest

from models.bilingual import BilingualText
from models.store_settings import StoreSettingsDTO, ShippingSettingsDTO, HeroSectionDTO
from repositories.store_settings import StoreSettingsRepository
from services.admin import AdminService
from services.settings import SettingsService, settings_from_document, settings_to_document, _deep_merge


class TestSettingsDocument:

    def test_defaults_for_missing_document(self):
        settings = settings_from_document(None)

        assert settings.currency == "AED"
        assert settings.tax_rate == 5.0
        assert settings.maintenance_mode is False
        assert settings.store_name == BilingualText()

    def test_flat_layout(self):
        document = settings_to_document(StoreSettingsDTO(
            store_name=BilingualText(en="Lisa Perfume", ar="ليزا للعطور"),
            shipping=ShippingSettingsDTO(free_shipping_threshold=200, shipping_cost=25),
            hero=HeroSectionDTO(button_text=BilingualText(en="Shop now", ar="تسوق الآن")),
        ))

        assert document["storeName_en"] == "Lisa Perfume"
        assert document["storeName_ar"] == "ليزا للعطور"
        assert document["shipping"] == {"freeShippingThreshold": 200, "shippingCost": 25}
        assert document["hero"]["buttonText_ar"] == "تسوق الآن"

    def test_zero_tax_rate_is_kept(self):
        assert settings_from_document({"taxRate": 0}).tax_rate == 0

    def test_null_tax_rate_uses_default(self):
        assert settings_from_document({"taxRate": None}).tax_rate == 5.0

    def test_deep_merge_keeps_unknown_keys(self):
        merged = _deep_merge({"hero": {"image": "/media/hero.jpg", "title_en": "Old"}, "legacyFlag": True},
                             {"hero": {"title_en": "New"}})

        assert merged == {"hero": {"image": "/media/hero.jpg", "title_en": "New"}, "legacyFlag": True}


class TestSettingsService:

    @pytest.mark.asyncio
    async def test_save_and_reload(self, session):
        saved = await AdminService.save_settings(StoreSettingsDTO(
            contact_email="hello@lisaperfume.com",
            shipping=ShippingSettingsDTO(free_shipping_threshold=300, shipping_cost=20),
        ), session)

        assert saved.contact_email == "hello@lisaperfume.com"
        assert saved.shipping.free_shipping_threshold == 300
        assert (await SettingsService.get_settings(session)).shipping.shipping_cost == 20

    @pytest.mark.asyncio
    async def test_form_save_keeps_unknown_keys(self, session):
        await SettingsService.merge_section_image("hero", "/media/settings/hero.jpg", session)
        session.commit()
        await StoreSettingsRepository.set({**(await StoreSettingsRepository.get(session)), "legacyFlag": True},
                                          session)
        session.commit()

        await AdminService.save_settings(StoreSettingsDTO(
            hero=HeroSectionDTO(title=BilingualText(en="Summer", ar="صيف")),
        ), session)

        document = await StoreSettingsRepository.get(session)
        assert document["legacyFlag"] is True
        assert document["hero"]["title_en"] == "Summer"
        # hero.image is part of the form, so the form value wins
        assert document["hero"]["image"] == ""

    @pytest.mark.asyncio
    async def test_uploaded_image_is_reported(self, session):
        await SettingsService.merge_section_image("about", "/media/settings/about.jpg", session)
        session.commit()

        settings = await SettingsService.get_settings(session)

        assert settings.about.image == "/media/settings/about.jpg"
        assert settings.hero.image == ""
