from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Column, String, DateTime, JSON, func

from models.base import Base
from models.bilingual import BilingualText

GENERAL_SETTINGS_ID = "general"


class StoreSettings(Base):
    """
    Singleton store configuration document (settings/general).

    The whole form is kept as one JSON document so that saving merges
    into whatever keys are already present.
    """
    __tablename__ = 'settings'

    id = Column(String, primary_key=True, default=GENERAL_SETTINGS_ID)
    data = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class SocialMediaDTO(BaseModel):
    facebook: str = ""
    instagram: str = ""
    twitter: str = ""


class ShippingSettingsDTO(BaseModel):
    free_shipping_threshold: float = Field(0.0, ge=0)
    shipping_cost: float = Field(0.0, ge=0)


class HeroSectionDTO(BaseModel):
    title: BilingualText = Field(default_factory=BilingualText)
    subtitle: BilingualText = Field(default_factory=BilingualText)
    button_text: BilingualText = Field(default_factory=BilingualText)
    image: str = ""


class AboutSectionDTO(BaseModel):
    title: BilingualText = Field(default_factory=BilingualText)
    content: BilingualText = Field(default_factory=BilingualText)
    image: str = ""


class StoreSettingsDTO(BaseModel):
    store_name: BilingualText = Field(default_factory=BilingualText)
    store_description: BilingualText = Field(default_factory=BilingualText)
    contact_email: str = ""
    contact_phone: str = ""
    address: BilingualText = Field(default_factory=BilingualText)
    social_media: SocialMediaDTO = Field(default_factory=SocialMediaDTO)
    shipping: ShippingSettingsDTO = Field(default_factory=ShippingSettingsDTO)
    currency: str = "AED"
    tax_rate: float = 5.0
    maintenance_mode: bool = False
    hero: HeroSectionDTO = Field(default_factory=HeroSectionDTO)
    about: AboutSectionDTO = Field(default_factory=AboutSectionDTO)
    updated_at: datetime | None = None
