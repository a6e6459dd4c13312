import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import Column, String, Integer, DateTime, JSON, func

from models.base import Base
from models.bilingual import BilingualText


def generate_id() -> str:
    return uuid.uuid4().hex


class Category(Base):
    __tablename__ = 'categories'

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(JSON, nullable=False)
    description = Column(JSON, nullable=True)
    slug = Column(String, nullable=True)
    image = Column(String, nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class CategoryDTO(BaseModel):
    id: str | None = None
    name: BilingualText = Field(default_factory=BilingualText)
    description: BilingualText = Field(default_factory=BilingualText)
    slug: str = ""
    image: str = ""
    display_order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("slug", "image", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("display_order", mode="before")
    @classmethod
    def none_to_zero(cls, value):
        return 0 if value is None else value


class CategoryFormDTO(BaseModel):
    """Admin category form. A missing id means create."""
    id: str | None = None
    name: BilingualText
    description: BilingualText = Field(default_factory=BilingualText)
    slug: str | None = None
    image: str | None = None
    display_order: int = 0
