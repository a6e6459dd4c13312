from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Column, String, DateTime, JSON, func

from models.base import Base


class Favorite(Base):
    """favorites/{user_id}: one document per user listing favorited product ids."""
    __tablename__ = 'favorites'

    user_id = Column(String(32), primary_key=True)
    product_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class FavoriteDTO(BaseModel):
    user_id: str
    product_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
