from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, func

from models.base import Base
from models.bilingual import BilingualText
from models.category import generate_id


class Product(Base):
    __tablename__ = 'products'

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(JSON, nullable=False)
    description = Column(JSON, nullable=True)
    # Plain reference, not a foreign key: deleting a category leaves its products untouched
    category_id = Column(String(32), nullable=True, index=True)
    # Ordered list of {"size": "50ml", "price": 120.0, "stock": 4}
    sizes = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    image_url = Column(String, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)
    sold_count = Column(Integer, nullable=False, default=0)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class ProductSizeDTO(BaseModel):
    size: str
    price: float = Field(0.0, ge=0)
    stock: int = Field(0, ge=0)

    @field_validator("size", mode="before")
    @classmethod
    def size_to_label(cls, value):
        # Early documents stored numeric sizes (e.g. 50 instead of "50ml")
        return "" if value is None else str(value)


class ProductDTO(BaseModel):
    id: str | None = None
    name: BilingualText = Field(default_factory=BilingualText)
    description: BilingualText = Field(default_factory=BilingualText)
    category_id: str | None = None
    sizes: list[ProductSizeDTO] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    image_url: str = ""
    featured: bool = False
    sold_count: int = 0
    display_order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("sizes", "images", mode="before")
    @classmethod
    def none_to_list(cls, value):
        return [] if value is None else value

    @field_validator("image_url", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("featured", mode="before")
    @classmethod
    def none_to_false(cls, value):
        return False if value is None else value

    @field_validator("sold_count", "display_order", mode="before")
    @classmethod
    def none_to_zero(cls, value):
        return 0 if value is None else value

    @property
    def primary_image(self) -> str:
        if self.images:
            return self.images[0]
        return self.image_url

    @property
    def base_price(self) -> float:
        """Price of the first size, shown on product cards."""
        return self.sizes[0].price if self.sizes else 0.0

    def get_size(self, size: str) -> ProductSizeDTO | None:
        for product_size in self.sizes:
            if product_size.size == size:
                return product_size
        return None


class ProductFormDTO(BaseModel):
    """Admin product form. A missing id means create."""
    id: str | None = None
    name: BilingualText
    description: BilingualText = Field(default_factory=BilingualText)
    category_id: str | None = None
    sizes: list[ProductSizeDTO] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    image_url: str | None = None
    featured: bool = False
    sold_count: int = 0
    display_order: int = 0


class ProductFilterDTO(BaseModel):
    category_id: str | None = None
    query: str = ""
    min_price: float = 0.0
    max_price: float = 1000.0
