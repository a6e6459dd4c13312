from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Column, String, Float, DateTime, JSON, Text, Enum as SQLEnum, func, CheckConstraint

from enums.order_status import OrderStatus
from models.base import Base
from models.cartItem import CartItemDTO
from models.category import generate_id


class Order(Base):
    __tablename__ = 'orders'

    id = Column(String(32), primary_key=True, default=generate_id)
    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING)

    # Customer contact / shipping address
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    country = Column(String, nullable=False)
    notes = Column(Text, nullable=False, default="")

    # Items Snapshot (JSON)
    # Copy of the cart at submission time, never edited afterwards
    # Format: [{"id": "...", "name": {"en": "...", "ar": "..."}, "price": 120.0,
    #           "quantity": 2, "size": "50ml", "image": "..."}]
    items = Column(JSON, nullable=False)

    subtotal = Column(Float, nullable=False)
    shipping = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint('subtotal >= 0', name='check_order_subtotal_non_negative'),
    )


class ShippingFormDTO(BaseModel):
    """Checkout form. Everything but notes is required; see OrderService.validate_shipping_form."""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    notes: str = ""


class OrderDTO(BaseModel):
    id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    notes: str = ""
    items: list[CartItemDTO] = Field(default_factory=list)
    subtotal: float = 0.0
    shipping: float = 0.0
    total: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderDetailDTO(OrderDTO):
    """Admin order view: the statuses the order can still move to."""
    next_statuses: list[OrderStatus] = Field(default_factory=list)
    is_final: bool = False


class OrderStatsDTO(BaseModel):
    total_orders: int = 0
    total_revenue: float = 0.0
    pending_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
