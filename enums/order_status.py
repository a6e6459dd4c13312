from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"          # Created at checkout, waiting for the shop
    PROCESSING = "processing"    # Being prepared by the shop
    COMPLETED = "completed"      # Delivered / handed over
    CANCELLED = "cancelled"      # Cancelled by admin
