from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from enums.language import Language
from enums.ui_entity import UIEntity
from models.order import OrderDTO, ShippingFormDTO
from services.order import OrderService
from stores.cart import CartStore
from utils.localizator import Localizator
from web.dependencies import get_cart, get_language, get_session


checkout_router = APIRouter(prefix="/api", tags=["checkout"])


class CheckoutResponse(BaseModel):
    message: str
    order: OrderDTO


@checkout_router.post("/checkout", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
async def checkout(form: ShippingFormDTO,
                   cart: CartStore = Depends(get_cart),
                   language: Language = Depends(get_language),
                   session: AsyncSession = Depends(get_session)):
    """
    Place an order from the client's cart.

    Returns:
        201: order created, cart cleared
        400: invalid form (details.errors has one message per field) or empty cart
        500: order could not be saved, cart untouched
    """
    order = await OrderService.place_order(form, cart, session, language)
    return CheckoutResponse(message=Localizator.get_text(UIEntity.USER, "order_placed", language), order=order)
