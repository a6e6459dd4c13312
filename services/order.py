import logging
import re

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from db import session_commit, session_rollback
from enums.language import Language
from enums.order_status import OrderStatus
from enums.ui_entity import UIEntity
from exceptions import (
    EmptyCartException,
    OrderNotFoundException,
    InvalidOrderStateException,
    ShippingFormValidationException,
    OrderSubmissionException,
    ProductNotFoundException,
)
from models.cartItem import CartItemDTO
from models.order import OrderDTO, OrderDetailDTO, ShippingFormDTO
from repositories.order import OrderRepository
from repositories.product import ProductRepository
from services.settings import SettingsService
from stores.cart import CartStore, cart_total
from utils.localizator import Localizator
from utils.order_state_machine import OrderStateMachine

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^[\d\s+-]+$')

# (field, localization key when blank)
REQUIRED_FIELDS = [
    ("first_name", "validation_first_name_required"),
    ("last_name", "validation_last_name_required"),
    ("email", "validation_email_required"),
    ("phone", "validation_phone_required"),
    ("address", "validation_address_required"),
    ("city", "validation_city_required"),
    ("country", "validation_country_required"),
]


class OrderService:

    @staticmethod
    def validate_shipping_form(form: ShippingFormDTO, language: Language) -> dict[str, str]:
        """
        Validate the checkout form.

        Returns:
            {field: localized message} for every invalid field; empty when the form is valid.
            Notes are optional and never validated.
        """
        errors = {}
        for field, key in REQUIRED_FIELDS:
            if not getattr(form, field).strip():
                errors[field] = Localizator.get_text(UIEntity.USER, key, language)

        if "email" not in errors and not EMAIL_PATTERN.match(form.email):
            errors["email"] = Localizator.get_text(UIEntity.USER, "validation_email_invalid", language)
        if "phone" not in errors and not PHONE_PATTERN.match(form.phone):
            errors["phone"] = Localizator.get_text(UIEntity.USER, "validation_phone_invalid", language)
        return errors

    @staticmethod
    async def calculate_shipping(subtotal: float, session: AsyncSession | Session) -> float:
        """
        Shipping charged at checkout.

        The storefront has always charged 0; the settings values are only
        applied when CHECKOUT_APPLY_SHIPPING_SETTINGS is enabled.
        """
        if not config.CHECKOUT_APPLY_SHIPPING_SETTINGS:
            return 0.0
        settings = await SettingsService.get_settings(session)
        threshold = settings.shipping.free_shipping_threshold
        if threshold > 0 and subtotal >= threshold:
            return 0.0
        return settings.shipping.shipping_cost

    @staticmethod
    async def decrement_stock(item: CartItemDTO, session: AsyncSession | Session) -> None:
        """
        Subtract the ordered quantity from the matching size, floored at 0.

        Read-modify-write of the product's sizes array with no version
        check: two concurrent checkouts can both read the same stock and
        oversell. Accepted, there is no reservation system.
        """
        product = await ProductRepository.get_by_id(item.id, session)
        if product is None:
            raise ProductNotFoundException(item.id)

        sizes = [size.model_copy(update={'stock': max(0, size.stock - item.quantity)})
                 if size.size == item.size else size
                 for size in product.sizes]
        await ProductRepository.update_sizes(product.id, sizes, session)

    @staticmethod
    async def place_order(form: ShippingFormDTO,
                          cart: CartStore,
                          session: AsyncSession | Session,
                          language: Language = Language.AR) -> OrderDTO:
        """
        Checkout.

        Flow:
        1. Validate the form (ShippingFormValidationException) and the cart (EmptyCartException)
        2. Compute subtotal / shipping / total from the cart snapshot
        3. Insert the order as pending
        4. Decrement stock once per line item
        5. Commit, then clear the cart (a failed clear is logged, the order still stands)

        Any failure in 3-5 rolls back, raises OrderSubmissionException and
        leaves the cart as it was so the customer can retry.
        """
        errors = OrderService.validate_shipping_form(form, language)
        if errors:
            raise ShippingFormValidationException(errors)

        items = cart.items
        if not items:
            raise EmptyCartException()

        subtotal = cart_total(items)
        try:
            shipping = await OrderService.calculate_shipping(subtotal, session)
            order_dto = OrderDTO(
                **form.model_dump(),
                items=items,
                subtotal=subtotal,
                shipping=shipping,
                total=subtotal + shipping,
            )
            order = await OrderRepository.create(order_dto, session)

            for item in items:
                await OrderService.decrement_stock(item, session)

            await session_commit(session)
        except Exception as e:
            await session_rollback(session)
            logging.error(f"Order submission failed: {type(e).__name__} - {e}", exc_info=True)
            raise OrderSubmissionException(str(e)) from e

        logging.info(f"✅ Order {order.id} placed (Items: {cart.item_count}, Total: {order.total:.2f})")
        try:
            await cart.clear()
        except Exception as e:
            # The order is already committed
            logging.error(f"Order {order.id} placed but the cart could not be cleared: {type(e).__name__} - {e}",
                          exc_info=True)
        return order

    @staticmethod
    async def get_order(order_id: str, session: AsyncSession | Session) -> OrderDTO:
        order = await OrderRepository.get_by_id(order_id, session)
        if order is None:
            raise OrderNotFoundException(order_id)
        return order

    @staticmethod
    async def get_order_detail(order_id: str, session: AsyncSession | Session) -> OrderDetailDTO:
        order = await OrderService.get_order(order_id, session)
        return OrderDetailDTO(
            **order.model_dump(),
            next_statuses=OrderStateMachine.get_valid_transitions(order.status),
            is_final=OrderStateMachine.is_final_status(order.status),
        )

    @staticmethod
    async def get_orders(session: AsyncSession | Session, status: OrderStatus | None = None) -> list[OrderDTO]:
        return await OrderRepository.get_all(session, status)

    @staticmethod
    async def update_status(order_id: str,
                            new_status: OrderStatus,
                            session: AsyncSession | Session,
                            admin_id: str | None = None) -> OrderDTO:
        """
        Move an order to a new status through the state machine.

        Setting the current status again changes nothing and returns the order as is.
        """
        order = await OrderService.get_order(order_id, session)
        new_status = OrderStatus(new_status)

        if order.status == new_status:
            return order

        if not OrderStateMachine.validate_and_log_transition(order_id, order.status, new_status, admin_id):
            raise InvalidOrderStateException(order_id, order.status.value, new_status.value)

        await OrderRepository.update_status(order_id, new_status, session)
        await session_commit(session)
        return await OrderService.get_order(order_id, session)
