"""
Unit Tests for OrderService.place_order()

Runs against an in-memory SQLite session: stock updates, totals and
rollback behaviour are checked on real rows.
"""

import logging
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select, func

from enums.language import Language
from enums.order_status import OrderStatus
from exceptions import EmptyCartException, OrderSubmissionException, ShippingFormValidationException
from models.bilingual import BilingualText
from models.order import Order, ShippingFormDTO
from models.product import ProductFormDTO, ProductSizeDTO
from repositories.product import ProductRepository
from services.order import OrderService
from stores.cart import CartStore


def valid_form(**overrides) -> ShippingFormDTO:
    values = dict(first_name="Lisa", last_name="Haddad", email="lisa@example.com", phone="+971 50 123 4567",
                  address="Al Wasl Road 12", city="Dubai", country="UAE", notes="Leave at reception")
    values.update(overrides)
    return ShippingFormDTO(**values)


async def create_product(session, stock_50: int = 5, stock_100: int = 3) -> str:
    product_id = await ProductRepository.create(ProductFormDTO(
        name=BilingualText(en="Oud Royal", ar="عود ملكي"),
        sizes=[ProductSizeDTO(size="50ml", price=100.0, stock=stock_50),
               ProductSizeDTO(size="100ml", price=180.0, stock=stock_100)],
    ), session)
    session.commit()
    return product_id


def order_count(session) -> int:
    return session.execute(select(func.count(Order.id))).scalar_one()


class TestPlaceOrder:

    @pytest.mark.asyncio
    async def test_successful_order(self, session, storage, cart_item_factory):
        product_id = await create_product(session)
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory(product_id, "50ml", price=100.0, quantity=2))
        await cart.add(cart_item_factory(product_id, "100ml", price=180.0, quantity=1))

        order = await OrderService.place_order(valid_form(), cart, session, Language.EN)

        assert order.id is not None
        assert order.status == OrderStatus.PENDING
        assert order.subtotal == 380.0
        assert order.shipping == 0.0
        assert order.total == 380.0
        assert len(order.items) == 2
        assert order.created_at is not None
        assert order.notes == "Leave at reception"

    @pytest.mark.asyncio
    async def test_stock_decremented_per_size(self, session, storage, cart_item_factory):
        product_id = await create_product(session, stock_50=5, stock_100=3)
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory(product_id, "50ml", quantity=2))

        await OrderService.place_order(valid_form(), cart, session)

        product = await ProductRepository.get_by_id(product_id, session)
        assert product.get_size("50ml").stock == 3
        assert product.get_size("100ml").stock == 3

    @pytest.mark.asyncio
    async def test_stock_never_negative(self, session, storage, cart_item_factory):
        product_id = await create_product(session, stock_50=1)
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory(product_id, "50ml", quantity=4))

        await OrderService.place_order(valid_form(), cart, session)

        product = await ProductRepository.get_by_id(product_id, session)
        assert product.get_size("50ml").stock == 0

    @pytest.mark.asyncio
    async def test_cart_cleared_after_success(self, session, storage, cart_item_factory):
        product_id = await create_product(session)
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory(product_id, "50ml"))

        await OrderService.place_order(valid_form(), cart, session)

        assert cart.items == []
        assert (await CartStore.load(storage)).items == []

    @pytest.mark.asyncio
    async def test_order_stands_when_cart_cannot_be_cleared(self, session, storage, cart_item_factory, caplog):
        product_id = await create_product(session)
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory(product_id, "50ml"))
        storage.save = AsyncMock(side_effect=ConnectionError("redis down"))

        with caplog.at_level(logging.ERROR):
            order = await OrderService.place_order(valid_form(), cart, session)

        assert order.id is not None
        assert order_count(session) == 1
        assert "could not be cleared" in caplog.text

    @pytest.mark.asyncio
    async def test_failure_keeps_cart_and_writes_nothing(self, session, storage, cart_item_factory):
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory("deleted-product", "50ml", quantity=2))

        with pytest.raises(OrderSubmissionException):
            await OrderService.place_order(valid_form(), cart, session)

        assert cart.item_count == 2
        assert (await CartStore.load(storage)).item_count == 2
        assert order_count(session) == 0

    @pytest.mark.asyncio
    async def test_empty_cart(self, session, storage):
        cart = await CartStore.load(storage)

        with pytest.raises(EmptyCartException):
            await OrderService.place_order(valid_form(), cart, session)

    @pytest.mark.asyncio
    async def test_invalid_form_rejected_before_writing(self, session, storage, cart_item_factory):
        cart = await CartStore.load(storage)
        await cart.add(cart_item_factory("p1", "50ml"))

        with pytest.raises(ShippingFormValidationException) as exc_info:
            await OrderService.place_order(valid_form(email="not-an-email"), cart, session, Language.EN)

        assert exc_info.value.errors == {"email": "Invalid email format"}
        assert order_count(session) == 0
        assert cart.item_count == 1


class TestValidateShippingForm:

    def test_valid_form(self):
        assert OrderService.validate_shipping_form(valid_form(), Language.EN) == {}

    def test_notes_optional(self):
        assert OrderService.validate_shipping_form(valid_form(notes=""), Language.EN) == {}

    def test_all_required_fields_reported(self):
        errors = OrderService.validate_shipping_form(ShippingFormDTO(), Language.EN)

        assert set(errors) == {"first_name", "last_name", "email", "phone", "address", "city", "country"}
        assert errors["email"] == "Email is required"

    def test_whitespace_counts_as_blank(self):
        errors = OrderService.validate_shipping_form(valid_form(city="   "), Language.EN)

        assert errors == {"city": "City is required"}

    @pytest.mark.parametrize("phone", ["abc", "050-12x", "+971 (50) 1234567"])
    def test_invalid_phone(self, phone):
        errors = OrderService.validate_shipping_form(valid_form(phone=phone), Language.EN)

        assert errors == {"phone": "Invalid phone number format"}

    @pytest.mark.parametrize("email", ["lisa@", "lisa example@x.com", "lisa@example"])
    def test_invalid_email(self, email):
        errors = OrderService.validate_shipping_form(valid_form(email=email), Language.EN)

        assert errors == {"email": "Invalid email format"}

    def test_arabic_messages(self):
        errors = OrderService.validate_shipping_form(valid_form(email="", phone="x"), Language.AR)

        assert errors == {"email": "البريد الإلكتروني مطلوب", "phone": "صيغة رقم الهاتف غير صحيحة"}
