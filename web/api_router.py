"""
Account endpoints: sign-in, server-side favorites and the order status email.
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from enums.order_status import OrderStatus
from models.product import ProductDTO
from models.user import UserDTO
from services.auth import AuthService
from services.catalog import CatalogService
from services.favorites import FavoritesService
from services.notification import NotificationService
from web.dependencies import get_bearer_token, get_current_user, get_session, require_admin

api_router = APIRouter(prefix="/api", tags=["api"])


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    expires_at: datetime
    user: UserDTO


class FavoriteRequest(BaseModel):
    product_id: str


class FavoritesResponse(BaseModel):
    product_ids: list[str]
    products: list[ProductDTO] = []


class StatusEmailRequest(BaseModel):
    """Body keys match the dashboard's fetch call."""
    order_id: str = Field(..., alias="orderId")
    new_status: OrderStatus = Field(..., alias="newStatus")


@api_router.post("/auth/login", response_model=LoginResponse)
async def login(payload: LoginRequest, session: AsyncSession = Depends(get_session)):
    auth_session, user = await AuthService.authenticate(payload.email, payload.password, session)
    return LoginResponse(token=auth_session.token, expires_at=auth_session.expires_at, user=user)


@api_router.post("/auth/logout")
async def logout(token: str | None = Depends(get_bearer_token), session: AsyncSession = Depends(get_session)):
    if token:
        await AuthService.logout(token, session)
    return {"success": True}


@api_router.get("/auth/me", response_model=UserDTO)
async def me(user: UserDTO = Depends(get_current_user)):
    return user


@api_router.get("/favorites", response_model=FavoritesResponse)
async def list_favorites(user: UserDTO = Depends(get_current_user), session: AsyncSession = Depends(get_session)):
    product_ids = await FavoritesService.get_product_ids(user.id, session)
    products = await CatalogService.get_favorite_products(product_ids, session)
    return FavoritesResponse(product_ids=product_ids, products=products)


@api_router.post("/favorites", response_model=FavoritesResponse)
async def add_favorite(payload: FavoriteRequest,
                       user: UserDTO = Depends(get_current_user),
                       session: AsyncSession = Depends(get_session)):
    return FavoritesResponse(product_ids=await FavoritesService.add(user.id, payload.product_id, session))


@api_router.delete("/favorites", response_model=FavoritesResponse)
async def remove_favorite(payload: FavoriteRequest,
                          user: UserDTO = Depends(get_current_user),
                          session: AsyncSession = Depends(get_session)):
    return FavoritesResponse(product_ids=await FavoritesService.remove(user.id, payload.product_id, session))


@api_router.post("/orders/status")
async def send_status_email(payload: StatusEmailRequest,
                            admin: UserDTO = Depends(require_admin),
                            session: AsyncSession = Depends(get_session)):
    """
    Email the customer the order's new status (SendGrid dynamic template).

    Returns:
        200: {"success": true}
        404: order not found
        502: mail API rejected the message
    """
    await NotificationService.send_order_status_email(payload.order_id, payload.new_status, session)
    return {"success": True}
