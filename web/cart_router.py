"""
Client-state endpoints (cart, local favorites, language).

Every request must carry X-Client-Id; the storefront generates one per
browser and keeps it in localStorage.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from enums.language import Language
from models.cartItem import CartItemDTO, CartSummaryDTO
from stores.cart import CartStore
from stores.favorites import FavoritesStore
from stores.language import LanguageStore
from web.dependencies import get_cart, get_favorites_store, get_language_store

cart_router = APIRouter(prefix="/api", tags=["cart"])


class CartLineRequest(BaseModel):
    id: str
    size: str


class CartQuantityRequest(CartLineRequest):
    quantity: int


class FavoriteRequest(BaseModel):
    product_id: str


class LanguageRequest(BaseModel):
    language: Language


class LanguageResponse(BaseModel):
    language: Language
    direction: str


class FavoritesResponse(BaseModel):
    product_ids: list[str]


@cart_router.get("/cart", response_model=CartSummaryDTO)
async def get_cart_summary(cart: CartStore = Depends(get_cart)):
    return cart.summary()


@cart_router.post("/cart/items", response_model=CartSummaryDTO)
async def add_cart_item(item: CartItemDTO, cart: CartStore = Depends(get_cart)):
    await cart.add(item)
    return cart.summary()


@cart_router.patch("/cart/items", response_model=CartSummaryDTO)
async def update_cart_item(payload: CartQuantityRequest, cart: CartStore = Depends(get_cart)):
    await cart.update_quantity(payload.id, payload.size, payload.quantity)
    return cart.summary()


@cart_router.delete("/cart/items", response_model=CartSummaryDTO)
async def remove_cart_item(payload: CartLineRequest, cart: CartStore = Depends(get_cart)):
    await cart.remove(payload.id, payload.size)
    return cart.summary()


@cart_router.delete("/cart", response_model=CartSummaryDTO)
async def clear_cart(cart: CartStore = Depends(get_cart)):
    await cart.clear()
    return cart.summary()


@cart_router.get("/client/favorites", response_model=FavoritesResponse)
async def get_local_favorites(favorites: FavoritesStore = Depends(get_favorites_store)):
    return FavoritesResponse(product_ids=favorites.product_ids)


@cart_router.post("/client/favorites", response_model=FavoritesResponse)
async def add_local_favorite(payload: FavoriteRequest, favorites: FavoritesStore = Depends(get_favorites_store)):
    await favorites.add(payload.product_id)
    return FavoritesResponse(product_ids=favorites.product_ids)


@cart_router.delete("/client/favorites", response_model=FavoritesResponse)
async def remove_local_favorite(payload: FavoriteRequest, favorites: FavoritesStore = Depends(get_favorites_store)):
    await favorites.remove(payload.product_id)
    return FavoritesResponse(product_ids=favorites.product_ids)


@cart_router.get("/client/language", response_model=LanguageResponse)
async def get_client_language(store: LanguageStore = Depends(get_language_store)):
    return LanguageResponse(language=store.language, direction=store.direction)


@cart_router.put("/client/language", response_model=LanguageResponse)
async def set_client_language(payload: LanguageRequest, store: LanguageStore = Depends(get_language_store)):
    await store.set(payload.language)
    return LanguageResponse(language=store.language, direction=store.direction)


@cart_router.post("/client/language/toggle", response_model=LanguageResponse)
async def toggle_client_language(store: LanguageStore = Depends(get_language_store)):
    await store.toggle()
    return LanguageResponse(language=store.language, direction=store.direction)
