"""
FastAPI dependencies shared by the routers.

Client state (cart, favorites, language) is looked up by the X-Client-Id
header; each client id gets its own Redis namespace.
"""
from fastapi import Depends, Header, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

import config
from db import get_db_session
from enums.language import Language
from exceptions import MissingClientIdException
from models.user import UserDTO
from services.auth import AuthService
from services.media import LocalMediaStorage, MediaStorage
from stores.cart import CART_STORAGE_KEY, CartStore
from stores.favorites import FAVORITES_STORAGE_KEY, FavoritesStore
from stores.language import LANGUAGE_STORAGE_KEY, LanguageStore
from stores.storage import RedisStateStorage, StateStorage


def resolve_request_language(request: Request) -> Language:
    """?lang= wins, then the first Accept-Language tag, then DEFAULT_LANGUAGE."""
    candidates = [request.query_params.get("lang")]
    accept_language = request.headers.get("accept-language")
    if accept_language:
        candidates.append(accept_language.split(",")[0].split(";")[0].strip()[:2].lower())
    for candidate in candidates:
        if candidate in (Language.EN.value, Language.AR.value):
            return Language(candidate)
    return config.DEFAULT_LANGUAGE


async def get_language(request: Request, lang: Language | None = Query(None)) -> Language:
    return lang or resolve_request_language(request)


async def get_session() -> AsyncSession:
    async with get_db_session() as session:
        yield session


async def get_client_storage(request: Request,
                             x_client_id: str | None = Header(None)) -> StateStorage:
    if not x_client_id or not x_client_id.strip():
        raise MissingClientIdException()
    return RedisStateStorage(request.app.state.redis, x_client_id.strip(),
                             ttl_seconds=config.CLIENT_STATE_TTL_DAYS * 24 * 3600,
                             lock_timeout_seconds=config.CLIENT_STATE_LOCK_TIMEOUT_SECONDS,
                             lock_wait_seconds=config.CLIENT_STATE_LOCK_WAIT_SECONDS)


async def get_cart(storage: StateStorage = Depends(get_client_storage)) -> CartStore:
    """The cart stays locked for this client until the request is done (checkout included)."""
    async with storage.lock(CART_STORAGE_KEY):
        yield await CartStore.load(storage)


async def get_favorites_store(storage: StateStorage = Depends(get_client_storage)) -> FavoritesStore:
    async with storage.lock(FAVORITES_STORAGE_KEY):
        yield await FavoritesStore.load(storage)


async def get_language_store(storage: StateStorage = Depends(get_client_storage)) -> LanguageStore:
    async with storage.lock(LANGUAGE_STORAGE_KEY):
        yield await LanguageStore.load(storage)


def get_media_storage() -> MediaStorage:
    return LocalMediaStorage(config.MEDIA_ROOT, config.MEDIA_URL)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


async def get_bearer_token(authorization: str | None = Header(None)) -> str | None:
    return _bearer_token(authorization)


async def get_current_user(token: str | None = Depends(get_bearer_token),
                           session: AsyncSession = Depends(get_session)) -> UserDTO:
    return await AuthService.get_user_by_token(token, session)


async def require_admin(token: str | None = Depends(get_bearer_token),
                        session: AsyncSession = Depends(get_session)) -> UserDTO:
    return await AuthService.require_admin(token, session)
