"""
Admin console API. Every route requires an admin bearer token.

Category/product writes are multipart: a "data" field with the form as
JSON and an optional "image" file. Each write returns the reloaded list.
"""
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from enums.media_entity import MediaEntity
from enums.order_status import OrderStatus
from exceptions import InvalidFormDataException
from models.category import CategoryDTO, CategoryFormDTO
from models.media import UploadedImageDTO
from models.order import OrderDTO, OrderDetailDTO
from models.product import ProductDTO, ProductFormDTO
from models.store_settings import StoreSettingsDTO
from models.user import UserDTO
from services.admin import AdminService
from services.analytics import OrderAnalyticsService
from services.catalog import CatalogService
from services.media import MediaStorage
from services.notification import NotificationService
from services.order import OrderService
from services.settings import SettingsService
from web.dependencies import get_media_storage, get_session, require_admin

admin_router = APIRouter(prefix="/api/admin", tags=["admin"])

SETTINGS_IMAGE_SECTIONS = {
    "hero": MediaEntity.SETTINGS_HERO,
    "about": MediaEntity.SETTINGS_ABOUT,
}


class OrderStatusRequest(BaseModel):
    status: OrderStatus
    notify: bool = False


def _parse_form(form_type: type[CategoryFormDTO] | type[ProductFormDTO], data: str, record_id: str | None):
    try:
        form = form_type.model_validate_json(data)
    except ValidationError as e:
        reason = "; ".join(f"{'.'.join(str(part) for part in error['loc']) or 'data'}: {error['msg']}"
                           for error in e.errors())
        raise InvalidFormDataException(form_type.__name__, reason) from e
    return form.model_copy(update={'id': record_id})


async def _read_image(image: UploadFile | None) -> UploadedImageDTO | None:
    if image is None or not image.filename:
        return None
    return UploadedImageDTO(filename=image.filename, content=await image.read(), content_type=image.content_type)


# Categories

@admin_router.get("/categories", response_model=list[CategoryDTO])
async def admin_list_categories(admin: UserDTO = Depends(require_admin),
                                session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_categories(session)


@admin_router.post("/categories", response_model=list[CategoryDTO])
async def admin_create_category(data: str = Form(...),
                                image: UploadFile | None = File(None),
                                admin: UserDTO = Depends(require_admin),
                                session: AsyncSession = Depends(get_session),
                                media: MediaStorage = Depends(get_media_storage)):
    form = _parse_form(CategoryFormDTO, data, None)
    return await AdminService.save_category(form, session, media, await _read_image(image))


@admin_router.put("/categories/{category_id}", response_model=list[CategoryDTO])
async def admin_update_category(category_id: str,
                                data: str = Form(...),
                                image: UploadFile | None = File(None),
                                admin: UserDTO = Depends(require_admin),
                                session: AsyncSession = Depends(get_session),
                                media: MediaStorage = Depends(get_media_storage)):
    form = _parse_form(CategoryFormDTO, data, category_id)
    return await AdminService.save_category(form, session, media, await _read_image(image))


@admin_router.delete("/categories/{category_id}", response_model=list[CategoryDTO])
async def admin_delete_category(category_id: str,
                                admin: UserDTO = Depends(require_admin),
                                session: AsyncSession = Depends(get_session)):
    return await AdminService.delete_category(category_id, session)


# Products

@admin_router.get("/products", response_model=list[ProductDTO])
async def admin_list_products(admin: UserDTO = Depends(require_admin),
                              session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_all_products(session)


@admin_router.post("/products", response_model=list[ProductDTO])
async def admin_create_product(data: str = Form(...),
                               image: UploadFile | None = File(None),
                               admin: UserDTO = Depends(require_admin),
                               session: AsyncSession = Depends(get_session),
                               media: MediaStorage = Depends(get_media_storage)):
    form = _parse_form(ProductFormDTO, data, None)
    return await AdminService.save_product(form, session, media, await _read_image(image))


@admin_router.put("/products/{product_id}", response_model=list[ProductDTO])
async def admin_update_product(product_id: str,
                               data: str = Form(...),
                               image: UploadFile | None = File(None),
                               admin: UserDTO = Depends(require_admin),
                               session: AsyncSession = Depends(get_session),
                               media: MediaStorage = Depends(get_media_storage)):
    form = _parse_form(ProductFormDTO, data, product_id)
    return await AdminService.save_product(form, session, media, await _read_image(image))


@admin_router.delete("/products/{product_id}", response_model=list[ProductDTO])
async def admin_delete_product(product_id: str,
                               admin: UserDTO = Depends(require_admin),
                               session: AsyncSession = Depends(get_session)):
    return await AdminService.delete_product(product_id, session)


# Settings

@admin_router.get("/settings", response_model=StoreSettingsDTO)
async def admin_get_settings(admin: UserDTO = Depends(require_admin),
                             session: AsyncSession = Depends(get_session)):
    return await SettingsService.get_settings(session)


@admin_router.put("/settings", response_model=StoreSettingsDTO)
async def admin_save_settings(settings: StoreSettingsDTO,
                              admin: UserDTO = Depends(require_admin),
                              session: AsyncSession = Depends(get_session)):
    return await AdminService.save_settings(settings, session)


@admin_router.post("/settings/images/{section}", response_model=StoreSettingsDTO)
async def admin_upload_settings_image(section: str,
                                      image: UploadFile = File(...),
                                      admin: UserDTO = Depends(require_admin),
                                      session: AsyncSession = Depends(get_session),
                                      media: MediaStorage = Depends(get_media_storage)):
    if section not in SETTINGS_IMAGE_SECTIONS:
        raise HTTPException(status_code=404, detail=f"Unknown settings section '{section}'")
    return await AdminService.upload_settings_image(SETTINGS_IMAGE_SECTIONS[section], await _read_image(image),
                                                    session, media)


# Orders

@admin_router.get("/orders", response_model=list[OrderDTO])
async def admin_list_orders(status: OrderStatus | None = None,
                            admin: UserDTO = Depends(require_admin),
                            session: AsyncSession = Depends(get_session)):
    return await OrderService.get_orders(session, status)


@admin_router.get("/orders/{order_id}", response_model=OrderDetailDTO)
async def admin_get_order(order_id: str,
                          admin: UserDTO = Depends(require_admin),
                          session: AsyncSession = Depends(get_session)):
    return await OrderService.get_order_detail(order_id, session)


@admin_router.patch("/orders/{order_id}/status", response_model=OrderDTO)
async def admin_update_order_status(order_id: str,
                                    payload: OrderStatusRequest,
                                    admin: UserDTO = Depends(require_admin),
                                    session: AsyncSession = Depends(get_session)):
    """
    Change the order status. With notify=true the customer is emailed
    afterwards; a failed email does not undo the status change.
    """
    order = await OrderService.update_status(order_id, payload.status, session, admin_id=admin.id)
    if payload.notify:
        await NotificationService.send_order_status_email(order_id, order.status, session)
    return order


@admin_router.get("/stats")
async def admin_stats(admin: UserDTO = Depends(require_admin),
                      session: AsyncSession = Depends(get_session)):
    return await OrderAnalyticsService.get_dashboard(session)
