"""
Admin write operations.

Every write is one AdminCommand followed by a reload: the command runs
and commits, then the affected list is fetched again and returned, so the
dashboard always shows what is actually stored.
"""
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit, session_rollback
from enums.media_entity import MediaEntity
from exceptions import CategoryNotFoundException, ProductNotFoundException
from models.category import CategoryDTO, CategoryFormDTO
from models.media import UploadedImageDTO
from models.product import ProductDTO, ProductFormDTO
from models.store_settings import StoreSettingsDTO
from repositories.category import CategoryRepository
from repositories.product import ProductRepository
from services.media import MediaStorage
from services.settings import SettingsService

logger = logging.getLogger(__name__)

SessionType = AsyncSession | Session


def changed_columns(form: CategoryFormDTO | ProductFormDTO) -> dict:
    """Columns the form actually carried. Omitted fields keep their stored value."""
    return form.model_dump(include=form.model_fields_set - {'id'})


@dataclass
class AdminCommand:
    name: str
    execute: Callable[[SessionType], Awaitable[Any]]
    reload: Callable[[SessionType], Awaitable[Any]]


class AdminService:

    @staticmethod
    async def run(command: AdminCommand, session: SessionType):
        """
        Execute, commit, reload.

        A failed command is rolled back and re-raised; nothing is reloaded.
        """
        try:
            result = await command.execute(session)
            await session_commit(session)
        except Exception:
            await session_rollback(session)
            logger.error(f"[Admin] {command.name} failed", exc_info=True)
            raise
        logger.info(f"[Admin] {command.name} done ({result})")
        return await command.reload(session)

    # Categories

    @staticmethod
    async def save_category(form: CategoryFormDTO,
                            session: SessionType,
                            media: MediaStorage,
                            image: UploadedImageDTO | None = None) -> list[CategoryDTO]:
        """Create when form.id is empty, otherwise merge-update. A new image replaces form.image."""

        async def execute(s: SessionType):
            values = form
            if image is not None:
                url = await media.upload(MediaEntity.CATEGORY, image)
                values = form.model_copy(update={'image': url})
            if not values.id:
                return await CategoryRepository.create(values, s)
            updated = await CategoryRepository.update(
                values.id, changed_columns(values), s)
            if not updated:
                raise CategoryNotFoundException(values.id)
            return values.id

        command = AdminCommand("save_category", execute, CategoryRepository.get_all)
        return await AdminService.run(command, session)

    @staticmethod
    async def delete_category(category_id: str, session: SessionType) -> list[CategoryDTO]:
        """Products of the category are left as they are."""

        async def execute(s: SessionType):
            if not await CategoryRepository.delete(category_id, s):
                logger.warning(f"[Admin] Category {category_id} already gone")
            return category_id

        command = AdminCommand("delete_category", execute, CategoryRepository.get_all)
        return await AdminService.run(command, session)

    # Products

    @staticmethod
    async def save_product(form: ProductFormDTO,
                           session: SessionType,
                           media: MediaStorage,
                           image: UploadedImageDTO | None = None) -> list[ProductDTO]:
        """Create when form.id is empty, otherwise merge-update. A new image replaces form.image_url."""

        async def execute(s: SessionType):
            values = form
            if image is not None:
                url = await media.upload(MediaEntity.PRODUCT, image)
                values = form.model_copy(update={'image_url': url})
            if not values.id:
                return await ProductRepository.create(values, s)
            updated = await ProductRepository.update(
                values.id, changed_columns(values), s)
            if not updated:
                raise ProductNotFoundException(values.id)
            return values.id

        command = AdminCommand("save_product", execute, ProductRepository.get_all)
        return await AdminService.run(command, session)

    @staticmethod
    async def delete_product(product_id: str, session: SessionType) -> list[ProductDTO]:

        async def execute(s: SessionType):
            if not await ProductRepository.delete(product_id, s):
                logger.warning(f"[Admin] Product {product_id} already gone")
            return product_id

        command = AdminCommand("delete_product", execute, ProductRepository.get_all)
        return await AdminService.run(command, session)

    # Settings

    @staticmethod
    async def save_settings(settings: StoreSettingsDTO, session: SessionType) -> StoreSettingsDTO:

        async def execute(s: SessionType):
            await SettingsService.merge_settings(settings, s)
            return "settings/general"

        command = AdminCommand("save_settings", execute, SettingsService.get_settings)
        return await AdminService.run(command, session)

    @staticmethod
    async def upload_settings_image(section: MediaEntity,
                                    image: UploadedImageDTO,
                                    session: SessionType,
                                    media: MediaStorage) -> StoreSettingsDTO:
        """Store a hero/about image at settings/<section>/<filename> and record its URL."""
        fields = {MediaEntity.SETTINGS_HERO: "hero", MediaEntity.SETTINGS_ABOUT: "about"}
        if section not in fields:
            raise ValueError(f"{section} is not a settings image section")

        async def execute(s: SessionType):
            url = await media.upload(section, image)
            await SettingsService.merge_section_image(fields[section], url, s)
            return url

        command = AdminCommand("upload_settings_image", execute, SettingsService.get_settings)
        return await AdminService.run(command, session)
