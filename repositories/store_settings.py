from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.store_settings import StoreSettings, GENERAL_SETTINGS_ID


class StoreSettingsRepository:
    """
    Repository for the singleton store settings document.

    The document is stored as raw JSON; shaping into StoreSettingsDTO
    happens in SettingsService.
    """

    @staticmethod
    async def get(session: AsyncSession | Session, settings_id: str = GENERAL_SETTINGS_ID) -> dict | None:
        stmt = select(StoreSettings).where(StoreSettings.id == settings_id)
        result = await session_execute(stmt, session)
        settings = result.scalar()
        return dict(settings.data) if settings else None

    @staticmethod
    async def set(data: dict, session: AsyncSession | Session, settings_id: str = GENERAL_SETTINGS_ID) -> None:
        """Insert or replace the whole document. Merging is the caller's job."""
        existing = await StoreSettingsRepository.get(session, settings_id)

        if existing is not None:
            stmt = (update(StoreSettings)
                    .where(StoreSettings.id == settings_id)
                    .values(data=data, updated_at=func.now()))
            await session_execute(stmt, session)
        else:
            session.add(StoreSettings(id=settings_id, data=data))
            await session_flush(session)
