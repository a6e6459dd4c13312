from datetime import datetime

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.auth_session import AuthSession, AuthSessionDTO


class AuthSessionRepository:

    @staticmethod
    async def create(token: str, user_id: str, expires_at: datetime, session: AsyncSession | Session) -> None:
        session.add(AuthSession(token=token, user_id=user_id, expires_at=expires_at))
        await session_flush(session)

    @staticmethod
    async def get(token: str, session: AsyncSession | Session) -> AuthSessionDTO | None:
        stmt = select(AuthSession).where(AuthSession.token == token)
        auth_session = await session_execute(stmt, session)
        auth_session = auth_session.scalar()
        if auth_session is None:
            return None
        return AuthSessionDTO.model_validate(auth_session, from_attributes=True)

    @staticmethod
    async def delete(token: str, session: AsyncSession | Session) -> None:
        stmt = delete(AuthSession).where(AuthSession.token == token)
        await session_execute(stmt, session)

    @staticmethod
    async def delete_expired(now: datetime, session: AsyncSession | Session) -> int:
        stmt = delete(AuthSession).where(AuthSession.expires_at < now)
        result = await session_execute(stmt, session)
        return result.rowcount
