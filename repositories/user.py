from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from enums.user_role import UserRole
from models.user import User, UserDTO


class UserRepository:

    @staticmethod
    async def get_by_id(user_id: str, session: AsyncSession | Session) -> UserDTO | None:
        stmt = select(User).where(User.id == user_id)
        user = await session_execute(stmt, session)
        user = user.scalar()
        if user is None:
            return None
        return UserDTO.model_validate(user, from_attributes=True)

    @staticmethod
    async def get_credentials(email: str, session: AsyncSession | Session) -> User | None:
        """
        Load the full row including password hash and salt.

        Only AuthService should call this; everything else uses UserDTO.
        """
        stmt = select(User).where(User.email == email.strip().lower())
        user = await session_execute(stmt, session)
        return user.scalar()

    @staticmethod
    async def create(email: str, name: str | None, password_hash: str, salt: str, role: UserRole,
                     session: AsyncSession | Session) -> str:
        user = User(email=email.strip().lower(), name=name, password_hash=password_hash, salt=salt, role=role)
        session.add(user)
        await session_flush(session)
        return user.id
