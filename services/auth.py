"""
Credential sign-in for the admin console.

Passwords are stored as PBKDF2-SHA256 with a per-user salt. A successful
sign-in creates a random bearer token valid for AUTH_SESSION_DAYS days.
"""
import hmac
import logging
import secrets
from datetime import datetime, timedelta

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from db import session_commit
from enums.user_role import UserRole
from exceptions import (
    InvalidCredentialsException,
    UnauthorizedException,
    AdminRequiredException,
    UserAlreadyExistsException,
)
from models.auth_session import AuthSessionDTO
from models.user import UserDTO
from repositories.auth_session import AuthSessionRepository
from repositories.user import UserRepository


def hash_password(password: str, salt: str | None = None) -> tuple[str, str]:
    if salt is None:
        salt = secrets.token_hex(16)
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=bytes.fromhex(salt),
        iterations=config.PASSWORD_HASH_ITERATIONS,
    )
    pwd_hash = kdf.derive(password.encode("utf-8")).hex()
    return pwd_hash, salt


class AuthService:

    @staticmethod
    async def create_user(email: str, password: str, session: AsyncSession | Session,
                          name: str | None = None, role: UserRole = UserRole.ADMIN) -> UserDTO:
        if await UserRepository.get_credentials(email, session) is not None:
            raise UserAlreadyExistsException(email)
        pwd_hash, salt = hash_password(password)
        user_id = await UserRepository.create(email, name, pwd_hash, salt, role, session)
        await session_commit(session)
        logging.info(f"[Auth] Created {role.value} account {user_id}")
        return await UserRepository.get_by_id(user_id, session)

    @staticmethod
    async def authenticate(email: str, password: str,
                           session: AsyncSession | Session) -> tuple[AuthSessionDTO, UserDTO]:
        user = await UserRepository.get_credentials(email, session)
        if user is None or not user.is_active:
            raise InvalidCredentialsException()
        pwd_hash, _ = hash_password(password, user.salt)
        if not hmac.compare_digest(pwd_hash, user.password_hash):
            logging.warning(f"[Auth] Failed sign-in for user {user.id}")
            raise InvalidCredentialsException()

        token = secrets.token_urlsafe(32)
        expires_at = datetime.now() + timedelta(days=config.AUTH_SESSION_DAYS)
        await AuthSessionRepository.create(token, user.id, expires_at, session)
        await session_commit(session)
        logging.info(f"[Auth] User {user.id} signed in")
        return (AuthSessionDTO(token=token, user_id=user.id, expires_at=expires_at),
                UserDTO.model_validate(user, from_attributes=True))

    @staticmethod
    async def get_user_by_token(token: str | None, session: AsyncSession | Session) -> UserDTO:
        if not token:
            raise UnauthorizedException("Missing bearer token")
        auth_session = await AuthSessionRepository.get(token, session)
        if auth_session is None:
            raise UnauthorizedException("Unknown session")
        if auth_session.expires_at < datetime.now():
            await AuthSessionRepository.delete(token, session)
            await session_commit(session)
            raise UnauthorizedException("Session expired")
        user = await UserRepository.get_by_id(auth_session.user_id, session)
        if user is None or not user.is_active:
            raise UnauthorizedException("Account disabled")
        return user

    @staticmethod
    async def require_admin(token: str | None, session: AsyncSession | Session) -> UserDTO:
        user = await AuthService.get_user_by_token(token, session)
        if not user.is_admin:
            raise AdminRequiredException(user.id)
        return user

    @staticmethod
    async def logout(token: str, session: AsyncSession | Session) -> None:
        await AuthSessionRepository.delete(token, session)
        await session_commit(session)
