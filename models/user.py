from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, DateTime, Boolean, Enum as SQLEnum, func

from enums.user_role import UserRole
from models.base import Base
from models.category import generate_id


class User(Base):
    __tablename__ = 'users'

    id = Column(String(32), primary_key=True, default=generate_id)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    salt = Column(String, nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class UserDTO(BaseModel):
    """Public view of a user, never carries credentials."""
    id: str | None = None
    email: str | None = None
    name: str | None = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
