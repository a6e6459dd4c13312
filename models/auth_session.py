from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, DateTime, ForeignKey, func

from models.base import Base


class AuthSession(Base):
    __tablename__ = 'auth_sessions'

    token = Column(String, primary_key=True)
    user_id = Column(String(32), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime, default=func.now())
    expires_at = Column(DateTime, nullable=False)


class AuthSessionDTO(BaseModel):
    token: str
    user_id: str
    expires_at: datetime
