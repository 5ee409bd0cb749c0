from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from .base import BaseModelDB

class SessionRecord(BaseModelDB, table=True):
    sid: str = Field(index=True, unique=True)
    user_id: int = Field(index=True, foreign_key="user.id")
    username: str
    is_admin: bool = Field(default=False)
    expires_at: datetime = Field(sa_type=DateTime(timezone=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
