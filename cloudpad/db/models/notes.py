from sqlalchemy import Text
from sqlmodel import Field

from .base import BaseModelDB

class Note(BaseModelDB, table=True):
    owner_id: int = Field(index=True, foreign_key="user.id")
    title: str = Field(default="Untitled")
    content: str = Field(default="", sa_type=Text)
