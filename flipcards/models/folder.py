from typing import List, Optional
from sqlmodel import SQLModel, Field, Relationship
from flipcards.utils.timestamps import now_ts

class Folder(SQLModel, table=True):
    __tablename__ = "folders"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    created_at: int = Field(default_factory=now_ts, index=True)

    flashcards: List["Flashcard"] = Relationship(back_populates="folder")
