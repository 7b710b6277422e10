from typing import Optional
from sqlmodel import SQLModel, Field, Relationship
from flipcards.utils.timestamps import now_ts

class Flashcard(SQLModel, table=True):
    __tablename__ = "flashcards"
    # AUTOINCREMENT no sqlite: ids nunca são reaproveitados
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    image_url: str
    thumb_url: Optional[str] = None
    notes: str = ""

    # Referência fraca: apagar a pasta só limpa o campo (ON DELETE SET NULL)
    folder_id: Optional[int] = Field(default=None, foreign_key="folders.id", ondelete="SET NULL", index=True)
    folder: Optional["Folder"] = Relationship(back_populates="flashcards")

    starred: bool = Field(default=False, index=True)
    last_visited: Optional[int] = Field(default=None, index=True)
    created_at: int = Field(default_factory=now_ts, index=True)
