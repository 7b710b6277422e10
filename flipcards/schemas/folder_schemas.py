from typing import List
from flipcards.schemas.flashcard_schemas import APIResponse, CamelModel


class FolderRead(CamelModel):
    id: int
    name: str
    created_at: int

class FolderWrite(CamelModel):
    name: str


class FolderEnvelope(APIResponse):
    folder: FolderRead

class FolderListResponse(APIResponse):
    folders: List[FolderRead]
