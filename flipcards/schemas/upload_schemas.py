from typing import List, Optional
from flipcards.schemas.flashcard_schemas import APIResponse, CamelModel, FlashcardRead


class ImageMetadata(CamelModel):
    name: str
    size: int
    type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

class UploadImageResponse(APIResponse):
    image_url: str
    thumb_url: Optional[str] = None
    metadata: ImageMetadata


# Falha de um arquivo do ZIP (não derruba o lote)
class ImportErrorItem(CamelModel):
    filename: str
    error: str

class ArchiveImportResponse(APIResponse):
    created: int
    errors: List[ImportErrorItem] = []
    flashcards: List[FlashcardRead]
