from datetime import date
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional


# Base dos schemas que vão e voltam do Frontend (chaves em camelCase)
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class APIResponse(CamelModel):
    success: bool = True


# O card que devolvemos para o Frontend (Output)
class FlashcardRead(CamelModel):
    id: int
    image_url: str
    thumb_url: Optional[str] = None
    notes: str = ""
    folder_id: Optional[int] = None
    starred: bool = False
    last_visited: Optional[int] = None
    created_at: int

# Input
class FlashcardCreate(CamelModel):
    image_url: str
    notes: Optional[str] = ""
    folder_id: Optional[int] = None
    thumb_url: Optional[str] = None

# Só os campos enviados são aplicados (exclude_unset)
class FlashcardUpdate(CamelModel):
    notes: Optional[str] = None
    folder_id: Optional[int] = None
    starred: Optional[bool] = None


class FlashcardFilter(BaseModel):
    folder_id: Optional[int] = None
    starred: bool = False
    visited_on: Optional[date] = None


class FlashcardEnvelope(APIResponse):
    flashcard: FlashcardRead

class FlashcardListResponse(APIResponse):
    flashcards: List[FlashcardRead]

class FlashcardCountResponse(APIResponse):
    count: int

class VisitedDatesResponse(APIResponse):
    dates: List[date]
