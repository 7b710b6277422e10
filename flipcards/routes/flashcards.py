from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from flipcards.db.session import get_session
from flipcards.schemas.flashcard_schemas import (
    APIResponse,
    FlashcardCountResponse,
    FlashcardCreate,
    FlashcardEnvelope,
    FlashcardListResponse,
    FlashcardRead,
    FlashcardUpdate,
    VisitedDatesResponse,
)
from flipcards.services import flashcard_service
from flipcards.services.query_params import build_filter, parse_folder_param, parse_id
from flipcards.utils.errors import NotFoundError

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


def _envelope(card) -> FlashcardEnvelope:
    return FlashcardEnvelope(flashcard=FlashcardRead.model_validate(card))


@router.get("", response_model=FlashcardListResponse)
def list_flashcards(
    folder_id: Optional[str] = Query(None, alias="folderId"),
    starred: Optional[str] = None,
    date: Optional[str] = None,
    session: Session = Depends(get_session),
):
    filters = build_filter(folder_id, starred, date)
    cards = flashcard_service.list_flashcards(session, filters)
    return FlashcardListResponse(flashcards=[FlashcardRead.model_validate(c) for c in cards])

@router.post("", response_model=FlashcardEnvelope, status_code=201)
def create_flashcard(payload: FlashcardCreate, session: Session = Depends(get_session)):
    card = flashcard_service.create_flashcard(
        session,
        payload.image_url,
        payload.notes or "",
        payload.folder_id,
        payload.thumb_url,
    )
    return _envelope(card)

# Rotas fixas antes de /{card_id}
@router.get("/visited-dates", response_model=VisitedDatesResponse)
def visited_dates(session: Session = Depends(get_session)):
    return VisitedDatesResponse(dates=flashcard_service.list_visited_dates(session))

@router.get("/count", response_model=FlashcardCountResponse)
def count_flashcards(
    folder_id: Optional[str] = Query(None, alias="folderId"),
    session: Session = Depends(get_session),
):
    count = flashcard_service.count_flashcards(session, parse_folder_param(folder_id))
    return FlashcardCountResponse(count=count)

@router.get("/{card_id}", response_model=FlashcardEnvelope)
def get_flashcard(card_id: str, session: Session = Depends(get_session)):
    card = flashcard_service.get_flashcard(session, parse_id(card_id))
    if card is None:
        raise NotFoundError("Flashcard not found")
    return _envelope(card)

@router.patch("/{card_id}", response_model=FlashcardEnvelope)
def update_flashcard(card_id: str, payload: FlashcardUpdate, session: Session = Depends(get_session)):
    changes = payload.model_dump(exclude_unset=True)
    card = flashcard_service.update_flashcard(session, parse_id(card_id), changes)
    return _envelope(card)

@router.delete("/{card_id}", response_model=APIResponse)
def delete_flashcard(card_id: str, session: Session = Depends(get_session)):
    flashcard_service.delete_flashcard(session, parse_id(card_id))
    return APIResponse()

@router.post("/{card_id}/star", response_model=FlashcardEnvelope)
def toggle_star(card_id: str, session: Session = Depends(get_session)):
    card = flashcard_service.toggle_star(session, parse_id(card_id))
    return _envelope(card)

@router.post("/{card_id}/visit", response_model=FlashcardEnvelope)
def record_visit(card_id: str, session: Session = Depends(get_session)):
    card = flashcard_service.record_visit(session, parse_id(card_id))
    return _envelope(card)
