import logging
from datetime import date
from typing import List, Optional
from sqlalchemy import not_, update
from sqlmodel import Session, select, func
from flipcards.models.flashcard import Flashcard
from flipcards.models.folder import Folder
from flipcards.schemas.flashcard_schemas import FlashcardFilter
from flipcards.utils.errors import NotFoundError, ValidationError
from flipcards.utils.timestamps import day_bounds, now_ts, ts_to_date

logger = logging.getLogger(__name__)


def _check_folder(session: Session, folder_id: Optional[int]):
    if folder_id is not None and session.get(Folder, folder_id) is None:
        raise ValidationError(f"Folder {folder_id} does not exist")


def create_flashcard(
    session: Session,
    image_url: str,
    notes: str = "",
    folder_id: Optional[int] = None,
    thumb_url: Optional[str] = None,
) -> Flashcard:
    image_url = image_url.strip() if isinstance(image_url, str) else ""
    if not image_url:
        raise ValidationError("imageUrl is required")
    _check_folder(session, folder_id)

    card = Flashcard(
        image_url=image_url,
        thumb_url=thumb_url or None,
        notes=notes or "",
        folder_id=folder_id,
        starred=False,
    )
    session.add(card)
    session.commit()
    session.refresh(card)
    logger.debug("Card %s criado (pasta=%s)", card.id, card.folder_id)
    return card

def list_flashcards(session: Session, filters: Optional[FlashcardFilter] = None) -> List[Flashcard]:
    """
    Lista os cards do mais novo para o mais antigo.
    Os filtros recebidos são combinados com AND.
    """
    filters = filters or FlashcardFilter()
    statement = select(Flashcard)

    if filters.folder_id is not None:
        statement = statement.where(Flashcard.folder_id == filters.folder_id)
    if filters.starred:
        statement = statement.where(Flashcard.starred == True)  # noqa: E712
    if filters.visited_on is not None:
        start, end = day_bounds(filters.visited_on)
        statement = statement.where(Flashcard.last_visited >= start, Flashcard.last_visited <= end)

    statement = statement.order_by(Flashcard.created_at.desc(), Flashcard.id.desc())
    return list(session.exec(statement).all())

def get_flashcard(session: Session, card_id: int) -> Optional[Flashcard]:
    return session.get(Flashcard, card_id)

def update_flashcard(session: Session, card_id: int, changes: dict) -> Flashcard:
    card = session.get(Flashcard, card_id)
    if card is None:
        raise NotFoundError("Flashcard not found")

    # Campos ausentes não são tocados
    if "notes" in changes:
        card.notes = changes["notes"] or ""
    if "folder_id" in changes:
        _check_folder(session, changes["folder_id"])
        card.folder_id = changes["folder_id"]
    if "starred" in changes:
        if not isinstance(changes["starred"], bool):
            raise ValidationError("starred must be a boolean")
        card.starred = changes["starred"]
    if "last_visited" in changes:
        visited = changes["last_visited"]
        if visited is not None and visited > now_ts():
            raise ValidationError("lastVisited cannot be in the future")
        card.last_visited = visited

    session.add(card)
    session.commit()
    session.refresh(card)
    return card

def toggle_star(session: Session, card_id: int) -> Flashcard:
    # Um único UPDATE: ler-inverter-gravar fica atômico no próprio banco
    table = Flashcard.__table__
    statement = (
        update(table)
        .where(table.c.id == card_id)
        .values(starred=not_(table.c.starred))
    )
    result = session.connection().execute(statement)
    if result.rowcount == 0:
        session.rollback()
        raise NotFoundError("Flashcard not found")
    session.commit()
    return session.get(Flashcard, card_id, populate_existing=True)

def record_visit(session: Session, card_id: int, now: Optional[int] = None) -> Flashcard:
    return update_flashcard(session, card_id, {"last_visited": now if now is not None else now_ts()})

def delete_flashcard(session: Session, card_id: int) -> None:
    card = session.get(Flashcard, card_id)
    if card is None:
        raise NotFoundError("Flashcard not found")
    session.delete(card)
    session.commit()
    logger.info("Card %s apagado", card_id)

def list_visited_dates(session: Session) -> List[date]:
    """
    Datas (dia UTC) em que pelo menos um card foi visto, da mais recente para a mais antiga.
    """
    statement = select(Flashcard.last_visited).where(Flashcard.last_visited != None).distinct()  # noqa: E711
    timestamps = session.exec(statement).all()
    return sorted({ts_to_date(ts) for ts in timestamps}, reverse=True)

def count_flashcards(session: Session, folder_id: Optional[int] = None) -> int:
    statement = select(func.count(Flashcard.id))
    if folder_id is not None:
        statement = statement.where(Flashcard.folder_id == folder_id)
    return session.exec(statement).one()
