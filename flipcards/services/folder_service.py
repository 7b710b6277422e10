import logging
from typing import List, Optional
from sqlmodel import Session, select
from flipcards.models.folder import Folder
from flipcards.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _clean_name(name) -> str:
    cleaned = name.strip() if isinstance(name, str) else ""
    if not cleaned:
        raise ValidationError("Folder name is required")
    return cleaned


def create_folder(session: Session, name: str) -> Folder:
    folder = Folder(name=_clean_name(name))
    session.add(folder)
    session.commit()
    session.refresh(folder)
    logger.info("Pasta %s criada: %r", folder.id, folder.name)
    return folder

def list_folders(session: Session) -> List[Folder]:
    statement = select(Folder).order_by(Folder.created_at.desc(), Folder.id.desc())
    return list(session.exec(statement).all())

def get_folder(session: Session, folder_id: int) -> Optional[Folder]:
    return session.get(Folder, folder_id)

def rename_folder(session: Session, folder_id: int, name: str) -> Folder:
    cleaned = _clean_name(name)
    folder = session.get(Folder, folder_id)
    if folder is None:
        raise NotFoundError("Folder not found")

    folder.name = cleaned
    session.add(folder)
    session.commit()
    session.refresh(folder)
    return folder

def delete_folder(session: Session, folder_id: int) -> None:
    """
    Apaga a pasta sem apagar os cards: quem apontava para ela fica sem pasta.
    A limpeza e o delete vão na mesma transação.
    """
    folder = session.get(Folder, folder_id)
    if folder is None:
        raise NotFoundError("Folder not found")

    cards = list(folder.flashcards)
    for card in cards:
        card.folder = None
        session.add(card)

    session.delete(folder)
    session.commit()
    logger.info("Pasta %s apagada (%d cards ficaram sem pasta)", folder_id, len(cards))
