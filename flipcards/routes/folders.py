from fastapi import APIRouter, Depends
from sqlmodel import Session
from flipcards.db.session import get_session
from flipcards.schemas.flashcard_schemas import APIResponse
from flipcards.schemas.folder_schemas import FolderEnvelope, FolderListResponse, FolderRead, FolderWrite
from flipcards.services import folder_service
from flipcards.services.query_params import parse_id
from flipcards.utils.errors import NotFoundError

router = APIRouter(prefix="/folders", tags=["folders"])


@router.get("", response_model=FolderListResponse)
def list_folders(session: Session = Depends(get_session)):
    folders = folder_service.list_folders(session)
    return FolderListResponse(folders=[FolderRead.model_validate(f) for f in folders])

@router.post("", response_model=FolderEnvelope, status_code=201)
def create_folder(payload: FolderWrite, session: Session = Depends(get_session)):
    folder = folder_service.create_folder(session, payload.name)
    return FolderEnvelope(folder=FolderRead.model_validate(folder))

@router.get("/{folder_id}", response_model=FolderEnvelope)
def get_folder(folder_id: str, session: Session = Depends(get_session)):
    folder = folder_service.get_folder(session, parse_id(folder_id, kind="folder"))
    if folder is None:
        raise NotFoundError("Folder not found")
    return FolderEnvelope(folder=FolderRead.model_validate(folder))

@router.patch("/{folder_id}", response_model=FolderEnvelope)
def rename_folder(folder_id: str, payload: FolderWrite, session: Session = Depends(get_session)):
    folder = folder_service.rename_folder(session, parse_id(folder_id, kind="folder"), payload.name)
    return FolderEnvelope(folder=FolderRead.model_validate(folder))

@router.delete("/{folder_id}", response_model=APIResponse)
def delete_folder(folder_id: str, session: Session = Depends(get_session)):
    folder_service.delete_folder(session, parse_id(folder_id, kind="folder"))
    return APIResponse()
