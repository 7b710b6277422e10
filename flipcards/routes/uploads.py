import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlmodel import Session
from flipcards.db.session import get_session
from flipcards.schemas.flashcard_schemas import FlashcardRead
from flipcards.schemas.upload_schemas import ArchiveImportResponse, ImageMetadata, ImportErrorItem, UploadImageResponse
from flipcards.services.archive_import import import_archive
from flipcards.services.query_params import parse_folder_param
from flipcards.utils.errors import EmptyFileError
from flipcards.utils.image_host import ImageHostClient, get_image_host, guess_image_mime

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post("/upload-image", response_model=UploadImageResponse)
def upload_image(
    file: UploadFile = File(...),
    uploader: ImageHostClient = Depends(get_image_host),
):
    data = file.file.read()
    if not data:
        raise EmptyFileError("Uploaded file is empty")

    filename = file.filename or "image"
    mime_type = file.content_type or guess_image_mime(filename)
    result = uploader.upload(data, filename, mime_type)
    logger.info("Imagem %s enviada: %s", filename, result.url)

    return UploadImageResponse(
        image_url=result.url,
        thumb_url=result.thumb_url,
        metadata=ImageMetadata(
            name=filename,
            size=len(data),
            type=mime_type,
            width=result.width,
            height=result.height,
        ),
    )

@router.post("/upload-zip", response_model=ArchiveImportResponse, status_code=201)
def upload_zip(
    archive: UploadFile = File(..., alias="zip"),
    folder_id: Optional[str] = Form(None, alias="folderId"),
    session: Session = Depends(get_session),
    uploader: ImageHostClient = Depends(get_image_host),
):
    summary = import_archive(session, archive.file.read(), uploader, parse_folder_param(folder_id))
    return ArchiveImportResponse(
        created=len(summary.created),
        errors=[ImportErrorItem(filename=f.filename, error=f.error) for f in summary.errors],
        flashcards=[FlashcardRead.model_validate(card) for card in summary.created],
    )
