import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import List, Optional
from sqlmodel import Session
from flipcards.models.flashcard import Flashcard
from flipcards.models.folder import Folder
from flipcards.services.flashcard_service import create_flashcard
from flipcards.utils.errors import EmptyFileError, NoImagesFoundError, ValidationError
from flipcards.utils.image_host import file_extension, guess_image_mime

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "bmp"})


def is_image_file(filename: str) -> bool:
    # Só a extensão conta, sem olhar o conteúdo
    return file_extension(filename) in IMAGE_EXTENSIONS


@dataclass
class ImportFailure:
    filename: str
    error: str

@dataclass
class ImportSummary:
    created: List[Flashcard] = field(default_factory=list)
    errors: List[ImportFailure] = field(default_factory=list)


def import_archive(session: Session, archive: bytes, uploader, folder_id: Optional[int] = None) -> ImportSummary:
    """
    Cria um card para cada imagem do ZIP.

    Importação "best effort": cada arquivo é independente, e a falha de um
    (vazio, upload recusado, erro no banco) vira uma entrada em `errors`
    sem interromper os outros. Só falha o lote inteiro se o ZIP for inválido,
    a pasta não existir ou não houver nenhuma imagem.
    """
    try:
        bundle = zipfile.ZipFile(io.BytesIO(archive))
    except zipfile.BadZipFile:
        raise ValidationError("Invalid ZIP archive")

    if folder_id is not None and session.get(Folder, folder_id) is None:
        raise ValidationError(f"Folder {folder_id} does not exist")

    summary = ImportSummary()
    with bundle:
        entries = bundle.infolist()
        files = [entry for entry in entries if not entry.is_dir()]
        images = [entry for entry in files if is_image_file(entry.filename)]
        logger.info("📦 ZIP com %d entradas, %d imagens", len(entries), len(images))

        if not images:
            raise NoImagesFoundError(len(entries), [entry.filename for entry in files])

        for entry in images:
            try:
                data = bundle.read(entry)
                if not data:
                    raise EmptyFileError()

                result = uploader.upload(data, entry.filename, guess_image_mime(entry.filename))
                card = create_flashcard(session, result.url, "", folder_id, result.thumb_url)
                summary.created.append(card)
                logger.info("Card %s criado a partir de %s", card.id, entry.filename)
            except Exception as e:
                session.rollback()
                message = getattr(e, "message", None) or str(e)
                logger.warning("⚠️ Falha ao importar %s: %s", entry.filename, message)
                summary.errors.append(ImportFailure(filename=entry.filename, error=message))

    return summary
