import logging
import os
from dataclasses import dataclass
from typing import Optional
import requests
from flipcards.utils.config import settings
from flipcards.utils.errors import UploadError

logger = logging.getLogger(__name__)

MIME_BY_EXTENSION = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
}


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lstrip(".").lower()

def guess_image_mime(filename: str) -> str:
    ext = file_extension(filename)
    return MIME_BY_EXTENSION.get(ext, f"image/{ext}" if ext else "application/octet-stream")


@dataclass
class UploadResult:
    url: str
    thumb_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class ImageHostClient:
    """
    Envia a imagem para o serviço de hospedagem e devolve a URL pública.
    Uma tentativa só; quem chama decide se tenta de novo.
    """

    def __init__(self, upload_url: str, api_key: str = "", timeout: Optional[float] = None):
        self.upload_url = upload_url
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls, config=settings):
        return cls(config.IMAGE_HOST_UPLOAD_URL, config.IMAGE_HOST_API_KEY, config.IMAGE_HOST_TIMEOUT)

    def upload(self, data: bytes, filename: str, mime_type: Optional[str] = None) -> UploadResult:
        form = {"key": self.api_key, "action": "upload", "format": "json"}
        files = {"source": (filename, data, mime_type or guess_image_mime(filename))}

        try:
            response = requests.post(self.upload_url, data=form, files=files, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Falha de rede ao enviar %s: %s", filename, e)
            raise UploadError("Failed to reach image host", details=str(e))

        if not response.ok:
            logger.warning("Image host respondeu %s para %s: %s", response.status_code, filename, response.text[:500])
            raise UploadError("Failed to upload image to image host", details=f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            raise UploadError("Image host returned an invalid response", status_code=500)

        return parse_upload_response(payload)


def parse_upload_response(payload) -> UploadResult:
    if not isinstance(payload, dict):
        raise UploadError("No image URL in response", status_code=500)

    image = payload.get("image")
    image = image if isinstance(image, dict) else {}
    url = image.get("url") or payload.get("display_url") or payload.get("url")
    if not url:
        raise UploadError("No image URL in response", status_code=500)

    thumb = payload.get("thumb") or image.get("thumb")
    thumb = thumb if isinstance(thumb, dict) else {}
    thumb_url = thumb.get("url") or payload.get("thumbnail_url")
    return UploadResult(url=url, thumb_url=thumb_url, width=image.get("width"), height=image.get("height"))


image_host = ImageHostClient.from_settings()

def get_image_host() -> ImageHostClient:
    return image_host
