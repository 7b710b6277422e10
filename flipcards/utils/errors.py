from typing import Any, Optional


class FlipcardsError(Exception):
    """Erro base da API; cada subclasse sabe qual status HTTP devolver."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"success": False, "error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(FlipcardsError):
    status_code = 400


class NotFoundError(FlipcardsError):
    status_code = 404


class UploadError(FlipcardsError):
    status_code = 502


class NoImagesFoundError(ValidationError):
    def __init__(self, total_entries: int, filenames: list):
        self.total_entries = total_entries
        self.filenames = list(filenames)
        listed = ", ".join(self.filenames) or "none"
        super().__init__(
            "No image files found in ZIP",
            details=f"Found {total_entries} total entries, {len(self.filenames)} files. Files: {listed}",
        )


class EmptyFileError(ValidationError):
    def __init__(self, message: str = "Empty file data"):
        super().__init__(message)
