from datetime import date, datetime
from typing import Optional
from flipcards.schemas.flashcard_schemas import FlashcardFilter
from flipcards.utils.errors import ValidationError

TRUTHY = {"1", "true", "yes", "on"}

# Maior valor que cabe num INTEGER do sqlite/postgres (bigint)
MAX_ID = 2**63 - 1


def parse_id(raw, kind: str = "flashcard") -> int:
    """
    Converte o id vindo da URL; rejeita qualquer coisa que não seja inteiro positivo.
    """
    text = str(raw).strip() if raw is not None else ""
    if not (text.isascii() and text.isdigit()) or not 0 < int(text) <= MAX_ID:
        raise ValidationError(f"Invalid {kind} ID", details={"received": raw})
    return int(text)

def parse_folder_param(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() in ("", "null"):
        return None
    return parse_id(raw, kind="folder")

def parse_bool_param(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in TRUTHY

def parse_date_param(raw: Optional[str]) -> Optional[date]:
    if raw is None or not raw.strip():
        return None
    try:
        return datetime.strptime(raw.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date, expected YYYY-MM-DD", details={"received": raw})

def build_filter(folder_id: Optional[str] = None, starred: Optional[str] = None, visited_on: Optional[str] = None) -> FlashcardFilter:
    return FlashcardFilter(
        folder_id=parse_folder_param(folder_id),
        starred=parse_bool_param(starred),
        visited_on=parse_date_param(visited_on),
    )
