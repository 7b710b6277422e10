from typing import List, Optional
import requests
from flipcards.schemas.flashcard_schemas import FlashcardFilter


class FlipcardsClient:
    """
    Cliente HTTP da API, usado pela sessão de revisão.
    Os cards voltam como dicts com as chaves do JSON (camelCase).
    """

    def __init__(self, base_url: str, http: Optional[requests.Session] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> dict:
        response = self.http.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()

    def list_flashcards(self, filters: Optional[FlashcardFilter] = None) -> List[dict]:
        filters = filters or FlashcardFilter()
        params = {}
        if filters.folder_id is not None:
            params["folderId"] = filters.folder_id
        if filters.starred:
            params["starred"] = "true"
        if filters.visited_on is not None:
            params["date"] = filters.visited_on.isoformat()
        return self._request("GET", "/flashcards", params=params)["flashcards"]

    def record_visit(self, card_id: int) -> dict:
        return self._request("POST", f"/flashcards/{card_id}/visit")["flashcard"]

    def toggle_star(self, card_id: int) -> dict:
        return self._request("POST", f"/flashcards/{card_id}/star")["flashcard"]

    def update_notes(self, card_id: int, notes: str) -> dict:
        return self._request("PATCH", f"/flashcards/{card_id}", json={"notes": notes})["flashcard"]

    def delete_flashcard(self, card_id: int) -> None:
        self._request("DELETE", f"/flashcards/{card_id}")
