import logging
import random
from functools import partial
from typing import List, Optional
from flipcards.schemas.flashcard_schemas import FlashcardFilter

logger = logging.getLogger(__name__)


class ReviewSession:
    """
    Estado em memória do visualizador de cards: lista filtrada, índice atual,
    embaralhamento e flip/edição. Nada aqui é persistido; as mutações passam
    pelo `source` (normalmente um FlipcardsClient) e a cópia local é ajustada.

    Ao exibir um card novo, a visita é registrada em modo "dispara e esquece":
    erros vão para o log e nunca sobem para quem chamou.
    """

    def __init__(self, source, rng: Optional[random.Random] = None, executor=None):
        self.source = source
        self.rng = rng or random.Random()
        self.executor = executor

        self.cards: List[dict] = []
        self.filters = FlashcardFilter()
        self.current_index = 0
        self.shuffled = False
        self.flipped = False
        self.editing = False
        self._displayed_id = None

    @property
    def current(self) -> Optional[dict]:
        if not self.cards:
            return None
        return self.cards[self.current_index]

    def load(self, filters: Optional[FlashcardFilter] = None):
        self.filters = filters or FlashcardFilter()
        self.cards = list(self.source.list_flashcards(self.filters))
        self.shuffled = False
        self.flipped = False
        self.editing = False
        self._displayed_id = None
        self._go_to(0)

    def shuffle(self):
        # random.shuffle é Fisher-Yates; a ordem salva no banco não muda
        self.rng.shuffle(self.cards)
        self.shuffled = True
        self._go_to(0)

    def next(self):
        self._go_to(self.current_index + 1)

    def previous(self):
        self._go_to(self.current_index - 1)

    def flip(self):
        self.flipped = not self.flipped

    def start_editing(self):
        self.editing = True

    def cancel_editing(self):
        self.editing = False

    def save_notes(self, card_id: int, notes: str) -> dict:
        updated = self.source.update_notes(card_id, notes)
        self._replace(updated)
        self.editing = False
        return updated

    def toggle_star(self, card_id: int) -> dict:
        updated = self.source.toggle_star(card_id)
        self._replace(updated)
        return updated

    def delete(self, card_id: int):
        self.source.delete_flashcard(card_id)
        self.remove(card_id)

    def remove(self, card_id: int):
        """Tira o card da lista local e corrige o índice se ele passou do fim."""
        self.cards = [card for card in self.cards if card["id"] != card_id]
        self._go_to(self.current_index)

    def _replace(self, updated: dict):
        for i, card in enumerate(self.cards):
            if card["id"] == updated["id"]:
                self.cards[i] = updated

    def _go_to(self, index: int):
        # Sem volta ao início: o índice fica preso em [0, len-1]
        last = max(len(self.cards) - 1, 0)
        self.current_index = min(max(index, 0), last)
        self._on_display()

    def _on_display(self):
        card = self.current
        if card is None or card["id"] == self._displayed_id:
            return
        self._displayed_id = card["id"]
        self.flipped = False
        self.editing = False
        self._fire_visit(card["id"])

    def _fire_visit(self, card_id: int):
        if self.executor is not None:
            future = self.executor.submit(self.source.record_visit, card_id)
            future.add_done_callback(partial(self._log_visit_result, card_id))
            return
        try:
            self.source.record_visit(card_id)
        except Exception as e:
            logger.warning("Falha ao registrar visita do card %s: %s", card_id, e)

    @staticmethod
    def _log_visit_result(card_id, future):
        error = future.exception()
        if error is not None:
            logger.warning("Falha ao registrar visita do card %s: %s", card_id, error)
