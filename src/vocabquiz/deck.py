import logging
import random
from typing import Any, Optional

from pydantic import ValidationError

from .config import settings
from .models import DeckState
from .storage import BlobStorage

logger = logging.getLogger(__name__)


class DeckRotator:
    """Serves item indices so that every item comes up once per pass.

    The deck is a shuffled permutation of ``[0, n)`` and a cursor into it.
    The state is written to storage after every draw and every reshuffle.
    """

    def __init__(
        self,
        storage: BlobStorage,
        key: str = settings.DECK_KEY,
        rng: Optional[random.Random] = None,
    ):
        self.storage = storage
        self.key = key
        self.rng = rng or random.Random()
        self.state = DeckState()

    def rebuild(self, n: int) -> None:
        order = list(range(n))
        self.rng.shuffle(order)
        self.state = DeckState(order=order, cursor=0)
        logger.debug(f"Deck rebuilt with {n} items")
        self.save()

    def load(self, n: int) -> None:
        """Restores the persisted deck, reshuffling if it doesn't fit ``n`` items."""
        restored = self._parse(self.storage.load_blob(self.key))
        if restored is not None and restored.is_valid_for(n):
            self.state = restored
            return
        if restored is not None:
            logger.warning(
                f"Persisted deck does not match vocabulary of {n} items, rebuilding"
            )
        self.rebuild(n)

    def next(self, n: int) -> Optional[int]:
        if n <= 0:
            return None
        if len(self.state.order) != n or self.state.exhausted:
            self.rebuild(n)
        index = self.state.order[self.state.cursor]
        self.state.cursor += 1
        self.save()
        return index

    def save(self) -> None:
        self.storage.save_blob(self.key, self.state.model_dump())

    @property
    def position(self) -> int:
        return self.state.cursor

    def _parse(self, blob: Any) -> Optional[DeckState]:
        if blob is None:
            return None
        try:
            return DeckState.model_validate(blob)
        except ValidationError:
            logger.warning("Discarding malformed deck state")
            return None
