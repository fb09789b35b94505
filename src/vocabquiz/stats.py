import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .config import settings
from .models import Preferences, Stats
from .storage import BlobStorage

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def load_merged(storage: BlobStorage, key: str, model: Type[M]) -> M:
    """Loads a persisted blob merged over the model defaults.

    Unknown keys are ignored; a blob that isn't an object or fails validation
    is discarded in favour of the defaults.
    """
    defaults = model()
    saved: Optional[Any] = storage.load_blob(key)
    if not isinstance(saved, dict):
        return defaults
    try:
        return model.model_validate({**defaults.model_dump(), **saved})
    except ValidationError:
        logger.warning(f"Discarding invalid {key!r} blob, using defaults")
        return defaults


class StatsTracker:
    """Correct / wrong / streak counters, persisted after every change."""

    def __init__(self, storage: BlobStorage, key: str = settings.STATS_KEY):
        self.storage = storage
        self.key = key
        self.stats = load_merged(storage, key, Stats)

    def record(self, correct: bool) -> Stats:
        if correct:
            self.stats.correct += 1
            self.stats.streak += 1
        else:
            self.stats.wrong += 1
            self.stats.streak = 0
        self.save()
        return self.stats

    def reset(self) -> Stats:
        self.stats = Stats()
        self.save()
        return self.stats

    def save(self) -> None:
        self.storage.save_blob(self.key, self.stats.model_dump())


class PreferenceStore:
    def __init__(self, storage: BlobStorage, key: str = settings.PREFS_KEY):
        self.storage = storage
        self.key = key
        self.prefs = load_merged(storage, key, Preferences)

    def update(self, **changes) -> Preferences:
        self.prefs = Preferences.model_validate({**self.prefs.model_dump(), **changes})
        self.save()
        return self.prefs

    def save(self) -> None:
        self.storage.save_blob(self.key, self.prefs.model_dump())
