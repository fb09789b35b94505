import logging
import random
import re
import unicodedata
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from .config import settings
from .models import Difficulty, QuizMode, VocabItem

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_phonetic(text: Optional[str]) -> str:
    """Lowercases, strips tone marks and other diacritics, and collapses spaces."""
    decomposed = unicodedata.normalize("NFD", (text or "").lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped).strip()


def similarity_key(item: VocabItem, mode: QuizMode) -> str:
    if mode == QuizMode.SOURCE_TO_TARGET:
        return (item.translation or "")[:1].lower()
    return normalize_phonetic(item.phonetic)[:1]


def sample_distinct(
    count: int,
    pool: Sequence[int],
    exclude: Optional[Callable[[int], bool]] = None,
    rng: Optional[random.Random] = None,
    attempts: int = settings.SAMPLE_ATTEMPTS,
) -> List[int]:
    """Draws up to ``count`` distinct entries of ``pool`` by random rejection.

    Gives up after ``attempts`` draws and returns whatever was collected, so a
    pool smaller than ``count`` yields a short result instead of an error.
    """
    rng = rng or random
    chosen: List[int] = []
    if not pool:
        return chosen
    tries = 0
    while len(chosen) < count and tries < attempts:
        tries += 1
        candidate = pool[rng.randrange(len(pool))]
        if exclude is not None and exclude(candidate):
            continue
        if candidate in chosen:
            continue
        chosen.append(candidate)
    if len(chosen) < count:
        logger.debug(f"Sampled {len(chosen)} of {count} distractors after {tries} draws")
    return chosen


# --- Strategy Pattern: Distractor Selection ---
class DistractorStrategy(ABC):
    """Chooses which items are offered as wrong answers."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @abstractmethod
    def candidate_pool(
        self,
        items: Sequence[VocabItem],
        correct_index: int,
        mode: QuizMode,
        exclude: Optional[Callable[[int], bool]] = None,
    ) -> List[int]:
        pass

    def choose(
        self,
        items: Sequence[VocabItem],
        correct_index: int,
        mode: QuizMode,
        count: int = settings.DISTRACTOR_COUNT,
        exclude: Optional[Callable[[int], bool]] = None,
    ) -> List[int]:
        def rejected(index: int) -> bool:
            if index == correct_index:
                return True
            return exclude is not None and exclude(index)

        pool = self.candidate_pool(items, correct_index, mode, rejected)
        return sample_distinct(count, pool, rejected, rng=self.rng)


class RandomDistractors(DistractorStrategy):
    """Easy and normal difficulty: any other item may be a distractor."""

    def candidate_pool(self, items, correct_index, mode, exclude=None):
        return list(range(len(items)))


class SimilarDistractors(DistractorStrategy):
    """Hard difficulty: prefer items whose answer starts like the correct one."""

    def candidate_pool(self, items, correct_index, mode, exclude=None):
        target = similarity_key(items[correct_index], mode)
        close = [
            i
            for i, item in enumerate(items)
            if i != correct_index
            and not (exclude is not None and exclude(i))
            and similarity_key(item, mode) == target
        ]
        return close or list(range(len(items)))


class DistractorFactory:
    """Factory to select the distractor strategy for a difficulty."""

    @staticmethod
    def create(difficulty: Difficulty, rng: Optional[random.Random] = None) -> DistractorStrategy:
        if difficulty == Difficulty.HARD:
            return SimilarDistractors(rng)
        return RandomDistractors(rng)
