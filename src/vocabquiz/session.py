import logging
import random
from typing import Optional

from .config import settings
from .deck import DeckRotator
from .models import (
    AnswerResult,
    Difficulty,
    OptionView,
    Question,
    QuestionView,
    QuizMode,
)
from .questions import QuestionBuilder
from .reveal import RevealState
from .stats import PreferenceStore, StatsTracker
from .storage import BlobStorage
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)


class QuizSession:
    """All mutable state of one quiz: deck, current question, lock, reveal, stats.

    Every user action goes through one of the methods below; renderers only
    read ``snapshot()``.
    """

    def __init__(
        self,
        vocab: VocabularyStore,
        storage: BlobStorage,
        mode: QuizMode = QuizMode.SOURCE_TO_TARGET,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: Optional[random.Random] = None,
    ):
        self.vocab = vocab
        self.storage = storage
        self.mode = QuizMode(mode)
        self.difficulty = Difficulty(difficulty)
        self.rng = rng or random.Random()

        self.stats = StatsTracker(storage)
        self.prefs = PreferenceStore(storage)
        self.reveal_state = RevealState(self.prefs.prefs.show_hint)
        self.rotator = DeckRotator(storage, rng=self.rng)
        self.rotator.load(len(vocab))
        self.builder = QuestionBuilder(vocab, self.rotator, rng=self.rng)

        self.current: Optional[Question] = None
        self.locked = False
        self.last_answer: Optional[AnswerResult] = None

    @classmethod
    def from_settings(cls, vocab: VocabularyStore, storage: BlobStorage) -> "QuizSession":
        return cls(
            vocab,
            storage,
            mode=QuizMode(settings.QUIZ_MODE),
            difficulty=Difficulty(settings.QUIZ_DIFFICULTY),
        )

    # --- Navigation ---

    def next_question(self) -> Optional[Question]:
        self.reveal_state.begin_question()
        self.current = self.builder.build(self.mode, self.difficulty)
        self.locked = False
        self.last_answer = None
        if self.current is None:
            logger.warning("No vocabulary available, no question built")
        return self.current

    def skip(self) -> Optional[Question]:
        return self.next_question()

    def set_mode(self, mode: QuizMode) -> Optional[Question]:
        self.mode = QuizMode(mode)
        logger.info(f"Quiz mode set to {self.mode.value}")
        return self.next_question()

    def set_difficulty(self, difficulty: Difficulty) -> Optional[Question]:
        self.difficulty = Difficulty(difficulty)
        logger.info(f"Difficulty set to {self.difficulty.value}")
        return self.next_question()

    def reset(self) -> Optional[Question]:
        self.stats.reset()
        self.rotator.rebuild(len(self.vocab))
        logger.info("Stats and deck reset")
        return self.next_question()

    # --- Hints ---

    def reveal(self) -> bool:
        self.reveal_state.reveal()
        return self.reveal_state.visible

    def set_show_hint(self, show_hint: bool) -> bool:
        self.prefs.update(show_hint=bool(show_hint))
        self.reveal_state.set_preference(show_hint)
        return self.reveal_state.visible

    def set_theme(self, theme: str) -> None:
        self.prefs.update(theme=theme)

    # --- Answers ---

    def answer(self, key: str) -> Optional[AnswerResult]:
        """Scores the chosen option key. Ignored when nothing is open for answering."""
        question = self.current
        if question is None or self.locked:
            return None
        self.locked = True
        is_correct = question.is_correct(key)
        self.stats.record(is_correct)

        verdict = "Correct." if is_correct else "Wrong. Answer:"
        self.last_answer = AnswerResult(
            word=question.prompt_main,
            user_answer=key,
            correct_answer=question.correct_key,
            is_correct=is_correct,
            feedback=f"{verdict} {question.correct.describe()}",
        )
        return self.last_answer

    def answer_at(self, position: int) -> Optional[AnswerResult]:
        if self.current is None or not 1 <= position <= len(self.current.options):
            return None
        return self.answer(self.current.options[position - 1].key)

    # --- Rendering ---

    def snapshot(self) -> Optional[QuestionView]:
        question = self.current
        if question is None:
            return None
        visible = self.reveal_state.visible
        has_hints = bool(question.prompt_hint) or question.mode == QuizMode.TARGET_TO_SOURCE
        return QuestionView(
            mode=question.mode,
            difficulty=self.difficulty,
            prompt_label=question.prompt_label,
            prompt_main=question.prompt_main,
            prompt_hint=question.prompt_hint if visible else None,
            hint_visible=visible,
            can_reveal=has_hints and not visible,
            options=[
                OptionView(position=i, key=opt.key, label=opt.label(visible))
                for i, opt in enumerate(question.options, start=1)
            ],
            locked=self.locked,
            answer=self.last_answer,
            stats=self.stats.stats.model_copy(),
            total=len(self.vocab),
            deck_position=self.rotator.position,
        )
