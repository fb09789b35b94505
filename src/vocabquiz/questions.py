import logging
import random
from typing import List, Optional

from .config import settings
from .deck import DeckRotator
from .models import Difficulty, Option, OptionKind, Question, QuizMode, VocabItem
from .sampler import DistractorFactory
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)

PROMPT_LABELS = {
    QuizMode.SOURCE_TO_TARGET: "Translate to the target language",
    QuizMode.TARGET_TO_SOURCE: "Translate to the source language",
}


def option_key(item: VocabItem, mode: QuizMode) -> str:
    if mode == QuizMode.SOURCE_TO_TARGET:
        return item.target_key
    return item.source_key


def make_option(index: int, item: VocabItem, mode: QuizMode) -> Option:
    if mode == QuizMode.SOURCE_TO_TARGET:
        return Option(
            kind=OptionKind.TARGET, key=item.target_key, text=item.translation, index=index
        )
    return Option(
        kind=OptionKind.SOURCE,
        key=item.source_key,
        text=item.term,
        hint=item.phonetic,
        index=index,
    )


class QuestionBuilder:
    """Turns the next deck draw into a multiple-choice question."""

    def __init__(
        self,
        vocab: VocabularyStore,
        rotator: DeckRotator,
        rng: Optional[random.Random] = None,
        distractor_count: int = settings.DISTRACTOR_COUNT,
    ):
        self.vocab = vocab
        self.rotator = rotator
        self.rng = rng or random.Random()
        self.distractor_count = distractor_count

    def resolve_mode(self, mode: QuizMode) -> QuizMode:
        if mode == QuizMode.MIXED:
            if self.rng.random() < 0.5:
                return QuizMode.SOURCE_TO_TARGET
            return QuizMode.TARGET_TO_SOURCE
        return mode

    def build(self, mode: QuizMode, difficulty: Difficulty) -> Optional[Question]:
        if not len(self.vocab):
            return None
        mode = self.resolve_mode(QuizMode(mode))
        correct_index = self.rotator.next(len(self.vocab))
        if correct_index is None:
            return None
        correct = self.vocab[correct_index]
        correct_key = option_key(correct, mode)

        strategy = DistractorFactory.create(Difficulty(difficulty), self.rng)
        distractors = strategy.choose(
            self.vocab.items,
            correct_index,
            mode,
            count=self.distractor_count,
            exclude=lambda i: option_key(self.vocab[i], mode) == correct_key,
        )

        options: List[Option] = [make_option(correct_index, correct, mode)]
        options += [make_option(i, self.vocab[i], mode) for i in distractors]
        self.rng.shuffle(options)
        logger.debug(
            f"Built {mode.value} question for item {correct_index} "
            f"with {len(distractors)} distractors"
        )

        if mode == QuizMode.SOURCE_TO_TARGET:
            prompt_main, prompt_hint = correct.term, correct.phonetic
        else:
            prompt_main, prompt_hint = correct.translation, None

        return Question(
            mode=mode,
            correct_index=correct_index,
            correct=correct,
            prompt_main=prompt_main,
            prompt_hint=prompt_hint,
            prompt_label=PROMPT_LABELS[mode],
            options=options,
            correct_key=correct_key,
        )
