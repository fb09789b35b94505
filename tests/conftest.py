import random

import pytest

from vocabquiz.models import Difficulty, QuizMode
from vocabquiz.session import QuizSession
from vocabquiz.storage import MemoryStorage
from vocabquiz.vocabulary import SAMPLE_VOCABULARY, VocabularyStore

GREETINGS = SAMPLE_VOCABULARY[:4]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def vocab():
    return VocabularyStore.from_records(GREETINGS)


@pytest.fixture
def session(vocab, storage, rng):
    return QuizSession(
        vocab,
        storage,
        mode=QuizMode.SOURCE_TO_TARGET,
        difficulty=Difficulty.EASY,
        rng=rng,
    )
