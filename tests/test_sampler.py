import random

import pytest

from vocabquiz.models import Difficulty, QuizMode, VocabItem
from vocabquiz.sampler import (
    DistractorFactory,
    RandomDistractors,
    SimilarDistractors,
    normalize_phonetic,
    sample_distinct,
    similarity_key,
)


def items(*rows):
    return [VocabItem(term=t, phonetic=p, translation=tr) for t, p, tr in rows]


ANIMALS = items(
    ("猫", "māo", "chat"),
    ("狗", "gǒu", "chien"),
    ("马", "mǎ", "cheval"),
    ("没", "méi", "merci"),
    ("书", "shū", "livre"),
    ("水", "shuǐ", "eau"),
)


def test_normalize_phonetic():
    assert normalize_phonetic("  Nǐ   Hǎo ") == "ni hao"
    assert normalize_phonetic("xièxiè") == "xiexie"
    assert normalize_phonetic("lǜ") == "lu"
    assert normalize_phonetic(None) == ""


def test_similarity_key_by_mode():
    item = VocabItem(term="马", phonetic="Mǎ", translation="Cheval")
    assert similarity_key(item, QuizMode.SOURCE_TO_TARGET) == "c"
    assert similarity_key(item, QuizMode.TARGET_TO_SOURCE) == "m"


@pytest.mark.parametrize("seed", range(20))
def test_sample_excludes_and_never_repeats(seed):
    chosen = sample_distinct(
        3, list(range(10)), exclude=lambda i: i == 3, rng=random.Random(seed)
    )
    assert len(chosen) == 3
    assert 3 not in chosen
    assert len(set(chosen)) == 3


def test_sample_returns_short_result_when_pool_too_small():
    chosen = sample_distinct(3, [0, 1], exclude=lambda i: i == 0, rng=random.Random(1))
    assert chosen == [1]


def test_sample_handles_empty_pool():
    assert sample_distinct(3, []) == []


def test_sample_ignores_repeated_pool_entries():
    chosen = sample_distinct(3, [5, 5, 5, 6], rng=random.Random(2), attempts=10_000)
    assert sorted(chosen) == [5, 6]


def test_hard_pool_restricted_to_matching_translation():
    strategy = SimilarDistractors(random.Random(3))
    assert strategy.candidate_pool(ANIMALS, 0, QuizMode.SOURCE_TO_TARGET) == [1, 2]
    chosen = strategy.choose(ANIMALS, 0, QuizMode.SOURCE_TO_TARGET)
    assert sorted(chosen) == [1, 2]


def test_hard_pool_restricted_to_matching_phonetic():
    strategy = SimilarDistractors(random.Random(3))
    assert strategy.candidate_pool(ANIMALS, 0, QuizMode.TARGET_TO_SOURCE) == [2, 3]


def test_hard_pool_falls_back_to_full_pool():
    strategy = SimilarDistractors(random.Random(4))
    pool = strategy.candidate_pool(ANIMALS, 4, QuizMode.SOURCE_TO_TARGET)
    assert pool == list(range(len(ANIMALS)))
    chosen = strategy.choose(ANIMALS, 4, QuizMode.SOURCE_TO_TARGET)
    assert len(chosen) == 3
    assert 4 not in chosen


def test_correct_item_excluded_by_index_not_value():
    twins = items(("猫", "māo", "chat"), ("猫", "māo", "chat"))
    chosen = RandomDistractors(random.Random(5)).choose(twins, 0, QuizMode.SOURCE_TO_TARGET)
    assert chosen == [1]


def test_factory_picks_strategy_by_difficulty():
    assert isinstance(DistractorFactory.create(Difficulty.HARD), SimilarDistractors)
    assert isinstance(DistractorFactory.create(Difficulty.NORMAL), RandomDistractors)
    assert isinstance(DistractorFactory.create(Difficulty.EASY), RandomDistractors)


def test_hard_pool_skips_rejected_items_before_falling_back():
    twins = items(
        ("猫", "māo", "chat"),
        ("貓", "māo", "chat"),
        ("谢谢", "xièxiè", "merci"),
        ("水", "shuǐ", "eau"),
        ("书", "shū", "livre"),
    )
    strategy = SimilarDistractors(random.Random(6))
    same_answer = lambda i: twins[i].translation == "chat"
    pool = strategy.candidate_pool(twins, 0, QuizMode.SOURCE_TO_TARGET, same_answer)
    assert pool == list(range(len(twins)))

    chosen = strategy.choose(twins, 0, QuizMode.SOURCE_TO_TARGET, exclude=same_answer)
    assert sorted(chosen) == [2, 3, 4]
