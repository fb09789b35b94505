import logging
import os
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

import pandas as pd

from .models import VocabItem

logger = logging.getLogger(__name__)

COLUMN_ALIASES = {"hanzi": "term", "pinyin": "phonetic", "fr": "translation"}
REQUIRED_COLUMNS = ("term", "translation")

SAMPLE_VOCABULARY: List[Dict[str, str]] = [
    {"term": "你好", "phonetic": "nǐ hǎo", "translation": "bonjour"},
    {"term": "谢谢", "phonetic": "xièxiè", "translation": "merci"},
    {"term": "猫", "phonetic": "māo", "translation": "chat"},
    {"term": "狗", "phonetic": "gǒu", "translation": "chien"},
    {"term": "水", "phonetic": "shuǐ", "translation": "eau"},
]


class VocabularyStore:
    """Immutable ordered list of vocabulary items.

    An item's identity is its position in the store; two items with the same
    text are still different items.
    """

    def __init__(self, items: Iterable[VocabItem]):
        self._items: Tuple[VocabItem, ...] = tuple(items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> VocabItem:
        return self._items[index]

    def __iter__(self) -> Iterator[VocabItem]:
        return iter(self._items)

    @property
    def items(self) -> Tuple[VocabItem, ...]:
        return self._items

    def indices(self) -> range:
        return range(len(self._items))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "VocabularyStore":
        df = pd.DataFrame(list(records))
        return cls(_frame_to_items(df))

    @classmethod
    def from_file(cls, path: str) -> "VocabularyStore":
        if path.lower().endswith(".json"):
            df = pd.read_json(path, orient="records", dtype=False)
        else:
            df = pd.read_csv(path, encoding="utf-8", dtype=str)
        items = _frame_to_items(df)
        logger.info(f"Loaded {len(items)} words from {path}")
        return cls(items)


def _frame_to_items(df: pd.DataFrame) -> List[VocabItem]:
    if df.empty:
        return []
    df = df.rename(columns=COLUMN_ALIASES)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Vocabulary is missing columns: {', '.join(missing)}")
    if "phonetic" not in df.columns:
        df["phonetic"] = None
    df = df[["term", "phonetic", "translation"]].astype(object)
    df = df.where(pd.notna(df), None)
    for column in df.columns:
        df[column] = df[column].map(lambda v: str(v).strip() if v is not None else None)
    df["phonetic"] = df["phonetic"].map(lambda v: v or None)

    complete = df["term"].astype(bool) & df["translation"].astype(bool)
    if not complete.all():
        logger.warning(f"Skipping {(~complete).sum()} rows without term or translation")
        df = df[complete]

    before = len(df)
    df = df.drop_duplicates()
    if len(df) < before:
        logger.warning(f"Dropped {before - len(df)} duplicate vocabulary rows")

    return [VocabItem(**record) for record in df.to_dict("records")]


def load_vocabulary(path: str) -> VocabularyStore:
    """Loads the vocabulary file, falling back to the built-in sample set."""
    if not os.path.exists(path):
        logger.warning(f"Vocabulary file {path} not found. Loading sample data.")
        return VocabularyStore.from_records(SAMPLE_VOCABULARY)
    try:
        return VocabularyStore.from_file(path)
    except Exception as e:
        logger.error(f"Failed to load {path}: {e}. Loading sample data.")
        return VocabularyStore.from_records(SAMPLE_VOCABULARY)
