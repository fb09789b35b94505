from enum import Enum
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt


class QuizMode(str, Enum):
    SOURCE_TO_TARGET = "source_to_target"
    TARGET_TO_SOURCE = "target_to_source"
    MIXED = "mixed"


class Difficulty(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class OptionKind(str, Enum):
    SOURCE = "source"
    TARGET = "target"


class VocabItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    term: str
    phonetic: Optional[str] = None
    translation: str

    @property
    def source_key(self) -> str:
        """Answer key when the item is offered as a source-language option."""
        return f"{self.term}|{self.phonetic or ''}"

    @property
    def target_key(self) -> str:
        return self.translation

    def describe(self) -> str:
        if self.phonetic:
            return f"{self.term} ({self.phonetic}) = {self.translation}"
        return f"{self.term} = {self.translation}"


class Option(BaseModel):
    kind: OptionKind
    key: str
    text: str
    hint: Optional[str] = None
    index: int

    def label(self, show_hint: bool) -> str:
        if self.kind == OptionKind.SOURCE and show_hint and self.hint:
            return f"{self.text} — {self.hint}"
        return self.text


class Question(BaseModel):
    mode: QuizMode
    correct_index: int
    correct: VocabItem
    prompt_main: str
    prompt_hint: Optional[str] = None
    prompt_label: str
    options: List[Option]
    correct_key: str

    def is_correct(self, key: str) -> bool:
        return key == self.correct_key


class DeckState(BaseModel):
    """Persisted rotation state: a permutation of item indices and a cursor."""

    order: List[StrictInt] = Field(default_factory=list)
    cursor: StrictInt = Field(default=0, validation_alias=AliasChoices("cursor", "idx"))

    def is_valid_for(self, size: int) -> bool:
        return (
            len(self.order) == size
            and sorted(self.order) == list(range(size))
            and 0 <= self.cursor <= size
        )

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.order)


class Preferences(BaseModel):
    show_hint: bool = True
    theme: Literal["dark", "light"] = "dark"


class Stats(BaseModel):
    correct: int = 0
    wrong: int = 0
    streak: int = 0


class AnswerResult(BaseModel):
    word: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    feedback: str


class OptionView(BaseModel):
    position: int
    key: str
    label: str


class QuestionView(BaseModel):
    mode: QuizMode
    difficulty: Difficulty
    prompt_label: str
    prompt_main: str
    prompt_hint: Optional[str] = None
    hint_visible: bool
    can_reveal: bool
    options: List[OptionView]
    locked: bool
    answer: Optional[AnswerResult] = None
    stats: Stats
    total: int
    deck_position: int
