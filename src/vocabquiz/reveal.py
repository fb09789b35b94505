from enum import Enum


class RevealPhase(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class RevealState:
    """Whether phonetic hints are shown for the active question.

    Hints are visible when the persistent preference is on, or when the user
    revealed them for the current question. The one-shot reveal is cleared
    whenever a new question starts or the preference changes.
    """

    def __init__(self, persistent_show_hint: bool = True):
        self.persistent_show_hint = persistent_show_hint
        self.revealed_once = False

    @property
    def visible(self) -> bool:
        return self.persistent_show_hint or self.revealed_once

    @property
    def phase(self) -> RevealPhase:
        return RevealPhase.VISIBLE if self.visible else RevealPhase.HIDDEN

    def begin_question(self) -> RevealPhase:
        self.revealed_once = False
        return self.phase

    def reveal(self) -> RevealPhase:
        self.revealed_once = True
        return self.phase

    def set_preference(self, show_hint: bool) -> RevealPhase:
        self.persistent_show_hint = bool(show_hint)
        self.revealed_once = False
        return self.phase
