from .models import Difficulty, Option, Question, QuizMode, VocabItem
from .session import QuizSession
from .storage import BlobStorage, MemoryStorage, SQLiteStorage
from .vocabulary import VocabularyStore, load_vocabulary

__all__ = [
    "BlobStorage",
    "Difficulty",
    "MemoryStorage",
    "Option",
    "Question",
    "QuizMode",
    "QuizSession",
    "SQLiteStorage",
    "VocabItem",
    "VocabularyStore",
    "load_vocabulary",
]
