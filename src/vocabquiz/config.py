import os


class Settings:
    PROJECT_NAME: str = "vocabquiz"
    DEBUG: bool = False
    LOG_DIR: str = "log"
    LOG_FILE: str = "vocabquiz.log"
    DB_DIR: str = os.environ.get("DB_DIR", "db")
    DB_FILE: str = "vocabquiz.db"
    VOCAB_FILE: str = os.environ.get("VOCAB_FILE", "vocabulary/vocab.csv")
    QUIZ_MODE: str = os.environ.get("QUIZ_MODE", "source_to_target")
    QUIZ_DIFFICULTY: str = os.environ.get("QUIZ_DIFFICULTY", "normal")
    DISTRACTOR_COUNT: int = 3
    SAMPLE_ATTEMPTS: int = 5000
    DECK_KEY: str = "cvt_deck"
    PREFS_KEY: str = "cvt_prefs"
    STATS_KEY: str = "cvt_stats"
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")


settings = Settings()
