import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from typing import Optional

from fastapi import FastAPI

from .config import settings
from .database import get_db_path, init_db
from .log_handler import SQLiteHandler
from .router import router
from .session import QuizSession
from .storage import SQLiteStorage
from .vocabulary import load_vocabulary


# --- Logging Setup ---
def setup_logging():
    logger = logging.getLogger("vocabquiz")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return

    if not os.path.exists(settings.LOG_DIR):
        os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    init_db()
    db_handler = SQLiteHandler(get_db_path(), level=logging.WARNING)
    db_handler.setFormatter(formatter)
    logger.addHandler(db_handler)
    # Also configure root logger to see logs from other libraries
    logging.basicConfig(level=logging.INFO)


def build_session() -> QuizSession:
    storage = SQLiteStorage()
    vocab = load_vocabulary(settings.VOCAB_FILE)
    return QuizSession.from_settings(vocab, storage)


# --- Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.session is None:
        app.state.session = build_session()
        app.state.session.next_question()
    yield


# --- App Factory ---
def create_app(session: Optional[QuizSession] = None, configure_logging: bool = True) -> FastAPI:
    if configure_logging:
        setup_logging()
    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
        root_path=settings.ROOT_PATH,
    )
    app.state.session = session
    if session is not None and session.current is None:
        session.next_question()

    app.include_router(router)

    return app
