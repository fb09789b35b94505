from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .models import Difficulty, QuizMode
from .session import QuizSession


router = APIRouter(prefix="/api")


# --- Dependencies ---
async def get_session(request: Request) -> QuizSession:
    return request.app.state.session


def question_response(session: QuizSession):
    view = session.snapshot()
    if view is None:
        return JSONResponse({"error": "Vocabulary is empty"}, status_code=404)
    return view


# --- Routes ---


@router.get("/question")
async def get_question(session: QuizSession = Depends(get_session)):
    return question_response(session)


@router.post("/answer")
async def submit_answer(key: str = Form(...), session: QuizSession = Depends(get_session)):
    if session.current is None:
        return JSONResponse({"error": "Vocabulary is empty"}, status_code=404)
    if session.locked:
        return JSONResponse({"error": "Already answered"}, status_code=400)
    return session.answer(key)


@router.post("/answer/{position}")
async def submit_answer_at(position: int, session: QuizSession = Depends(get_session)):
    if session.current is None:
        return JSONResponse({"error": "Vocabulary is empty"}, status_code=404)
    if session.locked:
        return JSONResponse({"error": "Already answered"}, status_code=400)
    if not (1 <= position <= len(session.current.options)):
        return JSONResponse({"error": "Invalid option"}, status_code=400)
    return session.answer_at(position)


@router.post("/next")
async def next_question(session: QuizSession = Depends(get_session)):
    session.next_question()
    return question_response(session)


@router.post("/skip")
async def skip_question(session: QuizSession = Depends(get_session)):
    session.skip()
    return question_response(session)


@router.post("/reveal")
async def reveal_hint(session: QuizSession = Depends(get_session)):
    session.reveal()
    return question_response(session)


@router.post("/prefs")
async def update_prefs(
    show_hint: Optional[bool] = Form(None),
    theme: Optional[str] = Form(None),
    session: QuizSession = Depends(get_session),
):
    try:
        if theme is not None:
            session.set_theme(theme)
        if show_hint is not None:
            session.set_show_hint(show_hint)
    except ValidationError:
        return JSONResponse({"error": "Invalid preference"}, status_code=400)
    return session.prefs.prefs


@router.post("/mode")
async def change_mode(mode: str = Form(...), session: QuizSession = Depends(get_session)):
    try:
        selected = QuizMode(mode)
    except ValueError:
        return JSONResponse({"error": f"Unknown mode: {mode}"}, status_code=400)
    session.set_mode(selected)
    return question_response(session)


@router.post("/difficulty")
async def change_difficulty(
    difficulty: str = Form(...), session: QuizSession = Depends(get_session)
):
    try:
        selected = Difficulty(difficulty)
    except ValueError:
        return JSONResponse({"error": f"Unknown difficulty: {difficulty}"}, status_code=400)
    session.set_difficulty(selected)
    return question_response(session)


@router.post("/reset")
async def reset_quiz(session: QuizSession = Depends(get_session)):
    session.reset()
    return question_response(session)


@router.get("/stats")
async def get_stats(session: QuizSession = Depends(get_session)):
    return session.stats.stats
