"""
Game endpoints - one session per browser tab
"""
from fastapi import APIRouter, HTTPException
import logging

from towerguess.core.engine import InvalidTransition, QuizEngine
from towerguess.services.session_registry import create_session, drop_session, get_engine


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/game", tags=["game"])


def _engine_or_404(session_id: str) -> QuizEngine:
    engine = get_engine(session_id)
    if engine is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return engine


def _conflict(exc: InvalidTransition) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={"error": "invalid_transition", "state": exc.state.value, "message": str(exc)}
    )


@router.post("/sessions")
async def new_session():
    """Create a game session; the catalog is loaded before this returns"""
    session_id = await create_session()
    engine = get_engine(session_id)
    logger.info(f"✅ Session {session_id[:8]} created")
    return {"session_id": session_id, **engine.snapshot()}


@router.get("/{session_id}")
async def get_session(session_id: str):
    """Current snapshot of a session"""
    return _engine_or_404(session_id).snapshot()


@router.delete("/{session_id}")
async def delete_session(session_id: str):
    if not drop_session(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return {"success": True}


@router.post("/{session_id}/settings")
async def update_settings(session_id: str, request: dict):
    """
    Menu settings

    Request:
        {"include_bonus": true}
    """
    engine = _engine_or_404(session_id)
    include = request.get("include_bonus", request.get("includePoM"))
    if include is None:
        raise HTTPException(status_code=400, detail="include_bonus required")

    if not isinstance(include, bool):
        raise HTTPException(status_code=400, detail="include_bonus must be true or false")

    try:
        engine.set_include_bonus(include)
    except InvalidTransition as e:
        raise _conflict(e) from e
    return engine.snapshot()


@router.post("/{session_id}/start")
async def start_game(session_id: str):
    """
    Start a round: preload the pool's images, then shuffle and play

    Responds once preloading has finished or timed out.
    """
    engine = _engine_or_404(session_id)
    try:
        report = await engine.start_game()
    except InvalidTransition as e:
        raise _conflict(e) from e

    if report is None:
        raise HTTPException(status_code=400, detail="No images available for the selected set")

    return {"preload": report.model_dump(), **engine.snapshot()}


@router.post("/{session_id}/guess")
async def submit_guess(session_id: str, request: dict):
    """
    Submit a guess for the current image

    Request:
        {"guess": "ToM"}

    Response (CORRECT):
        {"correct": true, "score": 3, "reshuffled": false, ..., "state": "playing", "image_url": "..."}

    Response (INCORRECT):
        {"correct": false, "score": 3, "correct_answer": "ToM", ..., "state": "game_over"}
    """
    engine = _engine_or_404(session_id)
    guess = request.get("guess")
    if guess is None:
        raise HTTPException(status_code=400, detail="guess required")

    try:
        result = engine.submit_guess(str(guess))
    except InvalidTransition as e:
        raise _conflict(e) from e

    return {**result.model_dump(), **engine.snapshot()}


@router.post("/{session_id}/restart")
async def restart(session_id: str):
    engine = _engine_or_404(session_id)
    try:
        engine.restart()
    except InvalidTransition as e:
        raise _conflict(e) from e
    return engine.snapshot()


@router.post("/{session_id}/menu")
async def back_to_menu(session_id: str):
    engine = _engine_or_404(session_id)
    try:
        engine.return_to_menu()
    except InvalidTransition as e:
        raise _conflict(e) from e
    return engine.snapshot()
