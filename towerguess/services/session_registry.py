"""Game session registration utilities"""
import logging
import time
import uuid
from typing import Optional

from towerguess import state
from towerguess.core.engine import QuizEngine
from towerguess.core.highscore import HighScoreStore
from towerguess.core.preload import LocalMediaProbe


logger = logging.getLogger(__name__)


def build_engine() -> QuizEngine:
    settings = state.SETTINGS
    return QuizEngine(
        high_scores=HighScoreStore(settings.high_score_file),
        probe=LocalMediaProbe(settings.images_dir, settings.url_prefix),
        preload_timeout=settings.preload_timeout,
    )


async def _fetch_catalog_document():
    if state.CATALOG is None:
        raise LookupError("catalog is not loaded")
    return state.CATALOG.to_document()


def prune_idle_sessions() -> int:
    """
    Drop sessions idle for longer than settings.session_ttl

    Closed browser tabs never delete their session, so idle ones are
    evicted whenever a new session is created.

    Returns:
        Number of sessions evicted
    """
    cutoff = time.monotonic() - state.SETTINGS.session_ttl
    expired = [sid for sid in state.SESSIONS if state.SESSION_SEEN.get(sid, 0.0) < cutoff]
    for sid in expired:
        drop_session(sid)

    if expired:
        logger.info(f"🔄 Evicted {len(expired)} idle sessions, {len(state.SESSIONS)} left")
    return len(expired)


async def create_session() -> str:
    prune_idle_sessions()
    session_id = uuid.uuid4().hex
    engine = build_engine()
    await engine.load_catalog(_fetch_catalog_document)
    state.SESSIONS[session_id] = engine
    state.SESSION_SEEN[session_id] = time.monotonic()
    return session_id


def get_engine(session_id: str) -> Optional[QuizEngine]:
    """Look up a session and mark it as active"""
    engine = state.SESSIONS.get(session_id)
    if engine is not None:
        state.SESSION_SEEN[session_id] = time.monotonic()
    return engine


def drop_session(session_id: str) -> bool:
    state.SESSION_SEEN.pop(session_id, None)
    return state.SESSIONS.pop(session_id, None) is not None
