"""
Global application state
Shared resources accessible across all modules
"""
from typing import TYPE_CHECKING, Dict, Optional

from towerguess.models import Catalog, Settings

if TYPE_CHECKING:
    from towerguess.core.engine import QuizEngine

# Effective settings, replaced at startup by load_config()
SETTINGS: Settings = Settings()

# Catalog document loaded at startup (empty pools if it could not be read)
CATALOG: Optional[Catalog] = None

# Live game sessions: session-id -> engine
SESSIONS: Dict[str, "QuizEngine"] = {}

# Last activity per session-id (time.monotonic), used for idle eviction
SESSION_SEEN: Dict[str, float] = {}
