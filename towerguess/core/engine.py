"""
Quiz engine - game state machine for one player session

States:
    loading -> menu -> preloading -> playing -> game_over
    game_over -> playing (restart) | menu (return_to_menu)

Rules:
  - Pool = default images, plus PoM images when the bonus toggle is set
  - Correct guess: +1 and next image; an exhausted play order is reshuffled,
    so a round never ends on its own
  - Wrong guess: game over, the canonical answer is shown
  - High score is persisted only when strictly beaten
"""
import logging
import random
from typing import Any, Awaitable, Callable, Dict, Optional

from towerguess.core.catalog import parse_catalog
from towerguess.core.highscore import HighScoreStore
from towerguess.core.normalizer import is_correct
from towerguess.core.preload import MediaProbe, preload_all
from towerguess.models import (
    Catalog, CatalogEntry, GameSession, GameState, GuessResult, PreloadReport
)
from towerguess.utils import shuffled


logger = logging.getLogger(__name__)

CatalogFetch = Callable[[], Awaitable[Any]]


class InvalidTransition(Exception):
    """Action not allowed in the current game state"""

    def __init__(self, action: str, state: GameState):
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} while {state.value}")


class QuizEngine:
    """Owns a GameSession and every mutation of it"""

    def __init__(
        self,
        high_scores: HighScoreStore,
        probe: MediaProbe,
        preload_timeout: float = 6.0,
        rng: Optional[random.Random] = None,
    ):
        self.high_scores = high_scores
        self.probe = probe
        self.preload_timeout = preload_timeout
        self.rng = rng or random.Random()
        self.catalog = Catalog()
        self.session = GameSession(high_score=high_scores.read())
        self._generation = 0

    @property
    def state(self) -> GameState:
        return self.session.state

    def _require(self, action: str, *allowed: GameState) -> None:
        if self.session.state not in allowed:
            raise InvalidTransition(action, self.session.state)

    # ==================== LOADING ====================

    async def load_catalog(self, fetch: CatalogFetch) -> Catalog:
        """
        Fetch the catalog document and move to the menu

        Any fetch error or malformed document leaves both pools empty;
        the engine still reaches the menu.
        """
        self._require("load catalog", GameState.LOADING)
        try:
            document = await fetch()
        except Exception as e:
            logger.error(f"❌ Failed to fetch catalog: {type(e).__name__}: {e}")
            document = None

        self.catalog = parse_catalog(document) if document is not None else Catalog()
        self.session.state = GameState.MENU
        logger.info(
            f"✅ Catalog ready: {len(self.catalog.default_images)} default, "
            f"{len(self.catalog.pom_images)} PoM"
        )
        return self.catalog

    # ==================== MENU ====================

    def set_include_bonus(self, include: bool) -> None:
        self._require("change settings", GameState.MENU)
        self.session.include_bonus = bool(include)

    def build_pool(self) -> list:
        pool = list(self.catalog.default_images)
        if self.session.include_bonus:
            pool.extend(self.catalog.pom_images)
        return pool

    async def start_game(self) -> Optional[PreloadReport]:
        """
        Select the pool, preload its media and enter playing

        Returns:
            PreloadReport, or None if the selected pool is empty (the engine
            stays in the menu)

        Raises:
            InvalidTransition: If not in the menu, including while a
                previous start is still preloading
        """
        self._require("start game", GameState.MENU)

        pool = self.build_pool()
        if not pool:
            logger.warning("⚠️ No images available for the selected set")
            return None

        self._generation += 1
        generation = self._generation
        self.session.pool = pool
        self.session.play_order = []
        self.session.cursor = 0
        self.session.score = 0
        self.session.last_correct_answer = None
        self.session.state = GameState.PRELOADING

        report = await preload_all([item.url for item in pool], self.probe, self.preload_timeout)
        self._enter_playing(generation)
        return report

    def _enter_playing(self, generation: int) -> bool:
        """One-shot entry into playing for a given start; stale starts are ignored"""
        if self.session.state != GameState.PRELOADING or generation != self._generation:
            logger.info(f"Preload for start #{generation} finished after the game moved on, ignoring")
            return False

        self.session.play_order = shuffled(self.session.pool, self.rng)
        self.session.cursor = 0
        self.session.state = GameState.PLAYING
        return True

    # ==================== PLAYING ====================

    def current_item(self) -> Optional[CatalogEntry]:
        if self.session.state != GameState.PLAYING or not self.session.play_order:
            return None
        return self.session.play_order[self.session.cursor]

    def submit_guess(self, guess: str) -> GuessResult:
        """
        Score a free-text guess against the current image

        Matching ignores case and surrounding whitespace.
        """
        self._require("submit guess", GameState.PLAYING)
        item = self.current_item()

        if is_correct(guess, item):
            self.session.score += 1
            reshuffled = False
            if self.session.cursor + 1 < len(self.session.play_order):
                self.session.cursor += 1
            else:
                self.session.play_order = shuffled(self.session.pool, self.rng)
                self.session.cursor = 0
                reshuffled = True
            return GuessResult(correct=True, score=self.session.score, reshuffled=reshuffled)

        self.session.last_correct_answer = item.answers[0]
        new_high = self._end_game()
        return GuessResult(
            correct=False,
            score=self.session.score,
            correct_answer=self.session.last_correct_answer,
            new_high_score=new_high,
        )

    def _end_game(self) -> bool:
        self.session.state = GameState.GAME_OVER
        score = self.session.score
        logger.info(f"🛑 Game over with score {score} (answer was {self.session.last_correct_answer})")

        if score <= self.session.high_score:
            return False

        new_high = self.high_scores.record(score)
        self.session.high_score = score if new_high else self.high_scores.read()
        return new_high

    # ==================== GAME OVER ====================

    def restart(self) -> None:
        """Play the same pool again from a fresh shuffle"""
        self._require("restart", GameState.GAME_OVER)
        self.session.play_order = shuffled(self.session.pool, self.rng)
        self.session.cursor = 0
        self.session.score = 0
        self.session.last_correct_answer = None
        self.session.state = GameState.PLAYING

    def return_to_menu(self) -> None:
        """Discard the pool and all round state"""
        self._require(
            "return to menu",
            GameState.MENU, GameState.PRELOADING, GameState.PLAYING, GameState.GAME_OVER,
        )
        self.session.pool = []
        self.session.play_order = []
        self.session.cursor = 0
        self.session.score = 0
        self.session.last_correct_answer = None
        self.session.state = GameState.MENU

    # ==================== VIEW ====================

    def snapshot(self) -> Dict[str, Any]:
        """Display-layer view; never includes answers of the current image"""
        item = self.current_item()
        return {
            "state": self.session.state.value,
            "include_bonus": self.session.include_bonus,
            "default_count": len(self.catalog.default_images),
            "pom_count": len(self.catalog.pom_images),
            "pool_size": len(self.session.pool),
            "image_url": item.url if item else None,
            "score": self.session.score,
            "high_score": self.session.high_score,
            "last_correct_answer": self.session.last_correct_answer,
        }
