"""
Durable high score

Stored as a single key in a small YAML file:

    highScore: '12'
"""
import logging
import yaml
from pathlib import Path


logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"


class HighScoreStore:
    """File-backed high score shared by every game session"""

    def __init__(self, path: str):
        self.path = Path(path)

    def read(self) -> int:
        """Stored high score, 0 if missing or unreadable"""
        if not self.path.exists():
            return 0

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            return int(str(data.get(HIGH_SCORE_KEY, 0)))
        except (OSError, yaml.YAMLError, AttributeError, ValueError) as e:
            logger.warning(f"⚠️ Ignoring unreadable high score in {self.path}: {e}")
            return 0

    def save(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            yaml.safe_dump({HIGH_SCORE_KEY: str(score)}, f, default_flow_style=False)

    def record(self, score: int) -> bool:
        """
        Persist score if it beats the stored value

        Ties do not overwrite.

        Returns:
            True if a new high score was written
        """
        if score <= self.read():
            return False
        self.save(score)
        logger.info(f"🏆 New high score: {score}")
        return True
