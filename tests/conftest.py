"""
Shared fixtures for catalog and engine tests
"""
import asyncio
import random

import pytest

from towerguess.core.engine import QuizEngine
from towerguess.core.highscore import HighScoreStore


SAMPLE_DOCUMENT = {
    "defaultImages": [
        {"url": "/images/ToM.png", "answers": ["ToM", "Tower of Misery"]},
        {"url": "/images/ToAST.png", "answers": ["ToAST", "Tower of Annoyingly Simple Trials"]},
        {"url": "/images/ToH.png", "answers": ["ToH", "Tower of Hecc"]},
    ],
    "pomImages": [
        {"url": "/images/PoM/WaT.jpg", "answers": ["WaT", "Was A Tower"]},
    ],
}


async def always_loads(url):
    return True


@pytest.fixture
def high_scores(tmp_path):
    return HighScoreStore(str(tmp_path / "highscore.yaml"))


@pytest.fixture
def make_engine(high_scores):
    """Engine factory with a seeded RNG and an always-successful probe"""
    def _make(probe=always_loads, preload_timeout=1.0, seed=1234):
        return QuizEngine(high_scores, probe, preload_timeout=preload_timeout, rng=random.Random(seed))
    return _make


@pytest.fixture
def menu_engine(make_engine):
    """Engine with SAMPLE_DOCUMENT loaded, waiting in the menu"""
    engine = make_engine()

    async def fetch():
        return SAMPLE_DOCUMENT

    asyncio.run(engine.load_catalog(fetch))
    return engine


@pytest.fixture
def playing_engine(menu_engine):
    """Engine with the default pool started"""
    asyncio.run(menu_engine.start_game())
    return menu_engine


@pytest.fixture
def sample_document():
    return SAMPLE_DOCUMENT
