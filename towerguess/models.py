"""
Data models for the tower quiz
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class CatalogEntry(BaseModel):
    """One playable image and its accepted answers"""
    url: str
    answers: List[str]  # first answer is the canonical display form

    @field_validator("answers")
    @classmethod
    def answers_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("answers must contain at least one entry")
        return value


class Catalog(BaseModel):
    """Catalog document: scanned default pool plus the curated bonus pool"""
    model_config = ConfigDict(populate_by_name=True)

    default_images: List[CatalogEntry] = Field(default_factory=list, alias="defaultImages")
    pom_images: List[CatalogEntry] = Field(default_factory=list, alias="pomImages")

    def to_document(self) -> dict:
        """Serialize with the wire field names"""
        return self.model_dump(by_alias=True)


class GameState(str, Enum):
    LOADING = "loading"
    MENU = "menu"
    PRELOADING = "preloading"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class GameSession(BaseModel):
    """Mutable state of one game, owned by a single QuizEngine"""
    state: GameState = GameState.LOADING
    include_bonus: bool = False
    pool: List[CatalogEntry] = []
    play_order: List[CatalogEntry] = []
    cursor: int = 0
    score: int = 0
    high_score: int = 0
    last_correct_answer: Optional[str] = None


class GuessResult(BaseModel):
    """Outcome of a single submitted guess"""
    correct: bool
    score: int
    reshuffled: bool = False
    correct_answer: Optional[str] = None  # canonical answer of a missed item
    new_high_score: bool = False


class PreloadReport(BaseModel):
    """Result of waiting on the preload barrier"""
    total: int = 0
    loaded: int = 0
    failed: int = 0
    timed_out: bool = False

    @property
    def resolved(self) -> int:
        return self.loaded + self.failed


class Settings(BaseModel):
    """Runtime configuration (see config/towerguess.yaml)"""
    sheet_url: str = (
        "https://docs.google.com/spreadsheets/d/"
        "1FlogEu7UQ2KZ4JjHQLs7jzv_S7QLxLfxAVJOEvQ231o/export?format=csv"
    )
    images_dir: str = "public/images"
    catalog_file: str = "public/images/towers.json"
    url_prefix: str = "/images"
    bonus_dir: str = "PoM"
    image_extensions: List[str] = [".png", ".jpg", ".jpeg", ".gif"]
    request_timeout: float = 30.0   # seconds, lookup fetch
    preload_timeout: float = 6.0    # seconds, preload barrier upper bound
    high_score_file: str = "data/highscore.yaml"
    session_ttl: float = 3600.0     # seconds a session may sit idle before eviction
    host: str = "0.0.0.0"
    port: int = 8000
