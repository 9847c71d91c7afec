"""Centralized game configuration: grid sizes, rank thresholds and engine settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

from rapidtype.logic.enums import Difficulty, GameMode
from rapidtype.logic.exceptions import InvalidConfigError
from rapidtype.logic.types import GridConfig, RankThresholds

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

COUNTDOWN_DURATION_MS = 3000
TIMER_INTERVAL_MS = 10
HISTORY_LIMIT = 100


def _grid(rows: int, cols: int, total_tiles: int) -> GridConfig:
    return GridConfig(rows=rows, cols=cols, total_tiles=total_tiles)


def _thresholds(s: int, a: int, b: int) -> RankThresholds:
    return RankThresholds(s=s, a=a, b=b)


_NUMBER_GRIDS = {
    Difficulty.EASY: _grid(4, 4, 16),
    Difficulty.NORMAL: _grid(5, 4, 20),
    Difficulty.HARD: _grid(5, 5, 25),
}

DEFAULT_GRID_CONFIGS: dict[GameMode, dict[Difficulty, GridConfig]] = {
    GameMode.NUMBERS: _NUMBER_GRIDS,
    GameMode.FIND_NUMBER: _NUMBER_GRIDS,
    GameMode.ALPHABET: {
        Difficulty.EASY: _grid(4, 4, 16),  # A-P
        Difficulty.NORMAL: _grid(5, 4, 20),  # A-T
        Difficulty.HARD: _grid(5, 6, 26),  # A-Z, 30 slots
    },
    # nominal only: the selected phrase length decides the real tile count
    GameMode.SENTENCE: {
        Difficulty.EASY: _grid(3, 3, 9),
        Difficulty.NORMAL: _grid(3, 4, 12),
        Difficulty.HARD: _grid(4, 4, 16),
    },
    GameMode.FLASH: {
        Difficulty.EASY: _grid(3, 3, 9),
        Difficulty.NORMAL: _grid(4, 4, 16),
        Difficulty.HARD: _grid(5, 5, 25),
    },
    GameMode.ENDLESS: {
        Difficulty.EASY: _grid(4, 4, 16),
        Difficulty.NORMAL: _grid(5, 5, 25),
        Difficulty.HARD: _grid(5, 5, 25),
    },
}

# ms per tile; lower is better
_NUMBER_THRESHOLDS = {
    Difficulty.EASY: _thresholds(400, 600, 800),
    Difficulty.NORMAL: _thresholds(350, 550, 750),
    Difficulty.HARD: _thresholds(300, 500, 700),
}

DEFAULT_RANK_THRESHOLDS: dict[GameMode, dict[Difficulty, RankThresholds]] = {
    GameMode.NUMBERS: _NUMBER_THRESHOLDS,
    GameMode.FIND_NUMBER: {
        Difficulty.EASY: _thresholds(500, 700, 900),
        Difficulty.NORMAL: _thresholds(450, 650, 850),
        Difficulty.HARD: _thresholds(400, 600, 800),
    },
    GameMode.ALPHABET: {
        Difficulty.EASY: _thresholds(450, 650, 850),
        Difficulty.NORMAL: _thresholds(400, 600, 800),
        Difficulty.HARD: _thresholds(350, 550, 750),
    },
    GameMode.SENTENCE: {
        Difficulty.EASY: _thresholds(800, 1000, 1200),
        Difficulty.NORMAL: _thresholds(700, 900, 1100),
        Difficulty.HARD: _thresholds(600, 800, 1000),
    },
    GameMode.FLASH: {
        Difficulty.EASY: _thresholds(350, 450, 550),
        Difficulty.NORMAL: _thresholds(300, 400, 500),
        Difficulty.HARD: _thresholds(250, 350, 450),
    },
    GameMode.ENDLESS: _NUMBER_THRESHOLDS,
}


class GameConfig(BaseModel):
    """
    Static mode/difficulty tables consumed by the generator and ranking.

    The default instance reproduces the shipped tables; callers may load and
    inject their own.
    """

    model_config = ConfigDict(frozen=True)

    grid_configs: dict[GameMode, dict[Difficulty, GridConfig]] = Field(
        default_factory=lambda: DEFAULT_GRID_CONFIGS,
    )
    rank_thresholds: dict[GameMode, dict[Difficulty, RankThresholds]] = Field(
        default_factory=lambda: DEFAULT_RANK_THRESHOLDS,
    )

    def grid_config(self, mode: GameMode, difficulty: Difficulty) -> GridConfig:
        try:
            return self.grid_configs[mode][difficulty]
        except KeyError:
            raise InvalidConfigError(f"No grid config for {mode.value}/{difficulty.value}") from None

    def thresholds(self, mode: GameMode, difficulty: Difficulty) -> RankThresholds:
        try:
            return self.rank_thresholds[mode][difficulty]
        except KeyError:
            raise InvalidConfigError(f"No rank thresholds for {mode.value}/{difficulty.value}") from None


DEFAULT_GAME_CONFIG = GameConfig()


class EngineSettings(BaseSettings):
    """
    Engine runtime settings read from RAPIDTYPE_* environment variables.

    countdown_duration_ms is read by the UI only: the countdown before play
    is presentation, and the engine goes straight from IDLE to PLAYING.
    """

    model_config = {"env_prefix": "RAPIDTYPE_"}

    tick_interval_ms: int = Field(default=TIMER_INTERVAL_MS, ge=1)
    countdown_duration_ms: int = Field(default=COUNTDOWN_DURATION_MS, ge=0)
    history_limit: int = Field(default=HISTORY_LIMIT, ge=1)
    log_dir: str | None = None
