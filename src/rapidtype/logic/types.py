"""
Pydantic models for game logic data structures.

Contains the tile, grid, session and result models that cross component
boundaries. All models are frozen; the session state machine replaces the
session wholesale through the helpers in state_utils.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rapidtype.logic.enums import Difficulty, GameMode, GameStatus, Rank


class GridConfig(BaseModel):
    """Grid dimensions for a mode and difficulty."""

    model_config = ConfigDict(frozen=True)

    rows: int = Field(ge=1)
    cols: int = Field(ge=1)
    total_tiles: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_fits(self) -> GridConfig:
        if self.rows * self.cols < self.total_tiles:
            raise ValueError(f"Grid {self.rows}x{self.cols} cannot hold {self.total_tiles} tiles")
        return self

    @property
    def slots(self) -> int:
        return self.rows * self.cols


class RankThresholds(BaseModel):
    """Upper bounds (ms per tile, inclusive) for each rank above C."""

    model_config = ConfigDict(frozen=True)

    s: int
    a: int
    b: int

    @model_validator(mode="after")
    def _check_order(self) -> RankThresholds:
        if not (self.s <= self.a <= self.b):
            raise ValueError(f"Rank thresholds must satisfy S <= A <= B, got {self.s}/{self.a}/{self.b}")
        return self


class Tile(BaseModel):
    """A single tappable tile on the grid."""

    model_config = ConfigDict(frozen=True)

    id: str
    value: str  # display glyph ("1", "A", "あ")
    order_index: int  # required tap order (0-based)
    position: int  # row-major grid cell (0-based)
    is_cleared: bool = False


class GeneratedTiles(BaseModel):
    """Output of the tile generator for one play."""

    model_config = ConfigDict(frozen=True)

    tiles: tuple[Tile, ...]
    grid_config: GridConfig
    sentence: str | None = None


class GameSession(BaseModel):
    """
    State of a single play, from generation to the final correct tap.

    Timestamps in tap_timestamps are milliseconds since the session started;
    start_time and end_time are wall-clock epoch milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str
    mode: GameMode
    difficulty: Difficulty
    grid_config: GridConfig
    tiles: tuple[Tile, ...]
    current_target_index: int = 0
    target_sentence: str | None = None
    start_time: int | None = None
    end_time: int | None = None
    status: GameStatus = GameStatus.IDLE
    mistake_count: int = 0
    tap_timestamps: tuple[int, ...] = ()

    @property
    def total_tiles(self) -> int:
        return len(self.tiles)

    @property
    def cleared_count(self) -> int:
        return sum(1 for tile in self.tiles if tile.is_cleared)

    @property
    def progress(self) -> float:
        """Fraction of tiles cleared (0.0 - 1.0)."""
        if not self.tiles:
            return 0.0
        return self.current_target_index / len(self.tiles)

    @property
    def current_target(self) -> Tile | None:
        """The tile that must be cleared next, or None once finished."""
        return self.tile_at_order(self.current_target_index)

    def tile_at_order(self, order_index: int) -> Tile | None:
        return next((tile for tile in self.tiles if tile.order_index == order_index), None)

    def find_tile(self, tile_id: str) -> Tile | None:
        return next((tile for tile in self.tiles if tile.id == tile_id), None)


class GameResult(BaseModel):
    """
    Immutable summary of a finished session.

    Serialized with camelCase keys so the payload can be passed to the result
    view as-is (see to_json / from_json).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    mode: GameMode
    difficulty: Difficulty
    clear_time: int = Field(alias="clearTime", ge=0)  # ms
    accuracy: float = Field(ge=0, le=100)  # percent
    rank: Rank
    is_new_record: bool = Field(alias="isNewRecord")
    previous_record: int | None = Field(default=None, alias="previousRecord")
    taps_per_second: float = Field(alias="tapsPerSecond", ge=0)
    tap_intervals: tuple[int, ...] = Field(alias="tapIntervals")
    date: str  # ISO 8601, UTC

    def to_json(self) -> str:
        """Serialize with camelCase keys, omitting an absent previous record."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> GameResult:
        """Parse a payload produced by to_json. Raises ValidationError on malformed data."""
        return cls.model_validate_json(data)
