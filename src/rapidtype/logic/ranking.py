"""
Ranking and scoring for finished sessions.

Pure functions that turn clear time, mistake count and tap timestamps into
rank, accuracy, taps per second and the final GameResult, plus the time
formatters used by the result view.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rapidtype.logic.enums import Difficulty, GameMode, Rank
from rapidtype.logic.settings import DEFAULT_GAME_CONFIG, GameConfig
from rapidtype.logic.types import GameResult

if TYPE_CHECKING:
    from collections.abc import Sequence


def _round1(value: float) -> float:
    """Round to one decimal, halves away from zero for the non-negative values used here."""
    return math.floor(value * 10 + 0.5) / 10


def calculate_rank(
    mode: GameMode,
    difficulty: Difficulty,
    clear_time_ms: float,
    *,
    total_tiles: int | None = None,
    config: GameConfig | None = None,
) -> Rank:
    """
    Rank a clear by average time per tile against the mode/difficulty thresholds.

    total_tiles defaults to the configured tile count; SENTENCE callers pass
    the actual phrase length. C is the floor and is always reachable.
    """
    config = config or DEFAULT_GAME_CONFIG
    if total_tiles is None:
        total_tiles = config.grid_config(mode, difficulty).total_tiles
    if total_tiles <= 0:
        return Rank.C

    thresholds = config.thresholds(mode, difficulty)
    time_per_tile = clear_time_ms / total_tiles

    if time_per_tile <= thresholds.s:
        return Rank.S
    if time_per_tile <= thresholds.a:
        return Rank.A
    if time_per_tile <= thresholds.b:
        return Rank.B
    return Rank.C


def calculate_accuracy(total_tiles: int, mistake_count: int) -> float:
    """Correct taps over all taps, as a percentage with one decimal. 0 for an empty set."""
    if total_tiles == 0:
        return 0.0
    return _round1(total_tiles / (total_tiles + mistake_count) * 100)


def calculate_taps_per_second(tap_timestamps: Sequence[float]) -> float:
    """Average correct taps per second across the recorded span."""
    if len(tap_timestamps) < 2:
        return 0.0
    span = tap_timestamps[-1] - tap_timestamps[0]
    if span == 0:
        return 0.0
    return _round1((len(tap_timestamps) - 1) / span * 1000)


def calculate_tap_intervals(tap_timestamps: Sequence[int]) -> list[int]:
    """Delta between each pair of consecutive timestamps."""
    return [b - a for a, b in zip(tap_timestamps, tap_timestamps[1:], strict=False)]


def is_new_record(clear_time_ms: int, previous_record: int | None) -> bool:
    """A clear is a record when there is none yet or it is strictly faster."""
    return previous_record is None or clear_time_ms < previous_record


def create_game_result(  # noqa: PLR0913
    session_id: str,
    mode: GameMode,
    difficulty: Difficulty,
    clear_time_ms: int,
    mistake_count: int,
    tap_timestamps: Sequence[int],
    previous_record: int | None,
    *,
    total_tiles: int | None = None,
    config: GameConfig | None = None,
) -> GameResult:
    """Compose rank, accuracy and tap statistics into a GameResult stamped with the current UTC time."""
    config = config or DEFAULT_GAME_CONFIG
    if total_tiles is None:
        total_tiles = config.grid_config(mode, difficulty).total_tiles

    return GameResult(
        session_id=session_id,
        mode=mode,
        difficulty=difficulty,
        clear_time=clear_time_ms,
        accuracy=calculate_accuracy(total_tiles, mistake_count),
        rank=calculate_rank(mode, difficulty, clear_time_ms, total_tiles=total_tiles, config=config),
        is_new_record=is_new_record(clear_time_ms, previous_record),
        previous_record=previous_record,
        taps_per_second=calculate_taps_per_second(tap_timestamps),
        tap_intervals=tuple(calculate_tap_intervals(tap_timestamps)),
        date=datetime.now(tz=UTC).isoformat(),
    )


def format_time(ms: float) -> str:
    """Format as MM:SS.cc (minutes, seconds, hundredths). No hour component."""
    ms = max(0, int(ms))
    total_seconds = ms // 1000
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    centiseconds = (ms % 1000) // 10
    return f"{minutes:02d}:{seconds:02d}.{centiseconds:02d}"


def format_time_diff(diff_ms: float) -> str:
    """Format a signed difference in seconds, e.g. "+1.25s" or "-0.40s"."""
    sign = "+" if diff_ms >= 0 else "-"
    return f"{sign}{abs(diff_ms) / 1000:.2f}s"
