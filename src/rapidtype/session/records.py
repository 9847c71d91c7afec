"""
In-memory record keeping for finished games.

RecordStore is the explicit, injected replacement for a global app store:
the session state machine reads previous records from it and the result
handler writes finished games into it. Persisting a store is left to the
caller via snapshot() / from_snapshot().
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import structlog
from pydantic import BaseModel, ConfigDict, Field

from rapidtype.logic.enums import Difficulty, GameMode, Rank
from rapidtype.logic.settings import HISTORY_LIMIT, EngineSettings

logger = structlog.get_logger()


def high_score_key(mode: GameMode, difficulty: Difficulty) -> str:
    """Key records as "<MODE>_<DIFFICULTY>", e.g. "NUMBERS_NORMAL"."""
    return f"{mode.value}_{difficulty.value}"


class UserStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_games_played: int = 0
    total_play_time: int = 0  # ms
    current_streak: int = 0  # days
    longest_streak: int = 0
    last_played_date: str = ""  # ISO timestamp, empty before the first game


class GameHistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    mode: GameMode
    difficulty: Difficulty
    clear_time: int
    accuracy: float
    rank: Rank
    date: str


class ModeStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    games_played: int = 0
    total_time: int = 0
    perfect_games: int = 0


class RecordSnapshot(BaseModel):
    """Serializable copy of everything a RecordStore holds."""

    high_scores: dict[str, int] = Field(default_factory=dict)
    stats: UserStats = Field(default_factory=UserStats)
    game_history: list[GameHistoryEntry] = Field(default_factory=list)
    mode_stats: dict[str, ModeStats] = Field(default_factory=dict)


class RecordStore:
    """High scores, play statistics, streaks and recent history for one player."""

    def __init__(self, *, history_limit: int = HISTORY_LIMIT, snapshot: RecordSnapshot | None = None) -> None:
        if history_limit < 1:
            raise ValueError(f"history_limit must be >= 1, got {history_limit}")
        snapshot = snapshot or RecordSnapshot()
        self._history_limit = history_limit
        self._high_scores: dict[str, int] = dict(snapshot.high_scores)
        self._stats = snapshot.stats
        self._history: list[GameHistoryEntry] = list(snapshot.game_history[:history_limit])
        self._mode_stats: dict[str, ModeStats] = dict(snapshot.mode_stats)

    @classmethod
    def from_settings(cls, settings: EngineSettings, snapshot: RecordSnapshot | None = None) -> RecordStore:
        return cls(history_limit=settings.history_limit, snapshot=snapshot)

    @classmethod
    def from_snapshot(cls, snapshot: RecordSnapshot, *, history_limit: int = HISTORY_LIMIT) -> RecordStore:
        return cls(history_limit=history_limit, snapshot=snapshot)

    def snapshot(self) -> RecordSnapshot:
        return RecordSnapshot(
            high_scores=dict(self._high_scores),
            stats=self._stats,
            game_history=list(self._history),
            mode_stats=dict(self._mode_stats),
        )

    # --- High scores ---

    def get_high_score(self, mode: GameMode, difficulty: Difficulty) -> int | None:
        """Best clear time in ms, or None if the mode/difficulty was never cleared."""
        return self._high_scores.get(high_score_key(mode, difficulty))

    def set_high_score(self, mode: GameMode, difficulty: Difficulty, time_ms: int) -> bool:
        """Store time_ms if it beats the current best. Return True when stored."""
        key = high_score_key(mode, difficulty)
        current = self._high_scores.get(key)
        if current is not None and time_ms >= current:
            return False
        self._high_scores[key] = time_ms
        logger.info("high score updated", key=key, time_ms=time_ms, previous_ms=current)
        return True

    # --- Stats ---

    @property
    def stats(self) -> UserStats:
        return self._stats

    def increment_games_played(self) -> None:
        self._stats = self._stats.model_copy(update={"total_games_played": self._stats.total_games_played + 1})

    def add_play_time(self, ms: int) -> None:
        self._stats = self._stats.model_copy(update={"total_play_time": self._stats.total_play_time + ms})

    def update_streak(self, now: datetime | None = None) -> None:
        """
        Advance the daily play streak.

        Days are compared as UTC calendar dates: same day leaves the streak
        unchanged, the next day extends it, any longer gap restarts it at 1.
        A now earlier than the last play (clock skew) counts as the same day.
        """
        now = (now or datetime.now(tz=UTC)).astimezone(UTC)
        today = now.isoformat()
        stats = self._stats

        if not stats.last_played_date:
            self._stats = stats.model_copy(
                update={"current_streak": 1, "longest_streak": max(1, stats.longest_streak), "last_played_date": today},
            )
            return

        gap_days = (now.date() - datetime.fromisoformat(stats.last_played_date).date()).days
        if gap_days <= 0:
            return
        if gap_days == 1:
            streak = stats.current_streak + 1
            self._stats = stats.model_copy(
                update={
                    "current_streak": streak,
                    "longest_streak": max(streak, stats.longest_streak),
                    "last_played_date": today,
                },
            )
            return
        self._stats = stats.model_copy(update={"current_streak": 1, "last_played_date": today})

    # --- History ---

    @property
    def game_history(self) -> list[GameHistoryEntry]:
        """Most recent first."""
        return list(self._history)

    def add_game_history(self, entry: GameHistoryEntry) -> None:
        self._history.insert(0, entry)
        del self._history[self._history_limit :]

    def clear_game_history(self) -> None:
        self._history.clear()

    # --- Per-mode stats ---

    def get_mode_stats(self, mode: GameMode, difficulty: Difficulty) -> ModeStats:
        return self._mode_stats.get(high_score_key(mode, difficulty), ModeStats())

    def update_mode_stats(self, mode: GameMode, difficulty: Difficulty, time_ms: int, *, is_perfect: bool) -> None:
        key = high_score_key(mode, difficulty)
        current = self._mode_stats.get(key, ModeStats())
        self._mode_stats[key] = ModeStats(
            games_played=current.games_played + 1,
            total_time=current.total_time + time_ms,
            perfect_games=current.perfect_games + (1 if is_perfect else 0),
        )
