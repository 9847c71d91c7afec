"""Record a finished game's result into the player's RecordStore."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from rapidtype.session.records import GameHistoryEntry

if TYPE_CHECKING:
    from datetime import datetime

    from rapidtype.logic.types import GameResult
    from rapidtype.session.records import RecordStore

logger = structlog.get_logger()

PERFECT_ACCURACY = 100.0


class ResultHandler:
    """
    Apply a GameResult to a RecordStore.

    Writes the high score (only for new records), the history entry, the
    per-mode stats, and the overall play stats and streak. Usable directly as
    the on_finished callback of GameLogic.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def __call__(self, result: GameResult) -> None:
        self.handle(result)

    def handle(self, result: GameResult, *, now: datetime | None = None) -> None:
        store = self._store
        if result.is_new_record:
            store.set_high_score(result.mode, result.difficulty, result.clear_time)

        store.add_game_history(
            GameHistoryEntry(
                mode=result.mode,
                difficulty=result.difficulty,
                clear_time=result.clear_time,
                accuracy=result.accuracy,
                rank=result.rank,
                date=result.date,
            ),
        )
        store.update_mode_stats(
            result.mode,
            result.difficulty,
            result.clear_time,
            is_perfect=result.accuracy >= PERFECT_ACCURACY,
        )
        store.increment_games_played()
        store.add_play_time(result.clear_time)
        store.update_streak(now)

        logger.info(
            "game result recorded",
            session_id=result.session_id,
            mode=result.mode,
            difficulty=result.difficulty,
            clear_time=result.clear_time,
            rank=result.rank,
            new_record=result.is_new_record,
        )
