"""
Game session state machine.

GameLogic owns one GameSession at a time and drives it through
IDLE -> PLAYING <-> PAUSED -> FINISHED in response to discrete events
(start, pause, resume, tile press, reset). Every event is handled
synchronously and in arrival order; the session itself is immutable and is
replaced on each change.

Tap validation keeps two lookups apart: acceptance compares the tapped tile
against the current target (by value in SENTENCE mode, by order elsewhere),
while mutation always clears the tile whose order_index equals the current
target index. That lets a player tap either copy of a repeated character.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from rapidtype.logic.enums import Difficulty, GameMode, GameStatus, TapOutcome
from rapidtype.logic.generator import generate_tiles
from rapidtype.logic.ranking import create_game_result
from rapidtype.logic.rng import generate_session_id
from rapidtype.logic.state_utils import (
    add_mistake,
    clear_current_target,
    create_session,
    finish_session,
    set_status,
    start_session,
)
from rapidtype.logic.stopwatch import Stopwatch, epoch_ms

if TYPE_CHECKING:
    import random
    from collections.abc import Callable

    from rapidtype.logic.phrases import PhraseBank
    from rapidtype.logic.settings import GameConfig
    from rapidtype.logic.types import GameResult, GameSession, Tile
    from rapidtype.session.records import RecordStore

logger = structlog.get_logger()


class GameLogic:
    """
    Session state machine for one mode and difficulty.

    Collaborators are injected: the stopwatch (timing), the record store
    (previous best for the result), and an optional on_finished callback that
    receives the GameResult exactly once per finished session.
    """

    def __init__(  # noqa: PLR0913
        self,
        mode: GameMode,
        difficulty: Difficulty,
        *,
        stopwatch: Stopwatch | None = None,
        records: RecordStore | None = None,
        on_finished: Callable[[GameResult], None] | None = None,
        config: GameConfig | None = None,
        phrase_bank: PhraseBank | None = None,
        rng: random.Random | None = None,
        wall_clock: Callable[[], int] | None = None,
    ) -> None:
        self._mode = mode
        self._difficulty = difficulty
        self._stopwatch = stopwatch or Stopwatch()
        self._records = records
        self._on_finished = on_finished
        self._config = config
        self._phrase_bank = phrase_bank
        self._rng = rng
        self._wall_clock = wall_clock or epoch_ms
        self._result: GameResult | None = None
        self._session = self._new_session()

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def status(self) -> GameStatus:
        return self._session.status

    @property
    def stopwatch(self) -> Stopwatch:
        return self._stopwatch

    @property
    def result(self) -> GameResult | None:
        """The finished session's result, None until the last tile is cleared."""
        return self._result

    @property
    def current_target(self) -> Tile | None:
        return self._session.current_target

    def is_correct(self, tile: Tile) -> bool:
        """Whether tapping tile now would count as a correct tap."""
        session = self._session
        current = session.find_tile(tile.id)
        if current is None:
            return False
        if session.mode == GameMode.SENTENCE:
            target = session.current_target
            if target is None:
                return False
            return not current.is_cleared and current.value == target.value
        return current.order_index == session.current_target_index

    def start_game(self) -> bool:
        """Begin play. Only valid from IDLE; returns False otherwise."""
        if self._session.status != GameStatus.IDLE:
            logger.debug("start ignored", session_id=self._session.session_id, status=self._session.status)
            return False
        self._session = start_session(self._session, self._wall_clock())
        self._stopwatch.start()
        logger.info(
            "game started",
            session_id=self._session.session_id,
            mode=self._mode,
            difficulty=self._difficulty,
            tile_count=self._session.total_tiles,
        )
        return True

    def pause_game(self) -> bool:
        """PLAYING -> PAUSED. Returns False when not playing."""
        if self._session.status != GameStatus.PLAYING:
            logger.debug("pause ignored", session_id=self._session.session_id, status=self._session.status)
            return False
        self._stopwatch.stop()
        self._session = set_status(self._session, GameStatus.PAUSED)
        logger.info("game paused", session_id=self._session.session_id, elapsed_ms=self._stopwatch.time_ms)
        return True

    def resume_game(self) -> bool:
        """PAUSED -> PLAYING, continuing the stopwatch. Returns False when not paused."""
        if self._session.status != GameStatus.PAUSED:
            logger.debug("resume ignored", session_id=self._session.session_id, status=self._session.status)
            return False
        self._stopwatch.start()
        self._session = set_status(self._session, GameStatus.PLAYING)
        logger.info("game resumed", session_id=self._session.session_id)
        return True

    def handle_tile_press(self, tile: Tile) -> TapOutcome:
        """
        Apply a tap on tile.

        Taps outside PLAYING, on unknown tiles, or on already cleared tiles are
        ignored. A correct tap records a lap timestamp and clears the current
        target; clearing the last tile finishes the session and produces the
        GameResult. An incorrect tap only increments the mistake count.
        """
        session = self._session
        if session.status != GameStatus.PLAYING:
            logger.debug("tap ignored", session_id=session.session_id, status=session.status)
            return TapOutcome.IGNORED

        current = session.find_tile(tile.id)
        if current is None or current.is_cleared:
            return TapOutcome.IGNORED

        if not self.is_correct(current):
            self._session = add_mistake(session)
            return TapOutcome.MISTAKE

        timestamp = self._stopwatch.lap()
        session = clear_current_target(session, timestamp)

        if session.current_target_index < session.total_tiles:
            self._session = session
            return TapOutcome.CORRECT

        self._stopwatch.stop()
        self._session = finish_session(session, self._wall_clock())
        self._finish(timestamp)
        return TapOutcome.FINISHED

    def reset_game(self) -> GameSession:
        """Discard the current session and start over in IDLE with fresh tiles."""
        self._stopwatch.reset()
        self._result = None
        self._session = self._new_session()
        logger.info("game reset", session_id=self._session.session_id)
        return self._session

    def close(self) -> None:
        """Release the stopwatch display tick."""
        self._stopwatch.close()

    def _new_session(self) -> GameSession:
        generated = generate_tiles(
            self._mode,
            self._difficulty,
            config=self._config,
            phrase_bank=self._phrase_bank,
            rng=self._rng,
        )
        return create_session(generate_session_id(), self._mode, self._difficulty, generated)

    def _finish(self, clear_time_ms: int) -> None:
        session = self._session
        previous_record = self._records.get_high_score(self._mode, self._difficulty) if self._records else None
        self._result = create_game_result(
            session.session_id,
            self._mode,
            self._difficulty,
            clear_time_ms,
            session.mistake_count,
            session.tap_timestamps,
            previous_record,
            total_tiles=session.total_tiles,
            config=self._config,
        )
        logger.info(
            "game finished",
            session_id=session.session_id,
            clear_time_ms=clear_time_ms,
            mistakes=session.mistake_count,
            rank=self._result.rank,
            new_record=self._result.is_new_record,
        )
        if self._on_finished is not None:
            self._on_finished(self._result)
