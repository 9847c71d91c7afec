"""
Immutable session update utilities using Pydantic model_copy.

These helpers never mutate the input session; they return a new GameSession
with the requested change applied. Callers (the session state machine) are
responsible for checking that the transition is legal.
"""

from rapidtype.logic.enums import Difficulty, GameMode, GameStatus
from rapidtype.logic.types import GameSession, GeneratedTiles


def create_session(
    session_id: str,
    mode: GameMode,
    difficulty: Difficulty,
    generated: GeneratedTiles,
) -> GameSession:
    """Return a fresh IDLE session over a generated tile set."""
    return GameSession(
        session_id=session_id,
        mode=mode,
        difficulty=difficulty,
        grid_config=generated.grid_config,
        tiles=generated.tiles,
        target_sentence=generated.sentence,
    )


def start_session(session: GameSession, start_time: int) -> GameSession:
    """Return new session in PLAYING with the initial 0 timestamp recorded."""
    return session.model_copy(
        update={
            "status": GameStatus.PLAYING,
            "start_time": start_time,
            "tap_timestamps": (0,),
        },
    )


def set_status(session: GameSession, status: GameStatus) -> GameSession:
    return session.model_copy(update={"status": status})


def add_mistake(session: GameSession) -> GameSession:
    """Return new session with the mistake counter incremented."""
    return session.model_copy(update={"mistake_count": session.mistake_count + 1})


def clear_current_target(session: GameSession, timestamp: int) -> GameSession:
    """
    Return new session with the current target tile cleared and progress advanced.

    The tile cleared is always the one whose order_index equals
    current_target_index, whichever tile the player touched.

    Raises:
        ValueError: If no tile carries the current target index.

    """
    target = session.current_target
    if target is None:
        raise ValueError(f"No tile with order_index {session.current_target_index}")
    tiles = tuple(
        tile.model_copy(update={"is_cleared": True}) if tile.id == target.id else tile for tile in session.tiles
    )
    return session.model_copy(
        update={
            "tiles": tiles,
            "current_target_index": session.current_target_index + 1,
            "tap_timestamps": (*session.tap_timestamps, timestamp),
        },
    )


def finish_session(session: GameSession, end_time: int) -> GameSession:
    """Return new session in FINISHED with the end time stamped."""
    return session.model_copy(update={"status": GameStatus.FINISHED, "end_time": end_time})
