"""Builders and fakes shared by the engine test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rapidtype.logic.enums import Difficulty, GameMode
from rapidtype.logic.phrases import Phrase, PhraseBank
from rapidtype.logic.types import GridConfig, Tile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rapidtype.session.game_logic import GameLogic


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = 0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def make_tile(
    order_index: int,
    value: str | None = None,
    *,
    position: int | None = None,
    tile_id: str | None = None,
    is_cleared: bool = False,
) -> Tile:
    """Create a Tile with sensible defaults for testing."""
    return Tile(
        id=tile_id if tile_id is not None else f"tile-{order_index}",
        value=value if value is not None else str(order_index + 1),
        order_index=order_index,
        position=position if position is not None else order_index,
        is_cleared=is_cleared,
    )


def make_grid(total_tiles: int, cols: int = 4) -> GridConfig:
    return GridConfig(rows=-(-total_tiles // cols) or 1, cols=cols, total_tiles=total_tiles)


def single_phrase_bank(text: str) -> PhraseBank:
    """A bank that always yields text, whatever the difficulty."""
    phrase = (Phrase(text=text),)
    return PhraseBank(phrases=dict.fromkeys(Difficulty, phrase))


def tiles_in_order(tiles: Sequence[Tile]) -> list[Tile]:
    return sorted(tiles, key=lambda t: t.order_index)


def play_correctly(logic: GameLogic, clock: FakeClock | None = None, step_ms: int = 0, taps: int | None = None) -> None:
    """Tap the current target repeatedly, advancing clock by step_ms before each tap."""
    remaining = taps if taps is not None else logic.session.total_tiles - logic.session.current_target_index
    for _ in range(remaining):
        target = logic.current_target
        assert target is not None
        if clock is not None:
            clock.advance(step_ms)
        logic.handle_tile_press(target)


def wrong_tile(logic: GameLogic) -> Tile:
    """Return an uncleared tile that is not an acceptable tap right now."""
    return next(t for t in logic.session.tiles if not t.is_cleared and not logic.is_correct(t))


ALL_MODES_EXCEPT_ENDLESS = [mode for mode in GameMode if mode != GameMode.ENDLESS]
