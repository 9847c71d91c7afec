"""
Tile generator for each game mode.

Shape (tile count, grid size) comes from the GameConfig table; placement and,
for FIND_NUMBER, the required order are reshuffled on every call. Each mode
is a short independent strategy selected by a match on GameMode.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from rapidtype.logic.enums import Difficulty, GameMode
from rapidtype.logic.exceptions import UnsupportedModeError
from rapidtype.logic.phrases import PhraseBank
from rapidtype.logic.rng import generate_tile_id, shuffled_range
from rapidtype.logic.settings import ALPHABET, DEFAULT_GAME_CONFIG, GameConfig
from rapidtype.logic.types import GeneratedTiles, GridConfig, Tile

if TYPE_CHECKING:
    import random
    from collections.abc import Sequence

logger = structlog.get_logger()

_DEFAULT_PHRASE_BANK = PhraseBank.default()


def _place(values: Sequence[str], rng: random.Random | None, *, shuffle_order: bool = False) -> tuple[Tile, ...]:
    """
    Build one tile per value with a shuffled grid position.

    Order is sequential (value index) unless shuffle_order is set, in which
    case it is a second permutation drawn independently of position.
    """
    count = len(values)
    positions = shuffled_range(count, rng)
    orders = shuffled_range(count, rng) if shuffle_order else list(range(count))
    return tuple(
        Tile(id=generate_tile_id(), value=value, order_index=orders[i], position=positions[i])
        for i, value in enumerate(values)
    )


def _number_values(grid: GridConfig) -> list[str]:
    return [str(i + 1) for i in range(grid.total_tiles)]


def generate_number_tiles(grid: GridConfig, rng: random.Random | None = None) -> tuple[Tile, ...]:
    return _place(_number_values(grid), rng)


def generate_alphabet_tiles(grid: GridConfig, rng: random.Random | None = None) -> tuple[Tile, ...]:
    count = min(grid.total_tiles, len(ALPHABET))
    return _place(list(ALPHABET[:count]), rng)


def generate_find_number_tiles(grid: GridConfig, rng: random.Random | None = None) -> tuple[Tile, ...]:
    return _place(_number_values(grid), rng, shuffle_order=True)


def generate_sentence_tiles(
    difficulty: Difficulty,
    phrase_bank: PhraseBank,
    rng: random.Random | None = None,
) -> tuple[tuple[Tile, ...], str]:
    """Pick a phrase and split it into one tile per character."""
    sentence = phrase_bank.pick(difficulty, rng).text
    return _place(list(sentence), rng), sentence


def generate_flash_tiles(grid: GridConfig) -> tuple[Tile, ...]:
    """Blank placeholder panels in sequential order and position."""
    return tuple(
        Tile(id=generate_tile_id(), value="", order_index=i, position=i) for i in range(grid.total_tiles)
    )


def generate_tiles(
    mode: GameMode,
    difficulty: Difficulty,
    *,
    config: GameConfig | None = None,
    phrase_bank: PhraseBank | None = None,
    rng: random.Random | None = None,
) -> GeneratedTiles:
    """
    Generate the tile set and grid for one play.

    Raises:
        UnsupportedModeError: For modes without a generation rule (ENDLESS).
        InvalidConfigError: If the config or phrase bank lacks the requested entry.

    """
    config = config or DEFAULT_GAME_CONFIG
    grid = config.grid_config(mode, difficulty)

    match mode:
        case GameMode.NUMBERS:
            result = GeneratedTiles(tiles=generate_number_tiles(grid, rng), grid_config=grid)
        case GameMode.ALPHABET:
            tiles = generate_alphabet_tiles(grid, rng)
            # capped at 26 letters whatever the configured count
            result = GeneratedTiles(tiles=tiles, grid_config=grid.model_copy(update={"total_tiles": len(tiles)}))
        case GameMode.FIND_NUMBER:
            result = GeneratedTiles(tiles=generate_find_number_tiles(grid, rng), grid_config=grid)
        case GameMode.SENTENCE:
            tiles, sentence = generate_sentence_tiles(difficulty, phrase_bank or _DEFAULT_PHRASE_BANK, rng)
            # grow rows when a long phrase would overflow the nominal grid
            rows = max(grid.rows, math.ceil(len(tiles) / grid.cols))
            result = GeneratedTiles(
                tiles=tiles,
                grid_config=grid.model_copy(update={"rows": rows, "total_tiles": len(tiles)}),
                sentence=sentence,
            )
        case GameMode.FLASH:
            result = GeneratedTiles(tiles=generate_flash_tiles(grid), grid_config=grid)
        case _:
            raise UnsupportedModeError(mode.value)

    logger.debug("tiles generated", mode=mode, difficulty=difficulty, tile_count=len(result.tiles))
    return result


def get_current_target_value(
    mode: GameMode,
    tiles: Sequence[Tile],
    current_index: int,
    sentence: str | None = None,
) -> str:
    """Return the glyph the player must tap next, or "" once nothing is left."""
    if mode == GameMode.SENTENCE and sentence:
        return sentence[current_index] if 0 <= current_index < len(sentence) else ""
    target = next((tile for tile in tiles if tile.order_index == current_index), None)
    return target.value if target is not None else ""
