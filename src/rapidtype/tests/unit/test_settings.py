import pytest
from pydantic import ValidationError

from rapidtype.logic.enums import Difficulty, GameMode
from rapidtype.logic.exceptions import InvalidConfigError
from rapidtype.logic.settings import (
    COUNTDOWN_DURATION_MS,
    DEFAULT_GAME_CONFIG,
    HISTORY_LIMIT,
    TIMER_INTERVAL_MS,
    EngineSettings,
    GameConfig,
)
from rapidtype.logic.types import GridConfig, RankThresholds


class TestEngineSettings:
    def test_defaults(self, monkeypatch):
        for name in ("TICK_INTERVAL_MS", "COUNTDOWN_DURATION_MS", "HISTORY_LIMIT", "LOG_DIR"):
            monkeypatch.delenv(f"RAPIDTYPE_{name}", raising=False)
        settings = EngineSettings()
        assert settings.tick_interval_ms == TIMER_INTERVAL_MS
        assert settings.countdown_duration_ms == COUNTDOWN_DURATION_MS
        assert settings.history_limit == HISTORY_LIMIT
        assert settings.log_dir is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("RAPIDTYPE_TICK_INTERVAL_MS", "50")
        monkeypatch.setenv("RAPIDTYPE_HISTORY_LIMIT", "20")
        settings = EngineSettings()
        assert settings.tick_interval_ms == 50
        assert settings.history_limit == 20

    def test_rejects_zero_tick_interval(self, monkeypatch):
        monkeypatch.setenv("RAPIDTYPE_TICK_INTERVAL_MS", "0")
        with pytest.raises(ValidationError):
            EngineSettings()


class TestGameConfig:
    def test_every_mode_and_difficulty_has_tables(self):
        for mode in GameMode:
            for difficulty in Difficulty:
                assert DEFAULT_GAME_CONFIG.grid_config(mode, difficulty).total_tiles > 0
                assert DEFAULT_GAME_CONFIG.thresholds(mode, difficulty).s > 0

    def test_fixed_grids_fit_their_tiles(self):
        for mode in (GameMode.NUMBERS, GameMode.FIND_NUMBER, GameMode.ALPHABET, GameMode.FLASH):
            for difficulty in Difficulty:
                grid = DEFAULT_GAME_CONFIG.grid_config(mode, difficulty)
                assert grid.slots >= grid.total_tiles

    def test_alphabet_hard_covers_whole_alphabet(self):
        grid = DEFAULT_GAME_CONFIG.grid_config(GameMode.ALPHABET, Difficulty.HARD)
        assert (grid.rows, grid.cols, grid.total_tiles) == (5, 6, 26)

    def test_missing_grid_raises(self):
        config = GameConfig(grid_configs={}, rank_thresholds={})
        with pytest.raises(InvalidConfigError, match="No grid config for NUMBERS/EASY"):
            config.grid_config(GameMode.NUMBERS, Difficulty.EASY)

    def test_missing_thresholds_raise(self):
        config = GameConfig(rank_thresholds={GameMode.NUMBERS: {}})
        with pytest.raises(InvalidConfigError, match="No rank thresholds for NUMBERS/HARD"):
            config.thresholds(GameMode.NUMBERS, Difficulty.HARD)

    def test_custom_tables_are_used(self):
        grid = GridConfig(rows=2, cols=2, total_tiles=4)
        config = GameConfig(grid_configs={GameMode.NUMBERS: {Difficulty.EASY: grid}})
        assert config.grid_config(GameMode.NUMBERS, Difficulty.EASY) == grid


class TestRankThresholds:
    def test_accepts_ordered_values(self):
        thresholds = RankThresholds(s=1, a=1, b=2)
        assert (thresholds.s, thresholds.a, thresholds.b) == (1, 1, 2)

    def test_rejects_unordered_values(self):
        with pytest.raises(ValidationError, match="S <= A <= B"):
            RankThresholds(s=500, a=400, b=600)


class TestGridConfig:
    def test_rejects_zero_rows(self):
        with pytest.raises(ValidationError):
            GridConfig(rows=0, cols=4, total_tiles=0)

    def test_rejects_grid_smaller_than_tile_count(self):
        with pytest.raises(ValidationError, match="cannot hold 16 tiles"):
            GridConfig(rows=2, cols=2, total_tiles=16)

    def test_accepts_spare_slots(self):
        grid = GridConfig(rows=5, cols=6, total_tiles=26)
        assert grid.slots == 30

    def test_undersized_grid_rejected_in_injected_config(self):
        with pytest.raises(ValidationError):
            GameConfig(grid_configs={GameMode.NUMBERS: {Difficulty.EASY: {"rows": 2, "cols": 2, "total_tiles": 16}}})
