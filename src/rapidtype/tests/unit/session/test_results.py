from datetime import UTC, datetime

from rapidtype.logic.enums import Difficulty, GameMode, Rank
from rapidtype.logic.types import GameResult
from rapidtype.session.game_logic import GameLogic
from rapidtype.session.results import ResultHandler
from rapidtype.tests.helpers import play_correctly

NOW = datetime(2026, 5, 10, 12, 0, tzinfo=UTC)


def _result(clear_time=8000, *, accuracy=100.0, is_new_record=True, previous_record=None):
    return GameResult(
        session_id="session_1_abcd",
        mode=GameMode.ALPHABET,
        difficulty=Difficulty.NORMAL,
        clear_time=clear_time,
        accuracy=accuracy,
        rank=Rank.S,
        is_new_record=is_new_record,
        previous_record=previous_record,
        taps_per_second=2.5,
        tap_intervals=(400,),
        date=NOW.isoformat(),
    )


class TestResultHandler:
    def test_new_record_is_stored(self, records):
        ResultHandler(records).handle(_result(), now=NOW)
        assert records.get_high_score(GameMode.ALPHABET, Difficulty.NORMAL) == 8000

    def test_non_record_keeps_best(self, records):
        records.set_high_score(GameMode.ALPHABET, Difficulty.NORMAL, 7000)
        ResultHandler(records).handle(_result(9000, is_new_record=False, previous_record=7000), now=NOW)
        assert records.get_high_score(GameMode.ALPHABET, Difficulty.NORMAL) == 7000

    def test_history_and_stats_updated(self, records):
        handler = ResultHandler(records)
        handler.handle(_result(8000), now=NOW)
        handler.handle(_result(9000, accuracy=90.0, is_new_record=False), now=NOW)

        assert [e.clear_time for e in records.game_history] == [9000, 8000]
        assert records.game_history[0].rank == Rank.S
        assert records.stats.total_games_played == 2
        assert records.stats.total_play_time == 17_000
        assert records.stats.current_streak == 1

        mode_stats = records.get_mode_stats(GameMode.ALPHABET, Difficulty.NORMAL)
        assert mode_stats.games_played == 2
        assert mode_stats.perfect_games == 1

    def test_callable_as_finish_callback(self, stopwatch, records, rng, wall_clock, clock):
        logic = GameLogic(
            GameMode.NUMBERS,
            Difficulty.EASY,
            stopwatch=stopwatch,
            records=records,
            on_finished=ResultHandler(records),
            rng=rng,
            wall_clock=wall_clock,
        )
        logic.start_game()
        play_correctly(logic, clock=clock, step_ms=300)
        assert records.get_high_score(GameMode.NUMBERS, Difficulty.EASY) == 4800

        logic.reset_game()
        logic.start_game()
        play_correctly(logic, clock=clock, step_ms=500)

        assert logic.result.previous_record == 4800
        assert logic.result.is_new_record is False
        assert records.get_high_score(GameMode.NUMBERS, Difficulty.EASY) == 4800
        assert records.stats.total_games_played == 2
