import io

import pytest
from conftest import ScriptedKeys

from cardodge.config import DEFAULT_PLAYFIELD
from cardodge.difficulty import current_difficulty
from cardodge.game import CRASHED, MENU, QUIT_ROUND, RUNNING, Game
from cardodge.screen import ConsoleSurface
from cardodge.stats import StatsLog

PF = DEFAULT_PLAYFIELD
REACH_ROW = PF.player_row - PF.sprite_height


def run_until_score(game, score, limit=3000):
    for _ in range(limit):
        if game.player.score >= score:
            return
        assert game.tick() == RUNNING
    pytest.fail(f"score stuck at {game.player.score}")


def test_round_ramps_up_to_level_five(make_game, sleeper):
    # hug the left edge; enemies only spawn at columns 32, 42 and 50
    game = make_game(polled=["a"] * 4)
    game.start_round()
    assert current_difficulty(game.player.score).level == 1

    assert game.tick() == RUNNING
    assert sleeper.durations[0] == pytest.approx(0.070)

    run_until_score(game, 5)
    assert game.player.position == PF.road_min
    assert current_difficulty(game.player.score).level == 2
    assert not game.obstacles[2].active

    assert game.tick() == RUNNING
    assert game.obstacles[2].active
    assert sleeper.durations[-1] == pytest.approx(0.055)

    run_until_score(game, 20)
    assert current_difficulty(game.player.score).level == 5
    assert game.player.high_score == game.player.score
    game.tick()
    assert sleeper.durations[-1] == pytest.approx(0.018)


def test_enemy_one_joins_on_tenth_tick(make_game):
    game = make_game()
    game.start_round()
    for _ in range(9):
        game.tick()
    assert not game.obstacles[1].active
    game.tick()
    assert game.obstacles[1].active


def test_crash_on_first_tick_still_saves_a_record(make_game, stats_log, sleeper, surface):
    game = make_game()
    game.start_round()
    ob = game.obstacles[0]
    ob.x, ob.y = game.player.position, REACH_ROW

    assert game.tick() == CRASHED
    assert sleeper.durations == []
    assert surface.rows[REACH_ROW][ob.x:ob.x + 4] == list("****")
    assert surface.rows[PF.player_row][ob.x:ob.x + 4] == list(" ++ ")

    record, saved = game.game_over()
    assert saved
    assert (record.score, record.high_score, record.level) == (0, 0, 1)
    assert "Game Over" in surface.text()

    summary = stats_log.read()
    assert summary.records == [record]
    assert summary.best_ever == 0

    game.show_stats()
    text = surface.text()
    assert "Total games played : 1" in text
    assert "All-time high score: 0" in text


def test_quit_key_leaves_without_saving(make_game, stats_log):
    game = make_game(polled=["q"], waited=["2", " ", "4"])
    game.run()
    assert game.state == "exit"
    assert not stats_log.path.exists()


def test_full_round_through_the_menu(make_game, stats_log):
    # every enemy spawns straight above the player
    game = make_game(waited=["2", " ", " ", "4"], rng_values=[16])
    game.run()
    summary = stats_log.read()
    assert summary.total_games == 1
    assert summary.records[0].score == 0
    assert summary.records[0].level == 1


def test_unsaved_round_is_reported(make_game, tmp_path, surface):
    game = make_game(stats_log=StatsLog(tmp_path))
    game.start_round()
    record, saved = game.game_over()
    assert not saved
    assert "Results could not be saved" in surface.text()


def test_stats_screen_without_games(make_game, surface):
    make_game().show_stats()
    assert "No games played yet." in surface.text()


def test_unknown_menu_key_redisplays_menu(make_game):
    assert make_game(waited=["x"]).show_menu() == MENU


def test_small_terminal_refuses_to_start(tmp_path):
    surface = ConsoleSurface(40, 12, stream=io.StringIO())
    game = Game(surface, ScriptedKeys(), stats_log=StatsLog(tmp_path / "data.txt"))
    assert game.play() == MENU
    assert "Terminal too small" in surface.text()
