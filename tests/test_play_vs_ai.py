import argparse
import json
from pathlib import Path

import pytest

from ultimate_ttt.core import GameResult, Move, apply_move, new_game

from scripts.play_vs_ai import build_config, describe_result, parse_move, prompt_human_move, replay_logged_game


def create_sample_log(path: Path) -> None:
    moves = [
        {"move_index": 0, "actor": "human", "player": "X", "move": [1, 1, 0, 2]},
        {"move_index": 1, "actor": "ai", "player": "O", "move": [0, 2, 2, 2]},
    ]
    log = {"metadata": {}, "moves": moves}
    path.write_text(json.dumps(log))


def test_replay_logged_game(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path)
    summary = replay_logged_game(log_path, verbose=False)
    assert summary["moves"] == 2
    assert summary["result"] == GameResult.IN_PROGRESS.value
    board = summary["board"]
    assert board[3][5] == 1
    assert board[2][8] == 2


def test_parse_move():
    assert parse_move("0 1 2 0") == Move(0, 1, 2, 0)
    with pytest.raises(ValueError):
        parse_move("0 1 2")
    with pytest.raises(ValueError):
        parse_move("a b c d")
    with pytest.raises(ValueError):
        parse_move("0 1 2 3")


def test_prompt_retries_until_move_is_legal(capsys):
    game = apply_move(new_game(), Move(0, 0, 1, 1))
    answers = iter(["nonsense", "0 0 0 0", "1 1 0 0"])

    move, next_game = prompt_human_move(game, input_fn=lambda _: next(answers))

    assert move == Move(1, 1, 0, 0)
    assert next_game == apply_move(game, move)
    assert "Invalid move:" in capsys.readouterr().out


def test_prompt_quit_exits():
    with pytest.raises(SystemExit):
        prompt_human_move(new_game(), input_fn=lambda _: "q")


def test_describe_result():
    assert describe_result(GameResult.X_WON) == "X won"
    assert describe_result(GameResult.TIE) == "It's a tie"


def make_args(config_path: Path, **overrides) -> argparse.Namespace:
    values = {"config": str(config_path), "mcts_simulations": None, "seed": None, "log_file": None}
    values.update(overrides)
    return argparse.Namespace(**values)


def test_build_config_reads_file_and_applies_flags(tmp_path):
    config_path = tmp_path / "cfg.yaml"
    config_path.write_text(
        "seed: 3\n"
        "log_file: games/last.json\n"
        "mcts:\n"
        "  num_simulations: 40\n"
        "  exploration: 0.7\n",
        encoding="utf-8",
    )

    from_file = build_config(make_args(config_path))
    assert from_file.seed == 3
    assert from_file.log_file == "games/last.json"
    assert from_file.mcts_config.num_simulations == 40

    overridden = build_config(
        make_args(config_path, mcts_simulations=5, seed=8, log_file=str(tmp_path / "log.json"))
    )
    assert overridden.seed == 8
    assert overridden.log_file == str(tmp_path / "log.json")
    assert overridden.mcts_config.num_simulations == 5
    assert overridden.mcts_config.exploration == 0.7
