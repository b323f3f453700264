import numpy as np

from ultimate_ttt.core import Game, GameResult, new_game
from ultimate_ttt.mcts import simulate


def test_simulate_reaches_a_terminal_state():
    start = new_game()
    path, outcome = simulate(start, np.random.default_rng(0))

    assert path[0] == start
    assert path[-1].is_terminal
    assert all(not state.is_terminal for state in path[:-1])
    assert len(path) - 1 <= 81
    assert outcome in (-1, 0, 1)
    assert outcome == path[-1].result.score


def test_simulate_places_one_piece_per_ply():
    path, _ = simulate(new_game(), np.random.default_rng(1))

    for before, after in zip(path, path[1:]):
        assert np.count_nonzero(after.to_numpy()) == np.count_nonzero(before.to_numpy()) + 1
        assert after.current_player is before.current_player.other


def test_simulate_is_reproducible_with_a_seed():
    first, first_outcome = simulate(new_game(), np.random.default_rng(42))
    second, second_outcome = simulate(new_game(), np.random.default_rng(42))

    assert first == second
    assert first_outcome == second_outcome


def test_simulate_from_terminal_state_returns_it():
    grid = np.zeros((9, 9), dtype=np.int8)
    for board_col in range(3):
        grid[0, board_col * 3 : board_col * 3 + 3] = 1
    terminal = Game.from_numpy(grid)
    assert terminal.result is GameResult.X_WON

    path, outcome = simulate(terminal)

    assert path == [terminal]
    assert outcome == 1


def test_outcome_mapping_covers_every_result():
    outcomes = set()
    rng = np.random.default_rng(3)
    for _ in range(40):
        path, outcome = simulate(new_game(), rng)
        assert outcome == {GameResult.X_WON: 1, GameResult.O_WON: -1, GameResult.TIE: 0}[path[-1].result]
        outcomes.add(outcome)
    assert outcomes <= {-1, 0, 1}
