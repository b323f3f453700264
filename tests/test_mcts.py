import math

import numpy as np
import pytest

from ultimate_ttt.core import Game, GameResult, Move, Player, apply_move, encode_move, legal_moves, new_game
from ultimate_ttt.mcts import MCTS, MCTSConfig, SearchTree, mover_sign, search


def winning_position(player: Player) -> Game:
    """``player`` owns the top-left and top-middle boards and can take the top-right one."""
    me, them = int(player), int(player.other)
    grid = np.zeros((9, 9), dtype=np.int8)
    grid[0, 0:3] = me
    grid[0, 3:6] = me
    grid[0, 6:8] = me
    grid[1, 6:8] = them
    grid[4, 4] = them
    grid[7, 7] = them
    grid[5, 0] = them
    grid[8, 2] = them
    return Game.from_numpy(grid, current_player=player, last_move=(0, 2))


@pytest.mark.parametrize("seed", [0, 1])
def test_search_returns_a_successor_of_the_root(seed):
    root = new_game()
    successors = {apply_move(root, move) for move in legal_moves(root)}

    result = search(root, 100, rng=np.random.default_rng(seed))

    assert result != root
    assert result in successors
    assert np.count_nonzero(result.to_numpy()) == 1


def test_search_from_a_later_position():
    game = new_game()
    for move in [Move(0, 0, 1, 1), Move(1, 1, 0, 0), Move(0, 0, 2, 2)]:
        game = apply_move(game, move)

    result = search(game, 50, rng=np.random.default_rng(5))

    assert result in {apply_move(game, move) for move in legal_moves(game)}
    assert result.current_player is Player.X


def test_run_counts_visits_and_reports_move():
    root = new_game()
    mcts = MCTS(MCTSConfig(num_simulations=100), rng=np.random.default_rng(0))

    result = mcts.run(root)

    assert mcts.tree.get(root).visit_count == 100
    assert result.visit_counts.shape == (81,)
    assert result.visit_counts.sum() == 100
    assert apply_move(root, result.move) == result.state
    assert -1.0 <= result.value <= 1.0
    # 100 iterations expand every move from the empty board.
    assert mcts.is_fully_expanded(root)


def test_first_untried_expansion_is_deterministic():
    mcts = MCTS(MCTSConfig(num_simulations=3, random_expansion=False), rng=np.random.default_rng(0))

    result = mcts.run(new_game())

    assert np.flatnonzero(result.visit_counts).tolist() == [0, 1, 2]


@pytest.mark.parametrize("player", [Player.X, Player.O])
def test_best_move_is_chosen_for_the_player_to_move(player):
    root = winning_position(player)
    assert root.result is GameResult.IN_PROGRESS

    result = MCTS(MCTSConfig(num_simulations=200), rng=np.random.default_rng(11)).run(root)

    assert result.move == Move(0, 2, 0, 2)
    assert result.state.result.winner is player
    assert result.visit_counts[encode_move(result.move)] >= 1


def test_search_rejects_finished_root():
    grid = np.zeros((9, 9), dtype=np.int8)
    grid[0, :] = 2
    finished = Game.from_numpy(grid)

    with pytest.raises(RuntimeError):
        search(finished, 10)


def test_search_rejects_fully_expanded_root():
    root = new_game()
    tree = SearchTree()
    search(root, 100, rng=np.random.default_rng(2), tree=tree)

    with pytest.raises(RuntimeError):
        search(root, 10, rng=np.random.default_rng(3), tree=tree)


def test_search_budget_must_be_positive():
    with pytest.raises(ValueError):
        search(new_game(), 0)


def test_ucb1_prefers_unvisited_and_avoids_exhausted_nodes():
    root = winning_position(Player.X)
    mcts = MCTS(MCTSConfig(num_simulations=10), rng=np.random.default_rng(4))
    unvisited = apply_move(root, Move(0, 2, 1, 2))
    winning = apply_move(root, Move(0, 2, 0, 2))

    assert mcts.ucb1(unvisited, root) == math.inf

    mcts.tree.add_visit(root)
    mcts.tree.add_visit(winning)
    mcts.tree.add_score(winning, 1)
    assert winning.is_terminal
    assert mcts.ucb1(winning, root) == -math.inf

    mcts.tree.add_visit(root)
    mcts.tree.add_visit(unvisited)
    mcts.tree.add_score(unvisited, -1)
    score = mcts.ucb1(unvisited, root)
    assert score == pytest.approx(-1.0 + math.sqrt(2.0 * math.log2(2) / 1))


def test_ucb1_flips_the_average_for_o_to_move():
    parent = apply_move(new_game(), Move(1, 1, 1, 1))
    child = apply_move(parent, Move(1, 1, 0, 0))
    assert parent.current_player is Player.O
    mcts = MCTS(MCTSConfig(num_simulations=10), rng=np.random.default_rng(0))

    for _ in range(4):
        mcts.tree.add_visit(parent)
    mcts.tree.add_visit(child)
    mcts.tree.add_score(child, -1)
    # O wins from the child, so its average counts positively for O.
    assert mcts.ucb1(child, parent) == pytest.approx(1.0 + math.sqrt(2.0 * math.log2(4) / 1))

    mcts.tree.add_score(child, 2)
    assert mcts.ucb1(child, parent) == pytest.approx(-1.0 + math.sqrt(2.0 * math.log2(4) / 1))


@pytest.mark.parametrize(
    "parent",
    [new_game(), apply_move(new_game(), Move(1, 1, 1, 1))],
    ids=["x_to_move", "o_to_move"],
)
def test_selection_avoids_the_child_that_loses_for_the_mover(parent):
    mcts = MCTS(MCTSConfig(num_simulations=10), rng=np.random.default_rng(0))
    children = [apply_move(parent, move) for move in legal_moves(parent)]
    losing = -mover_sign(parent)
    for index, child in enumerate(children):
        mcts.tree.record_child(parent, child)
        mcts.tree.add_visit(parent)
        mcts.tree.add_visit(child)
        mcts.tree.add_score(child, losing if index == 0 else -losing)
    assert mcts.is_fully_expanded(parent)

    path = mcts._select(parent)

    assert path == [parent, children[1]]


def test_expansion_without_untried_moves_is_fatal(monkeypatch):
    root = new_game()
    tree = SearchTree()
    search(root, 100, rng=np.random.default_rng(6), tree=tree)

    mcts = MCTS(MCTSConfig(num_simulations=1), rng=np.random.default_rng(7), tree=tree)
    monkeypatch.setattr(mcts, "is_fully_expanded", lambda game: False)

    with pytest.raises(RuntimeError, match="no untried moves"):
        mcts.run(root)


def test_search_keeps_the_other_config_fields():
    root = new_game()
    tree = SearchTree()
    config = MCTSConfig(num_simulations=500, random_expansion=False)

    search(root, 3, rng=np.random.default_rng(8), tree=tree, config=config)

    assert tree.get(root).visit_count == 3
    first_three = {apply_move(root, move) for move in legal_moves(root)[:3]}
    assert tree.children(root) == first_three
