"""Ultimate Tic-Tac-Toe rules engine and Monte Carlo Tree Search player."""

from . import core, env, evaluation, features, mcts, selfplay
from .config import ExperimentConfig, load_yaml_config
from .core import (
    Board,
    CellAlreadyOccupied,
    Game,
    GameResult,
    InvalidBoard,
    InvalidMoveError,
    Move,
    Player,
    apply_move,
    format_game,
    get_winner,
    legal_moves,
    new_game,
)
from .env import UltimateTTTEnv
from .evaluation import EvaluationResult, evaluate_policies
from .mcts import MCTS, MCTSConfig, MCTSResult, SearchTree, search, simulate
from .selfplay import MCTSPolicy, Policy, RandomPolicy, SelfPlayManager, play_game

__all__ = [
    "core",
    "env",
    "evaluation",
    "features",
    "mcts",
    "selfplay",
    "Board",
    "Game",
    "GameResult",
    "Move",
    "Player",
    "InvalidMoveError",
    "CellAlreadyOccupied",
    "InvalidBoard",
    "apply_move",
    "format_game",
    "get_winner",
    "legal_moves",
    "new_game",
    "UltimateTTTEnv",
    "MCTS",
    "MCTSConfig",
    "MCTSResult",
    "SearchTree",
    "search",
    "simulate",
    "Policy",
    "RandomPolicy",
    "MCTSPolicy",
    "SelfPlayManager",
    "play_game",
    "EvaluationResult",
    "evaluate_policies",
    "ExperimentConfig",
    "load_yaml_config",
]
