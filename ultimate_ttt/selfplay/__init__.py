"""Self-play policies and batch game runners."""

from .self_play import (
    MCTSPolicy,
    PlayedGame,
    Policy,
    RandomPolicy,
    SelfPlayManager,
    play_game,
    random_playout_summary,
)

__all__ = [
    "MCTSPolicy",
    "PlayedGame",
    "Policy",
    "RandomPolicy",
    "SelfPlayManager",
    "play_game",
    "random_playout_summary",
]
