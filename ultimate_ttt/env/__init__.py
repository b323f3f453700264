"""Gymnasium environment for Ultimate Tic-Tac-Toe."""

from .gym_env import UltimateTTTEnv

__all__ = ["UltimateTTTEnv"]
