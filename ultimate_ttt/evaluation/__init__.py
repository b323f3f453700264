"""Evaluation helpers for Ultimate Tic-Tac-Toe players."""

from .match import EvaluationResult, evaluate_policies

__all__ = ["EvaluationResult", "evaluate_policies"]
