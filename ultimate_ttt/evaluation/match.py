from __future__ import annotations

from dataclasses import dataclass

from ultimate_ttt.core import Player
from ultimate_ttt.selfplay.self_play import Policy, play_game


@dataclass
class EvaluationResult:
    games_played: int
    policy_a_wins: int
    policy_b_wins: int
    draws: int
    average_length: float

    def winrate_a(self) -> float:
        return self.policy_a_wins / max(1, self.games_played)

    def winrate_b(self) -> float:
        return self.policy_b_wins / max(1, self.games_played)


def evaluate_policies(
    policy_a: Policy,
    policy_b: Policy,
    *,
    episodes: int,
    alternate_sides: bool = True,
) -> EvaluationResult:
    """Play ``episodes`` games between two policies.

    Policy A plays X in even-numbered games; with ``alternate_sides`` it
    plays O in the odd-numbered ones, otherwise it is always X.
    """
    policy_a_wins = 0
    policy_b_wins = 0
    draws = 0
    total_ply = 0

    for episode in range(episodes):
        a_is_x = not alternate_sides or episode % 2 == 0
        if a_is_x:
            played = play_game(policy_a, policy_b)
        else:
            played = play_game(policy_b, policy_a)
        total_ply += len(played.moves)

        winner = played.result.winner
        if winner is None:
            draws += 1
        elif (winner is Player.X) == a_is_x:
            policy_a_wins += 1
        else:
            policy_b_wins += 1

    return EvaluationResult(
        games_played=episodes,
        policy_a_wins=policy_a_wins,
        policy_b_wins=policy_b_wins,
        draws=draws,
        average_length=total_ply / max(1, episodes),
    )
