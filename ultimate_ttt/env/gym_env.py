from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from ultimate_ttt.core import (
    ACTION_VECTOR_SIZE,
    Game,
    apply_move,
    decode_move,
    format_game,
    new_game,
)
from ultimate_ttt.features import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    BOARD_DIM,
    build_aux_vector,
    build_board_tensor,
    legal_action_mask,
)


class UltimateTTTEnv(gym.Env):
    """Two-player environment; rewards are from X's point of view."""

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, BOARD_DIM, BOARD_DIM)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(ACTION_VECTOR_SIZE)

        self._state: Game = new_game()

    @property
    def state(self) -> Game:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state = new_game()
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.is_terminal:
            raise ValueError("Episode is over; call reset() first.")

        if self._enforce_legal and not self.legal_action_mask()[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        self._state = apply_move(self._state, decode_move(int(action_index)))

        observation = self._build_observation()
        info = self._build_info()
        reward = float(self._state.result.score) if self._state.is_terminal else 0.0
        terminated = self._state.is_terminal
        return observation, reward, terminated, False, info

    def legal_action_mask(self) -> np.ndarray:
        return legal_action_mask(self._state)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return format_game(self._state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._state), "aux": build_aux_vector(self._state)}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "current_player": self._state.current_player,
            "result": self._state.result,
        }
