from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, FallingBlockGame, GameConfig, TetrominoType


# Discrete action index -> engine command (None = let gravity act alone)
ACTIONS: Tuple[Optional[Command], ...] = (
    None,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.SOFT_DROP,
    Command.ROTATE_CW,
    Command.HARD_DROP,
    Command.HOLD,
)
ACT_HOLD = ACTIONS.index(Command.HOLD)

_NUM_KINDS = len(TetrominoType)

_PALETTE = {
    0: (30, 30, 36),
    1: (0, 240, 240),
    2: (240, 240, 0),
    3: (160, 0, 240),
    4: (0, 240, 0),
    5: (240, 0, 0),
    6: (0, 0, 240),
    7: (240, 160, 0),
}


class FallingBlockEnv(gym.Env):
    """Gymnasium wrapper: one player command followed by one gravity tick per step.

    Reward is the engine score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 5}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode

        h, w = self.game.grid.height, self.game.grid.width
        depth = self.game.config.preview_depth

        self.observation_space = spaces.Dict(
            {
                # Locked colour tags, active piece overlaid as negative tags
                "grid": spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8),
                "active": spaces.Discrete(_NUM_KINDS),
                "preview": spaces.MultiDiscrete([_NUM_KINDS] * depth),
                # _NUM_KINDS means the slot is empty
                "held": spaces.Discrete(_NUM_KINDS + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        held = self.game.held_piece
        obs: Dict[str, Any] = {
            "grid": self.game.get_state().astype(np.int8),
            "active": int(self.game.active_piece.kind),
            "preview": np.array([int(p.kind) for p in self.game.preview], dtype=np.int64),
            "held": int(held.kind) if held is not None else _NUM_KINDS,
            "can_hold": int(self.game.hold_slot.can_hold_again),
        }
        return obs

    def _compute_action_mask(self) -> np.ndarray:
        mask = np.ones((len(ACTIONS),), dtype=np.bool_)
        mask[ACT_HOLD] = self.game.hold_slot.can_hold_again
        return mask

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self._compute_action_mask(),
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        command = ACTIONS[int(action)]
        score_before = self.game.score

        if command is not None:
            self.game.handle_command(command)
        lines = self.game.tick()

        terminated = bool(self.game.game_over)
        self._steps += 1
        truncated = self._steps >= self.game.config.max_episode_steps

        reward = float(self.game.score - score_before)

        obs = self._get_obs()
        info = self._get_info()
        info["tick_lines_cleared"] = int(lines)
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        return self._compute_action_mask()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["grid"] if self._last_obs is not None else self.game.get_state()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = _PALETTE.get(abs(int(grid[y, x])), (200, 200, 200))
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
