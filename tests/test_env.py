from __future__ import annotations

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_block_env import ACT_HOLD, ACTIONS, FallingBlockEnv
from falling_blocks.game import SPAWN_X, Command, GameConfig, TetrominoType

from conftest import force_active


def test_registered_env_resets_into_observation_space() -> None:
    env = gym.make("FallingBlocks-30x30-v0")
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs["grid"].shape == (30, 30)
    assert (obs["grid"] < 0).sum() == 4
    assert info["action_mask"].all()
    env.close()


def test_hard_drop_step_locks_piece() -> None:
    env = FallingBlockEnv()
    env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(ACTIONS.index(Command.HARD_DROP))
    assert reward == 0.0
    assert not terminated and not truncated
    assert info["pieces_locked"] == 1
    assert env.observation_space.contains(obs)


def test_hold_masked_after_use() -> None:
    env = FallingBlockEnv()
    env.reset(seed=2)
    obs, _, _, _, info = env.step(ACT_HOLD)
    assert obs["held"] != 7
    assert obs["can_hold"] == 0
    assert not info["action_mask"][ACT_HOLD]


def test_reward_is_score_delta() -> None:
    env = FallingBlockEnv()
    env.reset(seed=3)
    game = env.game
    force_active(game, TetrominoType.O)
    game.grid.grid[-2:, :] = 2
    game.grid.grid[-2:, SPAWN_X + 1 : SPAWN_X + 3] = 0

    _, reward, _, _, info = env.step(ACTIONS.index(Command.HARD_DROP))

    assert reward == 200.0
    assert info["score"] == 200
    assert info["lines_cleared_total"] == 2


def test_same_seed_same_observations() -> None:
    a, b = FallingBlockEnv(), FallingBlockEnv()
    obs_a, _ = a.reset(seed=11)
    obs_b, _ = b.reset(seed=11)
    for action in [1, 4, 5, 6, 2, 3, 5]:
        obs_a, *_ = a.step(action)
        obs_b, *_ = b.step(action)
    assert np.array_equal(obs_a["grid"], obs_b["grid"])
    assert np.array_equal(obs_a["preview"], obs_b["preview"])


def test_truncates_after_max_steps() -> None:
    env = FallingBlockEnv(GameConfig(max_episode_steps=3))
    env.reset(seed=4)
    truncated = False
    for _ in range(3):
        _, _, _, truncated, _ = env.step(0)
    assert truncated


def test_rgb_render() -> None:
    env = FallingBlockEnv(render_mode="rgb_array")
    env.reset(seed=5)
    img = env.render()
    assert img.shape == (360, 360, 3)
    assert img.dtype == np.uint8
