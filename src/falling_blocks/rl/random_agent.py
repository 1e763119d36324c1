

from __future__ import annotations

import argparse
import logging

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.utils.logging import setup_logger

logger = logging.getLogger("falling_blocks.rl")


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = gym.make("FallingBlocks-30x30-v0")
    obs, info = env.reset(seed=seed)
    rng = np.random.default_rng(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Sample only among currently allowed actions
        valid = np.flatnonzero(info["action_mask"])
        action = int(rng.choice(valid))
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("Episode %d finished with score %d", episodes, info["score"])
            obs, info = env.reset()
    env.close()
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="falling_blocks", level=args.log_level)
    total_reward = run_random(args.steps, args.seed)
    logger.info("Random agent total reward: %.2f", total_reward)


if __name__ == "__main__":  # pragma: no cover
    main()
