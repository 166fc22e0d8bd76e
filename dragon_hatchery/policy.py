"""
Per-scenario spawn policy.

A policy is built once from one scenario's configuration subtree and
decides whether the egg spawns and which block appears instead.
"""
from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Tuple

from .blocks import BlockData, BlockState, parse_material
from .config_access import compute_value, parse_value
from .config_node import ConfigNode
from .errors import ConfigError, ConfigErrorReason
from .weighted import WeightedSampler

logger = logging.getLogger(__name__)


def parse_chance(raw: str) -> float:
    """Probability in [0, 1], both bounds inclusive."""
    value = float(raw)
    if not 0.0 <= value <= 1.0:
        raise ValueError("Chance must be between 0 and 1 (both inclusive)")
    return value


def parse_weight(raw: str) -> float:
    """Positive finite weight."""
    value = float(raw)
    if not math.isfinite(value) or value <= 0:
        raise ValueError("Weight must be a positive number")
    return value


def _non_empty_section(node: ConfigNode, key: str) -> ConfigNode:
    section = node.get_node(key)
    if section is None:
        raise ValueError("Missing section")
    if len(section) == 0:
        raise ValueError("There must be at least 1 entry")
    return section


class ScenarioPolicy:
    """
    Spawn chance plus a weighted set of blocks to spawn.

    Immutable once built; a configuration reload builds new instances.

    Example:
        >>> policy = ScenarioPolicy.from_config(node)
        >>> if policy.decide():
        ...     policy.apply(new_block)
    """

    def __init__(
        self,
        spawn_chance: float,
        blocks: WeightedSampler[BlockData],
        name: str = "",
        prng_seed: Optional[int] = None,
    ):
        if not 0.0 <= spawn_chance <= 1.0:
            raise ValueError(f"spawn_chance out of range: {spawn_chance}")
        self._spawn_chance = spawn_chance
        self._blocks = blocks
        self.name = name
        self.rng = random.Random(prng_seed)

    @classmethod
    def from_config(cls, config: ConfigNode, prng_seed: Optional[int] = None) -> "ScenarioPolicy":
        """
        Build a policy from a scenario subtree.

        If any spawned-block entry is invalid the whole policy is
        rejected, never a partial weight table.

        Args:
            config: The scenario's node, e.g. ``scenario.first``
            prng_seed: Random seed for deterministic behavior

        Raises:
            ConfigError: pointing at the first invalid entry
        """
        name = config.name
        spawn_chance = parse_value(config, "spawn-chance", parse_chance)
        logger.debug(f"{name}: spawn chance = {spawn_chance}")

        section = compute_value(config, "spawned-block", _non_empty_section)

        raw_blocks: List[Tuple[BlockData, float]] = []
        for key in section.keys():
            entry = section.get_node(key)
            if entry is None:
                raise ConfigError(section.child_path(key), ConfigErrorReason.MISSING, "Missing section")

            material = parse_value(entry, "block-type", parse_material)
            logger.debug(f"{name}: block type = {material.key}")

            block_data = parse_value(entry, "block-data", material.create_block_data)
            logger.debug(f"{name}: block data = {block_data.as_string(True)}")

            weight = parse_value(entry, "weight", parse_weight)
            logger.debug(f"{name}: weight = {weight}")

            raw_blocks.append((block_data, weight))

        seed = None if prng_seed is None else prng_seed + 1
        return cls(spawn_chance, WeightedSampler(raw_blocks, prng_seed=seed), name, prng_seed)

    @property
    def spawn_chance(self) -> float:
        return self._spawn_chance

    @property
    def blocks(self) -> WeightedSampler[BlockData]:
        return self._blocks

    def decide(self) -> bool:
        """Roll whether the egg may spawn."""
        roll = self.rng.random()
        logger.debug(f"{self.name}: rolled should-spawn value: {roll}")
        return roll < self._spawn_chance

    def apply(self, new_block: BlockState) -> BlockData:
        """
        Replace the spawning block's data with a randomly picked one.

        Only call this after decide() returned True for the same event.

        Args:
            new_block: The block that will be placed, mutated in place

        Returns:
            The data written to the block
        """
        picked = self._blocks.pick_random()
        logger.debug(f"{self.name}: rolled block: {picked.as_string(True)}")
        data = picked.clone()
        new_block.set_block_data(data)
        return data

    def copy(self, prng_seed: Optional[int] = None) -> "ScenarioPolicy":
        """Same chance and blocks with independent random state."""
        seed = None if prng_seed is None else prng_seed + 1
        blocks = WeightedSampler(zip(self._blocks.entries(), self._blocks.weights()), prng_seed=seed)
        return ScenarioPolicy(self._spawn_chance, blocks, self.name, prng_seed)

    def describe(self) -> dict:
        total = self._blocks.total
        return {
            "spawn_chance": self._spawn_chance,
            "blocks": [
                {"block_data": data.as_string(True), "weight": weight, "probability": weight / total}
                for data, weight in zip(self._blocks.entries(), self._blocks.weights())
            ],
        }

    def __repr__(self) -> str:
        return f"ScenarioPolicy(name={self.name!r}, spawn_chance={self._spawn_chance}, blocks={len(self._blocks)})"
