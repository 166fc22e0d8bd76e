"""
The situations in which a dragon egg appears.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class EggScenario(Enum):
    """
    Discrete context of an egg spawn.

    FIRST: the ender dragon is killed for the first time.
    SUBSEQUENT: the ender dragon has been killed before.
    """
    FIRST = "first"
    SUBSEQUENT = "subsequent"

    @property
    def config_key(self) -> str:
        """Identifier of this scenario inside the configuration."""
        return self.value

    @classmethod
    def matching(cls, previously_killed: bool) -> "EggScenario":
        """Scenario for a battle, based on whether the dragon died before."""
        return cls.SUBSEQUENT if previously_killed else cls.FIRST

    @classmethod
    def from_config_key(cls, key: str) -> Optional["EggScenario"]:
        """Scenario whose config key equals ``key``, or None."""
        for scenario in cls:
            if scenario.config_key == key:
                return scenario
        return None

    def __str__(self) -> str:
        return self.name
