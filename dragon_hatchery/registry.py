"""
Container of ScenarioPolicy instances, built from the configuration.

Each scenario loads independently: a broken scenario is logged and
left out, the others still load.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from .config_access import get_section
from .config_node import ConfigNode
from .errors import ConfigError
from .policy import ScenarioPolicy
from .scenario import EggScenario

logger = logging.getLogger(__name__)

SCENARIO_SECTION = "scenario"


class PolicyRegistry:
    """
    Maps each known scenario to its policy, if it loaded.

    Never partially updated: a reload builds a new registry.

    Example:
        >>> registry = PolicyRegistry(load_config("config.yml"))
        >>> policy = registry.policy_for(EggScenario.FIRST)
        >>> if policy is None:
        ...     pass  # deny the spawn
    """

    def __init__(self, root: ConfigNode, prng_seed: Optional[int] = None):
        """
        Build policies for every known scenario.

        Does not raise on invalid configuration; failures are logged
        and recorded in ``failures``.

        Args:
            root: The document root
            prng_seed: Random seed for deterministic behavior
        """
        self._policies: Dict[EggScenario, ScenarioPolicy] = {}
        self._failures: Dict[str, Exception] = {}

        try:
            config = get_section(root, SCENARIO_SECTION)
        except ConfigError as e:
            logger.error(
                f"Invalid config, unable to load scenarios: {e}",
                extra={"config_path": e.path, "reason": e.reason.value},
            )
            self._failures[SCENARIO_SECTION] = e
            return

        for key in config.keys():
            if EggScenario.from_config_key(key) is None:
                logger.warning(f"Ignoring unknown scenario: {key}", extra={"config_path": config.child_path(key)})

        for index, scenario in enumerate(EggScenario):
            key = scenario.config_key
            seed = None if prng_seed is None else prng_seed + 7 * index
            try:
                policy = ScenarioPolicy.from_config(get_section(config, key), prng_seed=seed)
            except ConfigError as e:
                logger.error(
                    f"Error parsing scenario: {key}: {e}",
                    exc_info=True,
                    extra={"scenario": key, "config_path": e.path, "reason": e.reason.value},
                )
                self._failures[key] = e
                continue
            except Exception as e:
                logger.error(f"Error parsing scenario: {key}: {e}", exc_info=True, extra={"scenario": key})
                self._failures[key] = e
                continue

            self._policies[scenario] = policy
            logger.debug(f"Registered policy for scenario: {scenario}")

    @classmethod
    def empty(cls) -> "PolicyRegistry":
        """A registry with no policies, e.g. before the first load."""
        registry = cls.__new__(cls)
        registry._policies = {}
        registry._failures = {}
        return registry

    def policy_for(self, scenario: Union[EggScenario, str]) -> Optional[ScenarioPolicy]:
        """
        Policy for ``scenario`` (enum member or config key).

        Returns None if the scenario is unknown or failed to load.
        """
        if isinstance(scenario, str):
            scenario = EggScenario.from_config_key(scenario)
            if scenario is None:
                return None
        return self._policies.get(scenario)

    def loaded_scenarios(self) -> List[EggScenario]:
        return [s for s in EggScenario if s in self._policies]

    @property
    def failures(self) -> Dict[str, Exception]:
        """Failed scenario keys (or the scenario section itself) -> error."""
        return dict(self._failures)

    def __len__(self) -> int:
        return len(self._policies)

    def __repr__(self) -> str:
        loaded = ", ".join(s.config_key for s in self.loaded_scenarios())
        return f"PolicyRegistry(loaded=[{loaded}], failed={sorted(self._failures)})"
