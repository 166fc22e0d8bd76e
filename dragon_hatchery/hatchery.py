"""
Application object: owns the configuration file and the active policies.

A reload builds a brand new PolicyRegistry and swaps the reference.
Readers never lock; whoever grabbed the old registry keeps using it,
and it stays fully formed.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional

import yaml

from .config import load_config, save_default_config
from .config_access import parse_bool, parse_value
from .config_node import ConfigNode
from .errors import ConfigError
from .listener import EggFormHandler
from .logging_config import set_debug_logging
from .registry import PolicyRegistry
from .scenario import EggScenario

logger = logging.getLogger(__name__)


@dataclass
class ReloadResult:
    """Outcome of a reload."""
    success: bool
    message: str
    loaded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    debug_logging: bool = False

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "loaded": list(self.loaded),
            "failed": list(self.failed),
            "debug_logging": self.debug_logging,
        }


class Hatchery:
    """
    Loads the configuration and serves the current policies.

    Example:
        >>> hatchery = Hatchery("plugins/DragonHatchery/config.yml")
        >>> result = hatchery.reload()
        >>> hatchery.handler.on_egg_form(event)
    """

    def __init__(self, config_path: str, prng_seed: Optional[int] = None):
        """
        Args:
            config_path: YAML file; the default config is written there if missing
            prng_seed: Random seed for deterministic behavior
        """
        self.config_path = config_path
        self.prng_seed = prng_seed
        self._registry = PolicyRegistry.empty()
        self._reload_lock = threading.Lock()
        self.handler = EggFormHandler(lambda: self.registry)

    @property
    def registry(self) -> PolicyRegistry:
        """
        The current registry.

        Don't cache the returned value: it is replaced on reload.
        """
        return self._registry

    def reload(self) -> ReloadResult:
        """
        Re-read the configuration and replace all policies.

        If the file cannot be read or parsed, the current policies stay
        active. Otherwise the new registry replaces the old one, even
        if some scenarios failed to load.
        """
        with self._reload_lock:
            try:
                save_default_config(self.config_path)
                root = load_config(self.config_path)
            except (OSError, yaml.YAMLError, ValueError) as e:
                logger.error(f"Unable to read config {self.config_path}, keeping current policies: {e}")
                return ReloadResult(
                    success=False,
                    message=f"Unable to read {self.config_path}: {e}",
                    loaded=[s.config_key for s in self._registry.loaded_scenarios()],
                    debug_logging=False,
                )

            debug = self._apply_debug_logging(root)
            registry = PolicyRegistry(root, prng_seed=self.prng_seed)
            self._registry = registry

        loaded = [s.config_key for s in registry.loaded_scenarios()]
        failures = registry.failures
        failed = [s.config_key for s in EggScenario if s not in registry.loaded_scenarios()]

        if not failed:
            message = "The configuration has been reloaded."
        else:
            details = "; ".join(_describe(key, error) for key, error in failures.items())
            message = f"Failed to load scenarios: {', '.join(failed)}. {details}"

        logger.info(f"Reloaded config: loaded={loaded} failed={failed}")
        return ReloadResult(
            success=not failed,
            message=message,
            loaded=loaded,
            failed=failed,
            debug_logging=debug,
        )

    def _apply_debug_logging(self, root: ConfigNode) -> bool:
        try:
            enabled = parse_value(root, "debug-logging", parse_bool)
        except ConfigError as e:
            logger.error(f"Invalid config, defaulting to debug logging: {e}")
            enabled = True
        set_debug_logging(enabled)
        return enabled


def _describe(key: str, error: Exception) -> str:
    if isinstance(error, ConfigError):
        return f"{key}: {error.describe()}"
    return f"{key}: {error}"
