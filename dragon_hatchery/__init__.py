"""
Dragon Hatchery - configurable dragon egg spawning.

Validates a declarative configuration with location-aware errors and
decides, per scenario, whether the dragon egg appears and which block
takes its place.
"""
__version__ = "1.2.0"

from .blocks import BlockData, BlockState, Material, match_material
from .config_access import compute_value, get_section, parse_value
from .config_node import ConfigNode
from .errors import ConfigError, ConfigErrorReason
from .hatchery import Hatchery, ReloadResult
from .listener import EggFormEvent, EggFormHandler
from .policy import ScenarioPolicy
from .registry import PolicyRegistry
from .scenario import EggScenario
from .weighted import WeightedSampler

__all__ = [
    "BlockData",
    "BlockState",
    "Material",
    "match_material",
    "compute_value",
    "get_section",
    "parse_value",
    "ConfigNode",
    "ConfigError",
    "ConfigErrorReason",
    "Hatchery",
    "ReloadResult",
    "EggFormEvent",
    "EggFormHandler",
    "ScenarioPolicy",
    "PolicyRegistry",
    "EggScenario",
    "WeightedSampler",
]
