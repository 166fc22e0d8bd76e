"""
Loading the hatchery configuration file.

The configuration is YAML. A commented default file is written on first
start so server owners have something to edit.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict

import yaml

from .config_node import ConfigNode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_YAML = """\
# Log what the plugin is doing, e.g. the rolled values.
debug-logging: false

# What should happen when the ender dragon dies and the egg would appear.
# 'first': the dragon is killed for the first time.
# 'subsequent': the dragon has been killed before.
scenario:
  first:
    # Chance of anything spawning, between 0 and 1 (both inclusive).
    spawn-chance: 1
    # The blocks to spawn instead of the egg; one is picked randomly,
    # each with a probability proportional to its weight.
    spawned-block:
      egg:
        block-type: dragon_egg
        block-data: ""
        weight: 1
  subsequent:
    spawn-chance: 0.5
    spawned-block:
      egg:
        block-type: dragon_egg
        block-data: ""
        weight: 9
      head:
        block-type: dragon_head
        block-data: "[rotation=8]"
        weight: 1
"""


def parse_config(text: str) -> ConfigNode:
    """
    Parse YAML text into a root node.

    Raises:
        yaml.YAMLError: if the text is not valid YAML
        ValueError: if the document is not a mapping
    """
    data = yaml.safe_load(text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")
    return ConfigNode(data)


def load_config(path: str) -> ConfigNode:
    """
    Load a YAML configuration file.

    Raises:
        OSError: if the file cannot be read
        yaml.YAMLError: if the file is not valid YAML
        ValueError: if the document is not a mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    node = parse_config(content)
    logger.debug(f"Loaded config from {path}: {len(node)} top-level keys")
    return node


def save_default_config(path: str) -> bool:
    """
    Write the default configuration unless the file already exists.

    Returns:
        True if the file was written
    """
    if os.path.exists(path):
        return False
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(DEFAULT_CONFIG_YAML)
    logger.info(f"Saved default config to {path}")
    return True


def dump_config(data: Dict[str, Any]) -> str:
    """Serialize a configuration dict back to YAML."""
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
