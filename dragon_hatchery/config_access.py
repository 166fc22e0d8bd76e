"""
Typed accessors over ConfigNode trees.

Missing or invalid values raise ConfigError with the exact location
of the problem. Nothing here substitutes defaults: callers decide that.
"""
from __future__ import annotations

from typing import Callable, TypeVar

from .config_node import ConfigNode
from .errors import ConfigError, ConfigErrorReason

T = TypeVar("T")


def get_section(node: ConfigNode, key: str) -> ConfigNode:
    """
    Get the subtree at ``key``.

    Raises:
        ConfigError: MISSING if the key is absent or not a subtree
    """
    section = node.get_node(key)
    if section is None:
        raise ConfigError(node.child_path(key), ConfigErrorReason.MISSING, "Missing section")
    return section


def parse_value(node: ConfigNode, key: str, parser: Callable[[str], T]) -> T:
    """
    Parse the scalar at ``key`` with ``parser``.

    The parser may raise to reject a value; that is how range checks and
    other semantic constraints are expressed. A None or empty result is
    rejected as well.

    Args:
        node: The node to read from
        key: Key of the scalar, relative to ``node``
        parser: Converts the raw string to the typed value

    Returns:
        The parsed value

    Raises:
        ConfigError: MISSING if absent, PARSE_FAILURE if the parser rejected it
    """
    path = node.child_path(key)
    raw = node.get_string(key)
    if raw is None:
        raise ConfigError(path, ConfigErrorReason.MISSING, "Missing value")

    message = f"Parse error: invalid value: '{raw}'"
    try:
        result = parser(raw)
    except Exception as e:
        raise ConfigError(path, ConfigErrorReason.PARSE_FAILURE, message, raw=raw, cause=e) from e

    if result is None or (isinstance(result, str) and not result):
        cause = ValueError("Parsed value must not be empty")
        raise ConfigError(path, ConfigErrorReason.PARSE_FAILURE, message, raw=raw, cause=cause)
    return result


def compute_value(node: ConfigNode, key: str, fn: Callable[[ConfigNode, str], T]) -> T:
    """
    Extract a value with ``fn``, which receives the node itself.

    Used when extraction needs more than one scalar, e.g. to check
    that a non-empty subtree exists.

    Raises:
        ConfigError: COMPUTE_FAILURE if ``fn`` raised or returned None
    """
    path = node.child_path(key)
    message = "Compute error: invalid value"
    try:
        result = fn(node, key)
    except Exception as e:
        raise ConfigError(path, ConfigErrorReason.COMPUTE_FAILURE, message, cause=e) from e

    if result is None:
        cause = ValueError("Computed value must not be None")
        raise ConfigError(path, ConfigErrorReason.COMPUTE_FAILURE, message, cause=cause)
    return result


def parse_bool(raw: str) -> bool:
    """Strict boolean parser: accepts only true/false (any case)."""
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"Expected true or false, got {raw!r}")
