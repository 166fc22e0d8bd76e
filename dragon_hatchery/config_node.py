"""
Read-only view over a nested configuration document.

A node wraps one mapping of the loaded document and remembers where it
lives, so errors raised while reading it can name the full location.
"""
from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Optional


class ConfigNode:
    """
    A named subtree of a configuration document.

    Entries are either scalars (exposed in raw textual form),
    nested nodes, or absent. Keys containing ``.`` walk into nested nodes.

    Example:
        >>> root = ConfigNode({"scenario": {"first": {"spawn-chance": 0.5}}})
        >>> node = root.get_node("scenario.first")
        >>> node.current_path
        'scenario.first'
        >>> node.get_string("spawn-chance")
        '0.5'
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, path: str = ""):
        self._data: Mapping[str, Any] = data if data is not None else {}
        self._path = path

    @property
    def current_path(self) -> str:
        """Dotted path of this node relative to the document root."""
        return self._path

    @property
    def name(self) -> str:
        """Last segment of the path; empty for the root."""
        return self._path.rsplit(".", 1)[-1]

    def child_path(self, key: str) -> str:
        """Full path of ``key`` below this node."""
        return f"{self._path}.{key}" if self._path else key

    def keys(self) -> List[str]:
        """Names of the direct children, in document order."""
        return [str(k) for k in self._data.keys()]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not None

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, Mapping):
                return None
            value = current.get(part)
            if value is None:
                # YAML keys like `1:` load as ints
                value = next((v for k, v in current.items() if str(k) == part), None)
            current = value
            if current is None:
                return None
        return current

    def get_node(self, key: str) -> Optional["ConfigNode"]:
        """Nested node at ``key``, or None if absent or not a subtree."""
        value = self._lookup(key)
        if not isinstance(value, Mapping):
            return None
        return ConfigNode(value, self.child_path(key))

    def get_string(self, key: str) -> Optional[str]:
        """
        Raw textual form of the scalar at ``key``.

        Returns None if the key is absent or denotes a subtree.
        Booleans render lowercase, the way YAML writes them; an unquoted
        flow list such as ``[rotation=8]`` renders back as bracketed text.
        """
        value = self._lookup(key)
        if value is None or isinstance(value, Mapping):
            return None
        return _render(value)

    def __repr__(self) -> str:
        return f"ConfigNode(path={self._path!r}, keys={self.keys()!r})"


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "[" + ", ".join(_render(v) for v in value) + "]"
    return str(value)
