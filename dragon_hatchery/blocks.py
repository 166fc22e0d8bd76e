"""
Block types and block states of the host game.

A Material is a block type with a fixed set of state properties.
BlockData is one concrete state of a material, written in the game's
bracket syntax, e.g. ``minecraft:chest[facing=north,type=single]``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

NAMESPACE = "minecraft"

_FACING = ("north", "east", "south", "west")
_FACING_ALL = ("north", "east", "south", "west", "up", "down")
_AXIS = ("y", "x", "z")
_BOOL = ("false", "true")
_ROTATION = tuple(str(i) for i in range(16))

_DATA_RE = re.compile(r"^(?:(?P<key>[a-z0-9_:]+))?(?:\[(?P<props>[^\]]*)\])?$")


@dataclass(frozen=True)
class Material:
    """
    A block type.

    Attributes:
        key: Name without namespace, e.g. "dragon_egg"
        properties: Property name -> allowed values; the first value is the default
    """
    key: str
    properties: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()

    @property
    def namespaced_key(self) -> str:
        return f"{NAMESPACE}:{self.key}"

    def allowed_values(self, prop: str) -> Optional[Tuple[str, ...]]:
        for name, values in self.properties:
            if name == prop:
                return values
        return None

    def create_block_data(self, raw: str = "") -> "BlockData":
        """
        Parse block state syntax for this material.

        Accepts ``""``, ``"[k=v,...]"`` or ``"minecraft:key[k=v,...]"``.

        Raises:
            ValueError: on syntax errors, unknown properties or values,
                or a different material named in the string
        """
        text = raw.strip().lower()
        match = _DATA_RE.match(text)
        if match is None:
            raise ValueError(f"Malformed block data: {raw!r}")

        named = match.group("key")
        if named is not None and match_material(named) != self:
            raise ValueError(f"Block data is for {named!r}, expected {self.key!r}")

        explicit: Dict[str, str] = {}
        props = match.group("props")
        if props and props.strip():
            for pair in props.split(","):
                name, sep, value = pair.partition("=")
                name, value = name.strip(), value.strip()
                if not sep or not name or not value:
                    raise ValueError(f"Malformed property {pair!r} in {raw!r}")
                allowed = self.allowed_values(name)
                if allowed is None:
                    raise ValueError(f"{self.key} has no property {name!r}")
                if value not in allowed:
                    raise ValueError(f"Invalid value {value!r} for {self.key}.{name}")
                if name in explicit:
                    raise ValueError(f"Duplicate property {name!r} in {raw!r}")
                explicit[name] = value

        return BlockData(self, tuple(sorted(explicit.items())))


@dataclass(frozen=True)
class BlockData:
    """
    One state of a material.

    Only the explicitly set properties are stored; the rest take the
    material's defaults.
    """
    material: Material
    explicit: Tuple[Tuple[str, str], ...] = ()

    def state(self) -> Dict[str, str]:
        """Full property map, defaults included."""
        result = {name: values[0] for name, values in self.material.properties}
        result.update(self.explicit)
        return result

    def as_string(self, hide_unspecified: bool = False) -> str:
        props = self.explicit if hide_unspecified else tuple(sorted(self.state().items()))
        if not props:
            return self.material.namespaced_key
        inner = ",".join(f"{k}={v}" for k, v in props)
        return f"{self.material.namespaced_key}[{inner}]"

    def clone(self) -> "BlockData":
        return BlockData(self.material, self.explicit)

    def __str__(self) -> str:
        return self.as_string(True)


@dataclass
class BlockState:
    """Mutable block about to be placed in the world."""
    block_data: BlockData

    def set_block_data(self, data: BlockData) -> None:
        self.block_data = data


def _m(key: str, **properties: Tuple[str, ...]) -> Material:
    return Material(key, tuple(properties.items()))


MATERIALS: Dict[str, Material] = {m.key: m for m in (
    _m("air"),
    _m("stone"),
    _m("dirt"),
    _m("grass_block", snowy=_BOOL),
    _m("bedrock"),
    _m("obsidian"),
    _m("crying_obsidian"),
    _m("end_stone"),
    _m("end_stone_bricks"),
    _m("purpur_block"),
    _m("purpur_pillar", axis=_AXIS),
    _m("oak_log", axis=_AXIS),
    _m("diamond_block"),
    _m("gold_block"),
    _m("emerald_block"),
    _m("beacon"),
    _m("barrier"),
    _m("dragon_egg"),
    _m("dragon_head", rotation=_ROTATION, powered=_BOOL),
    _m("dragon_wall_head", facing=_FACING, powered=_BOOL),
    _m("player_head", rotation=_ROTATION, powered=_BOOL),
    _m("end_rod", facing=_FACING_ALL),
    _m("chest", facing=_FACING, type=("single", "left", "right"), waterlogged=_BOOL),
    _m("ender_chest", facing=_FACING, waterlogged=_BOOL),
    _m("shulker_box", facing=_FACING_ALL),
    _m("respawn_anchor", charges=("0", "1", "2", "3", "4")),
    _m("lantern", hanging=_BOOL, waterlogged=_BOOL),
    _m("amethyst_cluster", facing=_FACING_ALL, waterlogged=_BOOL),
)}


def match_material(raw: str) -> Optional[Material]:
    """
    Find a material by name.

    Case-insensitive; accepts a ``minecraft:`` prefix and spaces
    in place of underscores. Returns None if nothing matches.
    """
    name = re.sub(r"\s+", "_", raw.strip().lower())
    if name.startswith(f"{NAMESPACE}:"):
        name = name[len(NAMESPACE) + 1:]
    return MATERIALS.get(name)


def parse_material(raw: str) -> Material:
    """Like match_material, but raises ValueError when nothing matches."""
    material = match_material(raw)
    if material is None:
        raise ValueError(f"Material not found: {raw!r}")
    return material
