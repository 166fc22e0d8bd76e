"""
Glue between the host's egg-form event and the policies.

Any failure while handling an event cancels the spawn: no egg is the
safe outcome when the configuration did not load.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List

from .blocks import BlockState
from .registry import PolicyRegistry
from .scenario import EggScenario

logger = logging.getLogger(__name__)


@dataclass
class EggFormEvent:
    """
    A dragon egg is about to appear.

    Attributes:
        previously_killed: Whether the dragon of this battle died before
        new_state: The block that will be placed, mutable
        cancelled: Whether the spawn is cancelled
        nearby_players: Names of players near the egg, for log context
    """
    previously_killed: bool
    new_state: BlockState
    cancelled: bool = False
    nearby_players: List[str] = field(default_factory=list)


class EggFormHandler:
    """
    Applies the current policies to egg-form events.

    The registry is fetched through a callable on every event, so a
    reload is picked up without re-registering the handler.
    """

    def __init__(self, registry_provider: Callable[[], PolicyRegistry]):
        self._registry_provider = registry_provider

    def on_egg_form(self, event: EggFormEvent) -> None:
        if event.cancelled:
            logger.debug("Egg spawning was already cancelled, ignoring event")
            return

        try:
            logger.debug("Egg spawning was not cancelled, handling it")
            self._handle(event)
        except Exception:
            event.cancelled = True
            players = ", ".join(event.nearby_players)
            logger.error(
                f"Error handling egg spawning; cancelling event; nearby players when this happened: {players}",
                exc_info=True,
            )

    def _handle(self, event: EggFormEvent) -> None:
        scenario = EggScenario.matching(event.previously_killed)
        logger.debug(f"Detected scenario: {scenario}")

        policy = self._registry_provider().policy_for(scenario)
        if policy is None:
            raise RuntimeError(f"No policy for scenario {scenario}; did the config fail to load?")

        if policy.decide():
            policy.apply(event.new_state)
            logger.debug("Allowed egg spawning, updated block")
        else:
            event.cancelled = True
            logger.debug("Cancelled egg spawning")
