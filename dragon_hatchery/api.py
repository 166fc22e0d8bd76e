"""
REST administration API for the hatchery.

Lets server owners check which scenarios loaded, reload the
configuration, and preview how a scenario behaves without touching
the world.

Run with:
    python -m dragon_hatchery.api --config plugins/DragonHatchery/config.yml
"""
from __future__ import annotations

import argparse
import logging
from collections import Counter
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from . import __version__
from .blocks import BlockState, match_material
from .hatchery import Hatchery
from .logging_config import configure_logging, is_debug_logging
from .scenario import EggScenario

logger = logging.getLogger(__name__)


# ============================================================================
# Pydantic Models for API
# ============================================================================

class BlockWeight(BaseModel):
    """One configured block of a scenario."""
    block_data: str
    weight: float
    probability: float


class ScenarioStatus(BaseModel):
    """Load state of one scenario."""
    scenario: str
    loaded: bool
    spawn_chance: Optional[float] = None
    blocks: List[BlockWeight] = []
    error: Optional[str] = None


class ReloadResponse(BaseModel):
    """Result of a configuration reload."""
    success: bool
    message: str
    loaded: List[str] = []
    failed: List[str] = []
    debug_logging: bool = False


class SimulationResponse(BaseModel):
    """Counts from rolling a scenario's policy repeatedly."""
    scenario: str
    count: int
    spawned: int
    cancelled: int
    blocks: Dict[str, int] = Field(default_factory=dict)


class BlockDataResponse(BaseModel):
    """Block data of a material, ready to paste into the config."""
    material: str
    block_data: str
    full_state: str


# ============================================================================
# App
# ============================================================================

def create_app(hatchery: Hatchery) -> FastAPI:
    """Create the FastAPI application around an existing Hatchery."""
    app = FastAPI(
        title="Dragon Hatchery Admin API",
        description="Status, reload and dry runs of the dragon egg spawn policies",
        version=__version__,
    )

    @app.get("/")
    async def root():
        """API health check."""
        registry = hatchery.registry
        return {
            "status": "ok",
            "version": __version__,
            "config_path": hatchery.config_path,
            "loaded_scenarios": [s.config_key for s in registry.loaded_scenarios()],
            "debug_logging": is_debug_logging(),
        }

    @app.get("/scenarios", response_model=List[ScenarioStatus])
    async def list_scenarios():
        """Status of every known scenario."""
        registry = hatchery.registry
        failures = registry.failures
        statuses = []
        for scenario in EggScenario:
            policy = registry.policy_for(scenario)
            if policy is None:
                error = failures.get(scenario.config_key) or failures.get("scenario")
                statuses.append(ScenarioStatus(
                    scenario=scenario.config_key,
                    loaded=False,
                    error=str(error) if error is not None else None,
                ))
                continue
            info = policy.describe()
            statuses.append(ScenarioStatus(
                scenario=scenario.config_key,
                loaded=True,
                spawn_chance=info["spawn_chance"],
                blocks=[BlockWeight(**b) for b in info["blocks"]],
            ))
        return statuses

    @app.post("/reload", response_model=ReloadResponse)
    async def reload():
        """Reload the configuration file and replace all policies."""
        result = hatchery.reload()
        return ReloadResponse(**result.to_dict())

    @app.post("/scenarios/{key}/simulate", response_model=SimulationResponse)
    def simulate(
        key: str,
        count: int = Query(1000, ge=1, le=100_000),
        seed: Optional[int] = Query(None),
    ):
        """Roll a copy of a scenario's policy ``count`` times against a scratch block."""
        live = hatchery.registry.policy_for(key)
        if live is None:
            raise HTTPException(status_code=404, detail=f"No policy loaded for scenario: {key}")

        policy = live.copy(prng_seed=seed)
        scratch = BlockState(match_material("dragon_egg").create_block_data())
        blocks: Counter = Counter()
        spawned = 0
        for _ in range(count):
            if policy.decide():
                spawned += 1
                blocks[policy.apply(scratch).as_string(True)] += 1

        return SimulationResponse(
            scenario=key,
            count=count,
            spawned=spawned,
            cancelled=count - spawned,
            blocks=dict(blocks),
        )

    @app.get("/materials/{key}", response_model=BlockDataResponse)
    async def block_data(key: str, data: str = Query("")):
        """Render block data for a material the way the config expects it."""
        material = match_material(key)
        if material is None:
            raise HTTPException(status_code=404, detail=f"Material not found: {key}")
        try:
            parsed = material.create_block_data(data)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return BlockDataResponse(
            material=material.key,
            block_data=parsed.as_string(True),
            full_state=parsed.as_string(),
        )

    return app


def main():
    """Run the API server from command line."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Dragon Hatchery admin API")
    parser.add_argument("--config", default="config.yml", help="Path to the YAML configuration")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--log-level", default="INFO", help="Root log level")
    parser.add_argument("--log-dir", default=None, help="Directory for log files")
    args = parser.parse_args()

    configure_logging(level=args.log_level, log_dir=args.log_dir)

    hatchery = Hatchery(args.config)
    result = hatchery.reload()
    if not result.success:
        logger.warning(result.message)

    app = create_app(hatchery)
    logger.info(f"Dragon Hatchery API starting on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
