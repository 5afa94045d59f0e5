"""
Seabed Agent API — FastAPI endpoints.

Lets a local harness drive and inspect a match over HTTP:
- Match start and turn submission
- World state inspection
- Policy configuration
- Turn history queries
"""

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from seabed_agent.history.store import TurnHistoryStore
from seabed_agent.models.config import MatchConfig, PolicyConfig
from seabed_agent.models.observation import CreatureProfile, TurnObservation
from seabed_agent.runner.factory import build_controller


# --- Request/Response Models ---

class MatchStartRequest(BaseModel):
    roster: List[CreatureProfile] = []
    policy: Optional[PolicyConfig] = None
    match: Optional[MatchConfig] = None


class TurnResponse(BaseModel):
    turn_number: int
    turns_left: int
    commands: List[str]


# --- Application Factory ---

def create_app(
    history: Optional[TurnHistoryStore] = None,
    policy_config: Optional[PolicyConfig] = None,
    match_config: Optional[MatchConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Seabed Agent API",
        description="Drone world model and policy for the seabed scan game",
        version="0.1.0",
    )

    app.state.history = history or TurnHistoryStore()
    app.state.controller = build_controller(
        policy_config=policy_config,
        match_config=match_config,
        history=app.state.history,
    )

    def controller():
        return app.state.controller

    # === MATCH ===

    @app.post("/match/start")
    def start_match(req: MatchStartRequest):
        """Begin a new match with a fresh world model."""
        app.state.controller = build_controller(
            policy_config=req.policy or controller().policy.config,
            match_config=req.match or controller().config,
            history=app.state.history,
        )
        controller().start_match(req.roster)
        return {
            "status": "started",
            "creatures": len(req.roster),
            "turns_left": controller().world_store.model.turns_left,
        }

    @app.post("/turns", response_model=TurnResponse)
    def play_turn(observation: TurnObservation):
        """Submit one turn of observations, get one command per drone."""
        commands = controller().play_turn(observation)
        model = controller().world_store.model
        return TurnResponse(
            turn_number=model.turn_number,
            turns_left=model.turns_left,
            commands=commands,
        )

    # === WORLD STATE ===

    @app.get("/world/state")
    def get_world_state():
        """Current world model snapshot."""
        return controller().world_store.get_state_snapshot()

    @app.get("/world/creatures/{creature_id}")
    def get_creature(creature_id: int):
        """Get a specific creature's state."""
        creature = controller().world_store.get_creature(creature_id)
        if not creature:
            raise HTTPException(404, "Creature not found")
        return creature.model_dump(mode="json")

    @app.get("/world/drones/{drone_id}")
    def get_drone(drone_id: int, foe: bool = False):
        """Get a specific drone's state."""
        drone = controller().world_store.get_drone(drone_id, foe=foe)
        if not drone:
            raise HTTPException(404, "Drone not found")
        return drone.model_dump(mode="json")

    # === POLICY ===

    @app.get("/policy/config")
    def get_policy_config():
        """Current policy configuration."""
        return controller().policy.config.model_dump()

    @app.put("/policy/config")
    def update_policy_config(config: PolicyConfig):
        """Update policy configuration."""
        controller().policy.config = config
        return config.model_dump()

    # === HISTORY ===

    @app.get("/history")
    def get_history(limit: int = 50):
        """Recent turn records."""
        records = app.state.history.query_recent(limit=limit)
        return [r.model_dump(mode="json") for r in records]

    @app.get("/history/verify")
    def verify_history():
        """Verify chain integrity."""
        return {
            "integrity_valid": app.state.history.verify_chain_integrity(),
            "total_records": app.state.history.count(),
        }

    @app.get("/history/over-budget")
    def get_over_budget_turns():
        """Turns that exceeded their response budget."""
        records = app.state.history.query_over_budget()
        return [r.model_dump(mode="json") for r in records]

    @app.get("/history/{turn_number}")
    def get_turn(turn_number: int):
        """Full record of one turn."""
        record = app.state.history.get_by_turn(turn_number)
        if not record:
            raise HTTPException(404, "Turn not found")
        return record.model_dump(mode="json")

    return app


# Default application instance
app = create_app()
