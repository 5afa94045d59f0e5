"""Wiring for a fresh match."""

from typing import Optional

from seabed_agent.history.store import TurnHistoryStore
from seabed_agent.models.config import MatchConfig, PolicyConfig
from seabed_agent.policy.drone_policy import DronePolicy
from seabed_agent.reconciler.observer import ObservationReconciler
from seabed_agent.runner.controller import TurnController
from seabed_agent.world_model.store import WorldModelStore


def build_controller(
    policy_config: Optional[PolicyConfig] = None,
    match_config: Optional[MatchConfig] = None,
    history: Optional[TurnHistoryStore] = None,
) -> TurnController:
    """Create a store, reconciler, policy and controller for one match."""
    match_config = match_config or MatchConfig()
    world_store = WorldModelStore(max_turns=match_config.max_turns)
    return TurnController(
        world_store=world_store,
        reconciler=ObservationReconciler(world_store),
        policy=DronePolicy(policy_config),
        config=match_config,
        history=history,
    )
