"""
Turn Controller — drives one match: reconcile, decide, emit, record.

Behavioral Contract:
- Reconciliation completes before any drone is decided
- Exactly one command per owned drone, in first-registration order
- Every turn is timed against its budget (larger on the first turn);
  overruns are logged, the judge enforces them
- Output is written once per turn and flushed
"""

import logging
import time
from datetime import datetime
from typing import List, Optional, TextIO
from uuid import uuid4

from seabed_agent.history.store import TurnHistoryStore
from seabed_agent.models.config import MatchConfig
from seabed_agent.models.history import TurnRecord
from seabed_agent.models.observation import CreatureProfile, TurnObservation
from seabed_agent.policy.drone_policy import DronePolicy
from seabed_agent.protocol.reader import ProtocolReader, format_commands
from seabed_agent.reconciler.observer import ObservationReconciler
from seabed_agent.world_model.store import WorldModelStore

logger = logging.getLogger(__name__)


class TurnController:
    """Sequences the reconciler and the policy for every turn of a match."""

    def __init__(
        self,
        world_store: WorldModelStore,
        reconciler: ObservationReconciler,
        policy: DronePolicy,
        config: Optional[MatchConfig] = None,
        history: Optional[TurnHistoryStore] = None,
    ):
        self.world_store = world_store
        self.reconciler = reconciler
        self.policy = policy
        self.config = config or MatchConfig()
        self.history = history

    def start_match(self, roster: List[CreatureProfile]) -> None:
        self.reconciler.start_match(roster)

    def budget_ms(self, turn_number: int) -> int:
        """Response budget for a turn (turns count from 1)."""
        if turn_number <= 1:
            return self.config.first_turn_budget_ms
        return self.config.turn_budget_ms

    def play_turn(
        self,
        observation: TurnObservation,
        started_at: Optional[float] = None,
    ) -> List[str]:
        """Reconcile one observation and return one command per owned drone."""
        if started_at is None:
            started_at = time.monotonic()

        self.reconciler.reconcile(observation)

        decisions = []
        commands = []
        for drone in self.world_store.drones():
            if drone.in_emergency:
                logger.info("Drone %d is in emergency", drone.drone_id)
            decision = self.policy.decide(self.world_store, drone.drone_id)
            if decision.bank:
                self.world_store.bank_memory(drone.drone_id)
            decisions.append(decision)
            commands.append(decision.command.to_line())

        model = self.world_store.model
        elapsed_ms = (time.monotonic() - started_at) * 1000.0
        budget = self.budget_ms(model.turn_number)
        over_budget = elapsed_ms > budget
        if over_budget:
            logger.warning(
                "Turn %d took %.1f ms (budget %d ms)",
                model.turn_number, elapsed_ms, budget,
            )
        else:
            logger.debug("Turn %d took %.1f ms", model.turn_number, elapsed_ms)

        if self.history is not None:
            self.history.append(TurnRecord(
                id=f"turn_{uuid4().hex[:12]}",
                turn_number=model.turn_number,
                turns_left=model.turns_left,
                my_score=model.my_score,
                foe_score=model.foe_score,
                commands=commands,
                decisions=[d.model_dump(mode="json") for d in decisions],
                elapsed_ms=round(elapsed_ms, 3),
                budget_ms=budget,
                over_budget=over_budget,
                world_state_snapshot=self.world_store.get_state_snapshot(),
                recorded_at=datetime.utcnow(),
            ))

        return commands

    def run(self, reader: ProtocolReader, out: TextIO) -> int:
        """
        Play a whole match from a protocol reader. Returns the number of
        turns played when the input ends.
        """
        self.start_match(reader.read_roster())

        played = 0
        while True:
            try:
                observation = reader.read_turn()
            except EOFError:
                logger.info("Input closed after %d turns", played)
                return played
            commands = self.play_turn(observation)
            out.write(format_commands(commands))
            out.flush()
            played += 1
