"""
Drone Policy — greedy per-turn decision for one owned drone.

States (recomputed every turn from the drone's memory size):
  EXPLORING → (memory full) → SAVING → (surfaced, memory banked) → EXPLORING

Exploring prefers, in order:
  1. the nearest visible creature not yet scanned,
  2. the radar quadrant of the first unscanned creature,
  3. waiting.

The policy never raises: with nothing actionable it waits.
"""

import logging
import math
from typing import Optional, Tuple

from seabed_agent.models.command import DecisionMode, DroneCommand, PolicyDecision
from seabed_agent.models.config import PolicyConfig
from seabed_agent.models.world import Creature, Drone, RadarDirection
from seabed_agent.world_model.store import WorldModelStore

logger = logging.getLogger(__name__)

# Sign of the (x, y) step for each radar quadrant. Y grows toward the seabed.
RADAR_OFFSETS = {
    RadarDirection.TOP_LEFT: (-1, -1),
    RadarDirection.TOP_RIGHT: (1, -1),
    RadarDirection.BOTTOM_LEFT: (-1, 1),
    RadarDirection.BOTTOM_RIGHT: (1, 1),
}


def parse_radar_direction(code: Optional[str]) -> Optional[RadarDirection]:
    """Map a protocol direction code to a quadrant, or None if unrecognised."""
    if code is None:
        return None
    try:
        return RadarDirection(code)
    except ValueError:
        return None


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


class DronePolicy:
    """Turns the World Model into one command per owned drone."""

    def __init__(self, config: Optional[PolicyConfig] = None):
        self.config = config or PolicyConfig()

    def command(self, world: WorldModelStore, drone_id: int) -> str:
        """
        Decide and return the command line for a drone.

        Surfacing with a full memory banks it: the memorised creatures are
        marked saved and the memory emptied before the command is returned.
        """
        decision = self.decide(world, drone_id)
        if decision.bank:
            world.bank_memory(drone_id)
        line = decision.command.to_line()
        logger.debug(
            "Drone %d [%s] %s -> %s",
            drone_id, decision.mode.value, decision.reason, line,
        )
        return line

    def decide(self, world: WorldModelStore, drone_id: int) -> PolicyDecision:
        """Choose a command without touching the World Model."""
        drone = world.get_drone(drone_id)
        if drone is None:
            return PolicyDecision(
                drone_id=drone_id,
                command=DroneCommand.wait(light=False),
                mode=DecisionMode.EXPLORING,
                reason="unknown drone",
            )

        if len(drone.memory) >= self.config.save_memory_threshold:
            return self._decide_saving(drone)
        return self._decide_exploring(world, drone)

    def light_for(self, drone: Drone) -> bool:
        """Powerful light on while the battery is above the threshold."""
        return drone.battery > self.config.light_battery_threshold

    # --- Saving ---

    def _decide_saving(self, drone: Drone) -> PolicyDecision:
        light = self.light_for(drone)
        surface_y = self.config.save_surface_y

        if drone.y > surface_y:
            return PolicyDecision(
                drone_id=drone.drone_id,
                command=DroneCommand.move(drone.x, surface_y, light),
                mode=DecisionMode.SAVING,
                reason=f"surfacing with {len(drone.memory)} scans",
            )

        return PolicyDecision(
            drone_id=drone.drone_id,
            command=DroneCommand.wait(light),
            mode=DecisionMode.SAVING,
            reason=f"saving {len(drone.memory)} scans",
            bank=sorted(drone.memory),
        )

    # --- Exploring ---

    def _decide_exploring(
        self, world: WorldModelStore, drone: Drone
    ) -> PolicyDecision:
        light = self.light_for(drone)
        creatures = world.creatures()

        target = self._nearest_visible_unscanned(drone, creatures)
        if target is not None:
            kin = target.kinematics
            return PolicyDecision(
                drone_id=drone.drone_id,
                command=DroneCommand.move(kin.x, kin.y, light),
                mode=DecisionMode.EXPLORING,
                reason="intercepting visible creature",
                target_creature_id=target.creature_id,
            )

        hidden = next((c for c in creatures if not c.scanned), None)
        if hidden is None:
            return PolicyDecision(
                drone_id=drone.drone_id,
                command=DroneCommand.wait(light),
                mode=DecisionMode.EXPLORING,
                reason="nothing left to scan",
            )

        destination = self._radar_destination(drone, hidden.creature_id)
        if destination is None:
            return PolicyDecision(
                drone_id=drone.drone_id,
                command=DroneCommand.wait(light),
                mode=DecisionMode.EXPLORING,
                reason=f"no radar hint for creature {hidden.creature_id}",
                target_creature_id=hidden.creature_id,
            )

        return PolicyDecision(
            drone_id=drone.drone_id,
            command=DroneCommand.move(destination[0], destination[1], light),
            mode=DecisionMode.EXPLORING,
            reason=f"following radar {drone.radar_hints[hidden.creature_id]}",
            target_creature_id=hidden.creature_id,
        )

    def _nearest_visible_unscanned(
        self, drone: Drone, creatures: list
    ) -> Optional[Creature]:
        """Nearest by Euclidean distance; the first of equal distances wins."""
        best = None
        best_distance = math.inf
        for creature in creatures:
            if not creature.visible or creature.scanned:
                continue
            kin = creature.kinematics
            d = distance(drone.x, drone.y, kin.x, kin.y)
            if d < best_distance:
                best = creature
                best_distance = d
        return best

    def _radar_destination(
        self, drone: Drone, creature_id: int
    ) -> Optional[Tuple[int, int]]:
        """A full step from the drone toward the creature's radar quadrant."""
        direction = parse_radar_direction(drone.radar_hints.get(creature_id))
        if direction is None:
            return None
        sign_x, sign_y = RADAR_OFFSETS[direction]
        step = self.config.radar_step
        return drone.x + sign_x * step, drone.y + sign_y * step
