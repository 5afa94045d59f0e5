"""
World Model Store — owns every Creature and Drone for the life of a match.

Updated by: Observation Reconciler (+ the save action of the Drone Policy)
Queried by: Drone Policy + Turn Controller

Entities are keyed by their stable game id and never removed. Unseen ids
are registered on first lookup.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from seabed_agent.models.observation import CreatureProfile
from seabed_agent.models.world import Creature, Drone, WorldModel


class WorldModelStore:
    """
    In-memory world model store. One instance per match.
    """

    def __init__(self, max_turns: int = 200):
        self._model = WorldModel(turns_left=max_turns)

    @property
    def model(self) -> WorldModel:
        """Get the current world model."""
        return self._model

    # --- Creatures ---

    def ensure_creature(self, creature_id: int) -> Creature:
        """Get a creature, registering a default one if the id is new."""
        creature = self._model.creatures.get(creature_id)
        if creature is None:
            creature = Creature(creature_id=creature_id)
            self._model.creatures[creature_id] = creature
        return creature

    def get_creature(self, creature_id: int) -> Optional[Creature]:
        """Get a specific creature by ID."""
        return self._model.creatures.get(creature_id)

    def creatures(self) -> List[Creature]:
        """All known creatures, in first-registration order."""
        return list(self._model.creatures.values())

    def register_roster(self, profiles: Iterable[CreatureProfile]) -> None:
        """Record the color and type of each creature in the initial roster."""
        for profile in profiles:
            creature = self.ensure_creature(profile.creature_id)
            creature.color = profile.color
            creature.type = profile.type

    def clear_stale_kinematics(self, visible_ids: Iterable[int]) -> List[int]:
        """Forget the position of every creature not seen this turn."""
        seen = set(visible_ids)
        cleared = []
        for creature_id, creature in self._model.creatures.items():
            if creature_id not in seen and creature.visible:
                creature.clear_kinematics()
                cleared.append(creature_id)
        return cleared

    # --- Drones ---

    def _side(self, foe: bool) -> Dict[int, Drone]:
        return self._model.foe_drones if foe else self._model.my_drones

    def ensure_drone(self, drone_id: int, foe: bool = False) -> Drone:
        """Get a drone of one side, registering a default one if the id is new."""
        drones = self._side(foe)
        drone = drones.get(drone_id)
        if drone is None:
            drone = Drone(drone_id=drone_id)
            drones[drone_id] = drone
        return drone

    def get_drone(self, drone_id: int, foe: bool = False) -> Optional[Drone]:
        """Get a specific drone of one side by ID."""
        return self._side(foe).get(drone_id)

    def drones(self, foe: bool = False) -> List[Drone]:
        """All drones of one side, in first-registration order."""
        return list(self._side(foe).values())

    def is_foe_drone(self, drone_id: int) -> bool:
        return drone_id in self._model.foe_drones

    def bank_memory(self, drone_id: int) -> List[int]:
        """
        Mark every creature in an owned drone's memory as saved and empty
        the memory. Returns the banked creature ids.
        """
        drone = self._model.my_drones.get(drone_id)
        if drone is None:
            return []
        banked = sorted(drone.memory)
        for creature_id in banked:
            self.ensure_creature(creature_id).mark_saved()
        drone.memory.clear()
        return banked

    # --- Match state ---

    def set_scores(self, my_score: int, foe_score: int) -> None:
        self._model.my_score = my_score
        self._model.foe_score = foe_score

    def advance_turn(self) -> None:
        """Count one more played turn."""
        self._model.turn_number += 1
        self._model.turns_left = max(0, self._model.turns_left - 1)

    def mark_reconciled(self) -> None:
        """Mark the world model as reconciled at the current time."""
        self._model.last_reconciled = datetime.utcnow()

    def get_state_snapshot(self) -> dict:
        """Get a serializable snapshot of the current world state."""
        return self._model.model_dump(mode="json")
