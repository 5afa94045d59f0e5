"""
Observation Reconciler — folds one turn of partial observations into the
World Model.

Steps run in a fixed order, each relying on state the previous ones set up:
  1. Scores
  2. Saved scans (mine, then foe's)
  3. Drone reports (mine, then foe's)
  4. Scan events
  5. Visibility (positions set, then every unseen creature cleared)
  6. Radar blips
  7. Turn counter

Unknown ids are looked up or created, never rejected.
"""

import logging
from typing import Iterable, List

from seabed_agent.models.observation import (
    CreatureProfile,
    DroneReport,
    RadarBlip,
    ScanEvent,
    TurnObservation,
    VisibleCreature,
)
from seabed_agent.models.world import Kinematics
from seabed_agent.world_model.store import WorldModelStore

logger = logging.getLogger(__name__)


class ObservationReconciler:
    """The only regular writer of the World Model."""

    def __init__(self, world_store: WorldModelStore):
        self.world_store = world_store

    def start_match(self, roster: Iterable[CreatureProfile]) -> None:
        """Register the initial creature roster."""
        profiles = list(roster)
        self.world_store.register_roster(profiles)
        logger.debug("Registered roster of %d creatures", len(profiles))

    def reconcile(self, observation: TurnObservation) -> None:
        """Apply one turn's full observation batch."""
        self.world_store.set_scores(observation.my_score, observation.foe_score)
        self._apply_saved(observation.my_saved, foe=False)
        self._apply_saved(observation.foe_saved, foe=True)
        self._apply_drones(observation.my_drones, foe=False)
        self._apply_drones(observation.foe_drones, foe=True)
        self._apply_scans(observation.scans)
        cleared = self._apply_visibility(observation.visible)
        self._apply_radar(observation.radar_blips)

        self.world_store.advance_turn()
        self.world_store.mark_reconciled()

        model = self.world_store.model
        logger.debug(
            "Turn %d reconciled: %d visible, %d cleared, %d scans, %d blips, "
            "%d turns left",
            model.turn_number,
            len(observation.visible),
            len(cleared),
            len(observation.scans),
            len(observation.radar_blips),
            model.turns_left,
        )

    def _apply_saved(self, creature_ids: List[int], foe: bool) -> None:
        for creature_id in creature_ids:
            self.world_store.ensure_creature(creature_id).mark_saved(by_foe=foe)

    def _apply_drones(self, reports: List[DroneReport], foe: bool) -> None:
        for report in reports:
            drone = self.world_store.ensure_drone(report.drone_id, foe=foe)
            drone.x = report.x
            drone.y = report.y
            drone.emergency = report.emergency
            drone.battery = report.battery

    def _apply_scans(self, scans: List[ScanEvent]) -> None:
        for scan in scans:
            foe = self.world_store.is_foe_drone(scan.drone_id)
            drone = self.world_store.ensure_drone(scan.drone_id, foe=foe)
            drone.memory.add(scan.creature_id)
            self.world_store.ensure_creature(scan.creature_id).mark_scanned()

    def _apply_visibility(self, visible: List[VisibleCreature]) -> List[int]:
        visible_ids = []
        for report in visible:
            creature = self.world_store.ensure_creature(report.creature_id)
            creature.observe(Kinematics(
                x=report.x, y=report.y, vx=report.vx, vy=report.vy,
            ))
            visible_ids.append(report.creature_id)

        # Only after the whole batch is in, so no report is cleared mid-pass.
        return self.world_store.clear_stale_kinematics(visible_ids)

    def _apply_radar(self, blips: List[RadarBlip]) -> None:
        for blip in blips:
            drone = self.world_store.ensure_drone(blip.drone_id)
            drone.radar_hints[blip.creature_id] = blip.direction
