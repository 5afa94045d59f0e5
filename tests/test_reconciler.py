"""Tests for the Observation Reconciler."""

import pytest

from seabed_agent.models.observation import (
    CreatureProfile,
    DroneReport,
    RadarBlip,
    ScanEvent,
    TurnObservation,
    VisibleCreature,
)
from seabed_agent.reconciler.observer import ObservationReconciler
from seabed_agent.world_model.store import WorldModelStore


def _drone(drone_id: int, x: int = 0, y: int = 0, battery: int = 30) -> DroneReport:
    return DroneReport(drone_id=drone_id, x=x, y=y, emergency=0, battery=battery)


def _seen(creature_id: int, x: int = 0, y: int = 0) -> VisibleCreature:
    return VisibleCreature(creature_id=creature_id, x=x, y=y, vx=5, vy=-5)


@pytest.fixture
def store():
    return WorldModelStore()


@pytest.fixture
def reconciler(store):
    reconciler = ObservationReconciler(store)
    reconciler.start_match([
        CreatureProfile(creature_id=4, color=0, type=0),
        CreatureProfile(creature_id=5, color=1, type=1),
        CreatureProfile(creature_id=6, color=2, type=2),
    ])
    return reconciler


class TestScoresAndDrones:
    def test_scores_overwrite(self, store, reconciler):
        reconciler.reconcile(TurnObservation(my_score=10, foe_score=4))
        reconciler.reconcile(TurnObservation(my_score=3, foe_score=9))
        assert store.model.my_score == 3
        assert store.model.foe_score == 9

    def test_drone_reports(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0, 100, 2000, 20)],
            foe_drones=[_drone(1, 900, 2500, 30)],
        ))
        mine = store.get_drone(0)
        foe = store.get_drone(1, foe=True)
        assert (mine.x, mine.y, mine.battery) == (100, 2000, 20)
        assert (foe.x, foe.y) == (900, 2500)
        assert store.get_drone(1) is None

        reconciler.reconcile(TurnObservation(my_drones=[_drone(0, 150, 1800, 19)]))
        assert (mine.x, mine.y, mine.battery) == (150, 1800, 19)

    def test_turn_counter(self, store, reconciler):
        reconciler.reconcile(TurnObservation())
        reconciler.reconcile(TurnObservation())
        assert store.model.turn_number == 2
        assert store.model.turns_left == 198
        assert store.model.last_reconciled is not None


class TestSavedScans:
    def test_my_saves(self, store, reconciler):
        reconciler.reconcile(TurnObservation(my_saved=[4]))
        assert store.get_creature(4).saved is True
        assert store.get_creature(4).saved_by_foe is False

    def test_foe_saves_are_recorded(self, store, reconciler):
        reconciler.reconcile(TurnObservation(foe_saved=[5]))
        assert store.get_creature(5).saved is True
        assert store.get_creature(5).saved_by_foe is True

    def test_unknown_saved_creature_is_created(self, store, reconciler):
        reconciler.reconcile(TurnObservation(my_saved=[77]))
        assert store.get_creature(77).saved is True

    def test_saved_is_monotonic(self, store, reconciler):
        reconciler.reconcile(TurnObservation(my_saved=[4]))
        reconciler.reconcile(TurnObservation())
        assert store.get_creature(4).saved is True


class TestScanEvents:
    def test_scan_marks_creature_and_grows_memory(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            scans=[ScanEvent(drone_id=0, creature_id=4)],
        ))
        assert store.get_creature(4).scanned is True
        assert store.get_drone(0).memory == {4}

        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            scans=[
                ScanEvent(drone_id=0, creature_id=4),
                ScanEvent(drone_id=0, creature_id=5),
            ],
        ))
        assert store.get_drone(0).memory == {4, 5}

    def test_scanned_is_monotonic(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            scans=[ScanEvent(drone_id=0, creature_id=4)],
        ))
        reconciler.reconcile(TurnObservation(my_drones=[_drone(0)]))
        assert store.get_creature(4).scanned is True

    def test_memory_does_not_shrink_without_save(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            scans=[ScanEvent(drone_id=0, creature_id=4)],
        ))
        reconciler.reconcile(TurnObservation(my_drones=[_drone(0)]))
        assert store.get_drone(0).memory == {4}

    def test_unknown_drone_and_creature_are_created(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            scans=[ScanEvent(drone_id=9, creature_id=50)],
        ))
        assert store.get_drone(9).memory == {50}
        assert store.get_creature(50).scanned is True

    def test_foe_drone_scan_marks_creature_scanned(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            foe_drones=[_drone(1)],
            scans=[ScanEvent(drone_id=1, creature_id=6)],
        ))
        assert store.get_creature(6).scanned is True
        assert store.get_drone(1, foe=True).memory == {6}
        assert store.get_drone(0).memory == set()
        assert store.get_drone(1) is None


class TestVisibility:
    def test_visible_creature_gets_kinematics(self, store, reconciler):
        reconciler.reconcile(TurnObservation(visible=[_seen(4, 300, 400)]))
        kin = store.get_creature(4).kinematics
        assert (kin.x, kin.y, kin.vx, kin.vy) == (300, 400, 5, -5)

    def test_unseen_creatures_are_cleared(self, store, reconciler):
        reconciler.reconcile(TurnObservation(visible=[_seen(4), _seen(5)]))
        reconciler.reconcile(TurnObservation(visible=[_seen(5, 10, 10)]))

        assert store.get_creature(4).kinematics is None
        assert store.get_creature(5).kinematics.x == 10
        assert store.get_creature(6).kinematics is None

    def test_empty_report_clears_everything(self, store, reconciler):
        reconciler.reconcile(TurnObservation(visible=[_seen(4), _seen(5), _seen(6)]))
        reconciler.reconcile(TurnObservation())
        assert all(not c.visible for c in store.creatures())

    def test_kinematics_all_or_nothing(self, store, reconciler):
        turns = [
            [_seen(4), _seen(6)],
            [_seen(5)],
            [],
            [_seen(4), _seen(5), _seen(6), _seen(80)],
        ]
        for visible in turns:
            reconciler.reconcile(TurnObservation(visible=visible))
            seen_ids = {v.creature_id for v in visible}
            for creature in store.creatures():
                assert creature.visible == (creature.creature_id in seen_ids)


class TestRadar:
    def test_blips_set_and_overwrite(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            radar_blips=[RadarBlip(drone_id=0, creature_id=4, direction="TL")],
        ))
        assert store.get_drone(0).radar_hints == {4: "TL"}

        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            radar_blips=[
                RadarBlip(drone_id=0, creature_id=4, direction="BR"),
                RadarBlip(drone_id=0, creature_id=5, direction="TR"),
            ],
        ))
        assert store.get_drone(0).radar_hints == {4: "BR", 5: "TR"}

    def test_hint_kept_for_visible_creature(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            my_drones=[_drone(0)],
            visible=[_seen(4)],
            radar_blips=[RadarBlip(drone_id=0, creature_id=4, direction="BL")],
        ))
        assert store.get_drone(0).radar_hints[4] == "BL"
        assert store.get_creature(4).visible is True

    def test_blip_for_unknown_drone(self, store, reconciler):
        reconciler.reconcile(TurnObservation(
            radar_blips=[RadarBlip(drone_id=3, creature_id=4, direction="TR")],
        ))
        assert store.get_drone(3).radar_hints == {4: "TR"}
