"""Observation batches — one turn of input, as handed to the reconciler."""

from typing import List

from pydantic import BaseModel, Field

from seabed_agent.models.world import CreatureColor, CreatureType


class CreatureProfile(BaseModel):
    """Initial roster entry. Color and type never change afterwards."""

    creature_id: int
    color: CreatureColor = CreatureColor.UNKNOWN
    type: CreatureType = CreatureType.UNKNOWN


class DroneReport(BaseModel):
    drone_id: int
    x: int
    y: int
    emergency: int = 0
    battery: int = Field(ge=0, le=30)


class ScanEvent(BaseModel):
    """A creature held in a drone's memory this turn."""

    drone_id: int
    creature_id: int


class VisibleCreature(BaseModel):
    creature_id: int
    x: int
    y: int
    vx: int
    vy: int


class RadarBlip(BaseModel):
    drone_id: int
    creature_id: int
    direction: str                          # "TL", "TR", "BL" or "BR"


class TurnObservation(BaseModel):
    """Everything the game reports in one turn, in protocol order."""

    my_score: int = 0
    foe_score: int = 0
    my_saved: List[int] = []
    foe_saved: List[int] = []
    my_drones: List[DroneReport] = []
    foe_drones: List[DroneReport] = []
    scans: List[ScanEvent] = []
    visible: List[VisibleCreature] = []
    radar_blips: List[RadarBlip] = []
