"""World Model — what the agent knows about the ocean, carried across turns."""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Dict, Optional, Set

from pydantic import BaseModel, Field


class CreatureColor(IntEnum):
    UNKNOWN = -1
    PINK = 0
    YELLOW = 1
    GREEN = 2
    BLUE = 3


class CreatureType(IntEnum):
    UNKNOWN = -1
    SQUID = 0
    FISH = 1
    CRAB = 2


class RadarDirection(str, Enum):
    """Quadrant of a radar blip relative to the drone. Y grows downward."""

    TOP_LEFT = "TL"
    TOP_RIGHT = "TR"
    BOTTOM_LEFT = "BL"
    BOTTOM_RIGHT = "BR"


class Kinematics(BaseModel):
    """Position and velocity of a creature seen this turn."""

    x: int
    y: int
    vx: int
    vy: int


class Creature(BaseModel):
    """A fish tracked by the world model. Never owned by either side."""

    creature_id: int
    color: CreatureColor = CreatureColor.UNKNOWN
    type: CreatureType = CreatureType.UNKNOWN
    kinematics: Optional[Kinematics] = None    # None while out of sight
    scanned: bool = False                      # Scanned by one of my drones
    saved: bool = False
    saved_by_foe: bool = False

    @property
    def visible(self) -> bool:
        return self.kinematics is not None

    def observe(self, kinematics: Kinematics) -> None:
        self.kinematics = kinematics

    def clear_kinematics(self) -> None:
        self.kinematics = None

    def mark_scanned(self) -> None:
        self.scanned = True

    def mark_saved(self, by_foe: bool = False) -> None:
        self.saved = True
        if by_foe:
            self.saved_by_foe = True


class Drone(BaseModel):
    """A drone of either side. Radar hints are only reported for my drones."""

    drone_id: int
    x: int = 0
    y: int = 0
    emergency: int = 0
    battery: int = Field(ge=0, le=30, default=30)
    memory: Set[int] = set()                   # Scanned, not yet saved
    radar_hints: Dict[int, str] = {}           # creature_id -> direction code

    @property
    def in_emergency(self) -> bool:
        return self.emergency == 1


class WorldModel(BaseModel):
    """The agent's persistent picture of the match."""

    creatures: Dict[int, Creature] = {}
    my_drones: Dict[int, Drone] = {}
    foe_drones: Dict[int, Drone] = {}
    my_score: int = 0
    foe_score: int = 0
    turns_left: int = 200
    turn_number: int = 0
    last_reconciled: Optional[datetime] = None
