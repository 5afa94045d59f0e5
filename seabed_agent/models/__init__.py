"""Seabed agent data models."""

from seabed_agent.models.command import (
    CommandAction,
    DecisionMode,
    DroneCommand,
    PolicyDecision,
)
from seabed_agent.models.config import MatchConfig, PolicyConfig
from seabed_agent.models.history import TurnRecord
from seabed_agent.models.observation import (
    CreatureProfile,
    DroneReport,
    RadarBlip,
    ScanEvent,
    TurnObservation,
    VisibleCreature,
)
from seabed_agent.models.world import (
    Creature,
    CreatureColor,
    CreatureType,
    Drone,
    Kinematics,
    RadarDirection,
    WorldModel,
)

__all__ = [
    "CommandAction",
    "Creature",
    "CreatureColor",
    "CreatureProfile",
    "CreatureType",
    "DecisionMode",
    "Drone",
    "DroneCommand",
    "DroneReport",
    "Kinematics",
    "MatchConfig",
    "PolicyConfig",
    "PolicyDecision",
    "RadarBlip",
    "RadarDirection",
    "ScanEvent",
    "TurnObservation",
    "TurnRecord",
    "VisibleCreature",
    "WorldModel",
]
