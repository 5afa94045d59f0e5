"""Drone Command — the one line each owned drone emits per turn."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class CommandAction(str, Enum):
    MOVE = "MOVE"
    WAIT = "WAIT"


class DecisionMode(str, Enum):
    SAVING = "saving"         # Memory full: surface and bank
    EXPLORING = "exploring"


class DroneCommand(BaseModel):
    """A MOVE toward (x, y) or a WAIT, with the powerful light on or off."""

    action: CommandAction
    x: Optional[int] = None
    y: Optional[int] = None
    light: bool = False

    @classmethod
    def move(cls, x: int, y: int, light: bool) -> "DroneCommand":
        return cls(action=CommandAction.MOVE, x=x, y=y, light=light)

    @classmethod
    def wait(cls, light: bool) -> "DroneCommand":
        return cls(action=CommandAction.WAIT, light=light)

    def to_line(self) -> str:
        light = "1" if self.light else "0"
        if self.action == CommandAction.MOVE:
            return f"MOVE {self.x} {self.y} {light}"
        return f"WAIT {light}"


class PolicyDecision(BaseModel):
    """What the policy chose for a drone, and why."""

    drone_id: int
    command: DroneCommand
    mode: DecisionMode
    reason: str
    target_creature_id: Optional[int] = None
    bank: List[int] = []                    # Memory to mark saved on surfacing
