"""
Protocol Reader — tokenises the game's line protocol into observation batches.

Initial block:
  creature count, then "<id> <color> <type>" per creature
Per turn:
  my score, foe score,
  my saved count + ids, foe saved count + ids,
  my drone count + "<id> <x> <y> <emergency> <battery>",
  foe drone count + same,
  scan count + "<drone id> <creature id>",
  visible count + "<id> <x> <y> <vx> <vy>",
  blip count + "<drone id> <creature id> <direction>"
"""

from typing import Iterable, Iterator, List

from seabed_agent.models.observation import (
    CreatureProfile,
    DroneReport,
    RadarBlip,
    ScanEvent,
    TurnObservation,
    VisibleCreature,
)


class ProtocolError(Exception):
    """Raised when an input line does not have the expected shape."""
    pass


class ProtocolReader:
    """Reads typed batches from any iterable of text lines (e.g. stdin)."""

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)
        self.line_number = 0

    def _next_line(self) -> str:
        try:
            line = next(self._lines)
        except StopIteration:
            raise EOFError("end of game input") from None
        self.line_number += 1
        return line.strip()

    def _ints(self, count: int) -> List[int]:
        line = self._next_line()
        tokens = line.split()
        if len(tokens) != count:
            raise ProtocolError(
                f"line {self.line_number}: expected {count} values, "
                f"got {line!r}"
            )
        try:
            return [int(t) for t in tokens]
        except ValueError:
            raise ProtocolError(
                f"line {self.line_number}: non-integer value in {line!r}"
            ) from None

    def _int(self) -> int:
        return self._ints(1)[0]

    def read_roster(self) -> List[CreatureProfile]:
        """Read the one-off creature roster sent before the first turn."""
        profiles = []
        for _ in range(self._int()):
            creature_id, color, creature_type = self._ints(3)
            profiles.append(CreatureProfile(
                creature_id=creature_id, color=color, type=creature_type,
            ))
        return profiles

    def _read_drones(self) -> List[DroneReport]:
        reports = []
        for _ in range(self._int()):
            drone_id, x, y, emergency, battery = self._ints(5)
            reports.append(DroneReport(
                drone_id=drone_id, x=x, y=y,
                emergency=emergency, battery=battery,
            ))
        return reports

    def _read_blip(self) -> RadarBlip:
        line = self._next_line()
        tokens = line.split()
        if len(tokens) != 3:
            raise ProtocolError(
                f"line {self.line_number}: expected 3 values, got {line!r}"
            )
        try:
            drone_id, creature_id = int(tokens[0]), int(tokens[1])
        except ValueError:
            raise ProtocolError(
                f"line {self.line_number}: non-integer id in {line!r}"
            ) from None
        return RadarBlip(drone_id=drone_id, creature_id=creature_id, direction=tokens[2])

    def read_turn(self) -> TurnObservation:
        """Read one full turn of observations."""
        my_score = self._int()
        foe_score = self._int()
        my_saved = [self._int() for _ in range(self._int())]
        foe_saved = [self._int() for _ in range(self._int())]
        my_drones = self._read_drones()
        foe_drones = self._read_drones()

        scans = []
        for _ in range(self._int()):
            drone_id, creature_id = self._ints(2)
            scans.append(ScanEvent(drone_id=drone_id, creature_id=creature_id))

        visible = []
        for _ in range(self._int()):
            creature_id, x, y, vx, vy = self._ints(5)
            visible.append(VisibleCreature(
                creature_id=creature_id, x=x, y=y, vx=vx, vy=vy,
            ))

        radar_blips = [self._read_blip() for _ in range(self._int())]

        return TurnObservation(
            my_score=my_score,
            foe_score=foe_score,
            my_saved=my_saved,
            foe_saved=foe_saved,
            my_drones=my_drones,
            foe_drones=foe_drones,
            scans=scans,
            visible=visible,
            radar_blips=radar_blips,
        )


def format_commands(lines: Iterable[str]) -> str:
    """Join one turn's command lines for a single buffered write."""
    return "".join(f"{line}\n" for line in lines)
