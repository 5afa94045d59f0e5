"""Tests for the line protocol reader."""

import pytest

from seabed_agent.models.world import CreatureColor, CreatureType
from seabed_agent.protocol.reader import ProtocolError, ProtocolReader, format_commands

ROSTER = """3
4 0 0
5 1 1
6 3 2
"""

TURN = """12
7
1
4
0
2
0 2000 2500 0 30
1 5000 2500 0 28
1
2 8000 2500 1 12
2
0 5
1 6
1
5 2300 3100 -150 200
2
0 4 TL
1 6 BR
"""


def _reader(text: str) -> ProtocolReader:
    return ProtocolReader(text.splitlines())


class TestRoster:
    def test_read_roster(self):
        roster = _reader(ROSTER).read_roster()
        assert [p.creature_id for p in roster] == [4, 5, 6]
        assert roster[2].color == CreatureColor.BLUE
        assert roster[2].type == CreatureType.CRAB

    def test_empty_roster(self):
        assert _reader("0\n").read_roster() == []


class TestTurn:
    def test_read_turn(self):
        turn = _reader(TURN).read_turn()
        assert (turn.my_score, turn.foe_score) == (12, 7)
        assert turn.my_saved == [4]
        assert turn.foe_saved == []
        assert [d.drone_id for d in turn.my_drones] == [0, 1]
        assert turn.my_drones[1].battery == 28
        assert turn.foe_drones[0].emergency == 1
        assert [(s.drone_id, s.creature_id) for s in turn.scans] == [(0, 5), (1, 6)]
        assert turn.visible[0].vx == -150
        assert [(b.drone_id, b.creature_id, b.direction) for b in turn.radar_blips] == [
            (0, 4, "TL"),
            (1, 6, "BR"),
        ]

    def test_roster_then_turns(self):
        reader = _reader(ROSTER + TURN + TURN)
        reader.read_roster()
        reader.read_turn()
        reader.read_turn()
        with pytest.raises(EOFError):
            reader.read_turn()

    def test_wrong_field_count(self):
        with pytest.raises(ProtocolError):
            _reader("1\n4 0\n").read_roster()

    def test_non_integer(self):
        with pytest.raises(ProtocolError):
            _reader("abc\n").read_roster()

    def test_truncated_turn(self):
        with pytest.raises(EOFError):
            _reader("12\n7\n").read_turn()


class TestFormatCommands:
    def test_one_line_per_command(self):
        assert format_commands(["MOVE 1 2 1", "WAIT 0"]) == "MOVE 1 2 1\nWAIT 0\n"

    def test_no_commands(self):
        assert format_commands([]) == ""
