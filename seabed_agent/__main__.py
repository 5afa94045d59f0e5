"""
Command-line entry point: play a match over stdin/stdout.

Commands go to stdout, one line per drone per turn. Logs go to stderr.
"""

import argparse
import logging
import sys

from seabed_agent.history.store import TurnHistoryStore
from seabed_agent.models.config import MatchConfig, PolicyConfig
from seabed_agent.protocol.reader import ProtocolReader
from seabed_agent.runner.factory import build_controller


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="seabed-agent",
        description="Play a seabed scan match over the line protocol.",
    )
    parser.add_argument("--log-level", default="WARNING",
                        help="Logging level written to stderr (default: WARNING)")
    parser.add_argument("--history-db", default=None,
                        help="SQLite file for the turn history; omit to disable")
    parser.add_argument("--save-threshold", type=int, default=3,
                        help="Scans held before heading up to save")
    parser.add_argument("--surface-y", type=int, default=500,
                        help="Depth at or above which scans are saved")
    parser.add_argument("--radar-step", type=int, default=600,
                        help="Step toward a radar quadrant")
    parser.add_argument("--light-battery", type=int, default=5,
                        help="Light is used while battery is above this")
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--first-turn-budget-ms", type=int, default=1000)
    parser.add_argument("--turn-budget-ms", type=int, default=50)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    history = TurnHistoryStore(args.history_db) if args.history_db else None
    controller = build_controller(
        policy_config=PolicyConfig(
            save_memory_threshold=args.save_threshold,
            save_surface_y=args.surface_y,
            radar_step=args.radar_step,
            light_battery_threshold=args.light_battery,
        ),
        match_config=MatchConfig(
            max_turns=args.max_turns,
            first_turn_budget_ms=args.first_turn_budget_ms,
            turn_budget_ms=args.turn_budget_ms,
        ),
        history=history,
    )

    try:
        controller.run(ProtocolReader(sys.stdin), sys.stdout)
    finally:
        if history is not None:
            history.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
