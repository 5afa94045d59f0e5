"""
Turn History Store — append-only, hash-chained record of every played turn.

Behavioral Contract:
- Append-only. No record is ever modified or deleted.
- Each record is hashed and chained to the previous record.
- Every record answers: Which turn? What did the world look like?
  What did each drone do? Did the turn fit its budget?
- Queryable by turn number and by budget overruns.
"""

import hashlib
import json
import sqlite3
from typing import List, Optional

from seabed_agent.models.history import TurnRecord


class TurnHistoryStore:
    """
    Append-only turn history.
    SQLite, in memory unless a file path is given.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the turns table if it doesn't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS turns (
                id TEXT PRIMARY KEY,
                turn_number INTEGER NOT NULL,
                turns_left INTEGER NOT NULL,
                my_score INTEGER NOT NULL,
                foe_score INTEGER NOT NULL,
                elapsed_ms REAL NOT NULL,
                over_budget INTEGER NOT NULL DEFAULT 0,
                signature TEXT NOT NULL,
                prior_record_hash TEXT,
                record_json TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """)
        self._conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_turns_turn_number ON turns(turn_number)
        """)
        self._conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_turns_over_budget ON turns(over_budget)
        """)
        self._conn.commit()

    @staticmethod
    def _sign(record: TurnRecord) -> str:
        record_dict = record.model_dump(mode="json")
        record_dict["signature"] = ""
        record_bytes = json.dumps(record_dict, sort_keys=True, default=str).encode()
        return hashlib.sha256(record_bytes).hexdigest()

    def append(self, record: TurnRecord) -> TurnRecord:
        """
        Append a turn record. Computes its hash and chains it to the
        previous record.
        """
        record.prior_record_hash = self._get_latest_hash()
        record.signature = self._sign(record)

        full_json = json.dumps(record.model_dump(mode="json"), default=str)

        self._conn.execute(
            """
            INSERT INTO turns (
                id, turn_number, turns_left, my_score, foe_score,
                elapsed_ms, over_budget, signature, prior_record_hash,
                record_json
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.id,
                record.turn_number,
                record.turns_left,
                record.my_score,
                record.foe_score,
                record.elapsed_ms,
                int(record.over_budget),
                record.signature,
                record.prior_record_hash,
                full_json,
            ),
        )
        self._conn.commit()
        return record

    def _get_latest_hash(self) -> Optional[str]:
        """Get the signature of the most recent record."""
        row = self._conn.execute(
            "SELECT signature FROM turns ORDER BY rowid DESC LIMIT 1"
        ).fetchone()
        return row["signature"] if row else None

    def _deserialize(self, row: sqlite3.Row) -> TurnRecord:
        return TurnRecord.model_validate_json(row["record_json"])

    def get_by_turn(self, turn_number: int) -> Optional[TurnRecord]:
        """Get the record of a specific turn."""
        row = self._conn.execute(
            "SELECT record_json FROM turns WHERE turn_number = ? "
            "ORDER BY rowid DESC LIMIT 1",
            (turn_number,),
        ).fetchone()
        return self._deserialize(row) if row else None

    def query_recent(self, limit: int = 50) -> List[TurnRecord]:
        """Get the most recent turn records, oldest first."""
        rows = self._conn.execute(
            "SELECT record_json FROM turns ORDER BY rowid DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [self._deserialize(r) for r in reversed(rows)]

    def query_over_budget(self) -> List[TurnRecord]:
        """All turns that took longer than their budget."""
        rows = self._conn.execute(
            "SELECT record_json FROM turns WHERE over_budget = 1 ORDER BY rowid"
        ).fetchall()
        return [self._deserialize(r) for r in rows]

    def verify_chain_integrity(self) -> bool:
        """Verify no records have been tampered with."""
        rows = self._conn.execute(
            "SELECT record_json, signature FROM turns ORDER BY rowid"
        ).fetchall()

        for i, row in enumerate(rows):
            record = self._deserialize(row)

            if record.signature != self._sign(record):
                return False

            if i > 0 and record.prior_record_hash != rows[i - 1]["signature"]:
                return False

        return True

    def count(self) -> int:
        """Total number of turn records."""
        row = self._conn.execute("SELECT COUNT(*) as cnt FROM turns").fetchone()
        return row["cnt"]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
