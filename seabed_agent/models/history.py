"""Turn Record — the immutable audit entry written once per turn."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class TurnRecord(BaseModel):
    """
    One played turn. Records are append-only and chained by hash.
    """

    id: str
    turn_number: int
    turns_left: int
    my_score: int
    foe_score: int
    commands: List[str]
    decisions: List[dict] = []
    elapsed_ms: float
    budget_ms: int
    over_budget: bool = False
    world_state_snapshot: dict = {}

    # Integrity
    signature: str = ""                     # SHA-256 over the record
    prior_record_hash: Optional[str] = None

    recorded_at: datetime
