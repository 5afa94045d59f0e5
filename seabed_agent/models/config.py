"""Policy and match configuration."""

from pydantic import BaseModel, Field


class PolicyConfig(BaseModel):
    """Thresholds for the per-drone decision policy."""

    save_memory_threshold: int = Field(ge=1, default=3)
    save_surface_y: int = 500
    radar_step: int = 600                   # Max drone travel per turn
    light_battery_threshold: int = 5


class MatchConfig(BaseModel):
    """Match length and per-turn response budget."""

    max_turns: int = 200
    first_turn_budget_ms: int = 1000
    turn_budget_ms: int = 50
