"""Combat action and result models for Monster Gauntlet."""

from enum import Enum

from pydantic import BaseModel


class ActionType(str, Enum):
    """Round actions available to the player."""
    ATTACK = "attack"
    DEFEND = "defend"
    ESCAPE = "escape"


class Outcome(str, Enum):
    """How a round action played out."""
    CRITICAL = "critical"           # Lucky attack, double damage
    HIT = "hit"
    MISS = "miss"
    BLOCKED = "blocked"             # Lucky defend, no damage
    DEFENDED = "defended"           # Reduced damage
    ESCAPED = "escaped"             # Lucky escape, healed
    PARTIAL_ESCAPE = "partial_escape"
    FAILED_ESCAPE = "failed_escape"


class ActionResult(BaseModel):
    """The resolution of a single combat action."""
    action_type: ActionType
    outcome: Outcome
    actor: str                      # Name of the acting character
    target: str                     # Who took the damage (actor for defend/escape)
    damage: int                     # Negative means the target was healed
    target_health: int              # Target health after the action
    description: str                # Human-readable narrative
