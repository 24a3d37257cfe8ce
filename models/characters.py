"""Character, player and enemy data models for Monster Gauntlet."""

from pydantic import BaseModel, Field


class Character(BaseModel):
    """A combat entity: anything that can attack, defend or escape."""
    id: int = 0                     # Placeholder until the store assigns one
    name: str
    health: int = Field(ge=0)       # Current hit points; 0 is dead
    attack_power: int = Field(ge=0)
    luck: float = Field(ge=0.0, le=1.0)  # Probability weight for favorable rolls
    level: int = Field(default=1, ge=1)


class Player(Character):
    """The player's character."""
    experience: int = Field(default=0, ge=0)
    level_up_experience: int = Field(default=50, ge=0)


class Enemy(Character):
    """A monster in the roster."""
    loot_id: int = 0                # The Loot dropped on death
