"""Battle state, event and game record models for Monster Gauntlet."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from models.actions import ActionResult
from models.characters import Enemy, Player
from models.loot import Loot


class BattlePhase(str, Enum):
    """States of the battle loop."""
    SETUP = "setup"
    IN_ROUND = "in_round"
    ROUND_RESOLVED = "round_resolved"
    NEXT_MONSTER = "next_monster"
    PLAYER_DEAD = "player_dead"
    ALL_MONSTERS_DEFEATED = "all_monsters_defeated"
    GAME_OVER = "game_over"


class BattleEvent(BaseModel):
    """A logged round from the battle."""
    round: int                      # Overall round counter, starting at 1
    enemy_index: int                # Position of the monster in the roster
    result: ActionResult
    player_health: int
    enemy_health: int
    enemy_defeated: bool = False
    loot_collected: Loot | None = None


class BattleSummary(BaseModel):
    """The outcome of a finished battle."""
    player: Player                  # Post-battle player record
    alive: bool
    loot: list[Loot] = []           # Loot collected by the player
    total_loot_value: int = 0
    defeated: list[Enemy] = []      # Monsters killed, in order
    defeated_indices: list[int] = []  # Roster positions of the monsters killed, same order
    enemies: list[Enemy] = []       # The full roster, in order
    enemy_loot: list[Loot] = []     # Loot held by each roster monster, same order
    experience: int = 0
    rounds: int = 0
    events: list[BattleEvent] = []
    score: int = 0
    phase: BattlePhase = BattlePhase.GAME_OVER


class Game(BaseModel):
    """A persisted game session."""
    id: int = 0
    player_id: int
    score: int = 0
    date: datetime


class GameEnemy(BaseModel):
    """Join record: a monster that belonged to a game."""
    game_id: int
    enemy_id: int


class GameLoot(BaseModel):
    """Join record: loot collected during a game."""
    game_id: int
    loot_id: int
