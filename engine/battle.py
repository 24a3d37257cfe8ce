"""Battle orchestration: roster setup, rounds, kills, loot and the final report."""

from __future__ import annotations

import logging
import random

from config import EXPERIENCE_PER_MONSTER_LEVEL
from engine.combatants import EnemyCombatant, PlayerCombatant
from engine.errors import InvalidArgumentError
from engine.generators import (
    LootGenerator,
    LootScaling,
    MonsterGenerator,
    PlayerGenerator,
)
from engine.random_source import RandomGenerator
from models.actions import ActionResult, ActionType
from models.characters import Player
from models.game_state import BattleEvent, BattlePhase, BattleSummary
from models.loot import Loot

logger = logging.getLogger(__name__)

# Order matters: the action selector draws an index into this tuple.
ROUND_ACTIONS = (ActionType.ATTACK, ActionType.DEFEND, ActionType.ESCAPE)


def acting_side(player: PlayerCombatant, enemy: EnemyCombatant) -> PlayerCombatant:
    """Return who acts in a round.

    Only the player ever chooses an action. Monsters are passive: they are
    the target of the player's attack and supply their attack power to the
    player's defend and escape.
    """
    return player


class GameManager:
    """Runs one game session: a player against a roster of monsters.

    Each manager owns its random source and generators, so concurrent
    sessions never share randomness.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        loot_scaling: LootScaling = LootScaling.ATTACK_POWER,
    ) -> None:
        self.random = RandomGenerator(rng)
        self.player_generator = PlayerGenerator(self.random.rng)
        self.monster_generator = MonsterGenerator(self.random.rng)
        self.loot_generator = LootGenerator(self.random.rng)
        self.loot_scaling = loot_scaling

        self.phase = BattlePhase.SETUP
        self.phase_history: list[BattlePhase] = [BattlePhase.SETUP]
        self.player: PlayerCombatant | None = None
        self.monsters: list[EnemyCombatant] = []
        self.player_loot: list[Loot] = []
        self.defeated: list[EnemyCombatant] = []
        self.defeated_indices: list[int] = []
        self.events: list[BattleEvent] = []
        self.round_number = 0

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def setup(
        self,
        enemy_count: int,
        player: Player | None = None,
        player_name: str | None = None,
    ) -> None:
        """Generate (or adopt) the player and generate the monster roster.

        Args:
            enemy_count: Number of monsters to fight.
            player: Existing player record; generated when omitted.
            player_name: Name override for a generated player.

        Raises:
            InvalidArgumentError: If enemy_count is negative or the player
                has no attack power.
        """
        if enemy_count < 0:
            raise InvalidArgumentError(f"Enemy count must be non-negative, got {enemy_count}")

        if player is None:
            player = self.player_generator.generate_player(player_name)
        if player.attack_power <= 0:
            raise InvalidArgumentError(
                f"Player {player.name!r} has no attack power and can never win a fight"
            )

        self.phase = BattlePhase.SETUP
        self.phase_history = [BattlePhase.SETUP]
        self.player = PlayerCombatant(player, self.random)
        self.monsters = self.generate_roster(enemy_count)
        self.player_loot = []
        self.defeated = []
        self.defeated_indices = []
        self.events = []
        self.round_number = 0

        logger.info(
            "Welcome %s! Level %d with %d health and %d attack power, facing %d monsters",
            player.name,
            player.level,
            player.health,
            player.attack_power,
            enemy_count,
        )

    def generate_roster(self, enemy_count: int) -> list[EnemyCombatant]:
        """Generate monsters, each paired with a freshly generated loot item."""
        roster = []
        for _ in range(enemy_count):
            monster = self.monster_generator.generate_monster()
            level = self.loot_generator.loot_level(self.loot_scaling, monster.attack_power)
            loot = self.loot_generator.generate_loot(level)
            roster.append(EnemyCombatant(monster, loot, self.random))
        return roster

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def _transition(self, phase: BattlePhase) -> None:
        logger.debug("Battle phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self.phase_history.append(phase)

    def play_round(self, enemy_index: int, enemy: EnemyCombatant) -> BattleEvent:
        """Play one round against ``enemy`` and resolve a kill if it dies.

        Raises:
            InvalidArgumentError: If either side is already dead or setup
                has not run.
        """
        if self.player is None:
            raise InvalidArgumentError("Battle has not been set up")
        if not self.player.is_alive() or not enemy.is_alive():
            raise InvalidArgumentError("Cannot fight a round with a dead combatant")

        self._transition(BattlePhase.IN_ROUND)
        self.round_number += 1

        actor = acting_side(self.player, enemy)
        action = self.random.pick_one(ROUND_ACTIONS)
        result = self._resolve(action, actor, enemy)

        event = BattleEvent(
            round=self.round_number,
            enemy_index=enemy_index,
            result=result,
            player_health=self.player.character.health,
            enemy_health=enemy.character.health,
        )

        if not enemy.is_alive():
            event.enemy_defeated = True
            event.loot_collected = self._collect_kill(enemy_index, enemy)

        self.events.append(event)
        self._transition(BattlePhase.ROUND_RESOLVED)
        return event

    def _resolve(
        self,
        action: ActionType,
        actor: PlayerCombatant,
        enemy: EnemyCombatant,
    ) -> ActionResult:
        if action == ActionType.ATTACK:
            return actor.attack(enemy)
        if action == ActionType.DEFEND:
            return actor.defend(enemy.character.attack_power)
        return actor.escape(enemy.character.attack_power)

    def _collect_kill(self, enemy_index: int, enemy: EnemyCombatant) -> Loot:
        """Award experience and loot for a slain monster."""
        self.player.gain_experience(enemy.character.level * EXPERIENCE_PER_MONSTER_LEVEL)
        self.player_loot.append(enemy.loot)
        self.defeated.append(enemy)
        self.defeated_indices.append(enemy_index)
        logger.info(
            "%s slew %s and looted %s worth %d",
            self.player.character.name,
            enemy.character.name,
            enemy.loot.name,
            enemy.loot.value,
        )
        return enemy.loot

    # ------------------------------------------------------------------
    # Full game
    # ------------------------------------------------------------------

    def run(
        self,
        enemy_count: int,
        player: Player | None = None,
        player_name: str | None = None,
    ) -> BattleSummary:
        """Fight every monster in order until the player dies or none remain."""
        self.setup(enemy_count, player=player, player_name=player_name)

        for index, enemy in enumerate(self.monsters):
            if not self.player.is_alive():
                break
            if index > 0:
                self._transition(BattlePhase.NEXT_MONSTER)
            while self.player.is_alive() and enemy.is_alive():
                self.play_round(index, enemy)

        if self.player.is_alive():
            self._transition(BattlePhase.ALL_MONSTERS_DEFEATED)
        else:
            self._transition(BattlePhase.PLAYER_DEAD)
        self._transition(BattlePhase.GAME_OVER)

        summary = self.summary()
        logger.info(
            "Game over: %s is %s with %d loot worth %d after %d rounds",
            summary.player.name,
            "alive" if summary.alive else "dead",
            len(summary.loot),
            summary.total_loot_value,
            summary.rounds,
        )
        return summary

    def summary(self) -> BattleSummary:
        """Build a summary of the battle so far."""
        if self.player is None:
            raise InvalidArgumentError("Battle has not been set up")
        total = sum(loot.value for loot in self.player_loot)
        return BattleSummary(
            player=self.player.player,
            alive=self.player.is_alive(),
            loot=list(self.player_loot),
            total_loot_value=total,
            defeated=[enemy.enemy for enemy in self.defeated],
            defeated_indices=list(self.defeated_indices),
            enemies=[enemy.enemy for enemy in self.monsters],
            enemy_loot=[enemy.loot for enemy in self.monsters],
            experience=self.player.experience,
            rounds=self.round_number,
            events=list(self.events),
            score=total,
            phase=self.phase,
        )


def report(summary: BattleSummary) -> list[str]:
    """Render the end-of-game report as lines of text."""
    player = summary.player
    lines = [
        f"{player.name}: level {player.level}, {player.health} health, "
        f"{player.attack_power} attack power, "
        f"{player.experience}/{player.level_up_experience} experience.",
        "You are alive!" if summary.alive else "You are dead!",
        f"You looted {len(summary.loot)} items:",
    ]
    lines.extend(f"* {loot.name} worth {loot.value}." for loot in summary.loot)
    lines.append(
        f"You ended with {summary.experience} experience points "
        f"and {summary.total_loot_value} gold."
    )
    lines.append(f"You killed {len(summary.defeated)} monsters:")
    lines.extend(f"* {enemy.name} (Level {enemy.level})" for enemy in summary.defeated)
    return lines
