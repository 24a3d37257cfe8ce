"""Combat primitives: attack, defend, escape, leveling and experience.

Every action depends only on the actor's own luck and up to two independent
draws from its RandomGenerator:

- Attack: lucky -> critical hit (x2); else a second draw above luck + 0.3
  misses; otherwise a normal hit.
- Defend: lucky -> full block; else damage is reduced to 50% (luck > 0.5)
  or 80% (luck <= 0.5).
- Escape: lucky -> heal 3; else a second draw above luck + 0.3 takes full
  damage; otherwise half damage.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol

from config import (
    CRITICAL_MULTIPLIER,
    ESCAPE_HEAL,
    HIGH_LUCK_DEFEND_FACTOR,
    HIGH_LUCK_THRESHOLD,
    LEVEL_UP_ATTACK_BONUS,
    LEVEL_UP_EXPERIENCE_PER_LEVEL,
    LEVEL_UP_HEALTH_BONUS,
    LEVEL_UP_LUCK_STEP,
    LOW_LUCK_DEFEND_FACTOR,
    LUCK_RANGE,
    MISS_MARGIN,
    PARTIAL_ESCAPE_FACTOR,
)
from engine.errors import InvalidArgumentError
from engine.random_source import RandomGenerator
from models.actions import ActionResult, ActionType, Outcome
from models.characters import Character, Enemy, Player
from models.loot import Loot

logger = logging.getLogger(__name__)


class Combatant(Protocol):
    """Anything the battle loop can fight with."""

    @property
    def character(self) -> Character: ...

    def attack(self, opponent: Combatant) -> ActionResult: ...

    def defend(self, incoming_attack_power: int) -> ActionResult: ...

    def escape(self, incoming_attack_power: int) -> ActionResult: ...

    def is_alive(self) -> bool: ...


def calculate_luck(
    min_luck: float = LUCK_RANGE[0],
    max_luck: float = LUCK_RANGE[1],
    random: RandomGenerator | None = None,
) -> float:
    """Draw a luck value in [min_luck, max_luck).

    An upper bound above 1.0 is clamped to 1.0 with a warning, so luck can
    keep ratcheting upward on level-up without leaving [0, 1].

    Raises:
        InvalidArgumentError: If min_luck is outside [0, 1] or max_luck is
            below min_luck.
    """
    random = random or RandomGenerator()
    if not 0.0 <= min_luck <= 1.0:
        raise InvalidArgumentError(f"Luck lower bound {min_luck} is outside [0, 1]")
    if max_luck < min_luck:
        raise InvalidArgumentError(
            f"Luck range is inverted: [{min_luck}, {max_luck})"
        )
    if max_luck > 1.0:
        logger.warning(
            "Luck range [%.3f, %.3f) exceeds 1.0, clamping upper bound",
            min_luck,
            max_luck,
        )
        max_luck = 1.0
    return random.random_float(min_luck, max_luck)


def build_character(
    name: str,
    health: int,
    attack_power: int,
    level: int,
    random: RandomGenerator | None = None,
) -> Character:
    """Build a Character record from discrete stats with a freshly drawn luck."""
    return Character(
        id=0,
        name=name,
        health=health,
        attack_power=attack_power,
        level=level,
        luck=calculate_luck(random=random),
    )


def apply_damage(character: Character, damage: int) -> int:
    """Apply damage (or healing, if negative) and return the new health.

    Health is clamped at zero; it is only read for the alive check.
    """
    character.health = max(0, character.health - damage)
    return character.health


class CharacterCore:
    """Wraps one character record and resolves its combat actions."""

    def __init__(self, character: Character, random: RandomGenerator | None = None) -> None:
        self.character = character.model_copy()
        self.random = random or RandomGenerator()

    def is_lucky(self) -> bool:
        """One draw against luck: True means the favorable branch."""
        return self.random.chance(self.character.luck)

    def is_unlucky(self) -> bool:
        """Second-chance draw: True when the draw exceeds luck + margin."""
        return self.random.draw() > self.character.luck + MISS_MARGIN

    def is_alive(self) -> bool:
        """Alive while health is above zero."""
        return self.character.health > 0

    def attack(self, opponent: Combatant) -> ActionResult:
        """Attack the opponent, reducing its health."""
        me = self.character
        target = opponent.character
        damage = me.attack_power

        if self.is_lucky():
            damage *= CRITICAL_MULTIPLIER
            outcome = Outcome.CRITICAL
            description = f"Critical hit! {me.name} hits {target.name} for {damage} damage."
        elif self.is_unlucky():
            damage = 0
            outcome = Outcome.MISS
            description = f"{me.name} misses {target.name}."
        else:
            outcome = Outcome.HIT
            description = f"{me.name} hits {target.name} for {damage} damage."

        remaining = apply_damage(target, damage)
        if remaining <= 0:
            description += f" {target.name} has been slain!"
        logger.debug(description)

        return ActionResult(
            action_type=ActionType.ATTACK,
            outcome=outcome,
            actor=me.name,
            target=target.name,
            damage=damage,
            target_health=remaining,
            description=description,
        )

    def defend(self, incoming_attack_power: int) -> ActionResult:
        """Defend against an incoming attack, taking reduced damage."""
        me = self.character

        if self.is_lucky():
            damage = 0
            outcome = Outcome.BLOCKED
            description = f"{me.name} blocks the attack."
        else:
            factor = (
                HIGH_LUCK_DEFEND_FACTOR
                if me.luck > HIGH_LUCK_THRESHOLD
                else LOW_LUCK_DEFEND_FACTOR
            )
            damage = math.floor(incoming_attack_power * factor)
            outcome = Outcome.DEFENDED
            description = f"{me.name} defends and takes only {damage} damage."

        remaining = apply_damage(me, damage)
        logger.debug(description)

        return ActionResult(
            action_type=ActionType.DEFEND,
            outcome=outcome,
            actor=me.name,
            target=me.name,
            damage=damage,
            target_health=remaining,
            description=description,
        )

    def escape(self, incoming_attack_power: int) -> ActionResult:
        """Try to escape; a lucky escape heals instead of hurting."""
        me = self.character

        if self.is_lucky():
            damage = -ESCAPE_HEAL
            outcome = Outcome.ESCAPED
            description = f"{me.name} escapes unharmed and recovers {ESCAPE_HEAL} health."
        elif self.is_unlucky():
            damage = incoming_attack_power
            outcome = Outcome.FAILED_ESCAPE
            description = f"{me.name} fails to escape and takes {damage} damage."
        else:
            damage = math.floor(incoming_attack_power * PARTIAL_ESCAPE_FACTOR)
            outcome = Outcome.PARTIAL_ESCAPE
            description = f"{me.name} escapes but takes {damage} damage."

        remaining = apply_damage(me, damage)
        logger.debug(description)

        return ActionResult(
            action_type=ActionType.ESCAPE,
            outcome=outcome,
            actor=me.name,
            target=me.name,
            damage=damage,
            target_health=remaining,
            description=description,
        )

    def level_up(self) -> None:
        """Raise level, attack power and health; ratchet luck upward."""
        me = self.character
        me.level += 1
        me.attack_power += LEVEL_UP_ATTACK_BONUS
        me.health += LEVEL_UP_HEALTH_BONUS
        me.luck = calculate_luck(me.luck, me.luck + LEVEL_UP_LUCK_STEP, self.random)
        logger.info("%s has reached level %d", me.name, me.level)


class PlayerCombatant:
    """The player's side of a battle: a combat core plus experience.

    Experience lives on the wrapped Player record, so ``character`` and
    ``player`` always agree.
    """

    def __init__(self, player: Player, random: RandomGenerator | None = None) -> None:
        self.core = CharacterCore(player, random)

    @property
    def character(self) -> Player:
        return self.core.character

    @property
    def player(self) -> Player:
        """Snapshot of the current player record."""
        return self.core.character.model_copy()

    @property
    def experience(self) -> int:
        return self.core.character.experience

    @property
    def level_up_experience(self) -> int:
        return self.core.character.level_up_experience

    def attack(self, opponent: Combatant) -> ActionResult:
        return self.core.attack(opponent)

    def defend(self, incoming_attack_power: int) -> ActionResult:
        return self.core.defend(incoming_attack_power)

    def escape(self, incoming_attack_power: int) -> ActionResult:
        return self.core.escape(incoming_attack_power)

    def is_alive(self) -> bool:
        return self.core.is_alive()

    def gain_experience(self, amount: int) -> bool:
        """Add experience, leveling up once the threshold is reached.

        Returns:
            True if the player leveled up.

        Raises:
            InvalidArgumentError: If amount is negative.
        """
        if amount < 0:
            raise InvalidArgumentError(f"Experience gain must be non-negative, got {amount}")

        me = self.core.character
        me.experience += amount
        if me.experience < me.level_up_experience:
            return False

        self.core.level_up()
        me.experience = 0
        me.level_up_experience += me.level * LEVEL_UP_EXPERIENCE_PER_LEVEL
        return True


class EnemyCombatant:
    """A monster's side of a battle: a combat core plus the loot it drops."""

    def __init__(
        self,
        enemy: Enemy,
        loot: Loot,
        random: RandomGenerator | None = None,
    ) -> None:
        self.core = CharacterCore(enemy, random)
        self.loot = loot

    @property
    def character(self) -> Character:
        return self.core.character

    @property
    def enemy(self) -> Enemy:
        """Snapshot of the current enemy record."""
        return Enemy(**self.core.character.model_dump())

    def attack(self, opponent: Combatant) -> ActionResult:
        return self.core.attack(opponent)

    def defend(self, incoming_attack_power: int) -> ActionResult:
        return self.core.defend(incoming_attack_power)

    def escape(self, incoming_attack_power: int) -> ActionResult:
        return self.core.escape(incoming_attack_power)

    def is_alive(self) -> bool:
        return self.core.is_alive()
