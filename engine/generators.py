"""Procedural generators for players, monsters and loot."""

from __future__ import annotations

import logging
import math
from enum import Enum

from config import (
    ATTACK_POWER_RANGE,
    HEALTH_RANGE,
    LEVEL_RANGE,
    LOOT_ATTACK_POWER_DIVISOR,
    LOOT_BASE_VALUE_RANGE,
    LOOT_RANDOM_LEVEL_RANGE,
    LUCK_RANGE,
    PLAYER_START_LEVEL,
    PLAYER_START_LEVEL_UP_EXPERIENCE,
    TITLE_CHANCE,
)
from engine.random_source import RandomGenerator
from models.characters import Enemy, Player
from models.loot import Loot

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

LOOT_PREFIXES = (
    "Rusty", "Shiny", "Ancient", "Magical", "Cursed",
    "Blessed", "Enchanted", "Mysterious", "Glowing", "Dark",
)
LOOT_MATERIALS = (
    "Iron", "Gold", "Silver", "Bronze", "Crystal",
    "Obsidian", "Mithril", "Dragonbone", "Moonstone", "Stardust",
)
LOOT_ITEMS = (
    "Sword", "Shield", "Amulet", "Ring", "Potion",
    "Scroll", "Gem", "Coin", "Dagger", "Staff",
)

MONSTER_PREFIXES = (
    "Shadow", "Frost", "Flame", "Storm", "Chaos",
    "Void", "Toxic", "Feral", "Ancient", "Mystic",
)
MONSTER_ROOTS = (
    "fang", "claw", "wing", "scale", "horn",
    "tail", "eye", "maw", "spine", "tentacle",
)
MONSTER_SUFFIXES = (
    "biter", "stalker", "crusher", "slayer", "howler",
    "lurker", "reaver", "wraith", "beast", "fiend",
)

FIRST_NAMES = (
    "Aiden", "Brynn", "Caspian", "Daphne", "Elowen", "Finn", "Gwendolyn",
    "Hector", "Iris", "Jasper", "Keira", "Liam", "Mira", "Nolan", "Ophelia",
    "Phoenix", "Quinn", "Rowan", "Sage", "Thora", "Ursa", "Vex", "Wren",
    "Xander", "Yara", "Zephyr",
)
LAST_NAMES = (
    "Blackwood", "Cloudkeeper", "Dawnbringer", "Earthshaker", "Frostwind",
    "Goldenheart", "Ironside", "Lightfoot", "Moonshadow", "Nightwalker",
    "Oakenshield", "Ravenclaw", "Silverthorn", "Stormborn", "Swiftarrow",
    "Thorngage", "Truthseeker", "Voidwalker", "Windrider", "Wolfsbane",
)
TITLES = (
    "the Brave", "the Wise", "the Swift", "the Strong", "the Cunning",
    "the Just", "the Merciful", "the Unyielding", "the Shadowdancer",
    "the Dragonheart", "the Spellweaver", "the Lionheart", "the Peacekeeper",
    "the Stormcaller", "the Truthsayer",
)


class LootScaling(str, Enum):
    """How a monster's loot level is chosen."""
    FIXED = "fixed"                 # Always level 1
    ATTACK_POWER = "attack-power"   # ceil(attack_power / 10)
    RANDOM_LEVEL = "random-level"   # Uniform in [1, 10)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


class CharacterGenerator(RandomGenerator):
    """Randomized base stats shared by players and monsters."""

    def generate_health(self) -> int:
        """Starting health in [10, 50)."""
        return self.random_int(*HEALTH_RANGE)

    def generate_attack_power(self) -> int:
        """Attack power in [5, 10)."""
        return self.random_int(*ATTACK_POWER_RANGE)

    def generate_luck(self) -> float:
        """Luck in [0.25, 0.75)."""
        return self.random_float(*LUCK_RANGE)

    def generate_level(self) -> int:
        """Monster level in [1, 5)."""
        return self.random_int(*LEVEL_RANGE)


class LootGenerator(RandomGenerator):
    """Named loot items with a value scaled by level."""

    def generate_name(self) -> str:
        """Prefix, material and item, e.g. "Ancient Iron Sword"."""
        prefix = self.pick_one(LOOT_PREFIXES)
        material = self.pick_one(LOOT_MATERIALS)
        item = self.pick_one(LOOT_ITEMS)
        return f"{prefix} {material} {item}"

    def calculate_value(self, level: int) -> int:
        """Base value in [10, 50) multiplied by level (at least 1)."""
        level = max(1, level)
        return self.random_int(*LOOT_BASE_VALUE_RANGE) * level

    def generate_loot(self, level: int) -> Loot:
        """Generate a loot item.

        Args:
            level: Scaling level; anything below 1 is treated as 1.

        Returns:
            A Loot with a placeholder id of 0.
        """
        name = self.generate_name()
        value = self.calculate_value(level)
        return Loot(id=0, name=name, value=value)

    def loot_level(self, scaling: LootScaling, attack_power: int = 0) -> int:
        """Pick the level a monster's loot is generated at."""
        if scaling == LootScaling.ATTACK_POWER:
            return math.ceil(attack_power / LOOT_ATTACK_POWER_DIVISOR)
        if scaling == LootScaling.RANDOM_LEVEL:
            return self.random_int(*LOOT_RANDOM_LEVEL_RANGE)
        return 1


class PlayerGenerator(CharacterGenerator):
    """Generates fresh level-1 players."""

    def generate_name(self) -> str:
        """First and last name, with a title half the time."""
        first_name = self.pick_one(FIRST_NAMES)
        last_name = self.pick_one(LAST_NAMES)
        title = self.pick_one(TITLES)
        if self.chance(TITLE_CHANCE):
            return f"{first_name} {last_name} {title}"
        return f"{first_name} {last_name}"

    def generate_player(self, name: str | None = None) -> Player:
        """Generate a new player.

        Args:
            name: Optional name to use instead of a generated one. Blank
                names are ignored. The name draws are made either way.

        Returns:
            A level-1 Player with a placeholder id of 0.
        """
        generated = self.generate_name()
        if name is not None and name.strip():
            generated = name.strip()

        player = Player(
            id=0,
            name=generated,
            health=self.generate_health(),
            attack_power=self.generate_attack_power(),
            luck=self.generate_luck(),
            level=PLAYER_START_LEVEL,
            experience=0,
            level_up_experience=PLAYER_START_LEVEL_UP_EXPERIENCE,
        )
        logger.debug("Generated player %s", player)
        return player


class MonsterGenerator(CharacterGenerator):
    """Generates monsters at a random starting level."""

    def generate_name(self) -> str:
        """Prefix, root and suffix, e.g. "Shadowfang stalker"."""
        prefix = self.pick_one(MONSTER_PREFIXES)
        root = self.pick_one(MONSTER_ROOTS)
        suffix = self.pick_one(MONSTER_SUFFIXES)
        return f"{prefix}{root} {suffix}"

    def generate_monster(self, loot_id: int = 0) -> Enemy:
        """Generate a monster holding a reference to ``loot_id``."""
        monster = Enemy(
            id=0,
            name=self.generate_name(),
            health=self.generate_health(),
            attack_power=self.generate_attack_power(),
            luck=self.generate_luck(),
            level=self.generate_level(),
            loot_id=loot_id,
        )
        logger.debug("Generated monster %s", monster)
        return monster
