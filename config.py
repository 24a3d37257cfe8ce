"""Game-wide configuration constants for Monster Gauntlet."""

import os

# Base stat ranges, [min, max)
HEALTH_RANGE = (10, 50)
ATTACK_POWER_RANGE = (5, 10)
LUCK_RANGE = (0.25, 0.75)
LEVEL_RANGE = (1, 5)

# Loot
LOOT_BASE_VALUE_RANGE = (10, 50)
LOOT_RANDOM_LEVEL_RANGE = (1, 10)   # Used by the random-level scaling policy
LOOT_ATTACK_POWER_DIVISOR = 10      # ceil(attack_power / 10) for attack-power scaling

# Player creation
PLAYER_START_LEVEL = 1
PLAYER_START_LEVEL_UP_EXPERIENCE = 50
TITLE_CHANCE = 0.5                  # Chance a generated player gets an honorific

# Combat
MISS_MARGIN = 0.3                   # Second draw above luck + margin is a miss / failed escape
CRITICAL_MULTIPLIER = 2
HIGH_LUCK_THRESHOLD = 0.5
HIGH_LUCK_DEFEND_FACTOR = 0.5
LOW_LUCK_DEFEND_FACTOR = 0.8
PARTIAL_ESCAPE_FACTOR = 0.5
ESCAPE_HEAL = 3

# Progression
LEVEL_UP_ATTACK_BONUS = 5
LEVEL_UP_HEALTH_BONUS = 10
LEVEL_UP_LUCK_STEP = 0.1
LEVEL_UP_EXPERIENCE_PER_LEVEL = 50
EXPERIENCE_PER_MONSTER_LEVEL = 10

# Records
TOP_GAMES_LIMIT = 10

DEFAULT_ENEMY_COUNT = int(os.environ.get("GAUNTLET_ENEMY_COUNT", "10"))
LOG_LEVEL = os.environ.get("GAUNTLET_LOG_LEVEL", "WARNING")
