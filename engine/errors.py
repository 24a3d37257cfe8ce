"""Error types raised by the Monster Gauntlet engine."""


class InvalidArgumentError(ValueError):
    """A caller passed arguments the engine cannot work with."""


class NotFoundError(LookupError):
    """A referenced player, enemy, loot or game record does not exist."""
