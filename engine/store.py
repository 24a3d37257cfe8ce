"""In-memory record store: id assignment, game joins and leaderboard queries."""

from __future__ import annotations

import itertools
import logging
from datetime import datetime, timezone

from config import TOP_GAMES_LIMIT
from engine.errors import NotFoundError
from models.characters import Enemy, Player
from models.game_state import BattleSummary, Game, GameEnemy, GameLoot
from models.loot import Loot

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Holds players, enemies, loot and games for the lifetime of the process.

    Records are copied on the way in and out, so callers never share
    mutable state with the store.
    """

    def __init__(self) -> None:
        self.players: dict[int, Player] = {}
        self.enemies: dict[int, Enemy] = {}
        self.loot: dict[int, Loot] = {}
        self.games: dict[int, Game] = {}
        self.game_enemies: list[GameEnemy] = []
        self.game_loot: list[GameLoot] = []
        self._ids = {
            "player": itertools.count(1),
            "enemy": itertools.count(1),
            "loot": itertools.count(1),
            "game": itertools.count(1),
        }

    # --- Players ---

    def add_player(self, player: Player) -> Player:
        """Store a new player under a fresh id.

        Args:
            player: The player record; its id is ignored.

        Returns:
            A copy of the stored player, carrying its assigned id.
        """
        stored = player.model_copy(update={"id": next(self._ids["player"])})
        self.players[stored.id] = stored
        logger.debug("Stored player %d (%s)", stored.id, stored.name)
        return stored.model_copy()

    def get_player(self, player_id: int) -> Player:
        """Look up a player by id.

        Raises:
            NotFoundError: If no such player exists.
        """
        if player_id not in self.players:
            raise NotFoundError(f"Player {player_id} not found")
        return self.players[player_id].model_copy()

    def update_player(self, player: Player) -> Player:
        """Replace a stored player with ``player``, matched by id.

        Raises:
            NotFoundError: If no player with that id exists.
        """
        if player.id not in self.players:
            raise NotFoundError(f"Player {player.id} not found")
        self.players[player.id] = player.model_copy()
        return player.model_copy()

    def delete_player(self, player_id: int) -> bool:
        """Delete a player. Returns False if it didn't exist."""
        return self.players.pop(player_id, None) is not None

    # --- Enemies and loot ---

    def add_enemy(self, enemy: Enemy) -> Enemy:
        """Store a new enemy under a fresh id and return the stored copy."""
        stored = enemy.model_copy(update={"id": next(self._ids["enemy"])})
        self.enemies[stored.id] = stored
        return stored.model_copy()

    def get_enemy(self, enemy_id: int) -> Enemy:
        """Look up an enemy by id.

        Raises:
            NotFoundError: If no such enemy exists.
        """
        if enemy_id not in self.enemies:
            raise NotFoundError(f"Enemy {enemy_id} not found")
        return self.enemies[enemy_id].model_copy()

    def add_loot(self, loot: Loot) -> Loot:
        """Store a new loot item under a fresh id and return the stored copy."""
        stored = loot.model_copy(update={"id": next(self._ids["loot"])})
        self.loot[stored.id] = stored
        return stored.model_copy()

    def get_loot(self, loot_id: int) -> Loot:
        """Look up a loot item by id.

        Raises:
            NotFoundError: If no such loot exists.
        """
        if loot_id not in self.loot:
            raise NotFoundError(f"Loot {loot_id} not found")
        return self.loot[loot_id].model_copy()

    # --- Games ---

    def create_game(
        self,
        player_id: int,
        score: int = 0,
        date: datetime | None = None,
    ) -> Game:
        """Create a game for an existing player.

        Args:
            player_id: Id of a stored player.
            score: Final score of the game.
            date: When the game was played; defaults to now (UTC).

        Returns:
            The stored Game.

        Raises:
            NotFoundError: If the player does not exist.
        """
        self.get_player(player_id)
        game = Game(
            id=next(self._ids["game"]),
            player_id=player_id,
            score=score,
            date=date or datetime.now(timezone.utc),
        )
        self.games[game.id] = game
        logger.debug("Created game %d for player %d", game.id, player_id)
        return game.model_copy()

    def get_game(self, game_id: int) -> Game:
        """Look up a game by id.

        Raises:
            NotFoundError: If no such game exists.
        """
        if game_id not in self.games:
            raise NotFoundError(f"Game {game_id} not found")
        return self.games[game_id].model_copy()

    def update_game(self, game: Game) -> Game:
        """Replace a stored game with ``game``, matched by id.

        Raises:
            NotFoundError: If no game with that id exists.
        """
        if game.id not in self.games:
            raise NotFoundError(f"Game {game.id} not found")
        self.games[game.id] = game.model_copy()
        return game.model_copy()

    def delete_game(self, game_id: int) -> bool:
        """Delete a game and its join records. Returns False if it didn't exist."""
        if self.games.pop(game_id, None) is None:
            return False
        self.game_enemies = [ge for ge in self.game_enemies if ge.game_id != game_id]
        self.game_loot = [gl for gl in self.game_loot if gl.game_id != game_id]
        return True

    def games_for_player(self, player_id: int) -> list[Game]:
        """Return every game played by a player, oldest first."""
        return [g.model_copy() for g in self.games.values() if g.player_id == player_id]

    def top_games(self, limit: int = TOP_GAMES_LIMIT) -> list[Game]:
        """Return the highest-scoring games, best first.

        Args:
            limit: Maximum number of games to return.

        Returns:
            Up to ``limit`` games ordered by score, descending.
        """
        ranked = sorted(self.games.values(), key=lambda g: g.score, reverse=True)
        return [g.model_copy() for g in ranked[:limit]]

    # --- Game joins ---

    def add_enemy_to_game(self, game_id: int, enemy_id: int) -> GameEnemy:
        """Link a stored enemy to a stored game.

        Raises:
            NotFoundError: If the game or the enemy does not exist.
        """
        self.get_game(game_id)
        self.get_enemy(enemy_id)
        link = GameEnemy(game_id=game_id, enemy_id=enemy_id)
        self.game_enemies.append(link)
        return link

    def add_loot_to_game(self, game_id: int, loot_id: int) -> GameLoot:
        """Link a stored loot item to a stored game.

        Raises:
            NotFoundError: If the game or the loot does not exist.
        """
        self.get_game(game_id)
        self.get_loot(loot_id)
        link = GameLoot(game_id=game_id, loot_id=loot_id)
        self.game_loot.append(link)
        return link

    def enemies_for_game(self, game_id: int) -> list[Enemy]:
        """Return the enemies linked to a game, in link order."""
        self.get_game(game_id)
        return [
            self.get_enemy(ge.enemy_id)
            for ge in self.game_enemies
            if ge.game_id == game_id
        ]

    def loot_for_game(self, game_id: int) -> list[Loot]:
        """Return the loot linked to a game, in link order."""
        self.get_game(game_id)
        return [
            self.get_loot(gl.loot_id)
            for gl in self.game_loot
            if gl.game_id == game_id
        ]

    def remove_enemy_from_game(self, game_id: int, enemy_id: int) -> bool:
        """Unlink an enemy from a game. Returns False if it wasn't linked."""
        before = len(self.game_enemies)
        self.game_enemies = [
            ge for ge in self.game_enemies
            if not (ge.game_id == game_id and ge.enemy_id == enemy_id)
        ]
        return len(self.game_enemies) < before

    def remove_loot_from_game(self, game_id: int, loot_id: int) -> bool:
        """Unlink a loot item from a game. Returns False if it wasn't linked."""
        before = len(self.game_loot)
        self.game_loot = [
            gl for gl in self.game_loot
            if not (gl.game_id == game_id and gl.loot_id == loot_id)
        ]
        return len(self.game_loot) < before


def record_battle(
    store: InMemoryStore,
    summary: BattleSummary,
    date: datetime | None = None,
) -> Game:
    """Persist a finished battle and return its Game record.

    Every roster monster is stored with its loot and linked to the game.
    Only the loot of the monsters at ``summary.defeated_indices`` is linked
    as game loot. A player with id 0 is stored as new, otherwise the stored
    player is updated.

    Args:
        store: Where to record the battle.
        summary: The finished battle.
        date: When the game was played; defaults to now (UTC).

    Returns:
        The stored Game.

    Raises:
        NotFoundError: If the summary's player has a non-zero id unknown to
            the store.
    """
    if summary.player.id == 0:
        player = store.add_player(summary.player)
    else:
        player = store.update_player(summary.player)

    game = store.create_game(player.id, score=summary.score, date=date)

    saved_loot: list[Loot] = []
    for enemy, loot in zip(summary.enemies, summary.enemy_loot):
        saved = store.add_loot(loot)
        saved_loot.append(saved)
        saved_enemy = store.add_enemy(enemy.model_copy(update={"loot_id": saved.id}))
        store.add_enemy_to_game(game.id, saved_enemy.id)

    for index in summary.defeated_indices:
        store.add_loot_to_game(game.id, saved_loot[index].id)

    logger.info(
        "Recorded game %d for player %d with score %d",
        game.id,
        player.id,
        game.score,
    )
    return game
