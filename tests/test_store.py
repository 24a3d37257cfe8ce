"""Tests for the in-memory record store and battle recording."""

from datetime import datetime, timezone

import pytest

from engine.errors import NotFoundError
from engine.store import InMemoryStore, record_battle
from models.characters import Enemy, Player
from models.game_state import BattleSummary
from models.loot import Loot


def _make_player(name: str = "Ada") -> Player:
    """Helper to create a test player."""
    return Player(name=name, health=30, attack_power=8, luck=0.5)


def _make_enemy(name: str = "Voidmaw fiend") -> Enemy:
    """Helper to create a test enemy."""
    return Enemy(name=name, health=0, attack_power=6, luck=0.3, level=2)


def _make_summary(player: Player | None = None) -> BattleSummary:
    """A finished battle: two monsters, the first one slain."""
    loot_a = Loot(name="Cursed Silver Amulet", value=40)
    loot_b = Loot(name="Dark Obsidian Staff", value=25)
    enemies = [_make_enemy("Voidmaw fiend"), _make_enemy("Toxictail howler")]
    return BattleSummary(
        player=player or _make_player(),
        alive=False,
        loot=[loot_a],
        total_loot_value=40,
        defeated=[enemies[0]],
        defeated_indices=[0],
        enemies=enemies,
        enemy_loot=[loot_a, loot_b],
        experience=20,
        rounds=7,
        score=40,
    )


class TestPlayers:
    """Tests for player records."""

    def test_ids_assigned_in_order(self):
        """Ids start at 1 and count up."""
        store = InMemoryStore()
        assert store.add_player(_make_player("A")).id == 1
        assert store.add_player(_make_player("B")).id == 2

    def test_get_missing_raises(self):
        with pytest.raises(NotFoundError, match="Player 5"):
            InMemoryStore().get_player(5)

    def test_returned_records_are_copies(self):
        """Mutating a returned record leaves the stored one alone."""
        store = InMemoryStore()
        player = store.add_player(_make_player())
        player.health = 1
        assert store.get_player(player.id).health == 30

    def test_update_player(self):
        store = InMemoryStore()
        player = store.add_player(_make_player())
        player.experience = 25
        store.update_player(player)
        assert store.get_player(player.id).experience == 25

    def test_update_unknown_player_raises(self):
        """Updating needs an id the store already knows."""
        with pytest.raises(NotFoundError):
            InMemoryStore().update_player(_make_player().model_copy(update={"id": 9}))

    def test_delete_player(self):
        """Deleting twice reports False the second time."""
        store = InMemoryStore()
        player = store.add_player(_make_player())
        assert store.delete_player(player.id) is True
        assert store.delete_player(player.id) is False


class TestGames:
    """Tests for game records and their joins."""

    def test_create_game_requires_player(self):
        with pytest.raises(NotFoundError):
            InMemoryStore().create_game(1)

    def test_create_game_sets_date(self):
        """Without a date, the game is stamped with an aware UTC time."""
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id, score=12)
        assert game.id == 1
        assert game.score == 12
        assert game.date.tzinfo is not None

    def test_update_game(self):
        """A changed score is stored and returned."""
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id, score=12)
        game.score = 99
        updated = store.update_game(game)
        assert updated.score == 99
        assert store.get_game(game.id).score == 99
        assert store.get_game(game.id).player_id == player.id

    def test_update_game_stores_a_copy(self):
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id, score=12)
        game.score = 30
        store.update_game(game)
        game.score = 0
        assert store.get_game(game.id).score == 30

    def test_update_unknown_game_raises(self):
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id)
        with pytest.raises(NotFoundError, match="Game 7"):
            store.update_game(game.model_copy(update={"id": 7}))

    def test_top_games_ordered_and_limited(self):
        store = InMemoryStore()
        player = store.add_player(_make_player())
        for score in (5, 50, 20, 35):
            store.create_game(player.id, score=score)
        assert [g.score for g in store.top_games(limit=3)] == [50, 35, 20]

    def test_games_for_player(self):
        """Only the given player's games come back."""
        store = InMemoryStore()
        a = store.add_player(_make_player("A"))
        b = store.add_player(_make_player("B"))
        store.create_game(a.id)
        store.create_game(b.id)
        store.create_game(a.id)
        assert len(store.games_for_player(a.id)) == 2
        assert len(store.games_for_player(b.id)) == 1

    def test_enemy_joins(self):
        """Link, list and unlink an enemy."""
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id)
        enemy = store.add_enemy(_make_enemy())
        store.add_enemy_to_game(game.id, enemy.id)
        assert store.enemies_for_game(game.id) == [enemy]
        assert store.remove_enemy_from_game(game.id, enemy.id) is True
        assert store.remove_enemy_from_game(game.id, enemy.id) is False
        assert store.enemies_for_game(game.id) == []

    def test_loot_joins(self):
        """Link, list and unlink a loot item."""
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id)
        loot = store.add_loot(Loot(name="Coin", value=3))
        store.add_loot_to_game(game.id, loot.id)
        assert store.loot_for_game(game.id) == [loot]
        assert store.remove_loot_from_game(game.id, loot.id) is True
        assert store.loot_for_game(game.id) == []

    def test_join_to_missing_enemy_raises(self):
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id)
        with pytest.raises(NotFoundError, match="Enemy"):
            store.add_enemy_to_game(game.id, 42)

    def test_delete_game_removes_joins(self):
        """Deleting a game drops its joins and the game itself."""
        store = InMemoryStore()
        player = store.add_player(_make_player())
        game = store.create_game(player.id)
        enemy = store.add_enemy(_make_enemy())
        store.add_enemy_to_game(game.id, enemy.id)
        assert store.delete_game(game.id) is True
        assert store.game_enemies == []
        assert store.delete_game(game.id) is False
        with pytest.raises(NotFoundError):
            store.get_game(game.id)


class TestRecordBattle:
    """Tests for record_battle()."""

    def test_records_new_player_and_game(self):
        """Player, game, every roster monster and the collected loot are stored."""
        store = InMemoryStore()
        date = datetime(2026, 1, 1, tzinfo=timezone.utc)
        game = record_battle(store, _make_summary(), date=date)

        assert game.score == 40
        assert game.date == date
        assert store.get_player(game.player_id).name == "Ada"

        enemies = store.enemies_for_game(game.id)
        assert [e.name for e in enemies] == ["Voidmaw fiend", "Toxictail howler"]
        assert store.get_loot(enemies[0].loot_id).name == "Cursed Silver Amulet"
        assert store.get_loot(enemies[1].loot_id).name == "Dark Obsidian Staff"

        collected = store.loot_for_game(game.id)
        assert [loot.name for loot in collected] == ["Cursed Silver Amulet"]
        assert collected[0].id == enemies[0].loot_id

    def test_existing_player_is_updated(self):
        """A player with an id is updated rather than stored again."""
        store = InMemoryStore()
        first = record_battle(store, _make_summary())
        player = store.get_player(first.player_id)
        player.experience = 45
        second = record_battle(store, _make_summary(player))
        assert second.player_id == first.player_id
        assert store.get_player(player.id).experience == 45
        assert len(store.games_for_player(player.id)) == 2

    def test_unknown_player_id_raises(self):
        store = InMemoryStore()
        ghost = _make_player().model_copy(update={"id": 99})
        with pytest.raises(NotFoundError):
            record_battle(store, _make_summary(ghost))

    def test_identical_loot_linked_separately(self):
        """Two kills with equal loot link two distinct stored items."""
        store = InMemoryStore()
        loot = Loot(name="Rusty Iron Sword", value=10)
        enemies = [_make_enemy("A"), _make_enemy("B")]
        summary = BattleSummary(
            player=_make_player(),
            alive=True,
            loot=[loot, loot],
            total_loot_value=20,
            defeated=enemies,
            defeated_indices=[0, 1],
            enemies=enemies,
            enemy_loot=[loot, loot],
            score=20,
        )
        game = record_battle(store, summary)
        ids = [item.id for item in store.loot_for_game(game.id)]
        assert len(ids) == 2
        assert len(set(ids)) == 2
        assert len(store.loot) == 2

    def test_equal_loot_links_the_slain_monsters_item(self):
        """Only the killed monster's loot is linked, even if a survivor holds an equal item."""
        store = InMemoryStore()
        loot = Loot(name="Rusty Iron Sword", value=10)
        survivor = Enemy(name="Frostfang biter", health=12, attack_power=6, luck=0.3)
        slain = _make_enemy("Stormclaw reaver")
        summary = BattleSummary(
            player=_make_player(),
            alive=False,
            loot=[loot],
            total_loot_value=10,
            defeated=[slain],
            defeated_indices=[1],
            enemies=[survivor, slain],
            enemy_loot=[loot, loot.model_copy()],
            score=10,
        )
        game = record_battle(store, summary)

        stored_survivor, stored_slain = store.enemies_for_game(game.id)
        collected = store.loot_for_game(game.id)
        assert [item.id for item in collected] == [stored_slain.loot_id]
        assert collected[0].id != stored_survivor.loot_id

    def test_no_kills_links_no_loot(self):
        """Roster loot is stored, but nothing is linked without a kill."""
        store = InMemoryStore()
        summary = _make_summary().model_copy(
            update={"loot": [], "defeated": [], "defeated_indices": [], "score": 0}
        )
        game = record_battle(store, summary)
        assert store.loot_for_game(game.id) == []
        assert len(store.loot) == 2
        assert len(store.enemies_for_game(game.id)) == 2
