"""
Basic tests for The Game room engine.
"""

import pytest

from thegame_engine import errors
from thegame_engine.constants import (
    PHASE_IN_PROGRESS, PHASE_NOT_STARTED, PILE_TYPES, TOTAL_CARDS,
)
from thegame_engine.engine import GameRoom
from thegame_engine.rules import create_rules, default_rules
from thegame_engine.shuffle import (
    count_cards, create_deck, draw_cards, shuffle_deck, validate_card_integrity,
)


def test_create_room():
    """Test room creation."""
    room = GameRoom("test-room")
    assert room.room_id == "test-room"
    assert room.phase == PHASE_NOT_STARTED
    assert not room.started and not room.ended
    assert len(room.players) == 0
    assert room.piles["up1"].cards == [1]
    assert room.piles["up2"].cards == [1]
    assert room.piles["down1"].cards == [100]
    assert room.piles["down2"].cards == [100]
    assert room.cards_remaining == TOTAL_CARDS
    assert validate_card_integrity(room)


@pytest.mark.parametrize("seed", [None, 0, 1, 42, 1234])
def test_shuffled_deck_is_permutation(seed):
    deck = shuffle_deck(create_deck(), seed)
    assert len(deck) == 98
    assert sorted(deck) == list(range(2, 100))


def test_seeded_shuffle_is_deterministic():
    assert shuffle_deck(create_deck(), 7) == shuffle_deck(create_deck(), 7)
    assert shuffle_deck(create_deck(), 7) != create_deck()


def test_draw_is_capped_by_deck():
    deck = [5, 6, 7]
    assert draw_cards(deck, 2) == [7, 6]
    assert draw_cards(deck, 5) == [5]
    assert deck == []


def test_join_room():
    """Test player joining room."""
    room = GameRoom("test-room")
    result = room.add_player("p1", "Alice")

    assert result.success
    player = room.players[0]
    assert player.name == "Alice"
    assert player.hand == []
    assert not player.ready


def test_duplicate_join_rejected():
    room = GameRoom("test-room")
    room.add_player("p1", "Alice")
    result = room.add_player("p1", "Alice again")
    assert not result.success
    assert result.error_code == errors.ALREADY_JOINED
    assert len(room.players) == 1


def test_room_full():
    """Test room capacity limit."""
    room = GameRoom("test-room")
    for i in range(default_rules.max_players):
        assert room.add_player(f"p{i}", f"Player {i}").success

    result = room.add_player("extra", "Extra Player")
    assert not result.success
    assert result.error_code == errors.ROOM_FULL
    assert "full" in result.message.lower()


def test_join_after_start_rejected(make_room):
    room = make_room(2)
    result = room.add_player("late", "Latecomer")
    assert not result.success
    assert result.error_code == errors.GAME_ALREADY_STARTED


def test_toggle_ready():
    room = GameRoom("test-room")
    room.add_player("p1", "Alice")
    assert room.toggle_ready("p1").ready is True
    assert room.toggle_ready("p1").ready is False
    assert room.toggle_ready("ghost").error_code == errors.PLAYER_NOT_FOUND


def test_start_game_insufficient_players(make_room):
    room = make_room(1, start=False)
    result = room.start_game()
    assert not result.success
    assert result.error_code == errors.NOT_ENOUGH_PLAYERS
    assert room.phase == PHASE_NOT_STARTED


def test_start_requires_everyone_ready(make_room):
    room = make_room(2, start=False)
    room.toggle_ready("p2")
    result = room.start_game()
    assert not result.success
    assert result.error_code == errors.PLAYERS_NOT_READY


def test_start_without_ready_check():
    room = GameRoom("test-room", rules=create_rules(require_all_ready=False))
    room.add_player("p1", "Alice")
    room.add_player("p2", "Bob")
    assert room.start_game().success


def test_two_player_game_deals_seven(make_room):
    room = make_room(2)
    assert room.phase == PHASE_IN_PROGRESS
    assert [p.hand_size for p in room.players] == [7, 7]
    assert len(room.deck) == 98 - 14
    assert room.turn.current_player_index == 0
    assert room.turn.cards_played_this_turn == 0
    assert room.turn.min_cards_required == 2
    for player in room.players:
        assert player.hand == sorted(player.hand)
    assert validate_card_integrity(room)


@pytest.mark.parametrize("player_count", [3, 4, 5, 6])
def test_larger_games_deal_six(make_room, player_count):
    room = make_room(player_count)
    assert all(p.hand_size == 6 for p in room.players)
    assert len(room.deck) == 98 - 6 * player_count
    assert count_cards(room) == TOTAL_CARDS


def test_start_twice_rejected(make_room):
    room = make_room(2)
    result = room.start_game()
    assert not result.success
    assert result.error_code == errors.GAME_ALREADY_STARTED


def test_seeded_start_is_reproducible(make_room):
    first = make_room(3, seed=99)
    second = make_room(3, seed=99)
    assert [p.hand for p in first.players] == [p.hand for p in second.players]
    assert first.deck == second.deck


def test_ready_locked_after_start(make_room):
    room = make_room(2)
    result = room.toggle_ready("p1")
    assert not result.success
    assert room.players[0].ready


def test_rule_config_validation():
    with pytest.raises(ValueError):
        create_rules(min_players=4, max_players=3)
    rules = create_rules(max_players=4)
    assert rules.validate_player_count(4)
    assert not rules.validate_player_count(5)
    assert rules.get_hand_size(2) == 7
    assert rules.get_hand_size(3) == 6
    assert rules.get_min_cards_required(0) == 1
    assert rules.get_min_cards_required(10) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
