import pytest

from thegame_engine.constants import PHASE_IN_PROGRESS
from thegame_engine.engine import GameRoom
from thegame_engine.models import Pile
from thegame_engine.placement import can_place
from thegame_engine.rules import create_rules

NAMES = ["Alice", "Bob", "Charlie", "Dana", "Eve", "Frank"]


@pytest.fixture
def make_room():
    """Room with ``player_count`` ready players (p1, p2, ...), started by default."""
    def _make(player_count=2, seed=42, start=True, **rule_overrides):
        rules = create_rules(**rule_overrides) if rule_overrides else None
        room = GameRoom("test-room", rules=rules)
        for i in range(player_count):
            room.add_player(f"p{i + 1}", NAMES[i])
            room.toggle_ready(f"p{i + 1}")
        if start:
            result = room.start_game(seed=seed)
            assert result.success
        return room
    return _make


@pytest.fixture
def arrange():
    """Put a room into an exact mid-game position."""
    def _arrange(room, hands, deck=(), tops=None, cards_played=0, current=0):
        room.phase = PHASE_IN_PROGRESS
        for player in room.players:
            player.hand = sorted(hands.get(player.id, []))
        room.deck = list(deck)
        for pile_type, top in (tops or {}).items():
            pile = Pile(pile_type)
            if top != pile.top:
                pile.cards.append(top)
            room.piles[pile_type] = pile
        room.turn.current_player_index = current
        room.turn.cards_played_this_turn = cards_played
        room.update_counters()
        return room
    return _arrange


def first_legal_move(room, player):
    for card in player.hand:
        for pile_type, pile in room.piles.items():
            if can_place(card, pile):
                return card, pile_type
    return None


@pytest.fixture
def legal_move():
    """First (card, pile_type) the player can legally place, or None."""
    return first_legal_move
