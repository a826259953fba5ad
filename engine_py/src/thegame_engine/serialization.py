"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, Optional

from .constants import SIGNAL_INTENTION, SIGNAL_WARNING
from .placement import jump_back_cards


def view_for_player(room, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the read-only view one player receives.

    Args:
        room: GameRoom to project
        viewer_id: ID of the player viewing the state (to show their cards)

    Returns:
        Dictionary safe for JSON transmission; other players' hands appear
        only as counts
    """
    viewer_index = room.find_player_index(viewer_id) if viewer_id else None
    viewer = room.players[viewer_index] if viewer_index is not None else None
    current = room.current_player if room.started else None

    return {
        "room_id": room.room_id,
        "phase": room.phase,
        "started": room.started,
        "ended": room.ended,
        "won": room.won,
        "piles": {pile_type: pile.cards.copy() for pile_type, pile in room.piles.items()},
        "pile_warnings": room.signals.snapshot(SIGNAL_WARNING),
        "pile_intentions": room.signals.snapshot(SIGNAL_INTENTION),
        "pile_poop_effects": dict(room.pile_poop_effects),
        "deck_count": len(room.deck),
        "cards_remaining": room.cards_remaining,
        "current_player_index": room.turn.current_player_index,
        "turn_state": {
            "cards_played_this_turn": room.turn.cards_played_this_turn,
            "min_cards_required": room.turn.min_cards_required,
        },
        "players": [
            serialize_player_for_list(player, is_current=(room.started and index == room.turn.current_player_index))
            for index, player in enumerate(room.players)
        ],
        "my_hand": viewer.hand.copy() if viewer else [],
        "is_my_turn": (
            room.started and viewer_index is not None
            and viewer_index == room.turn.current_player_index
        ),
        "can_end_turn": room.can_player_end_turn(viewer_id) if viewer else False,
        "current_player_name": current.name if current else "",
        "good_move_cards": jump_back_cards(viewer.hand, room.piles) if viewer else [],
    }


def serialize_player_for_list(player, is_current: bool = False) -> Dict[str, Any]:
    """Serialize player for the shared player list."""
    return {
        "id": player.id,
        "name": player.name,
        "hand_size": player.hand_size,
        "ready": player.ready,
        "is_current_player": is_current,
    }


def get_lobby_state(room) -> Dict[str, Any]:
    """Player list and start flag sent while seats change."""
    return {
        "players": [serialize_player_for_list(player) for player in room.players],
        "started": room.started,
    }


def get_public_room_info(room) -> Dict[str, Any]:
    """Get public information about a room for listings."""
    return {
        "id": room.room_id,
        "phase": room.phase,
        "player_count": len(room.players),
        "max_players": room.rules.max_players,
        "cards_remaining": room.cards_remaining,
    }
