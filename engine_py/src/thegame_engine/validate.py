"""
Command validation for the game room.

Each validator inspects a room without touching it and reports whether the
command may proceed.
"""

from typing import Optional

from . import errors
from .constants import (
    PHASE_IN_PROGRESS, PHASE_NOT_STARTED, is_valid_pile,
)
from .placement import can_place


class ValidationResult:
    """Result of command validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        player_index: Optional[int] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.player_index = player_index

    @classmethod
    def success(cls, player_index: Optional[int] = None) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, player_index=player_index)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def validate_join(room, player_id: str) -> ValidationResult:
    if room.phase != PHASE_NOT_STARTED:
        return ValidationResult.error(errors.GAME_ALREADY_STARTED, "The game is already in progress")
    if len(room.players) >= room.rules.max_players:
        return ValidationResult.error(
            errors.ROOM_FULL, f"Room is full (max {room.rules.max_players} players)"
        )
    if room.find_player_index(player_id) is not None:
        return ValidationResult.error(errors.ALREADY_JOINED, "Already in this room")
    return ValidationResult.success()


def validate_start(room) -> ValidationResult:
    if room.phase != PHASE_NOT_STARTED:
        return ValidationResult.error(errors.GAME_ALREADY_STARTED, "The game has already started")
    if len(room.players) < room.rules.min_players:
        return ValidationResult.error(
            errors.NOT_ENOUGH_PLAYERS, f"Need at least {room.rules.min_players} players"
        )
    if room.rules.require_all_ready and not all(p.ready for p in room.players):
        return ValidationResult.error(errors.PLAYERS_NOT_READY, "Not every player is ready")
    return ValidationResult.success()


def validate_turn(room, player_id: str) -> ValidationResult:
    """Common checks for commands only the current player may issue."""
    player_index = room.find_player_index(player_id)
    if player_index is None:
        return ValidationResult.error(errors.PLAYER_NOT_FOUND, "Player not found")
    if room.phase != PHASE_IN_PROGRESS:
        return ValidationResult.error(errors.GAME_NOT_IN_PROGRESS, "The game is not in progress")
    if player_index != room.turn.current_player_index:
        return ValidationResult.error(errors.NOT_YOUR_TURN, "It is not your turn")
    return ValidationResult.success(player_index)


def validate_play(room, player_id: str, card: int, pile_type: str) -> ValidationResult:
    """
    Validate a card placement.

    Args:
        room: Room the play happens in
        player_id: Acting player
        card: Card to place
        pile_type: Target pile

    Returns:
        ValidationResult carrying the acting player's seat index on success
    """
    result = validate_turn(room, player_id)
    if not result.valid:
        return result

    if not is_valid_pile(pile_type):
        return ValidationResult.error(errors.INVALID_PILE, f"Unknown pile: {pile_type}")

    player = room.players[result.player_index]
    if card not in player.hand:
        return ValidationResult.error(errors.CARD_NOT_IN_HAND, f"You don't hold {card}")

    if not can_place(card, room.piles[pile_type]):
        return ValidationResult.error(
            errors.ILLEGAL_PLACEMENT,
            f"Cannot place {card} on {pile_type} (top is {room.piles[pile_type].top})"
        )

    return result


def validate_end_turn(room, player_id: str) -> ValidationResult:
    result = validate_turn(room, player_id)
    if not result.valid:
        return result

    min_required = room.rules.get_min_cards_required(len(room.deck))
    if room.turn.cards_played_this_turn < min_required:
        return ValidationResult.error(
            errors.MIN_CARDS_NOT_MET,
            f"You must place at least {min_required} card{'s' if min_required > 1 else ''} "
            f"before ending your turn"
        )

    return result


def validate_signal(room, player_id: str, pile_type: str) -> ValidationResult:
    player_index = room.find_player_index(player_id)
    if player_index is None:
        return ValidationResult.error(errors.PLAYER_NOT_FOUND, "Player not found")
    if room.phase != PHASE_IN_PROGRESS:
        return ValidationResult.error(errors.GAME_NOT_IN_PROGRESS, "The game is not in progress")
    if not is_valid_pile(pile_type):
        return ValidationResult.error(errors.INVALID_PILE, f"Unknown pile: {pile_type}")
    return ValidationResult.success(player_index)
