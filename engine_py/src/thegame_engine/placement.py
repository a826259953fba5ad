"""
Pile placement legality.

Ascending piles accept any higher card, descending piles any lower card.
Both directions also accept a card exactly 10 back against the direction
(the jump-back rule).
"""

from typing import Dict, Iterable, List

from .constants import JUMP_BACK_DISTANCE, POOP_MOVE_DISTANCE
from .models import Pile


def can_place(card: int, pile: Pile) -> bool:
    """Check whether a card may be placed on a pile."""
    top = pile.top
    if pile.ascending:
        return card > top or card == top - JUMP_BACK_DISTANCE
    return card < top or card == top + JUMP_BACK_DISTANCE


def is_jump_back(card: int, pile: Pile) -> bool:
    """True when the card would be placed through the jump-back rule."""
    if pile.ascending:
        return card == pile.top - JUMP_BACK_DISTANCE
    return card == pile.top + JUMP_BACK_DISTANCE


def is_poop_move(previous_card: int, card: int) -> bool:
    """Cosmetic flag for a placement far from the previous top."""
    return abs(card - previous_card) >= POOP_MOVE_DISTANCE


def playable_piles(card: int, piles: Dict[str, Pile]) -> List[str]:
    """Pile types the card can legally go on."""
    return [pile_type for pile_type, pile in piles.items() if can_place(card, pile)]


def has_legal_move(hand: Iterable[int], piles: Dict[str, Pile]) -> bool:
    """Whether any card in the hand can go on any pile."""
    return any(can_place(card, pile) for card in hand for pile in piles.values())


def jump_back_cards(hand: Iterable[int], piles: Dict[str, Pile]) -> List[int]:
    """
    Cards from the hand that hit the jump-back rule on at least one pile.

    Args:
        hand: Cards held by a player
        piles: Current piles keyed by pile type

    Returns:
        Sorted list without duplicates
    """
    return sorted({
        card for card in hand
        if any(is_jump_back(card, pile) for pile in piles.values())
    })
