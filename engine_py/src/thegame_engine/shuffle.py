"""
Card shuffling and dealing utilities.
"""

import random
from typing import Dict, Iterable, List, Optional

from .constants import CARD_MAX, CARD_MIN
from .models import Player


def create_deck() -> List[int]:
    """Create the 98-card deck (2..99)."""
    return list(range(CARD_MIN, CARD_MAX + 1))


def shuffle_deck(deck: List[int], seed: Optional[int] = None) -> List[int]:
    """
    Shuffle a deck deterministically if seed is provided.

    Args:
        deck: List of cards to shuffle
        seed: Optional seed for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()

    if seed is not None:
        rng = random.Random(seed)
        rng.shuffle(deck_copy)
    else:
        random.shuffle(deck_copy)

    return deck_copy


def draw_cards(deck: List[int], count: int) -> List[int]:
    """
    Draw up to ``count`` cards from the top of the deck.

    The deck is mutated; fewer cards come back when it runs out.
    """
    drawn = []
    for _ in range(count):
        if not deck:
            break
        drawn.append(deck.pop())
    return drawn


def sort_hand(hand: Iterable[int]) -> List[int]:
    return sorted(hand)


def deal_hands(deck: List[int], players: List[Player], hand_size: int) -> Dict[str, List[int]]:
    """
    Deal ``hand_size`` cards to every player from the top of the deck.

    Args:
        deck: Shuffled deck, mutated in place
        players: Players in seating order
        hand_size: Cards per player

    Returns:
        Dictionary mapping player_id to their dealt cards
    """
    hands = {}
    for player in players:
        player.hand = sort_hand(draw_cards(deck, hand_size))
        hands[player.id] = player.hand
    return hands


def collect_cards(room) -> List[int]:
    """All real cards currently held by deck, hands and piles."""
    cards = list(room.deck)
    for player in room.players:
        cards.extend(player.hand)
    for pile in room.piles.values():
        cards.extend(pile.cards[1:])
    return cards


def count_cards(room) -> int:
    """Deck + hands + placed cards; 98 whenever the room is consistent."""
    return (
        len(room.deck)
        + sum(player.hand_size for player in room.players)
        + sum(pile.placed_count for pile in room.piles.values())
    )


def validate_card_integrity(room) -> bool:
    """
    Validate that all cards are accounted for and no duplicates exist.

    Args:
        room: GameRoom to validate

    Returns:
        True if every card 2..99 sits in exactly one of deck, hand or pile
    """
    all_cards = collect_cards(room)
    return (
        len(all_cards) == len(set(all_cards))
        and set(all_cards) == set(create_deck())
    )
