"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import List

from .constants import (
    ASCENDING_START, DESCENDING_START, MIN_CARDS_WITH_DECK, is_ascending,
)


@dataclass
class Player:
    id: str
    name: str
    hand: List[int] = field(default_factory=list)  # kept sorted ascending
    ready: bool = False

    @property
    def hand_size(self) -> int:
        return len(self.hand)


@dataclass
class Pile:
    pile_type: str
    cards: List[int] = field(default_factory=list)  # includes the starting sentinel

    def __post_init__(self):
        if not self.cards:
            self.cards.append(ASCENDING_START if self.ascending else DESCENDING_START)

    @property
    def ascending(self) -> bool:
        return is_ascending(self.pile_type)

    @property
    def top(self) -> int:
        return self.cards[-1]

    @property
    def placed_count(self) -> int:
        """Number of real cards on the pile (sentinel excluded)."""
        return len(self.cards) - 1


@dataclass
class TurnState:
    current_player_index: int = 0
    cards_played_this_turn: int = 0
    min_cards_required: int = MIN_CARDS_WITH_DECK


@dataclass(frozen=True)
class SignalMarker:
    player_id: str
    player_name: str
