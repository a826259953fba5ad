"""Game constants and utilities"""

from typing import List, Literal

PileType = Literal['up1', 'up2', 'down1', 'down2']

CARD_MIN = 2
CARD_MAX = 99
TOTAL_CARDS = CARD_MAX - CARD_MIN + 1  # 98 real cards

ASCENDING_START = 1
DESCENDING_START = 100

ASCENDING_PILES: List[str] = ['up1', 'up2']
DESCENDING_PILES: List[str] = ['down1', 'down2']
PILE_TYPES: List[str] = ASCENDING_PILES + DESCENDING_PILES

JUMP_BACK_DISTANCE = 10
POOP_MOVE_DISTANCE = 20

# Minimum cards to place before a turn may end
MIN_CARDS_WITH_DECK = 2
MIN_CARDS_EMPTY_DECK = 1

# Phases
PHASE_NOT_STARTED = 'not_started'
PHASE_IN_PROGRESS = 'in_progress'
PHASE_WON = 'won'
PHASE_LOST = 'lost'
ENDED_PHASES = (PHASE_WON, PHASE_LOST)

# Signal kinds
SIGNAL_WARNING = 'warning'
SIGNAL_INTENTION = 'intention'


def is_ascending(pile_type: str) -> bool:
    return pile_type in ASCENDING_PILES


def is_valid_pile(pile_type: str) -> bool:
    return pile_type in PILE_TYPES
