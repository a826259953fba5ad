"""Game room: the per-room engine and its command API"""

import logging
from typing import Dict, List, Optional

from . import errors
from .constants import (
    ENDED_PHASES, PHASE_IN_PROGRESS, PHASE_LOST, PHASE_NOT_STARTED, PHASE_WON,
    PILE_TYPES, SIGNAL_INTENTION, SIGNAL_WARNING,
)
from .models import Pile, Player, TurnState
from .placement import has_legal_move, is_poop_move
from .results import (
    CurrentPlayerInfo, EndTurnResult, JoinResult, LeaveResult, PlayResult,
    ReadyResult, SignalResult, StartResult,
)
from .rules import RuleConfig, default_rules
from .shuffle import create_deck, deal_hands, draw_cards, shuffle_deck, sort_hand
from .signals import SignalBoard
from .validate import (
    validate_end_turn, validate_join, validate_play, validate_signal, validate_start,
)

logger = logging.getLogger(__name__)


class GameRoom:
    """
    One table of The Game.

    Commands validate, mutate, recompute counters and run the defeat check
    before returning. Callers must serialize commands per room (see
    ``RoomStore.lock``).
    """

    def __init__(self, room_id: str, rules: Optional[RuleConfig] = None, seed: Optional[int] = None):
        self.room_id = room_id
        self.rules = rules or default_rules
        self.players: List[Player] = []
        self.deck: List[int] = shuffle_deck(create_deck(), seed)
        self.piles: Dict[str, Pile] = {pile_type: Pile(pile_type) for pile_type in PILE_TYPES}
        self.pile_poop_effects: Dict[str, bool] = {pile_type: False for pile_type in PILE_TYPES}
        self.turn = TurnState()
        self.signals = SignalBoard()
        self.phase = PHASE_NOT_STARTED
        self.cards_remaining = len(self.deck)

    # --- lookups -----------------------------------------------------------

    @property
    def started(self) -> bool:
        return self.phase != PHASE_NOT_STARTED

    @property
    def ended(self) -> bool:
        return self.phase in ENDED_PHASES

    @property
    def won(self) -> bool:
        return self.phase == PHASE_WON

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self.turn.current_player_index < len(self.players):
            return self.players[self.turn.current_player_index]
        return None

    def find_player_index(self, player_id: str) -> Optional[int]:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return None

    def get_player(self, player_id: str) -> Optional[Player]:
        index = self.find_player_index(player_id)
        return self.players[index] if index is not None else None

    def can_player_end_turn(self, player_id: str) -> bool:
        if self.phase != PHASE_IN_PROGRESS:
            return False
        if self.find_player_index(player_id) != self.turn.current_player_index:
            return False
        return self.turn.cards_played_this_turn >= self.turn.min_cards_required

    # --- lobby -------------------------------------------------------------

    def add_player(self, player_id: str, player_name: str) -> JoinResult:
        validation = validate_join(self, player_id)
        if not validation.valid:
            logger.debug(f"Join rejected in room {self.room_id}: {validation.error_message}")
            return JoinResult.error(validation.error_code, validation.error_message)

        self.players.append(Player(id=player_id, name=player_name))
        logger.info(f"{player_name} ({player_id}) joined room {self.room_id}")
        return JoinResult(success=True)

    def toggle_ready(self, player_id: str) -> ReadyResult:
        player = self.get_player(player_id)
        if not player:
            return ReadyResult.error(errors.PLAYER_NOT_FOUND, "Player not found")
        if self.started:
            return ReadyResult.error(errors.GAME_ALREADY_STARTED, "The game has already started")
        player.ready = not player.ready
        return ReadyResult(success=True, ready=player.ready)

    def start_game(self, seed: Optional[int] = None) -> StartResult:
        validation = validate_start(self)
        if not validation.valid:
            return StartResult.error(validation.error_code, validation.error_message)

        if seed is not None:
            self.deck = shuffle_deck(create_deck(), seed)

        deal_hands(self.deck, self.players, self.rules.get_hand_size(len(self.players)))
        self.phase = PHASE_IN_PROGRESS
        self.turn = TurnState(current_player_index=0, cards_played_this_turn=0)
        self.update_counters()
        logger.info(f"Game started in room {self.room_id} with {len(self.players)} players")

        is_defeated = self.check_defeat_condition()
        return StartResult(success=True, is_defeated=is_defeated)

    # --- turn commands -----------------------------------------------------

    def play_card(self, player_id: str, card: int, pile_type: str) -> PlayResult:
        validation = validate_play(self, player_id, card, pile_type)
        if not validation.valid:
            logger.debug(f"Play rejected in room {self.room_id}: {validation.error_message}")
            return PlayResult.error(validation.error_code, validation.error_message)

        player = self.players[validation.player_index]
        pile = self.piles[pile_type]
        previous_card = pile.top

        player.hand.remove(card)
        pile.cards.append(card)
        self.turn.cards_played_this_turn += 1

        poop = is_poop_move(previous_card, card)
        self.pile_poop_effects[pile_type] = poop

        self.update_counters()
        is_defeated = self.check_defeat_condition()

        return PlayResult(
            success=True,
            card=card,
            pile_type=pile_type,
            previous_card=previous_card,
            is_poop_move=poop,
            is_defeated=is_defeated,
            cards_played_this_turn=self.turn.cards_played_this_turn,
        )

    def end_turn(self, player_id: str) -> EndTurnResult:
        validation = validate_end_turn(self, player_id)
        if not validation.valid:
            logger.debug(f"End turn rejected in room {self.room_id}: {validation.error_message}")
            return EndTurnResult.error(validation.error_code, validation.error_message)

        player = self.players[validation.player_index]
        drawn = draw_cards(self.deck, self.turn.cards_played_this_turn)
        player.hand = sort_hand(player.hand + drawn)

        self._advance_turn()
        self.update_counters()
        is_defeated = self.check_defeat_condition()

        next_player = self.current_player
        return EndTurnResult(
            success=True,
            is_defeated=is_defeated,
            cards_drawn=len(drawn),
            previous_player_id=player.id,
            current_player_id=next_player.id if next_player else None,
        )

    def _advance_turn(self):
        """Move to the next seat and give that player a fresh turn."""
        self.turn.current_player_index = (self.turn.current_player_index + 1) % len(self.players)
        self.turn.cards_played_this_turn = 0

    # --- signals -----------------------------------------------------------

    def set_warning(self, player_id: str, pile_type: str) -> SignalResult:
        return self._toggle_signal(SIGNAL_WARNING, player_id, pile_type)

    def set_intention(self, player_id: str, pile_type: str) -> SignalResult:
        return self._toggle_signal(SIGNAL_INTENTION, player_id, pile_type)

    def _toggle_signal(self, kind: str, player_id: str, pile_type: str) -> SignalResult:
        validation = validate_signal(self, player_id, pile_type)
        if not validation.valid:
            return SignalResult.error(validation.error_code, validation.error_message)

        player = self.players[validation.player_index]
        self.signals.toggle(kind, pile_type, player.id, player.name)
        return SignalResult(
            success=True,
            player_id=player.id,
            player_name=player.name,
            pile_type=pile_type,
            is_active=self.signals.is_active(kind, pile_type),
        )

    # --- presence ----------------------------------------------------------

    def remove_player(self, player_id: str) -> LeaveResult:
        player_index = self.find_player_index(player_id)
        if player_index is None:
            return LeaveResult(player_removed=False)

        player = self.players.pop(player_index)
        self.signals.remove_player(player_id)
        logger.info(f"{player.name} ({player_id}) left room {self.room_id}")

        if not self.started:
            return LeaveResult(player_removed=True)

        cards_returned = 0
        if self.phase == PHASE_IN_PROGRESS and self.rules.return_hand_on_leave and player.hand:
            cards_returned = len(player.hand)
            self.deck = shuffle_deck(self.deck + player.hand)
            player.hand = []

        was_current_player = player_index == self.turn.current_player_index
        if was_current_player:
            if self.turn.current_player_index >= len(self.players):
                self.turn.current_player_index = 0
            self.turn.cards_played_this_turn = 0
        elif player_index < self.turn.current_player_index:
            self.turn.current_player_index -= 1

        self.update_counters()
        is_defeated = self.check_defeat_condition()

        new_current_player = None
        if was_current_player and self.players:
            current = self.current_player
            new_current_player = CurrentPlayerInfo(id=current.id, name=current.name)

        return LeaveResult(
            player_removed=True,
            was_current_player=was_current_player,
            new_current_player=new_current_player,
            is_defeated=is_defeated,
            cards_returned=cards_returned,
        )

    @property
    def is_empty(self) -> bool:
        return not self.players

    # --- derived state -----------------------------------------------------

    def update_counters(self):
        """Recompute remaining cards and the turn minimum; detect a win."""
        self.cards_remaining = len(self.deck) + sum(p.hand_size for p in self.players)
        self.turn.min_cards_required = self.rules.get_min_cards_required(len(self.deck))

        if self.phase == PHASE_IN_PROGRESS and self.cards_remaining == 0:
            self.phase = PHASE_WON
            logger.info(f"Room {self.room_id}: every card placed, game won")

    def check_defeat_condition(self) -> bool:
        """
        End the game if the current player can neither meet the turn minimum
        nor place any card.

        Returns:
            True if this check ended the game in defeat
        """
        if self.phase != PHASE_IN_PROGRESS or not self.players:
            return False

        current = self.current_player
        if current is None:
            return False

        if self.turn.cards_played_this_turn >= self.turn.min_cards_required:
            return False

        if has_legal_move(current.hand, self.piles):
            return False

        self.phase = PHASE_LOST
        logger.info(
            f"Room {self.room_id}: {current.name} cannot place a card, game lost "
            f"({self.cards_remaining} cards remaining)"
        )
        return True
