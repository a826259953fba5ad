"""
WebSocket event models and validation.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ..constants import CARD_MAX, CARD_MIN, PileType


class EventType(str, Enum):
    """Inbound event types."""
    JOIN = "join"
    READY = "ready"
    START = "start"
    PLAY = "play"
    END_TURN = "end_turn"
    SET_WARNING = "set_warning"
    SET_INTENTION = "set_intention"
    REQUEST_STATE = "request_state"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    JOIN_SUCCESS = "join_success"
    JOIN_FAILED = "join_failed"
    LOBBY_STATE = "lobby_state"
    GAME_STARTED = "game_started"
    STATE_FULL = "state_full"
    CARD_PLAYED = "card_played"
    TURN_ENDED = "turn_ended"
    WARNING_SET = "warning_set"
    INTENTION_SET = "intention_set"
    PLAYER_DISCONNECTED = "player_disconnected"
    INVALID_MOVE = "invalid_move"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Error codes for events that never reached the engine."""
    INVALID_EVENT = "INVALID_EVENT"
    NOT_IN_ROOM = "NOT_IN_ROOM"
    INTERNAL = "INTERNAL"


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    type: EventType


class JoinEvent(BaseEvent):
    """Join room event."""
    type: EventType = EventType.JOIN
    room_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=30)


class ReadyEvent(BaseEvent):
    """Toggle ready flag."""
    type: EventType = EventType.READY


class StartEvent(BaseEvent):
    """Start game event."""
    type: EventType = EventType.START
    seed: Optional[int] = None


class PlayEvent(BaseEvent):
    """Place one card on a pile."""
    type: EventType = EventType.PLAY
    card: int = Field(..., ge=CARD_MIN, le=CARD_MAX)
    pile_type: PileType


class EndTurnEvent(BaseEvent):
    type: EventType = EventType.END_TURN


class SetWarningEvent(BaseEvent):
    type: EventType = EventType.SET_WARNING
    pile_type: PileType


class SetIntentionEvent(BaseEvent):
    type: EventType = EventType.SET_INTENTION
    pile_type: PileType


class RequestStateEvent(BaseEvent):
    """Request full state event."""
    type: EventType = EventType.REQUEST_STATE


# Union type for all inbound events
InboundEvent = Union[
    JoinEvent,
    ReadyEvent,
    StartEvent,
    PlayEvent,
    EndTurnEvent,
    SetWarningEvent,
    SetIntentionEvent,
    RequestStateEvent,
]


# Outbound event models
class OutboundEvent(BaseModel):
    type: OutboundEventType
    timestamp: float = Field(default_factory=time.time)


class JoinSuccessEvent(OutboundEvent):
    """Join success confirmation event."""
    type: OutboundEventType = OutboundEventType.JOIN_SUCCESS
    room_id: str
    player_id: str


class JoinFailedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.JOIN_FAILED
    code: Optional[str] = None
    message: str


class LobbyStateEvent(OutboundEvent):
    """Seat list while players gather."""
    type: OutboundEventType = OutboundEventType.LOBBY_STATE
    players: List[Dict[str, Any]]
    started: bool


class StateFullEvent(OutboundEvent):
    """Full per-player view."""
    type: OutboundEventType = OutboundEventType.STATE_FULL
    state: Dict[str, Any]


class GameStartedEvent(StateFullEvent):
    type: OutboundEventType = OutboundEventType.GAME_STARTED


class CardPlayedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.CARD_PLAYED
    player_id: str
    player_name: str
    card: int
    pile_type: str
    previous_card: int
    cards_played_this_turn: int
    is_poop_move: bool
    is_defeated: bool


class TurnEndedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.TURN_ENDED
    previous_player: str
    current_player: Optional[str] = None
    cards_drawn: int
    is_defeated: bool


class SignalSetEvent(OutboundEvent):
    """Warning or intention toggled on a pile."""
    player_id: str
    player_name: str
    pile_type: str
    is_active: bool


class PlayerDisconnectedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.PLAYER_DISCONNECTED
    message: str
    new_current_player: Optional[str] = None
    is_defeated: bool = False


class InvalidMoveEvent(OutboundEvent):
    """Rejected command, sent to the acting player only."""
    type: OutboundEventType = OutboundEventType.INVALID_MOVE
    code: Optional[str] = None
    message: str


class ErrorEvent(OutboundEvent):
    """Error event."""
    type: OutboundEventType = OutboundEventType.ERROR
    code: ErrorCode
    message: str


EVENT_MAP = {
    EventType.JOIN: JoinEvent,
    EventType.READY: ReadyEvent,
    EventType.START: StartEvent,
    EventType.PLAY: PlayEvent,
    EventType.END_TURN: EndTurnEvent,
    EventType.SET_WARNING: SetWarningEvent,
    EventType.SET_INTENTION: SetIntentionEvent,
    EventType.REQUEST_STATE: RequestStateEvent,
}


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from WebSocket

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")

    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    event_class = EVENT_MAP[event_type]

    try:
        return event_class(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid event data: {e}")


def create_error_event(code: ErrorCode, message: str) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(code=code, message=message)


def create_invalid_move_event(code: Optional[str], message: str) -> InvalidMoveEvent:
    return InvalidMoveEvent(code=code, message=message)


def create_state_full_event(state: Dict[str, Any]) -> StateFullEvent:
    """Create a full state event."""
    return StateFullEvent(state=state)


def create_signal_event(kind: OutboundEventType, result) -> SignalSetEvent:
    """Create a warning_set / intention_set event from a SignalResult."""
    return SignalSetEvent(
        type=kind,
        player_id=result.player_id,
        player_name=result.player_name,
        pile_type=result.pile_type,
        is_active=result.is_active,
    )
