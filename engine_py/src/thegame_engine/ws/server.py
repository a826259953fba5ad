"""
FastAPI WebSocket transport for The Game.

Maps each connection to an opaque player id, forwards commands to the room
engine and broadcasts the results. Failed commands are answered to the
acting player only.
"""

import logging
import uuid
from collections import defaultdict
from typing import Dict, List, Optional, Set, Tuple

import orjson
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..engine import GameRoom
from ..errors import NOT_IN_ROOM, GameError
from ..serialization import get_lobby_state, view_for_player
from ..store import RoomStore
from .events import (
    CardPlayedEvent, EndTurnEvent, ErrorCode, GameStartedEvent, JoinEvent,
    JoinFailedEvent, JoinSuccessEvent, LobbyStateEvent, OutboundEvent,
    OutboundEventType, PlayerDisconnectedEvent, PlayEvent, ReadyEvent,
    RequestStateEvent, SetIntentionEvent, SetWarningEvent, StartEvent,
    TurnEndedEvent, create_error_event, create_invalid_move_event,
    create_signal_event, create_state_full_event, parse_inbound_event,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Global state
store = RoomStore()


def encode_event(event: OutboundEvent) -> str:
    return orjson.dumps(event.model_dump(mode="json")).decode()


class ConnectionManager:
    """Manages WebSocket connections and broadcasting."""

    def __init__(self):
        self.connections: Dict[str, WebSocket] = {}
        self.player_rooms: Dict[str, str] = {}
        self.room_members: Dict[str, Set[str]] = defaultdict(set)

    def connect(self, websocket: WebSocket) -> str:
        player_id = str(uuid.uuid4())
        self.connections[player_id] = websocket
        logger.info(f"Player {player_id} connected")
        return player_id

    def add_to_room(self, player_id: str, room_id: str):
        self.player_rooms[player_id] = room_id
        self.room_members[room_id].add(player_id)

    def room_of(self, player_id: str) -> Optional[str]:
        return self.player_rooms.get(player_id)

    def disconnect(self, player_id: str) -> Optional[str]:
        """Forget a connection. Returns the room it was seated in, if any."""
        self.connections.pop(player_id, None)
        room_id = self.player_rooms.pop(player_id, None)
        if room_id is not None:
            self.room_members[room_id].discard(player_id)
            if not self.room_members[room_id]:
                del self.room_members[room_id]
        logger.info(f"Player {player_id} disconnected from room {room_id}")
        return room_id

    async def send(self, player_id: str, event: OutboundEvent):
        websocket = self.connections.get(player_id)
        if websocket is None:
            return
        try:
            await websocket.send_text(encode_event(event))
        except Exception as e:
            logger.error(f"Error sending to player {player_id}: {e}")

    async def broadcast(self, room_id: str, event: OutboundEvent):
        for player_id in list(self.room_members.get(room_id, ())):
            await self.send(player_id, event)

    async def send_each(self, messages: List[Tuple[str, OutboundEvent]]):
        for player_id, event in messages:
            await self.send(player_id, event)


manager = ConnectionManager()


def personal_views(room: GameRoom, event_class=None) -> List[Tuple[str, OutboundEvent]]:
    """One full view per seated player. Built while the room lock is held."""
    event_class = event_class or create_state_full_event
    return [(player.id, event_class(state=view_for_player(room, player.id))) for player in room.players]


def lobby_event(room: GameRoom) -> LobbyStateEvent:
    return LobbyStateEvent(**get_lobby_state(room))


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Main WebSocket endpoint."""
    await websocket.accept()
    player_id = manager.connect(websocket)

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                data = orjson.loads(raw_data)
                event = parse_inbound_event(data)
                await handle_event(player_id, event)
            except ValueError as e:
                await manager.send(player_id, create_error_event(ErrorCode.INVALID_EVENT, str(e)))
            except GameError as e:
                await manager.send(player_id, create_error_event(ErrorCode.NOT_IN_ROOM, e.message))
            except Exception as e:
                logger.exception(f"Error handling event from {player_id}: {e}")
                await manager.send(player_id, create_error_event(ErrorCode.INTERNAL, "Internal server error"))

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for player {player_id}")
    finally:
        await handle_disconnect(player_id)


async def handle_event(player_id: str, event):
    """Dispatch an inbound event."""
    if isinstance(event, JoinEvent):
        await handle_join(player_id, event)
    elif isinstance(event, ReadyEvent):
        await handle_ready(player_id)
    elif isinstance(event, StartEvent):
        await handle_start(player_id, event)
    elif isinstance(event, PlayEvent):
        await handle_play(player_id, event)
    elif isinstance(event, EndTurnEvent):
        await handle_end_turn(player_id)
    elif isinstance(event, SetWarningEvent):
        await handle_signal(player_id, event.pile_type, OutboundEventType.WARNING_SET)
    elif isinstance(event, SetIntentionEvent):
        await handle_signal(player_id, event.pile_type, OutboundEventType.INTENTION_SET)
    elif isinstance(event, RequestStateEvent):
        await handle_request_state(player_id)
    else:
        raise ValueError(f"Unhandled event type: {type(event)}")


def _room_for(player_id: str) -> Tuple[str, GameRoom]:
    room_id = manager.room_of(player_id)
    if room_id is None:
        raise GameError(NOT_IN_ROOM, "Not in a room")
    return room_id, store.require(room_id)


async def handle_join(player_id: str, event: JoinEvent):
    if manager.room_of(player_id) is not None:
        await manager.send(player_id, JoinFailedEvent(message="Already in a room"))
        return

    room_id = event.room_id
    room = store.get_or_create(room_id)
    with store.lock(room_id):
        result = room.add_player(player_id, event.name)
        if not result.success:
            store.discard_if_empty(room_id)
        lobby = lobby_event(room)

    if not result.success:
        await manager.send(player_id, JoinFailedEvent(code=result.error_code, message=result.message))
        return

    manager.add_to_room(player_id, room_id)
    await manager.send(player_id, JoinSuccessEvent(room_id=room_id, player_id=player_id))
    await manager.broadcast(room_id, lobby)


async def handle_ready(player_id: str):
    room_id, room = _room_for(player_id)
    with store.lock(room_id):
        result = room.toggle_ready(player_id)
        lobby = lobby_event(room)

    if not result.success:
        await manager.send(player_id, create_invalid_move_event(result.error_code, result.message))
        return
    await manager.broadcast(room_id, lobby)


async def handle_start(player_id: str, event: StartEvent):
    room_id, room = _room_for(player_id)
    with store.lock(room_id):
        result = room.start_game(seed=event.seed)
        views = personal_views(room, GameStartedEvent) if result.success else []

    if not result.success:
        await manager.send(player_id, create_invalid_move_event(result.error_code, result.message))
        return
    await manager.send_each(views)


async def handle_play(player_id: str, event: PlayEvent):
    room_id, room = _room_for(player_id)
    with store.lock(room_id):
        result = room.play_card(player_id, event.card, event.pile_type)
        if result.success:
            views = personal_views(room)
            player = room.get_player(player_id)
            played = CardPlayedEvent(
                player_id=player_id,
                player_name=player.name,
                card=result.card,
                pile_type=result.pile_type,
                previous_card=result.previous_card,
                cards_played_this_turn=result.cards_played_this_turn,
                is_poop_move=result.is_poop_move,
                is_defeated=result.is_defeated,
            )

    if not result.success:
        await manager.send(player_id, create_invalid_move_event(result.error_code, result.message))
        return
    await manager.send_each(views)
    await manager.broadcast(room_id, played)


async def handle_end_turn(player_id: str):
    room_id, room = _room_for(player_id)
    with store.lock(room_id):
        result = room.end_turn(player_id)
        if result.success:
            views = personal_views(room)
            previous = room.get_player(result.previous_player_id)
            current = room.get_player(result.current_player_id) if result.current_player_id else None
            ended = TurnEndedEvent(
                previous_player=previous.name,
                current_player=current.name if current else None,
                cards_drawn=result.cards_drawn,
                is_defeated=result.is_defeated,
            )

    if not result.success:
        await manager.send(player_id, create_invalid_move_event(result.error_code, result.message))
        return
    await manager.send_each(views)
    await manager.broadcast(room_id, ended)


async def handle_signal(player_id: str, pile_type: str, kind: OutboundEventType):
    room_id, room = _room_for(player_id)
    with store.lock(room_id):
        if kind == OutboundEventType.WARNING_SET:
            result = room.set_warning(player_id, pile_type)
        else:
            result = room.set_intention(player_id, pile_type)
        views = personal_views(room) if result.success else []

    if not result.success:
        await manager.send(player_id, create_invalid_move_event(result.error_code, result.message))
        return
    await manager.send_each(views)
    await manager.broadcast(room_id, create_signal_event(kind, result))


async def handle_request_state(player_id: str):
    room_id, room = _room_for(player_id)
    with store.lock(room_id):
        state = view_for_player(room, player_id)
    await manager.send(player_id, create_state_full_event(state))


async def handle_disconnect(player_id: str):
    room_id = manager.disconnect(player_id)
    if room_id is None:
        return
    room = store.get(room_id)
    if room is None:
        return

    with store.lock(room_id):
        result = room.remove_player(player_id)
        deleted = store.discard_if_empty(room_id)
        views = [] if deleted else personal_views(room)

    if deleted or not result.player_removed:
        return

    await manager.send_each(views)
    if result.was_current_player and result.new_current_player:
        notice = PlayerDisconnectedEvent(
            message="The current player disconnected",
            new_current_player=result.new_current_player.name,
            is_defeated=result.is_defeated,
        )
    else:
        notice = PlayerDisconnectedEvent(message="A player disconnected", is_defeated=result.is_defeated)
    await manager.broadcast(room_id, notice)
