import orjson
import pytest

from thegame_engine.results import SignalResult
from thegame_engine.ws.events import (
    CardPlayedEvent, EventType, JoinEvent, OutboundEventType, PlayEvent,
    StartEvent, create_signal_event, parse_inbound_event,
)
from thegame_engine.ws.server import ConnectionManager, encode_event


def test_parse_join_event():
    event = parse_inbound_event({"type": "join", "room_id": "test-room", "name": "Alice"})
    assert isinstance(event, JoinEvent)
    assert event.room_id == "test-room"
    assert event.name == "Alice"


def test_parse_play_event():
    event = parse_inbound_event({"type": "play", "card": 42, "pile_type": "down2"})
    assert isinstance(event, PlayEvent)
    assert event.type == EventType.PLAY
    assert event.card == 42
    assert event.pile_type == "down2"


def test_parse_start_with_seed():
    event = parse_inbound_event({"type": "start", "seed": 5})
    assert isinstance(event, StartEvent)
    assert event.seed == 5


@pytest.mark.parametrize("payload", [
    {"type": "invalid"},
    {"room_id": "no-type"},
    {"type": "join", "room_id": "", "name": "Alice"},
    {"type": "play", "card": 1, "pile_type": "up1"},
    {"type": "play", "card": 100, "pile_type": "up1"},
    {"type": "play", "card": 50, "pile_type": "sideways"},
    {"type": "set_warning"},
    ["not", "an", "object"],
])
def test_parse_rejects_bad_payloads(payload):
    with pytest.raises(ValueError):
        parse_inbound_event(payload)


def test_encode_outbound_event():
    event = CardPlayedEvent(
        player_id="p1", player_name="Alice", card=30, pile_type="up1",
        previous_card=5, cards_played_this_turn=1, is_poop_move=True, is_defeated=False,
    )
    decoded = orjson.loads(encode_event(event))
    assert decoded["type"] == "card_played"
    assert decoded["previous_card"] == 5
    assert decoded["is_poop_move"] is True
    assert isinstance(decoded["timestamp"], float)


def test_signal_event_from_result():
    result = SignalResult(success=True, player_id="p1", player_name="Alice", pile_type="up2", is_active=True)
    event = create_signal_event(OutboundEventType.INTENTION_SET, result)
    assert event.model_dump(mode="json")["type"] == "intention_set"
    assert event.is_active


class FakeWebSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_text(self, text):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(orjson.loads(text))


@pytest.mark.asyncio
async def test_broadcast_reaches_room_members_only():
    manager = ConnectionManager()
    alice, bob, carol = FakeWebSocket(), FakeWebSocket(fail=True), FakeWebSocket()
    alice_id = manager.connect(alice)
    bob_id = manager.connect(bob)
    carol_id = manager.connect(carol)
    manager.add_to_room(alice_id, "room-a")
    manager.add_to_room(bob_id, "room-a")
    manager.add_to_room(carol_id, "room-b")

    event = CardPlayedEvent(
        player_id=alice_id, player_name="Alice", card=30, pile_type="up1",
        previous_card=1, cards_played_this_turn=1, is_poop_move=True, is_defeated=False,
    )
    await manager.broadcast("room-a", event)

    assert [msg["type"] for msg in alice.sent] == ["card_played"]
    assert carol.sent == []
    assert bob.sent == []


def test_manager_disconnect_forgets_room():
    manager = ConnectionManager()
    player_id = manager.connect(FakeWebSocket())
    manager.add_to_room(player_id, "room-a")

    assert manager.disconnect(player_id) == "room-a"
    assert manager.room_of(player_id) is None
    assert "room-a" not in manager.room_members
    assert manager.disconnect(player_id) is None
