"""
Per-player view projection.
"""

from thegame_engine.serialization import get_lobby_state, get_public_room_info, view_for_player


def test_view_shows_only_own_hand(make_room):
    room = make_room(3)
    view = view_for_player(room, "p2")

    assert view["my_hand"] == room.players[1].hand
    assert view["is_my_turn"] is False
    assert view["can_end_turn"] is False
    assert view["current_player_name"] == "Alice"
    for entry in view["players"]:
        assert "hand" not in entry
        assert entry["hand_size"] == 6
    assert [p["is_current_player"] for p in view["players"]] == [True, False, False]


def test_view_for_current_player(make_room):
    room = make_room(2)
    alice = room.players[0]
    room.play_card("p1", alice.hand[0], "up1")
    room.play_card("p1", alice.hand[0], "up1")

    view = view_for_player(room, "p1")

    assert view["is_my_turn"] is True
    assert view["can_end_turn"] is True
    assert view["turn_state"] == {"cards_played_this_turn": 2, "min_cards_required": 2}
    assert view["phase"] == "in_progress"
    assert view["started"] and not view["ended"] and not view["won"]
    assert len(view["piles"]["up1"]) == 3
    assert view["deck_count"] == len(room.deck)
    assert view["cards_remaining"] == room.cards_remaining


def test_view_is_a_copy(make_room):
    room = make_room(2)
    view = view_for_player(room, "p1")
    view["my_hand"].clear()
    view["piles"]["up1"].append(99)
    assert room.players[0].hand_size == 7
    assert room.piles["up1"].cards == [1]


def test_good_move_cards(make_room, arrange):
    room = make_room(2)
    arrange(room, {"p1": [40, 45, 80], "p2": [30]}, deck=[2], tops={
        "up1": 50, "up2": 50, "down1": 70, "down2": 90,
    })
    view = view_for_player(room, "p1")
    assert view["good_move_cards"] == [40, 80]
    # Other players' hints are not leaked
    assert view_for_player(room, "p2")["good_move_cards"] == []


def test_view_for_stranger_and_lobby(make_room):
    room = make_room(2, start=False)
    view = view_for_player(room, "nobody")
    assert view["my_hand"] == []
    assert view["is_my_turn"] is False
    assert view["current_player_name"] == ""
    assert view["players"][0]["ready"] is True

    lobby = get_lobby_state(room)
    assert lobby["started"] is False
    assert [p["name"] for p in lobby["players"]] == ["Alice", "Bob"]


def test_view_reports_signals_and_poop(make_room, arrange):
    room = make_room(2)
    arrange(room, {"p1": [80, 81], "p2": [30]}, deck=[2])
    room.play_card("p1", 80, "up1")
    room.set_warning("p2", "up1")

    view = view_for_player(room, "p1")
    assert view["pile_poop_effects"]["up1"] is True
    assert view["pile_poop_effects"]["up2"] is False
    assert view["pile_warnings"]["up1"] == [{"player_id": "p2", "player_name": "Bob"}]
    assert view["pile_intentions"]["up1"] == []


def test_public_room_info(make_room):
    room = make_room(4)
    info = get_public_room_info(room)
    assert info == {
        "id": "test-room",
        "phase": "in_progress",
        "player_count": 4,
        "max_players": 6,
        "cards_remaining": 98,
    }
