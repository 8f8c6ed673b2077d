"""Tests for outbound queues and frame decoding."""

import asyncio

from shopassist.cobrowse import create_coordinator
from shopassist.cobrowse.lifecycle import decode_frame
from shopassist.cobrowse.transport import ConnectionHub


def drain(queue: asyncio.Queue) -> list:
    messages = []
    while not queue.empty():
        messages.append(queue.get_nowait())
    return messages


def test_send_wraps_event_and_data():
    hub = ConnectionHub()
    queue = hub.open("c1")

    hub.send("c1", "scroll", {"y": 10})

    assert drain(queue) == [{"event": "scroll", "data": {"y": 10}}]


def test_send_to_closed_connection_is_dropped():
    """Test that sending to a closed or unknown connection never raises."""
    hub = ConnectionHub()
    hub.open("c1")
    hub.close("c1")

    hub.send("c1", "scroll", {"y": 10})
    hub.send("unknown", "scroll", {"y": 10})

    assert not hub.is_open("c1")
    assert len(hub) == 0


def test_full_queue_drops_oldest():
    """Test that a slow consumer loses its oldest messages, not the newest."""
    hub = ConnectionHub(queue_size=2)
    queue = hub.open("c1")

    for index in range(3):
        hub.send("c1", "cursor-move", {"x": index})

    assert [message["data"]["x"] for message in drain(queue)] == [1, 2]


def test_decode_frame_accepts_text_and_dicts():
    assert decode_frame('{"event": "join-session", "data": "abc"}') == ("join-session", "abc")
    assert decode_frame({"event": "scroll"}) == ("scroll", None)


def test_decode_frame_rejects_malformed_input():
    assert decode_frame("not json") is None
    assert decode_frame("[1, 2]") is None
    assert decode_frame({"data": {}}) is None
    assert decode_frame({"event": 5}) is None


def test_lifecycle_connect_receive_disconnect():
    """Test the lifecycle manager wiring from connect to cleanup."""
    coordinator = create_coordinator()
    a_id, a_queue = coordinator.connect()
    b_id, b_queue = coordinator.connect()

    assert drain(a_queue) == [{"event": "connected", "data": {"userId": a_id}}]
    drain(b_queue)

    assert coordinator.receive(a_id, '{"event": "join-session", "data": "s"}') == "join-session"
    coordinator.receive(b_id, {"event": "join-session", "data": "s"})
    assert coordinator.receive(b_id, "garbage") is None
    assert coordinator.receive(b_id, {"event": "teleport", "data": {}}) is None
    assert coordinator.receive(b_id, b'{"event": "scroll", "data": {"y": 1}}') == "scroll"

    assert drain(a_queue)[-1] == {"event": "user-joined", "data": {"userId": b_id, "userCount": 2}}

    coordinator.disconnect(b_id)
    assert drain(a_queue) == [{"event": "user-left", "data": {"userId": b_id, "userCount": 1}}]
    assert coordinator.stats() == {
        "active_sessions": 1,
        "joined_connections": 1,
        "open_connections": 1,
    }

    coordinator.disconnect(a_id)
    coordinator.disconnect(a_id)
    assert coordinator.stats() == {
        "active_sessions": 0,
        "joined_connections": 0,
        "open_connections": 0,
    }
