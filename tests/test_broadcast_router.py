"""
Broadcast router and event hub fan-out tests.
"""

import asyncio

import pytest

from engine.events import Event
from engine.hub import BroadcastRouter, Connection, ConnectionRegistry, ConnectionState, EventHub


def _event(subject="svc-a", detail="deployed"):
    return Event.create("repo-update", subject, detail)


@pytest.mark.asyncio
async def test_router_isolates_refusing_connection(make_socket):
    reg = ConnectionRegistry()
    evicted = []

    def evict(conn, reason):
        reg.unregister(conn.connection_id)
        evicted.append((conn.connection_id, reason))

    router = BroadcastRouter(reg, evict)
    good = [Connection(make_socket()) for _ in range(2)]
    full = Connection(make_socket(), queue_size=1)
    full.try_send({"filler": True})
    for c in (*good, full):
        reg.register(c)

    report = router.emit(_event())
    assert report.attempted == 3
    assert report.delivered == 2
    assert report.failed == (full.connection_id,)
    assert evicted == [(full.connection_id, "outbox full")]
    assert len(reg) == 2
    assert not report.all_failed
    assert all(c.pending == 1 for c in good)


@pytest.mark.asyncio
async def test_fan_out_isolation_with_failing_transport(make_socket):
    hub = EventHub()
    sockets = [make_socket(), make_socket("failing"), make_socket()]
    conns = [hub.subscribe(s) for s in sockets]

    hub.emit(_event())
    await asyncio.gather(*(asyncio.wait_for(c.flush(), 1) for c in conns))

    for sock in (sockets[0], sockets[2]):
        assert [m["type"] for m in sock.messages()] == ["info", "repo-update"]
    assert conns[1].state is ConnectionState.evicted
    assert conns[1].connection_id not in hub.registry
    assert hub.subscriber_count == 2

    report = hub.emit(_event(detail="rolled-back"))
    assert report.attempted == 2 and report.delivered == 2
    await hub.stop()


@pytest.mark.asyncio
async def test_welcome_then_only_new_events(make_socket):
    hub = EventHub(welcome_message="hi there")
    early = make_socket()
    hub.subscribe(early)
    for i in range(5):
        hub.emit(_event(subject=f"svc-{i}"))

    late_sock = make_socket()
    late = hub.subscribe(late_sock)
    await asyncio.wait_for(late.flush(), 1)
    assert late_sock.messages() == [{"type": "info", "message": "hi there"}]

    hub.emit(_event(subject="svc-new"))
    await asyncio.wait_for(late.flush(), 1)
    msgs = late_sock.messages()
    assert len(msgs) == 2
    assert msgs[1]["repo"] == "svc-new"
    assert msgs[1]["event"] == "deployed"
    assert msgs[1]["timestamp"].endswith("Z")
    await hub.stop()


@pytest.mark.asyncio
async def test_per_subscriber_fifo(make_socket):
    hub = EventHub()
    sock = make_socket()
    conn = hub.subscribe(sock)
    for i in range(20):
        hub.emit(_event(subject=f"svc-{i}"))
    await asyncio.wait_for(conn.flush(), 1)
    assert [m["repo"] for m in sock.messages()[1:]] == [f"svc-{i}" for i in range(20)]
    await hub.stop()


@pytest.mark.asyncio
async def test_report_all_failed(make_socket):
    hub = EventHub(queue_size=1)
    conn = hub.subscribe(make_socket())
    # the welcome record still occupies the single outbox slot
    report = hub.emit(_event())
    assert report.all_failed
    assert report.to_dict()["failed"] == [conn.connection_id]
    await hub.stop()


@pytest.mark.asyncio
async def test_emit_without_subscribers():
    hub = EventHub()
    report = hub.emit(_event())
    assert report.attempted == 0 and not report.all_failed


@pytest.mark.asyncio
async def test_unsubscribe_is_idempotent(make_socket):
    hub = EventHub()
    sock = make_socket()
    conn = hub.subscribe(sock)
    await hub.unsubscribe(conn.connection_id)
    await hub.unsubscribe(conn.connection_id)
    assert hub.subscriber_count == 0
    assert sock.closed_with is None
