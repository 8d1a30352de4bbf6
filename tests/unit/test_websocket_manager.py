"""
Tests for the per-connection weather broadcaster.
"""

import asyncio
from typing import List, Optional

import pytest

from feedhub.core.websocket_manager import WEATHER_EVENT, ConnectionManager, manager


class FakeSocket:
    def __init__(self, fail_on_send: bool = False):
        self.accepted = False
        self.sent: List[dict] = []
        self.fail_on_send = fail_on_send

    async def accept(self):
        self.accepted = True

    async def send_json(self, data: dict):
        if self.fail_on_send:
            raise RuntimeError("socket closed")
        self.sent.append(data)


def fixed_fetch(value: Optional[float]):
    async def fetch():
        return value
    return fetch


async def wait_for(predicate, timeout: float = 1.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


class TestConnectionManager:
    @pytest.mark.asyncio
    async def test_each_connection_gets_its_own_feed(self):
        broadcaster = ConnectionManager(fetch=fixed_fetch(18.5), interval=0.01)
        first, second = FakeSocket(), FakeSocket()

        first_id = await broadcaster.connect(first)
        second_id = await broadcaster.connect(second)

        assert first.accepted and second.accepted
        assert first_id != second_id
        assert broadcaster.task_count() == 2

        await wait_for(lambda: first.sent and second.sent)
        assert first.sent[0] == {"event": WEATHER_EVENT, "data": 18.5}

        await broadcaster.shutdown()

    @pytest.mark.asyncio
    async def test_disconnect_cancels_only_that_connection(self):
        broadcaster = ConnectionManager(fetch=fixed_fetch(20.0), interval=0.01)
        first, second = FakeSocket(), FakeSocket()
        first_id = await broadcaster.connect(first)
        await broadcaster.connect(second)
        first_task = broadcaster.poll_tasks[first_id]

        await broadcaster.disconnect(first_id)

        assert first_task.cancelled()
        assert first_id not in broadcaster.poll_tasks
        assert first_id not in broadcaster.active_connections
        assert broadcaster.task_count() == 1

        sent_before = len(first.sent)
        received_before = len(second.sent)
        await wait_for(lambda: len(second.sent) > received_before)
        assert len(first.sent) == sent_before

        await broadcaster.shutdown()

    @pytest.mark.asyncio
    async def test_failed_fetch_skips_tick(self):
        broadcaster = ConnectionManager(fetch=fixed_fetch(None), interval=0.01)
        socket = FakeSocket()
        connection_id = await broadcaster.connect(socket)

        await asyncio.sleep(0.05)

        assert socket.sent == []
        assert not broadcaster.poll_tasks[connection_id].done()
        await broadcaster.shutdown()

    @pytest.mark.asyncio
    async def test_send_failure_stops_feed(self):
        broadcaster = ConnectionManager(fetch=fixed_fetch(1.0), interval=0.01)
        connection_id = await broadcaster.connect(FakeSocket(fail_on_send=True))

        await wait_for(lambda: broadcaster.poll_tasks[connection_id].done())

        assert broadcaster.task_count() == 0
        await broadcaster.disconnect(connection_id)
        assert broadcaster.poll_tasks == {}

    @pytest.mark.asyncio
    async def test_shutdown_cancels_everything(self):
        broadcaster = ConnectionManager(fetch=fixed_fetch(1.0), interval=10)
        for _ in range(3):
            await broadcaster.connect(FakeSocket())
        tasks = list(broadcaster.poll_tasks.values())

        await broadcaster.shutdown()

        assert all(task.cancelled() for task in tasks)
        assert broadcaster.poll_tasks == {}
        assert broadcaster.active_connections == {}

    @pytest.mark.asyncio
    async def test_unknown_connection_disconnect_is_noop(self):
        broadcaster = ConnectionManager(fetch=fixed_fetch(1.0), interval=10)

        await broadcaster.disconnect("missing")

        assert broadcaster.task_count() == 0


def test_websocket_endpoint_pushes_weather(client, monkeypatch):
    monkeypatch.setattr(manager, "fetch", fixed_fetch(21.5))
    monkeypatch.setattr(manager, "interval", 0.01)

    with client.websocket_connect("/ws") as websocket:
        assert websocket.receive_json() == {"event": "FromAPI", "data": 21.5}
        assert len(manager.poll_tasks) == 1

    assert manager.poll_tasks == {}
    assert manager.active_connections == {}
