import asyncio
import os
import sys

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


class FakeSocket:
    """Stand-in for a websocket: records every text frame it is sent."""

    def __init__(self):
        self.sent = []
        self.closed_with = None

    async def send_text(self, data):
        self.sent.append(data)

    async def close(self, code=1000):
        self.closed_with = code

    def messages(self):
        import json
        return [json.loads(s) for s in self.sent]


class FailingSocket(FakeSocket):
    async def send_text(self, data):
        raise ConnectionResetError("peer reset")


class StalledSocket(FakeSocket):
    async def send_text(self, data):
        await asyncio.sleep(3600)


@pytest.fixture
def fake_socket():
    return FakeSocket()


@pytest.fixture
def failing_socket():
    return FailingSocket()


@pytest.fixture
def stalled_socket():
    return StalledSocket()


@pytest.fixture
def make_socket():
    kinds = {"ok": FakeSocket, "failing": FailingSocket, "stalled": StalledSocket}

    def factory(kind="ok"):
        return kinds[kind]()

    return factory
