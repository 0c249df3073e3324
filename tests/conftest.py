import asyncio

import pytest


def videos(*ids):
    return [{"id": i, "title": f"video {i}", "uploader": {"username": "alice"}} for i in ids]


class FakeFeed:
    """Scripted feed: each call returns the next response; the last one repeats.

    A response is a list of ids (turned into video dicts), a ready-made list,
    or an exception instance to raise. Set ``gate`` to an asyncio.Event to
    stall calls until it is set.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0
        self.gate = None

    def push(self, *responses):
        self.responses.extend(responses)

    async def __call__(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if len(self.responses) > 1:
            resp = self.responses.pop(0)
        elif self.responses:
            resp = self.responses[0]
        else:
            resp = []
        if isinstance(resp, BaseException):
            raise resp
        if resp and all(isinstance(i, int) for i in resp):
            return videos(*resp)
        return resp


class Recorder:
    def __init__(self):
        self.items = []

    def __call__(self, item):
        self.items.append(item)

    @property
    def ids(self):
        return [it["id"] for it in self.items]


async def settle(rounds: int = 3) -> None:
    """Let freshly spawned tasks run until their next await."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def recorder():
    return Recorder()
