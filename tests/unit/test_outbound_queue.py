from __future__ import annotations

import asyncio

import pytest

from classroom_service.infrastructure.ws.outbound import OutboundQueue


class SlowSocket:
    def __init__(self) -> None:
        self.sent: list[str] = []
        self.gate = asyncio.Event()

    async def send_text(self, text: str) -> None:
        await self.gate.wait()
        self.sent.append(text)


@pytest.mark.asyncio
async def test_put_does_not_wait_for_socket():
    socket = SlowSocket()
    out = OutboundQueue(socket.send_text, maxsize=10)
    out.start()

    assert out.put("a") is True
    assert out.put("b") is True
    await asyncio.sleep(0)
    assert socket.sent == []

    socket.gate.set()
    for _ in range(5):
        await asyncio.sleep(0)
    await out.stop()

    assert socket.sent == ["a", "b"]


@pytest.mark.asyncio
async def test_full_queue_drops_new_frames():
    socket = SlowSocket()
    out = OutboundQueue(socket.send_text, maxsize=2)

    results = [out.put(text) for text in ("a", "b", "c")]

    assert results == [True, True, False]
    assert out.dropped == 1
    assert out.pending == 2


@pytest.mark.asyncio
async def test_failing_socket_stops_writer():
    async def closed_socket(_text: str) -> None:
        raise RuntimeError("socket closed")

    out = OutboundQueue(closed_socket, maxsize=2)
    out.start()
    out.put("a")
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    await out.stop()
    await out.stop()
    assert out.put("b") is True
