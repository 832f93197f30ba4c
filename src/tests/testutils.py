import asyncio
import random

from stund.net.types import Address, Packet, TransportClosed

COOKIE_BYTES = bytes.fromhex("2112a442")
TRANSACTION_ID = bytes(range(12))


def binding_request_bytes(
    transaction_id: bytes = TRANSACTION_ID,
    msg_type: int = 0x0001,
    cookie: bytes = COOKIE_BYTES,
    attrs: bytes = b"",
) -> bytes:
    return (
        msg_type.to_bytes(2, "big")
        + len(attrs).to_bytes(2, "big")
        + cookie
        + transaction_id
        + attrs
    )


class FakeTransport:
    def __init__(self) -> None:
        self.sent = list[tuple[bytes, Address]]()
        self._queue = asyncio.Queue[Packet | None]()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, data: bytes, source: Address):
        self._queue.put_nowait(Packet(source, data))

    async def receive(self) -> Packet:
        pkt = await self._queue.get()
        if pkt is None:
            raise TransportClosed()
        return pkt

    def send(self, data: bytes, addr: Address) -> None:
        self.sent.append((data, addr))

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)


class ScriptedRandom(random.Random):
    """Returns queued offsets from uniform() instead of drawing them."""

    def __init__(self, offsets: list[float]) -> None:
        super().__init__(0)
        self._offsets = list(offsets)

    def uniform(self, a: float, b: float) -> float:
        return self._offsets.pop(0)
