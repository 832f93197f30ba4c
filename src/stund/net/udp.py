import asyncio
import logging
from typing import Any, override

from .types import Address, Packet, TransportClosed

logger = logging.getLogger(__name__)

# Wakes up receivers blocked on an empty queue when the endpoint goes away
_CLOSED = object()


class StunUDPProtocol(asyncio.DatagramProtocol):
    def __init__(self) -> None:
        self._transport: asyncio.DatagramTransport | None = None
        self._queue = asyncio.Queue[Packet | object]()
        self._closed = False

    @property
    def transport(self) -> asyncio.DatagramTransport:
        if self._transport is None:
            raise ValueError("Unable get UDP transport")
        return self._transport

    @property
    def closed(self) -> bool:
        return self._closed

    @override
    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self._transport = transport  # type: ignore[assignment]

    @override
    def datagram_received(self, data: bytes, addr: tuple[str | Any, int]) -> None:
        if self._closed:
            return

        # IPv6 sockets report (host, port, flowinfo, scope_id)
        address, port = addr[0], addr[1]
        self._queue.put_nowait(Packet(Address(str(address), port), bytes(data)))

    @override
    def error_received(self, exc: Exception) -> None:
        logger.warning("UDP error received: %s", exc)

    @override
    def connection_lost(self, exc: Exception | None) -> None:
        if exc is not None:
            logger.warning("UDP connection lost: %s", exc)
        self._mark_closed()

    def _mark_closed(self):
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def receive(self) -> Packet:
        if self._closed and self._queue.empty():
            raise TransportClosed()

        pkt = await self._queue.get()
        if pkt is _CLOSED:
            # Leave the marker for any other waiter
            self._queue.put_nowait(_CLOSED)
            raise TransportClosed()

        assert isinstance(pkt, Packet)
        return pkt

    def send(self, data: bytes, addr: Address) -> None:
        if self._closed or self._transport is None:
            logger.debug("Drop send to %s, transport is closed", addr)
            return

        try:
            self._transport.sendto(data, addr.as_tuple())
        except OSError as e:
            logger.warning("Failed to send response to %s: %s", addr, e)
        else:
            logger.debug("Sent %d bytes to %s", len(data), addr)

    def close(self) -> None:
        self._mark_closed()
        if self._transport is not None:
            self._transport.close()

    def sockname(self) -> tuple[str, int]:
        sockname = self.transport.get_extra_info("sockname")
        return (sockname[0], sockname[1])


async def open_udp_transport(host: str, port: int) -> StunUDPProtocol:
    loop = asyncio.get_running_loop()
    _, protocol = await loop.create_datagram_endpoint(
        StunUDPProtocol, local_addr=(host, port)
    )
    return protocol
