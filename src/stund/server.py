import logging
import random

from . import stun
from .net.types import Packet, TransportClosed, TransportProtocol
from .scheduler import DelayScheduler, PendingResponse

logger = logging.getLogger(__name__)


class StunServer:
    def __init__(
        self,
        transport: TransportProtocol,
        delay_ms: int = 0,
        max_delay_offset_ms: int = 0,
        max_pending: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._transport = transport
        self._scheduler = DelayScheduler(
            transport,
            delay=delay_ms / 1000,
            max_offset=max_delay_offset_ms / 1000,
            max_pending=max_pending,
            rng=rng,
        )

    @property
    def scheduler(self) -> DelayScheduler:
        return self._scheduler

    async def serve(self):
        while True:
            try:
                pkt = await self._transport.receive()
            except TransportClosed:
                logger.info("Transport closed, stop receiving")
                return

            self.handle_packet(pkt)

    def handle_packet(self, pkt: Packet) -> PendingResponse | None:
        try:
            request = stun.stun_message_parse_header(pkt.data)
        except stun.StunParseError as e:
            logger.debug(
                "Ignoring non-Binding or invalid STUN packet from %s: %s", pkt.source, e
            )
            return None

        payload = stun.build_binding_success(request, pkt.source.as_tuple())
        if payload is None:
            logger.debug("Unsupported address family of %s, no response", pkt.source)
            return None

        pending = self._scheduler.schedule(payload, pkt.source)
        if pending is not None:
            logger.info(
                "Received Binding Request from %s, scheduling response in %dms",
                pkt.source,
                round(pending.delay * 1000),
            )
        return pending

    def stop(self):
        self._scheduler.close()
        try:
            self._transport.close()
        except OSError as e:
            logger.warning("Error while closing socket: %s", e)
