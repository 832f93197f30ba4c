import asyncio
import logging
import random
from dataclasses import dataclass

from .net.types import Address, TransportProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingResponse:
    payload: bytes
    destination: Address
    delay: float


class DelayScheduler:
    """
    Sends each response after its own randomized delay.

    The delay is drawn uniformly from [delay - max_offset, delay + max_offset]
    and floored at zero. Every response gets an independent task, so a later
    request with a shorter draw is answered before an earlier one.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        delay: float = 0.0,
        max_offset: float = 0.0,
        max_pending: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        if max_offset < 0:
            raise ValueError("max_offset must be non-negative")
        if max_pending is not None and max_pending < 1:
            raise ValueError("max_pending must be positive")

        self._transport = transport
        self._delay = delay
        self._max_offset = max_offset
        self._max_pending = max_pending
        # Owned for the scheduler lifetime, only touched from the event loop thread
        self._rng = rng or random.Random()
        self._waiting = set[asyncio.Task[None]]()
        self._closed = False

    @property
    def pending(self) -> int:
        return len(self._waiting)

    def compute_delay(self) -> float:
        if self._max_offset == 0:
            return self._delay
        offset = self._rng.uniform(-self._max_offset, self._max_offset)
        return max(0.0, self._delay + offset)

    def schedule(self, payload: bytes, destination: Address) -> PendingResponse | None:
        if self._closed:
            logger.debug("Scheduler closed, drop response to %s", destination)
            return None

        if self._max_pending is not None and self.pending >= self._max_pending:
            logger.warning(
                "Too many pending responses (%d), drop response to %s",
                self.pending,
                destination,
            )
            return None

        pending = PendingResponse(payload, destination, self.compute_delay())

        task = asyncio.ensure_future(self._send_later(pending))
        self._waiting.add(task)
        task.add_done_callback(self._on_done)

        return pending

    async def _send_later(self, pending: PendingResponse):
        if pending.delay > 0:
            await asyncio.sleep(pending.delay)

        if self._transport.closed:
            logger.debug(
                "Transport closed before response to %s fired, drop it",
                pending.destination,
            )
            return

        self._transport.send(pending.payload, pending.destination)

    def _on_done(self, task: asyncio.Task[None]):
        self._waiting.discard(task)

        if task.cancelled():
            return

        if e := task.exception():
            logger.warning("Scheduled response failed: %s", e)

    async def wait_idle(self):
        while self._waiting:
            await asyncio.wait(list(self._waiting))

    def close(self):
        self._closed = True
        for task in list(self._waiting):
            task.cancel()
