import asyncio
import logging
from typing import Any, override

from . import stun

logger = logging.getLogger(__name__)


class _BindingClientProtocol(asyncio.DatagramProtocol):
    def __init__(self, transaction_id: bytes) -> None:
        self._transaction_id = transaction_id
        self.response: asyncio.Future[stun.Message] = (
            asyncio.get_running_loop().create_future()
        )

    @override
    def datagram_received(self, data: bytes, addr: tuple[str | Any, int]) -> None:
        if self.response.done():
            return
        try:
            msg = parse_binding_response(data)
        except ValueError as e:
            logger.debug("Ignoring invalid response from %s: %s", addr, e)
            return

        if msg.transaction_id != self._transaction_id:
            logger.debug("Transaction id mismatch from %s", addr)
            return

        self.response.set_result(msg)

    @override
    def error_received(self, exc: Exception) -> None:
        if not self.response.done():
            self.response.set_exception(exc)


def new_binding_request(transaction_id: bytes | None = None) -> stun.Message:
    return stun.Message(stun.BINDING_REQUEST, transaction_id)


def parse_binding_response(data: bytes) -> stun.Message:
    msg = stun.stun_message_parse_header(data, stun.BINDING_SUCCESS_RESPONSE)
    return stun.stun_message_parse_attrs(data, msg)


async def binding_request(
    host: str, port: int, timeout: float = 5.0
) -> tuple[str, int]:
    """Send one Binding Request and return the reflexive address from the reply."""
    loop = asyncio.get_running_loop()
    request = new_binding_request()

    transport, protocol = await loop.create_datagram_endpoint(
        lambda: _BindingClientProtocol(request.transaction_id),
        remote_addr=(host, port),
    )
    try:
        transport.sendto(request.encode())
        msg = await asyncio.wait_for(protocol.response, timeout)
    finally:
        transport.close()

    attr = msg.get_attribute(stun.XORMappedAddress)
    if attr is None:
        raise ValueError(f"{stun.XORMappedAddress.NAME} missing in response")
    return attr.address
