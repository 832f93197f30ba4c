from dataclasses import dataclass
from typing import Protocol

from stund.stun.utils import format_endpoint


@dataclass(frozen=True)
class Address:
    address: str
    port: int

    def as_tuple(self) -> tuple[str, int]:
        return (self.address, self.port)

    def __str__(self) -> str:
        return format_endpoint(self.address, self.port)


@dataclass(frozen=True)
class Packet:
    source: Address
    data: bytes


class TransportClosed(Exception):
    pass


class TransportProtocol(Protocol):
    @property
    def closed(self) -> bool: ...

    async def receive(self) -> Packet:
        "Suspends until a datagram arrives, raises TransportClosed once closed"
        ...

    def send(self, data: bytes, addr: Address) -> None: ...

    def close(self) -> None: ...
