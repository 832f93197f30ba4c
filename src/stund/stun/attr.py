from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, TypeVar, override, Type

from .utils import nearest_padded_value_length
from .utils import pack_xor_address, unpack_xor_address
from .utils import UnsupportedAddressFamily

T = TypeVar("T")


class Attribute(Generic[T], ABC):
    TYPE: int = 0
    NAME: str = ""

    @abstractmethod
    def marshal(self) -> bytes:
        raise NotImplementedError

    @staticmethod
    def unmarshal(
        data: bytearray, transaction_id: bytes | None = None
    ) -> "Attribute[T]":
        raise NotImplementedError

    @classmethod
    def type_to_uint16_bytes(cls) -> bytes:
        return cls.TYPE.to_bytes(2, "big")

    def write_to_buf(self, attr_buf: bytearray) -> bytearray:
        attr_data = self.marshal()
        attr_len = len(attr_data)

        attr_buf.extend(
            self.type_to_uint16_bytes() + attr_len.to_bytes(2, "big") + attr_data
        )

        padding_bytes_to_add = nearest_padded_value_length(attr_len)
        if padding_bytes_to_add > 0:
            attr_buf.extend(b"\x00" * padding_bytes_to_add)

        return attr_buf


class XORMappedAddress(Attribute[tuple[str, int]]):
    """
    XOR-MAPPED-ADDRESS (RFC 5389 15.2). The value is 8 bytes for IPv4 peers
    and 20 bytes for IPv6 peers.
    """

    TYPE = 0x0020
    NAME = "XOR-MAPPED-ADDRESS"

    def __init__(self, transaction_id: bytes, address: tuple[str, int]) -> None:
        self._transaction_id = transaction_id
        self._address = address

    @property
    def address(self) -> tuple[str, int]:
        return self._address

    @override
    def marshal(self) -> bytes:
        return pack_xor_address(self._address, self._transaction_id)

    @staticmethod
    def unmarshal(
        data: bytearray, transaction_id: bytes | None = None
    ) -> "XORMappedAddress":
        if transaction_id is None:
            raise ValueError(f"{XORMappedAddress.NAME} must have transaction_id")
        return XORMappedAddress(
            transaction_id, unpack_xor_address(bytes(data), transaction_id)
        )

    def __repr__(self) -> str:
        return f"XORMappedAddress(_transaction_id={self._transaction_id.hex()}, _address={self._address})"


ATTRIBUTE_REGISTRY: Dict[int, Type[Attribute[Any]]] = {
    XORMappedAddress.TYPE: XORMappedAddress,
}


def get_attribute_from_registry(type_: int) -> Type[Attribute[Any]]:
    attribute_class = ATTRIBUTE_REGISTRY[type_]
    return attribute_class


def build_xor_mapped_attr(
    address: tuple[str, int], transaction_id: bytes
) -> bytes | None:
    """Full attribute TLV, or None when the peer family is neither IPv4 nor IPv6."""
    try:
        return bytes(XORMappedAddress(transaction_id, address).write_to_buf(bytearray()))
    except UnsupportedAddressFamily:
        return None
