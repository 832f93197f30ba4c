import os

from typing import Any, Type

from .message_type import MessageType, BINDING_SUCCESS_RESPONSE
from .attr import Attribute, T, XORMappedAddress
from .utils import (
    COOKIE_UINT32_BYTES,
    MESSAGE_HEADER_LENGTH,
    TRANSACTION_ID_SIZE,
    UnsupportedAddressFamily,
    mutate_body_length,
)


class Message:
    def __init__(self, message_type: MessageType, transaction_id: bytes | None = None):
        self.message_type = message_type
        self.transaction_id = bytes(transaction_id or self._new_transaction_id())
        self.attributes = list[Attribute[Any]]()

        if len(self.transaction_id) != TRANSACTION_ID_SIZE:
            raise ValueError("STUN transaction id must be 12 bytes")

    def __repr__(self):
        return (
            f"Message(message_method=Method.{self.message_type.method.name}, "
            f"message_class=Class.{self.message_type.message_class.name}, "
            f"transaction_id={self.transaction_id.hex()}, "
            f"attributes={self.attributes})"
        )

    def encode(self) -> bytes:
        buf = bytearray(MESSAGE_HEADER_LENGTH)
        buf[0:2] = self.message_type.to_uint16_bytes()
        buf[4:8] = COOKIE_UINT32_BYTES
        buf[8:MESSAGE_HEADER_LENGTH] = self.transaction_id

        for attr in self.attributes:
            attr.write_to_buf(buf)

        mutate_body_length(buf, len(buf) - MESSAGE_HEADER_LENGTH)

        return bytes(buf)

    def _new_transaction_id(self) -> bytes:
        return os.urandom(TRANSACTION_ID_SIZE)

    def add_attribute(self, _attr: Attribute[Any]):
        self.attributes.append(_attr)

    def get_attribute(self, attr_type: Type[T]) -> T | None:
        for attr in self.attributes:
            if isinstance(attr, attr_type):
                return attr
        return None


def build_binding_success(request: Message, address: tuple[str, int]) -> bytes | None:
    """
    Binding Success Response for a validated request, echoing its transaction
    id and carrying the peer's XOR-MAPPED-ADDRESS. None if the peer address
    family is not supported.
    """
    msg = Message(BINDING_SUCCESS_RESPONSE, request.transaction_id)
    msg.add_attribute(XORMappedAddress(request.transaction_id, address))

    try:
        return msg.encode()
    except UnsupportedAddressFamily:
        return None
