import logging

from .attr import ATTRIBUTE_REGISTRY, get_attribute_from_registry
from .message import Message
from .message_type import BINDING_REQUEST, MessageType
from .utils import (
    ATTRIBUTE_HEADER_SIZE,
    COOKIE,
    MESSAGE_HEADER_LENGTH,
    nearest_padded_value_length,
)

logger = logging.getLogger(__name__)


class StunParseError(ValueError):
    pass


def stun_message_parse_header(
    data: bytes | memoryview, expected: MessageType = BINDING_REQUEST
) -> Message:
    """
    Validate the fixed 20 byte header and return the message without its
    attributes. Only the type and the magic cookie are checked, the length
    field and attribute area are left alone.
    """
    if len(data) < MESSAGE_HEADER_LENGTH:
        raise StunParseError("STUN data is too short to a header")

    msg_type = int.from_bytes(data[0:2], "big")
    cookie = int.from_bytes(data[4:8], "big")
    transaction_id = bytes(data[8:MESSAGE_HEADER_LENGTH])

    if msg_type != expected.to_uint16():
        raise StunParseError(f"Unexpected message type 0x{msg_type:04x}")

    if cookie != COOKIE:
        raise StunParseError("Invalid magic cookie")

    return Message(expected, transaction_id)


def is_binding_request(data: bytes | memoryview) -> bool:
    try:
        stun_message_parse_header(data)
    except StunParseError:
        return False
    return True


def stun_message_parse_attrs(data: bytes | memoryview, msg: Message) -> Message:
    """Decode known attributes following the header, skipping unknown ones."""
    length = int.from_bytes(data[2:4], "big")
    body = bytes(data[MESSAGE_HEADER_LENGTH : MESSAGE_HEADER_LENGTH + length])

    if len(body) != length:
        raise StunParseError("Invalid message length")

    while len(body) >= ATTRIBUTE_HEADER_SIZE:
        attr_type = int.from_bytes(body[0:2], "big")
        attr_length = int.from_bytes(body[2:4], "big")
        attr_value = body[ATTRIBUTE_HEADER_SIZE : ATTRIBUTE_HEADER_SIZE + attr_length]

        if len(attr_value) != attr_length:
            raise StunParseError("Truncated STUN attribute")

        if attr_type in ATTRIBUTE_REGISTRY:
            attr_cls = get_attribute_from_registry(attr_type)
            msg.add_attribute(
                attr_cls.unmarshal(
                    data=bytearray(attr_value), transaction_id=msg.transaction_id
                )
            )
        else:
            logger.debug(
                "Skip unknown STUN attribute: attr_type=0x%04x, attr_length=%d",
                attr_type,
                attr_length,
            )

        total_length = ATTRIBUTE_HEADER_SIZE + attr_length
        body = body[total_length + nearest_padded_value_length(total_length) :]

    return msg
