import pytest

from stund.stun.message_type import (
    BINDING_REQUEST,
    BINDING_SUCCESS_RESPONSE,
    MessageClass,
    MessageType,
    Method,
)


@pytest.mark.parametrize(
    "message_class, value",
    [
        (MessageClass.Request, 0x0001),
        (MessageClass.Indication, 0x0011),
        (MessageClass.SuccessResponse, 0x0101),
        (MessageClass.ErrorResponse, 0x0111),
    ],
)
def test_binding_type_values(message_class, value):
    msg_type = MessageType(Method.Binding, message_class)

    assert msg_type.to_uint16() == value
    assert MessageType.from_int(value) == msg_type


def test_constants():
    assert BINDING_REQUEST.to_uint16_bytes() == b"\x00\x01"
    assert BINDING_SUCCESS_RESPONSE.to_uint16_bytes() == b"\x01\x01"


def test_unknown_method():
    with pytest.raises(ValueError):
        MessageType.from_int(0x0003)
