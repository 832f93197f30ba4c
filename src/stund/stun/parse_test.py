import pytest

from stund.stun import (
    BINDING_REQUEST,
    BINDING_SUCCESS_RESPONSE,
    Message,
    StunParseError,
    XORMappedAddress,
    is_binding_request,
    stun_message_parse_attrs,
    stun_message_parse_header,
)
from tests.testutils import TRANSACTION_ID, binding_request_bytes


class Test_ParseHeader:
    def test_minimal_request(self):
        msg = stun_message_parse_header(binding_request_bytes())

        assert msg.message_type == BINDING_REQUEST
        assert msg.transaction_id == TRANSACTION_ID
        assert msg.attributes == []

    def test_attributes_are_not_inspected(self):
        garbage = b"\xff\xff\x00\x40" + b"\x01"  # truncated, bogus length
        data = binding_request_bytes(attrs=garbage)

        assert stun_message_parse_header(data).transaction_id == TRANSACTION_ID

    def test_length_field_is_not_checked(self):
        data = bytearray(binding_request_bytes())
        data[2:4] = (100).to_bytes(2, "big")

        assert is_binding_request(bytes(data))

    @pytest.mark.parametrize("size", [0, 1, 8, 19])
    def test_too_short(self, size):
        with pytest.raises(StunParseError):
            stun_message_parse_header(binding_request_bytes()[:size])

    @pytest.mark.parametrize("msg_type", [0x0000, 0x000B, 0x0101, 0x0111, 0x0003])
    def test_wrong_type(self, msg_type):
        assert not is_binding_request(binding_request_bytes(msg_type=msg_type))

    def test_wrong_cookie(self):
        data = binding_request_bytes(cookie=bytes.fromhex("2112a443"))

        with pytest.raises(StunParseError):
            stun_message_parse_header(data)

    def test_accepts_memoryview(self):
        assert is_binding_request(memoryview(binding_request_bytes()))


class Test_ParseAttrs:
    def test_decode_response(self):
        response = Message(BINDING_SUCCESS_RESPONSE, TRANSACTION_ID)
        response.add_attribute(XORMappedAddress(TRANSACTION_ID, ("192.0.2.7", 40000)))
        data = response.encode()

        msg = stun_message_parse_header(data, BINDING_SUCCESS_RESPONSE)
        msg = stun_message_parse_attrs(data, msg)

        attr = msg.get_attribute(XORMappedAddress)
        assert attr is not None
        assert attr.address == ("192.0.2.7", 40000)

    def test_skips_unknown_attribute(self):
        unknown = b"\x80\x22\x00\x03abc\x00"
        data = binding_request_bytes(attrs=unknown)

        msg = stun_message_parse_attrs(data, stun_message_parse_header(data))

        assert msg.attributes == []

    def test_truncated_body(self):
        data = binding_request_bytes(attrs=b"\x00\x20\x00\x08")[:22]

        with pytest.raises(StunParseError):
            stun_message_parse_attrs(data, stun_message_parse_header(data))
