import enum


class MessageClass(enum.IntEnum):
    Request = 0x00  # 0b00
    Indication = 0x01  # 0b01
    SuccessResponse = 0x02  # 0b10
    ErrorResponse = 0x03  # 0b11


class Method(enum.IntEnum):
    Binding = 0x001


# Method bits A(M0-M3), B(M4-M6), D(M7-M11)
method_a_bits = 0xF  # 0b0000000000001111
method_b_bits = 0x70  # 0b0000000001110000
method_d_bits = 0xF80  # 0b0000111110000000

method_b_shift = 1
method_d_shift = 2

# Class bits C0 (request/response) and C1 (indication/error)
c0_bit = 0x1
c1_bit = 0x2

class_c0_shift = 4
class_c1_shift = 7


class MessageType:
    def __init__(self, method: Method, message_class: MessageClass):
        self.method = method
        self.message_class = message_class

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageType):
            return NotImplemented
        return (self.method, self.message_class) == (other.method, other.message_class)

    def __hash__(self) -> int:
        return hash((self.method, self.message_class))

    def to_uint16(self) -> int:
        """
        Combine method and class into the 14 significant bits of the STUN
        message type field. The two most significant bits are always zero.

        References:
        https://datatracker.ietf.org/doc/html/rfc5389#section-6
        """
        #  0                 1
        #  2  3  4 5 6 7 8 9 0 1 2 3 4 5
        # +--+--+-+-+-+-+-+-+-+-+-+-+-+-+
        # |M |M |M|M|M|C|M|M|M|C|M|M|M|M|
        # |11|10|9|8|7|1|6|5|4|0|3|2|1|0|
        # +--+--+-+-+-+-+-+-+-+-+-+-+-+-+
        # Figure 3: Format of STUN Message Type Field
        m = int(self.method)
        a = m & method_a_bits
        b = m & method_b_bits
        d = m & method_d_bits

        # Shifting to add "holes" for C0 (at 4 bit) and C1 (8 bit).
        m = a | (b << method_b_shift) | (d << method_d_shift)

        c = int(self.message_class)
        c0 = (c & c0_bit) << class_c0_shift
        c1 = (c & c1_bit) << class_c1_shift

        return m | c0 | c1

    def to_uint16_bytes(self) -> bytes:
        return self.to_uint16().to_bytes(2, "big")

    @staticmethod
    def from_int(v: int) -> "MessageType":
        c0 = (v >> class_c0_shift) & c0_bit
        c1 = (v >> class_c1_shift) & c1_bit
        message_class = c0 | c1

        a = v & method_a_bits
        b = (v >> method_b_shift) & method_b_bits
        d = (v >> method_d_shift) & method_d_bits
        method = a | b | d

        return MessageType(Method(method), MessageClass(message_class))

    def __str__(self):
        return f"{self.method.name} {self.message_class.name}"

    def __repr__(self):
        return f"MessageType(method=Method.{self.method.name}, message_class=MessageClass.{self.message_class.name})"


BINDING_REQUEST = MessageType(Method.Binding, MessageClass.Request)
BINDING_SUCCESS_RESPONSE = MessageType(Method.Binding, MessageClass.SuccessResponse)
