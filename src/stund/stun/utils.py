import ipaddress


MESSAGE_HEADER_LENGTH = 20
ATTRIBUTE_HEADER_SIZE = 4
TRANSACTION_ID_SIZE = 12

COOKIE = 0x2112A442
COOKIE_UINT32_BYTES = COOKIE.to_bytes(4, "big")

IPV4_PROTOCOL = 0x01
IPV6_PROTOCOL = 0x02

_ADDRESS_LENGTH = {
    IPV4_PROTOCOL: 4,
    IPV6_PROTOCOL: 16,
}


class UnsupportedAddressFamily(ValueError):
    pass


def is_stun(b: bytes | memoryview) -> bool:
    if len(b) < MESSAGE_HEADER_LENGTH:
        return False
    extracted_value = (b[4] << 24) | (b[5] << 16) | (b[6] << 8) | b[7]
    return extracted_value == COOKIE


# STUN aligns attributes on 32-bit boundaries, attributes whose content
# is not a multiple of 4 bytes are padded with 1, 2, or 3 bytes of
# padding so that its value contains a multiple of 4 bytes.
# https://tools.ietf.org/html/rfc5389#section-15
PADDING = 4


def nearest_padded_value_length(length: int) -> int:
    return (PADDING - (length % PADDING)) % PADDING


def mutate_body_length(data: bytearray, length: int):
    data[2:4] = length.to_bytes(2, "big")


def xor_address(data: bytes, transaction_id: bytes) -> bytes:
    """
    Apply the RFC 5389 15.2 mask to a packed MAPPED-ADDRESS value.

    The value layout is reserved(1) family(1) port(2) address(4|16). The port
    is masked with the most significant 16 bits of the cookie, the address
    with cookie followed by the transaction id. For IPv4 only the cookie part
    of the pad is consumed.
    """
    if len(transaction_id) != TRANSACTION_ID_SIZE:
        raise ValueError("STUN transaction id must be 12 bytes")

    xpad = (COOKIE >> 16).to_bytes(2, "big") + COOKIE_UINT32_BYTES + transaction_id
    xdata = bytearray(data[:2])  # reserved and family are not masked
    for i in range(2, len(data)):
        xdata.append(data[i] ^ xpad[i - 2])
    return bytes(xdata)


def pack_address(value: tuple[str, int]) -> bytes:
    try:
        ip_address = ipaddress.ip_address(value[0])
    except ValueError as e:
        raise UnsupportedAddressFamily(f"Unsupported address {value[0]!r}") from e

    if isinstance(ip_address, ipaddress.IPv4Address):
        protocol = IPV4_PROTOCOL
    else:
        protocol = IPV6_PROTOCOL

    return (
        b"\x00"
        + protocol.to_bytes(1, "big")
        + value[1].to_bytes(2, "big")
        + ip_address.packed
    )


def pack_xor_address(value: tuple[str, int], transaction_id: bytes) -> bytes:
    return xor_address(pack_address(value), transaction_id)


def unpack_address(data: bytes) -> tuple[str, int]:
    if len(data) < 4:
        raise ValueError("STUN address length is less than 4 bytes")
    protocol = data[1]
    port = int.from_bytes(data[2:4], "big")
    address = data[4:]

    expected = _ADDRESS_LENGTH.get(protocol)
    if expected is None:
        raise UnsupportedAddressFamily("STUN address has unknown protocol")
    if len(address) != expected:
        raise ValueError("STUN address has invalid length for its family")

    return (str(ipaddress.ip_address(bytes(address))), port)


def unpack_xor_address(data: bytes, transaction_id: bytes) -> tuple[str, int]:
    return unpack_address(xor_address(data, transaction_id))


def format_endpoint(address: str, port: int) -> str:
    if ":" in address:
        return f"[{address}]:{port}"
    return f"{address}:{port}"
