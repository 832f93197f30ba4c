from .message_type import (
    MessageClass,
    Method,
    MessageType,
    BINDING_REQUEST,
    BINDING_SUCCESS_RESPONSE,
)
from .message import Message, build_binding_success
from .attr import (
    Attribute,
    ATTRIBUTE_REGISTRY,
    get_attribute_from_registry,
    XORMappedAddress,
    build_xor_mapped_attr,
)
from .parse import (
    StunParseError,
    stun_message_parse_header,
    stun_message_parse_attrs,
    is_binding_request,
)
from .utils import is_stun, UnsupportedAddressFamily
from .utils import *
