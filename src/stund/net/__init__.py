from .types import Address, Packet, TransportClosed, TransportProtocol
from .udp import StunUDPProtocol, open_udp_transport
