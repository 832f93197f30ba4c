from .config import ServerOptions, parse_options
from .scheduler import DelayScheduler, PendingResponse
from .server import StunServer
