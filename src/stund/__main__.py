import asyncio
import functools
import logging
import signal
import sys
from typing import Sequence

from .config import ServerOptions, parse_options
from .net.udp import open_udp_transport
from .server import StunServer

logger = logging.getLogger("stund")


async def run(options: ServerOptions):
    transport = await open_udp_transport(options.host, options.port)
    server = StunServer(
        transport,
        delay_ms=options.delay_ms,
        max_delay_offset_ms=options.max_delay_offset_ms,
        max_pending=options.max_pending,
    )
    host, port = transport.sockname()
    logger.info("STUN server listening on UDP %s:%d", host, port)

    loop = asyncio.get_running_loop()

    def ask_exit(signame: str):
        logger.info("Received signal %s, stopping server...", signame)
        server.stop()

    for signame in {"SIGINT", "SIGTERM"}:
        loop.add_signal_handler(
            getattr(signal, signame), functools.partial(ask_exit, signame)
        )

    logger.info("Server ready. Press Ctrl+C to stop.")
    try:
        await server.serve()
    finally:
        server.stop()
    logger.info("Server stopped.")


def main(argv: Sequence[str] | None = None) -> int:
    options = parse_options(argv)

    logging.basicConfig(
        level=options.log_level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        asyncio.run(run(options))
    except OSError as e:
        logger.error("Fatal: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
