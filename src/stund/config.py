import argparse
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Sequence

DEFAULT_PORT = 3478

_ENV_PREFIX = "STUND_"


@dataclass
class ServerOptions:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    delay_ms: int = 0
    max_delay_offset_ms: int = 0
    max_pending: int | None = None
    log_level: str = "DEBUG"


def _non_negative_int(value: str) -> int:
    try:
        v = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if v < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {value!r}")
    return v


def _port(value: str) -> int:
    v = _non_negative_int(value)
    if v > 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {value!r}")
    return v


def _positive_int(value: str) -> int:
    v = _non_negative_int(value)
    if v == 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return v


def _log_level(value: str) -> str:
    level = value.upper()
    if level not in logging.getLevelNamesMapping():
        raise argparse.ArgumentTypeError(f"unknown log level: {value!r}")
    return level


def build_parser(env: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    env = os.environ if env is None else env
    defaults = ServerOptions()

    def from_env(name: str, default):
        return env.get(_ENV_PREFIX + name, default)

    parser = argparse.ArgumentParser(
        prog="stund", description="STUN Binding responder with injected delay"
    )
    parser.add_argument(
        "port",
        type=_port,
        nargs="?",
        default=from_env("PORT", str(defaults.port)),
        help="UDP port to listen on (default: %(default)s)",
    )
    parser.add_argument(
        "--host",
        default=from_env("HOST", defaults.host),
        help="address to bind (default: %(default)s)",
    )
    parser.add_argument(
        "--delay-ms",
        type=_non_negative_int,
        default=from_env("DELAY_MS", str(defaults.delay_ms)),
        help="base response delay in milliseconds",
    )
    parser.add_argument(
        "--max-delay-offset-ms",
        type=_non_negative_int,
        default=from_env("MAX_DELAY_OFFSET_MS", str(defaults.max_delay_offset_ms)),
        help="maximum random offset around the base delay in milliseconds",
    )
    parser.add_argument(
        "--max-pending",
        type=_positive_int,
        default=from_env("MAX_PENDING", None),
        help="drop responses once this many are waiting (default: unbounded)",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=from_env("LOG_LEVEL", defaults.log_level),
    )
    return parser


def parse_options(
    argv: Sequence[str] | None = None, env: Mapping[str, str] | None = None
) -> ServerOptions:
    args = build_parser(env).parse_args(argv)
    return ServerOptions(
        host=args.host,
        port=args.port,
        delay_ms=args.delay_ms,
        max_delay_offset_ms=args.max_delay_offset_ms,
        max_pending=args.max_pending,
        log_level=args.log_level,
    )
