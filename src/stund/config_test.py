import pytest

from stund.config import DEFAULT_PORT, ServerOptions, parse_options


def test_defaults():
    assert parse_options([], env={}) == ServerOptions()
    assert ServerOptions().port == DEFAULT_PORT == 3478


def test_cli():
    options = parse_options(
        [
            "5000",
            "--host",
            "127.0.0.1",
            "--delay-ms",
            "100",
            "--max-delay-offset-ms",
            "20",
            "--max-pending",
            "64",
            "--log-level",
            "info",
        ],
        env={},
    )

    assert options == ServerOptions(
        host="127.0.0.1",
        port=5000,
        delay_ms=100,
        max_delay_offset_ms=20,
        max_pending=64,
        log_level="INFO",
    )


def test_env_and_cli_precedence():
    env = {"STUND_PORT": "4000", "STUND_DELAY_MS": "250", "STUND_MAX_PENDING": "8"}

    options = parse_options(["--delay-ms", "5"], env=env)

    assert options.port == 4000
    assert options.delay_ms == 5
    assert options.max_pending == 8


@pytest.mark.parametrize(
    "argv",
    [
        ["70000"],
        ["--delay-ms", "-1"],
        ["--max-delay-offset-ms", "abc"],
        ["--max-pending", "0"],
        ["--log-level", "chatty"],
    ],
)
def test_invalid(argv):
    with pytest.raises(SystemExit):
        parse_options(argv, env={})
