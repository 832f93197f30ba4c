import argparse
import asyncio

from stund.client import binding_request


async def probe(host: str, port: int, count: int, timeout: float):
    loop = asyncio.get_running_loop()

    for _ in range(count):
        started = loop.time()
        try:
            address, mapped_port = await binding_request(host, port, timeout)
        except TimeoutError:
            print("Request timed out")
            continue

        elapsed_ms = (loop.time() - started) * 1000
        print(f"XOR-MAPPED-ADDRESS: {address}:{mapped_port} ({elapsed_ms:.1f}ms)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Send STUN Binding Requests")
    parser.add_argument("host", nargs="?", default="localhost")
    parser.add_argument("port", nargs="?", type=int, default=3478)
    parser.add_argument("-n", "--count", type=int, default=1)
    parser.add_argument("--timeout", type=float, default=5.0)

    args = parser.parse_args()

    asyncio.run(probe(args.host, args.port, args.count, args.timeout))
