import argparse
import os
import sys

from watchfiles import DefaultFilter, run_process


def server_routine(argv: list[str]):
    from stund.__main__ import main

    sys.exit(main(argv))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run stund and restart it on changes")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="arguments for stund")

    args = parser.parse_args()

    ROOT = os.path.dirname(__file__)

    print("Watching for changes in ../src/stund")

    run_process(
        f"{ROOT}/../src/stund",
        target=server_routine,
        args=(args.args,),
        watch_filter=DefaultFilter(ignore_dirs=["__pycache__"]),
    )
