from argparse import ArgumentParser, Namespace
from asyncio import run
from pathlib import PurePath
from sys import exit, stderr, version_info

if version_info < (3, 8, 2):
    print("⛔️ python < 3.8.2", file=stderr)
    exit(1)


def parse_args() -> Namespace:
    parser = ArgumentParser(prog="sniphub")

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    p = sub_parsers.add_parser("run")
    p.add_argument("--socket", required=True)

    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.command == "run":
        from .client import init

        run(init(PurePath(args.socket)))
    else:
        assert False


main()
