import argparse
import sys

from logs_bloom import Bloom, decode_hex


def _add(args) -> int:
    bloom = Bloom.from_hex(args.bloom) if args.bloom else Bloom()
    for topic in args.topics:
        bloom.add(decode_hex(topic))
    print(bloom.hex())
    return 0


def _check(args) -> int:
    found = Bloom.from_hex(args.bloom).multi_check(args.topics)
    print("true" if found else "false")
    return 0 if found else 1


def _union(args) -> int:
    bloom = Bloom()
    for other in args.blooms:
        bloom.union(Bloom.from_hex(other))
    print(bloom.hex())
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        prog="logs_bloom", description="Build and query 2048-bit log blooms."
    )
    commands = ap.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="add hex topics to a bloom")
    add.add_argument("topics", nargs="+")
    add.add_argument("--bloom", default=None, help="bloom to start from")
    add.set_defaults(run=_add)

    check = commands.add_parser("check", help="test hex topics against a bloom")
    check.add_argument("bloom")
    check.add_argument("topics", nargs="+")
    check.set_defaults(run=_check)

    union = commands.add_parser("union", help="OR blooms together")
    union.add_argument("blooms", nargs="+")
    union.set_defaults(run=_union)

    args = ap.parse_args(argv)
    try:
        return args.run(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
