"""fnvbloom CLI entry point.

Usage: uv run fnvbloom [command]

    fnvbloom build -o words.bloom words.txt
    fnvbloom query words.bloom apple durian
    fnvbloom info words.bloom
    fnvbloom hash apple --seed 1576284489
"""
from __future__ import annotations

import argparse
import logging
import sys

log = logging.getLogger(__name__)


def _add_build_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "build",
        help="Build a filter from newline-separated values and save it.",
    )
    p.add_argument(
        "input", nargs="?", default="-",
        help="File with one value per line, '-' for stdin (default: -)",
    )
    p.add_argument(
        "-o", "--output", required=True,
        help="Where to write the filter (JSON envelope).",
    )
    p.add_argument(
        "--bits", type=int, default=8192,
        help="Bit capacity, rounded up to a multiple of 32 (default: 8192)",
    )
    p.add_argument(
        "--hashes", type=int, default=4,
        help="Positions probed per value (default: 4)",
    )
    p.add_argument(
        "--expected", type=int, default=None,
        help="Size for this many values instead of using --bits/--hashes.",
    )
    p.add_argument(
        "--fp-rate", type=float, default=0.01,
        help="Target false positive rate with --expected (default: 0.01)",
    )


def _add_query_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "query",
        help="Test values against a saved filter.",
    )
    p.add_argument("filter", help="Filter file written by 'build'.")
    p.add_argument("values", nargs="+", help="Values to test.")


def _add_info_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "info",
        help="Print size, fill ratio and estimates for a saved filter.",
    )
    p.add_argument("filter", help="Filter file written by 'build'.")


def _add_hash_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "hash",
        help="Print the FNV-1a hash of a value.",
    )
    p.add_argument("value")
    p.add_argument(
        "--seed", type=int, default=0,
        help="Seed XORed into the offset basis (default: 0)",
    )


def _read_values(source: str) -> list[str]:
    if source == "-":
        lines = sys.stdin.read().splitlines()
    else:
        with open(source, encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    return [line for line in lines if line]


def _run_build(args: argparse.Namespace) -> None:
    from fnvbloom.core.bloom import BloomFilter
    from fnvbloom.core.sizing import BloomParams
    from fnvbloom.serialization.codec import save

    if args.expected is not None:
        params = BloomParams.for_capacity(args.expected, args.fp_rate)
    else:
        params = BloomParams(bit_capacity=args.bits, k=args.hashes)
    bf = BloomFilter.from_params(params)
    values = _read_values(args.input)
    bf.update(values)
    save(bf, args.output)
    print(f"Added {len(values):,} values to {args.output} (m={bf.m}, k={bf.k})")


def _run_query(args: argparse.Namespace) -> None:
    from fnvbloom.serialization.codec import load

    bf = load(args.filter)
    for value in args.values:
        print(f"{value}\t{'maybe' if bf.test(value) else 'absent'}")


def _run_info(args: argparse.Namespace) -> None:
    from fnvbloom.report import format_info
    from fnvbloom.serialization.codec import load

    print(format_info(load(args.filter), label=args.filter))


def _run_hash(args: argparse.Namespace) -> None:
    from fnvbloom.hashing.fnv import fnv_1a

    print(fnv_1a(args.value, args.seed))


_COMMANDS = {
    "build": _run_build,
    "query": _run_query,
    "info": _run_info,
    "hash": _run_hash,
}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="fnvbloom",
        description="Bloom filter with FNV-1a double hashing.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_build_parser(subparsers)
    _add_query_parser(subparsers)
    _add_info_parser(subparsers)
    _add_hash_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        _COMMANDS[args.command](args)
    except (OSError, ValueError) as exc:
        log.error("%s failed: %s", args.command, exc)
        sys.exit(1)
