#!/usr/bin/env python3
"""Build a numbered decode table from an instruction catalog.

The catalog is either a JSON file (``--catalog``) or one of the built-in
instruction sets (``--isa``). The resulting table is written as JSON for a
code emitter or runtime decoder to consume; ``--dump`` prints a readable node
listing instead and ``--decode`` runs words through the freshly built table.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, TextIO

from decodegen import serde
from decodegen.catalog import Catalog
from decodegen.config import load_generator_config
from decodegen.decoder import TableDecoder
from decodegen.errors import DecodeGenError
from decodegen.formats import format_bits
from decodegen.isa import CATALOGS
from decodegen.numbering import DecodeTable, build_table
from decodegen.subsumption import oracle_for

logger = logging.getLogger("decodegen.tools.build_decoder_table")


def _parse_word(raw: str) -> int:
    try:
        value = int(raw, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"not a 16-bit word: {raw!r}")
    return value


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog",
        type=str,
        help="Path to a JSON catalog (list of {name, pattern, category, subsumes})",
    )
    source.add_argument(
        "--isa",
        choices=sorted(CATALOGS),
        default="avr",
        help="Built-in catalog to use when --catalog is not given (default: avr)",
    )
    parser.add_argument(
        "--subsumption",
        choices=["pattern", "declared"],
        help="Override DECODEGEN_SUBSUMPTION",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Path to write the JSON table. Defaults to stdout.",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print the JSON output for human inspection.",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print a readable listing of every node instead of JSON.",
    )
    parser.add_argument(
        "--decode",
        type=_parse_word,
        action="append",
        default=[],
        metavar="WORD",
        help="Decode a word (e.g. 0x0D32) against the table; may be repeated.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log splitting decisions"
    )
    return parser.parse_args(list(argv))


def dump_table(table: DecodeTable, out: TextIO) -> None:
    for node in table.nodes:
        out.write("==================================\n")
        out.write(f"ID: {node.id}\n")
        out.write(f"MASK: {format_bits(node.mask)}\n")
        if node.is_terminal:
            out.write(f"WINNER: {node.winner}\n")
            if len(node.candidates) > 1:
                out.write(f"SUBSUMES: {', '.join(node.candidates[1:])}\n")
            continue
        for value, child in node.entries:
            out.write(f"{format_bits(value)} ==> {child}\n")


def _describe(table: DecodeTable, word: int) -> str:
    decoded = TableDecoder(table).decode(word)
    if decoded is None:
        return f"{word:#06x}: <no match>"
    operands = ", ".join(f"{name}={value}" for name, value in decoded.operands.items())
    suffix = f" {operands}" if operands else ""
    return f"{word:#06x}: {decoded.name}{suffix} (node {decoded.node})"


def main(argv: Iterable[str]) -> int:
    args = parse_args(argv)
    try:
        config = load_generator_config(subsumption=args.subsumption)
    except ValueError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or config.trace) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = Catalog.load(args.catalog) if args.catalog else CATALOGS[args.isa]()
        table = build_table(catalog, oracle_for(config, catalog))
    except (DecodeGenError, OSError) as exc:
        logger.debug("table build failed", exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        return 1

    lines: List[str] = [_describe(table, word) for word in args.decode]
    if args.decode:
        sys.stdout.write("\n".join(lines) + "\n")
        if not args.output and not args.dump:
            return 0

    if args.dump:
        dump_table(table, sys.stdout)
        return 0

    payload = serde.to_json(table, indent=2 if args.pretty else None)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(payload + "\n")
    else:
        sys.stdout.write(payload + "\n")
    return 0


def _entrypoint() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    _entrypoint()
