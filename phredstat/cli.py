"""Command line entrypoint.

Reads one encoded quality string per line (already extracted from the
sequencing file) and prints per-position statistics as JSON.

Usage:
  phredstat summarize quals.txt
  cut-quality-lines reads.fastq | phredstat summarize -
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Iterator

from phredstat.config import QcConfig
from phredstat.pipeline import run_quality_stats
from phredstat.rows import per_position_rows


def get_logger(name: str = "phredstat", level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def _iter_quality_lines(handle: BinaryIO) -> Iterator[bytes | None]:
    for line in handle:
        line = line.rstrip(b"\r\n")
        yield line if line else None


def _cmd_summarize(args: argparse.Namespace) -> None:
    log = get_logger(level=logging.DEBUG if args.verbose else logging.WARNING)
    cfg = replace(QcConfig(), phred_offset=args.offset)
    if args.input == "-":
        result = run_quality_stats(_iter_quality_lines(sys.stdin.buffer), config=cfg, logger=log)
    else:
        path = Path(args.input)
        if not path.is_file():
            raise SystemExit(f"Input file not found: {path}")
        with path.open("rb") as handle:
            result = run_quality_stats(_iter_quality_lines(handle), config=cfg, logger=log)

    payload = {
        "verdict": result.verdict.value,
        "invalid_reads": result.invalid_reads,
        "records": result.records,
        "positions": per_position_rows(result.positions),
    }
    print(json.dumps(payload, indent=args.indent, allow_nan=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phredstat", description="Per-base sequence quality statistics")
    sub = parser.add_subparsers(dest="cmd", required=True)

    summ = sub.add_parser("summarize", help="Summarise quality strings, one per line")
    summ.add_argument("input", nargs="?", default="-", help="Path to quality lines, or '-' for stdin")
    summ.add_argument("--offset", type=int, default=QcConfig().phred_offset, help="Phred encoding offset")
    summ.add_argument("--indent", type=int, default=None, help="JSON indent")
    summ.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    summ.set_defaults(func=_cmd_summarize)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
