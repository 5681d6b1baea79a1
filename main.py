"""log-retrieval: query day-partitioned JSON log files by date or log ID."""

import logging
import sys
from argparse import ArgumentParser
from dataclasses import replace

from logretrieval.config import load_config
from logretrieval.errors import LogRetrievalError
from logretrieval.formatter import get_formatter
from logretrieval.queries import query_by_date, query_by_log_id

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="log-retrieval",
        description="Query day-partitioned JSON log files by date or log ID.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--date", help="Show all entries for a date (YYYY-MM-DD)")
    mode.add_argument("--log-id", help="Show all entries sharing a log ID, across every date")
    mode.add_argument("--serve", action="store_true", help="Run the HTTP query service")
    parser.add_argument("--log-dir", help="Override the log directory")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--workers", type=int, help="Parallel file scans for --log-id")
    return parser


def run(args) -> int:
    """Execute one query (or start the server) and return the exit code."""
    cfg = load_config(args.config)
    if args.log_dir:
        cfg = replace(cfg, log_dir=args.log_dir)
    if args.workers:
        cfg = replace(cfg, max_workers=args.workers)

    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s [log-retrieval] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.serve:
        from logretrieval.web import create_app
        logger.info("Serving logs from %s on %s:%d", cfg.log_dir, cfg.host, cfg.port)
        create_app(cfg).run(host=cfg.host, port=cfg.port)
        return 0

    formatter = get_formatter(args.output)
    try:
        if args.date is not None:
            entries, total = query_by_date(cfg.catalog(), args.date)
        else:
            entries = query_by_log_id(
                cfg.catalog(), args.log_id,
                max_workers=cfg.max_workers,
                lookback_days=cfg.lookback_days or None,
            )
            total = len(entries)
    except LogRetrievalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output = formatter(entries)
    if output:
        print(output)
    print(f"\n--- {total} result(s) ---", file=sys.stderr)
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
