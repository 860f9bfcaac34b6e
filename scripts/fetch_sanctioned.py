"""Fetch Chainalysis sanction events and write the net sanctioned address snapshot.

Usage:
    PYTHONPATH=src python scripts/fetch_sanctioned.py [--tx-file hashes.txt] [--output sanction_events.json]

Settings come from SANCTIONLOG_* environment variables or .env
(rpc_url, rpc_timeout, rpc_max_attempts, max_concurrency, ...).
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logger = logging.getLogger("fetch_sanctioned")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--tx-file", help="File with one transaction hash per line, oldest first")
    parser.add_argument("--output", help="Snapshot path (default: settings.output_path)")
    return parser.parse_args()


async def main(args: argparse.Namespace) -> int:
    from sanctionlog.container import Container
    from sanctionlog.data.tx_hashes import (
        CHAINALYSIS_SANCTIONS_LIST_LABEL,
        CHAINALYSIS_TX_HASHES,
        read_tx_hashes,
    )
    from sanctionlog.report.writer import ReportWriter

    container = Container()
    settings = container.settings()
    if settings.debug:
        logging.getLogger("sanctionlog").setLevel(logging.DEBUG)

    tx_hashes = read_tx_hashes(args.tx_file) if args.tx_file else CHAINALYSIS_TX_HASHES
    writer = ReportWriter(args.output) if args.output else container.report_writer()

    http = container.http_client()
    async with http:
        if not args.tx_file:
            print(f"Source: {CHAINALYSIS_SANCTIONS_LIST_LABEL}")
        print(f"Processing {len(tx_hashes)} transactions...")
        engine = container.engine()
        report = await engine.run(tx_hashes)

    writer.write(report)
    print(f"Net sanctioned addresses: {len(report.net_addresses)}")
    if report.failures:
        print(f"WARNING: {len(report.failures)} transactions failed; snapshot is provisional")
        for failure in report.failures:
            print(f"  {failure.tx_hash}: {failure.reason}")

    if report.net_addresses:
        print("\nNet sanctioned addresses:")
        for addr in report.net_addresses:
            print(addr)
    else:
        print("\nNo net sanctioned addresses found.")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main(parse_args())))
    except Exception:
        logger.exception("Error")
        sys.exit(1)
