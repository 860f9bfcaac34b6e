"""ReconciliationEngine: drives the fetcher over an ordered hash list and folds events.

Fetches may overlap (bounded by ``max_concurrency``) but outcomes are recorded
and folded strictly in input order, so the net set never depends on the order
in which responses arrive.
"""

import asyncio
import logging
import re
from collections.abc import Sequence

from sanctionlog.domain.enums import RunStatus
from sanctionlog.domain.models.sanction import (
    ReconciliationReport,
    SanctionEvent,
    TransactionOutcome,
    TxFailure,
    TxSuccess,
)
from sanctionlog.exceptions import ConfigurationError
from sanctionlog.infra.blockchain.evm.tx_fetcher import TransactionFetcher
from sanctionlog.reconcile.fold import apply_event, render_addresses

logger = logging.getLogger(__name__)

_TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_tx_hashes(tx_hashes: Sequence[str]) -> list[str]:
    """Reject malformed or repeated hashes before any processing starts."""
    if isinstance(tx_hashes, str):
        raise ConfigurationError("Expected a sequence of transaction hashes, got a single string")

    seen: set[str] = set()
    validated: list[str] = []
    for i, tx_hash in enumerate(tx_hashes):
        if not isinstance(tx_hash, str) or not _TX_HASH_RE.match(tx_hash):
            raise ConfigurationError(f"Malformed transaction hash at position {i}: {tx_hash!r}")
        key = tx_hash.lower()
        if key in seen:
            raise ConfigurationError(f"Duplicate transaction hash at position {i}: {tx_hash}")
        seen.add(key)
        validated.append(tx_hash)
    return validated


class ReconciliationEngine:
    """Per-run state machine: IDLE -> PROCESSING(i) -> DONE.

    The running address set lives only inside ``run``. A cancelled run ends in
    CANCELLED, discards the folded set, and leaves an incomplete report in
    ``partial_report``.
    """

    def __init__(self, fetcher: TransactionFetcher, max_concurrency: int = 1) -> None:
        if max_concurrency < 1:
            raise ConfigurationError("max_concurrency must be at least 1")
        self._fetcher = fetcher
        self._max_concurrency = max_concurrency
        self._status = RunStatus.IDLE
        self._position = 0
        self.partial_report: ReconciliationReport | None = None

    @property
    def status(self) -> RunStatus:
        return self._status

    @property
    def position(self) -> int:
        """Index of the transaction currently being recorded."""
        return self._position

    async def run(self, tx_hashes: Sequence[str]) -> ReconciliationReport:
        if self._status == RunStatus.PROCESSING:
            raise ConfigurationError("A reconciliation run is already in progress")
        hashes = validate_tx_hashes(tx_hashes)

        self._status = RunStatus.PROCESSING
        self._position = 0
        self.partial_report = None
        logger.info("Processing %d transactions (max_concurrency=%d)", len(hashes), self._max_concurrency)

        successes: list[TxSuccess] = []
        failures: list[TxFailure] = []
        all_events: list[SanctionEvent] = []
        addresses: set[str] = set()

        semaphore = asyncio.Semaphore(self._max_concurrency)
        tasks = [asyncio.create_task(self._fetch_bounded(semaphore, h)) for h in hashes]
        try:
            for i, task in enumerate(tasks):
                self._position = i
                outcome = await task
                if isinstance(outcome, TxSuccess):
                    successes.append(outcome)
                    all_events.extend(outcome.events)
                    for event in outcome.events:
                        apply_event(addresses, event)
                else:
                    failures.append(outcome)
        except asyncio.CancelledError:
            self._status = RunStatus.CANCELLED
            self.partial_report = ReconciliationReport(
                successes=successes,
                failures=failures,
                all_events=all_events,
                complete=False,
            )
            logger.warning(
                "Run cancelled after %d of %d transactions; partial report discarded",
                len(successes) + len(failures), len(hashes),
            )
            raise
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        self._status = RunStatus.DONE
        self._position = len(hashes)
        report = ReconciliationReport(
            successes=successes,
            failures=failures,
            all_events=all_events,
            net_addresses=render_addresses(addresses),
            complete=True,
        )
        summary = report.summary
        logger.info(
            "Reconciled %d TXs: %d ok, %d failed, %d events, %d net addresses",
            summary.total_transactions,
            summary.successful_transactions,
            summary.failed_transactions,
            summary.total_sanction_events,
            summary.net_sanctioned_addresses,
        )
        return report

    async def _fetch_bounded(self, semaphore: asyncio.Semaphore, tx_hash: str) -> TransactionOutcome:
        async with semaphore:
            try:
                return await self._fetcher.fetch(tx_hash)
            except Exception as e:
                logger.exception("Unexpected error fetching TX %s", tx_hash)
                return TxFailure(tx_hash=tx_hash, reason=f"Unexpected error: {e}")
