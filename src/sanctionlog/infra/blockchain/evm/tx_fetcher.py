"""Transaction fetcher: one hash in, one TransactionOutcome out."""

import logging

from sanctionlog.domain.models.sanction import TransactionOutcome, TxFailure, TxSuccess
from sanctionlog.exceptions import DecodeError, ExternalServiceError, TransactionNotFoundError
from sanctionlog.infra.blockchain.evm.rpc_client import EVMRPCClient
from sanctionlog.parser.classifier import LogClassifier

logger = logging.getLogger(__name__)


class TransactionFetcher:
    """Fetches a receipt and classifies its logs.

    Every expected failure is returned as a TxFailure so one bad transaction
    never aborts the run. No retries happen here; the RPC client owns that policy.
    """

    def __init__(self, rpc: EVMRPCClient, classifier: LogClassifier) -> None:
        self._rpc = rpc
        self._classifier = classifier

    async def fetch(self, tx_hash: str) -> TransactionOutcome:
        try:
            receipt = await self._rpc.get_transaction_receipt(tx_hash)
        except TransactionNotFoundError as e:
            logger.warning("TX %s: %s", tx_hash, e)
            return TxFailure(tx_hash=tx_hash, reason=str(e))
        except ExternalServiceError as e:
            logger.warning("TX %s: fetch failed: %s", tx_hash, e)
            return TxFailure(tx_hash=tx_hash, reason=str(e))

        try:
            events = self._classifier.classify_all(receipt.logs)
        except DecodeError as e:
            logger.warning("TX %s: decode failed: %s", tx_hash, e)
            return TxFailure(tx_hash=tx_hash, reason=f"Decode error: {e}")

        logger.debug("TX %s: %d sanction events in %d logs", tx_hash, len(events), len(receipt.logs))
        return TxSuccess(tx_hash=tx_hash, block_number=receipt.block_number, events=tuple(events))
