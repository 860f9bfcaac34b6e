"""Error hierarchy for sanction list reconciliation."""


class SanctionLogError(Exception):
    """Base for all sanctionlog errors."""


class ExternalServiceError(SanctionLogError):
    """Remote ledger node unreachable, timed out, or returned an RPC error."""


class TransactionNotFoundError(SanctionLogError):
    """The node has no receipt for the requested transaction."""

    def __init__(self, tx_hash: str) -> None:
        super().__init__("Transaction not found")
        self.tx_hash = tx_hash


class DecodeError(SanctionLogError):
    """A recognized sanction log carried a payload that could not be decoded."""


class ConfigurationError(SanctionLogError):
    """Invalid run input or settings. Raised before any transaction is processed."""


class IncompleteReportError(SanctionLogError):
    """Attempt to persist a report from a run that did not reach DONE."""
