"""Domain types for sanction event reconciliation.

Field aliases are the camelCase names used by the JSON-RPC receipt format and
by the persisted snapshot artifact. Downstream tooling depends on them.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from sanctionlog.domain.enums import SanctionEventKind


def _hex_int(value: int | str) -> int:
    """JSON-RPC quantities arrive as 0x-prefixed hex strings."""
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    return int(value)


class RawLog(BaseModel):
    """One log entry from a transaction receipt. Read-only."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str
    topics: tuple[str, ...] = ()
    data: str = "0x"
    transaction_hash: str = Field(alias="transactionHash")
    block_number: int = Field(alias="blockNumber")
    log_index: int = Field(alias="logIndex")

    @classmethod
    def from_rpc(cls, raw: dict) -> "RawLog":
        return cls(
            address=raw.get("address", ""),
            topics=tuple(t.lower() for t in raw.get("topics") or ()),
            data=raw.get("data") or "0x",
            transaction_hash=raw.get("transactionHash", ""),
            block_number=_hex_int(raw.get("blockNumber", 0)),
            log_index=_hex_int(raw.get("logIndex", 0)),
        )


class Receipt(BaseModel):
    """The subset of a transaction receipt the fetcher consumes."""

    model_config = ConfigDict(frozen=True)

    transaction_hash: str
    block_number: int
    logs: tuple[RawLog, ...] = ()

    @classmethod
    def from_rpc(cls, raw: dict) -> "Receipt":
        return cls(
            transaction_hash=raw.get("transactionHash", ""),
            block_number=_hex_int(raw.get("blockNumber", 0)),
            logs=tuple(RawLog.from_rpc(log) for log in raw.get("logs") or ()),
        )


class SanctionEvent(BaseModel):
    """A decoded SanctionedAddressesAdded / SanctionedAddressesRemoved log."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: SanctionEventKind = Field(alias="type")
    contract_address: str = Field(alias="contractAddress")
    block_number: int = Field(alias="blockNumber")
    transaction_hash: str = Field(alias="transactionHash")
    log_index: int = Field(alias="logIndex")
    addresses: tuple[str, ...] = ()  # checksummed, payload order


class TxSuccess(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tx_hash: str = Field(alias="txHash")
    block_number: int = Field(alias="blockNumber")
    events: tuple[SanctionEvent, ...] = Field(default=(), alias="sanctionEvents")


class TxFailure(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tx_hash: str = Field(alias="txHash")
    reason: str = Field(alias="error")

    def to_artifact(self) -> dict:
        # Failed entries keep an empty sanctionEvents list in the artifact
        return {**self.model_dump(mode="json", by_alias=True), "sanctionEvents": []}


TransactionOutcome = TxSuccess | TxFailure


class ReportSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_transactions: int = Field(alias="totalTransactions")
    successful_transactions: int = Field(alias="successfulTransactions")
    failed_transactions: int = Field(alias="failedTransactions")
    total_sanction_events: int = Field(alias="totalSanctionEvents")
    net_sanctioned_addresses: int = Field(alias="netSanctionedAddresses")


class ReconciliationReport(BaseModel):
    """Terminal artifact of a run. Only reports with complete=True are snapshots."""

    successes: list[TxSuccess] = []
    failures: list[TxFailure] = []
    all_events: list[SanctionEvent] = []
    net_addresses: list[str] = []  # sorted, deduplicated
    complete: bool = False
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def summary(self) -> ReportSummary:
        return ReportSummary(
            total_transactions=len(self.successes) + len(self.failures),
            successful_transactions=len(self.successes),
            failed_transactions=len(self.failures),
            total_sanction_events=len(self.all_events),
            net_sanctioned_addresses=len(self.net_addresses),
        )

    @property
    def is_provisional(self) -> bool:
        """True when some transactions failed, so net_addresses rests on incomplete ledger data."""
        return bool(self.failures) or not self.complete

    def to_artifact(self) -> dict:
        """Render the persisted snapshot shape."""
        timestamp = self.generated_at.astimezone(UTC).isoformat(timespec="milliseconds")
        return {
            "timestamp": timestamp.replace("+00:00", "Z"),
            "summary": self.summary.model_dump(by_alias=True),
            "netSanctionedAddresses": list(self.net_addresses),
            "sanctionEvents": [e.model_dump(mode="json", by_alias=True) for e in self.all_events],
            "successful": [s.model_dump(mode="json", by_alias=True) for s in self.successes],
            "failed": [f.to_artifact() for f in self.failures],
        }
