from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from sanctionlog.domain.enums import SanctionEventKind
from sanctionlog.domain.models.sanction import (
    RawLog,
    Receipt,
    ReconciliationReport,
    SanctionEvent,
    TxFailure,
    TxSuccess,
)

from conftest import ORACLE, addr, tx_hash


def _event() -> SanctionEvent:
    return SanctionEvent(
        kind=SanctionEventKind.ADDED,
        contract_address=ORACLE,
        block_number=14_000_000,
        transaction_hash=tx_hash(1),
        log_index=2,
        addresses=(addr(1),),
    )


class TestRawLog:
    def test_from_rpc_parses_hex_quantities(self, rpc_log):
        log = RawLog.from_rpc(rpc_log("added", [addr(1)], block=0x10, log_index=0x1F))
        assert log.block_number == 16
        assert log.log_index == 31
        assert log.address == ORACLE.lower()

    def test_from_rpc_lowercases_topics(self):
        log = RawLog.from_rpc({"topics": ["0xABCDEF"], "blockNumber": "0x1", "logIndex": "0x0"})
        assert log.topics == ("0xabcdef",)
        assert log.data == "0x"

    def test_is_frozen(self, rpc_log):
        log = RawLog.from_rpc(rpc_log("added", [addr(1)]))
        with pytest.raises(ValidationError):
            log.block_number = 1


class TestReceipt:
    def test_from_rpc_keeps_log_order(self, rpc_log):
        receipt = Receipt.from_rpc({
            "transactionHash": tx_hash(1),
            "blockNumber": "0x64",
            "logs": [rpc_log(None, data="0x", log_index=i) for i in (4, 1, 9)],
        })
        assert receipt.block_number == 100
        assert [log.log_index for log in receipt.logs] == [4, 1, 9]

    def test_missing_logs(self):
        receipt = Receipt.from_rpc({"blockNumber": "0x1", "logs": None})
        assert receipt.logs == ()


class TestArtifactShape:
    def test_sanction_event_aliases(self):
        dumped = _event().model_dump(mode="json", by_alias=True)
        assert dumped == {
            "type": "SanctionedAddressesAdded",
            "contractAddress": ORACLE,
            "blockNumber": 14_000_000,
            "transactionHash": tx_hash(1),
            "logIndex": 2,
            "addresses": [addr(1)],
        }

    def test_report_artifact(self):
        event = _event()
        report = ReconciliationReport(
            successes=[TxSuccess(tx_hash=tx_hash(1), block_number=14_000_000, events=(event,))],
            failures=[TxFailure(tx_hash=tx_hash(2), reason="Transaction not found")],
            all_events=[event],
            net_addresses=[addr(1)],
            complete=True,
            generated_at=datetime(2025, 8, 26, 12, 0, 0, tzinfo=UTC),
        )
        artifact = report.to_artifact()

        assert artifact["timestamp"] == "2025-08-26T12:00:00.000Z"
        assert artifact["summary"] == {
            "totalTransactions": 2,
            "successfulTransactions": 1,
            "failedTransactions": 1,
            "totalSanctionEvents": 1,
            "netSanctionedAddresses": 1,
        }
        assert artifact["netSanctionedAddresses"] == [addr(1)]
        assert artifact["sanctionEvents"][0]["type"] == "SanctionedAddressesAdded"
        assert artifact["successful"][0]["txHash"] == tx_hash(1)
        assert artifact["successful"][0]["blockNumber"] == 14_000_000
        assert artifact["successful"][0]["sanctionEvents"][0]["logIndex"] == 2
        assert artifact["failed"] == [{"txHash": tx_hash(2), "error": "Transaction not found", "sanctionEvents": []}]

    def test_provisional_flags(self):
        assert not ReconciliationReport(complete=True).is_provisional
        assert ReconciliationReport(complete=False).is_provisional
        assert ReconciliationReport(
            complete=True, failures=[TxFailure(tx_hash=tx_hash(1), reason="x")]
        ).is_provisional
