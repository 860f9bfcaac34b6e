import pytest
from eth_utils import to_checksum_address

from sanctionlog.domain.models.sanction import Receipt
from sanctionlog.parser.address_array import encode_address_array
from sanctionlog.parser.classifier import LogClassifier
from sanctionlog.parser.topics import (
    SANCTIONED_ADDRESSES_ADDED_TOPIC,
    SANCTIONED_ADDRESSES_REMOVED_TOPIC,
    build_default_registry,
)

ORACLE = to_checksum_address("0x40c57923924b5c5c5455c48d93317139addac8fb")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def addr(n: int) -> str:
    """Deterministic checksummed test address."""
    return to_checksum_address("0x" + f"{n:x}".rjust(40, "a"))


def tx_hash(n: int) -> str:
    return "0x" + f"{n:x}".rjust(64, "0")


@pytest.fixture()
def registry():
    return build_default_registry()


@pytest.fixture()
def classifier(registry):
    return LogClassifier(registry, max_array_length=100)


@pytest.fixture()
def rpc_log():
    """Factory for JSON-RPC style log dicts."""

    def _make(
        kind: str | None = "added",
        addresses: list[str] | None = None,
        tx: str = tx_hash(1),
        block: int = 100,
        log_index: int = 0,
        data: str | None = None,
        topic: str | None = None,
    ) -> dict:
        if topic is None:
            topic = {
                "added": SANCTIONED_ADDRESSES_ADDED_TOPIC,
                "removed": SANCTIONED_ADDRESSES_REMOVED_TOPIC,
            }.get(kind or "", TRANSFER_TOPIC)
        return {
            "address": ORACLE.lower(),
            "topics": [topic],
            "data": data if data is not None else encode_address_array(addresses or []),
            "transactionHash": tx,
            "blockNumber": hex(block),
            "logIndex": hex(log_index),
        }

    return _make


@pytest.fixture()
def receipt():
    """Factory for Receipt objects built from RPC log dicts."""

    def _make(tx: str, logs: list[dict], block: int = 100) -> Receipt:
        return Receipt.from_rpc({"transactionHash": tx, "blockNumber": hex(block), "logs": logs})

    return _make
