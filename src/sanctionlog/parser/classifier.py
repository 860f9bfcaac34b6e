"""Log classifier: RawLog -> SanctionEvent | None."""

from eth_utils import to_checksum_address

from sanctionlog.domain.models.sanction import RawLog, SanctionEvent
from sanctionlog.exceptions import DecodeError
from sanctionlog.parser.address_array import DEFAULT_MAX_LENGTH, decode_address_array
from sanctionlog.parser.topics import TopicRegistry


class LogClassifier:
    """Matches a log's topic0 against the registry and decodes recognized payloads.

    Returns None for logs unrelated to sanctions. A recognized log whose payload
    cannot be decoded raises DecodeError instead of yielding an empty event.
    """

    def __init__(self, registry: TopicRegistry, max_array_length: int = DEFAULT_MAX_LENGTH) -> None:
        self._registry = registry
        self._max_array_length = max_array_length

    def classify(self, log: RawLog) -> SanctionEvent | None:
        topic0 = log.topics[0] if log.topics else None
        kind = self._registry.lookup(topic0)
        if kind is None:
            return None

        try:
            addresses = decode_address_array(log.data, max_length=self._max_array_length)
            contract_address = to_checksum_address(log.address)
        except (DecodeError, ValueError) as e:
            raise DecodeError(f"{kind.value} log {log.log_index}: {e}") from e

        return SanctionEvent(
            kind=kind,
            contract_address=contract_address,
            block_number=log.block_number,
            transaction_hash=log.transaction_hash,
            log_index=log.log_index,
            addresses=tuple(addresses),
        )

    def classify_all(self, logs: list[RawLog] | tuple[RawLog, ...]) -> list[SanctionEvent]:
        """Classify logs in their original order, dropping unrelated ones."""
        events: list[SanctionEvent] = []
        for log in logs:
            event = self.classify(log)
            if event is not None:
                events.append(event)
        return events
