"""Topic registry: event signature fingerprints -> sanction event kind."""

from eth_utils import keccak

from sanctionlog.domain.enums import SanctionEventKind

SANCTIONED_ADDRESSES_ADDED = "SanctionedAddressesAdded(address[])"
SANCTIONED_ADDRESSES_REMOVED = "SanctionedAddressesRemoved(address[])"


def event_topic(signature: str) -> str:
    """keccak256 of the canonical event signature, as 0x-prefixed lowercase hex."""
    return "0x" + keccak(text=signature).hex()


class TopicRegistry:
    """Registry mapping topic0 fingerprints to a SanctionEventKind.

    Lookup is total: unknown fingerprints return None.
    """

    def __init__(self) -> None:
        self._kinds: dict[str, SanctionEventKind] = {}

    def register(self, signature: str, kind: SanctionEventKind) -> str:
        topic = event_topic(signature)
        self._kinds[topic] = kind
        return topic

    def lookup(self, topic: str | None) -> SanctionEventKind | None:
        if not topic:
            return None
        return self._kinds.get(topic.lower())

    def topics(self) -> dict[str, SanctionEventKind]:
        return dict(self._kinds)


def build_default_registry() -> TopicRegistry:
    """Create a TopicRegistry with the sanctions oracle events registered."""
    registry = TopicRegistry()
    registry.register(SANCTIONED_ADDRESSES_ADDED, SanctionEventKind.ADDED)
    registry.register(SANCTIONED_ADDRESSES_REMOVED, SanctionEventKind.REMOVED)
    return registry


SANCTIONED_ADDRESSES_ADDED_TOPIC = event_topic(SANCTIONED_ADDRESSES_ADDED)
SANCTIONED_ADDRESSES_REMOVED_TOPIC = event_topic(SANCTIONED_ADDRESSES_REMOVED)
