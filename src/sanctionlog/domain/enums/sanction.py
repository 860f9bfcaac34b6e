from enum import Enum


class SanctionEventKind(str, Enum):
    """Decoded sanction event kind. Values match the artifact's "type" field."""

    ADDED = "SanctionedAddressesAdded"
    REMOVED = "SanctionedAddressesRemoved"


class RunStatus(str, Enum):
    """Reconciliation run state."""

    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    DONE = "DONE"
    CANCELLED = "CANCELLED"
