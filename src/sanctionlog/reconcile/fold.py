"""Sanction set fold: pure functions, no network dependency."""

from collections.abc import Iterable

from sanctionlog.domain.enums import SanctionEventKind
from sanctionlog.domain.models.sanction import SanctionEvent


def apply_event(addresses: set[str], event: SanctionEvent) -> None:
    """Apply one event in place. Removing an absent address is a no-op."""
    if event.kind == SanctionEventKind.ADDED:
        addresses.update(event.addresses)
    elif event.kind == SanctionEventKind.REMOVED:
        addresses.difference_update(event.addresses)


def fold_events(events: Iterable[SanctionEvent], initial: Iterable[str] = ()) -> set[str]:
    """Fold events, in the given order, into the net sanctioned address set."""
    addresses = set(initial)
    for event in events:
        apply_event(addresses, event)
    return addresses


def render_addresses(addresses: Iterable[str]) -> list[str]:
    """Deterministic external form: deduplicated and sorted."""
    return sorted(set(addresses))
