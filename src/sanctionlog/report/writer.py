"""Snapshot persistence: writes the reconciliation artifact and reads it back."""

import json
import logging
from pathlib import Path

from eth_utils import is_checksum_address

from sanctionlog.domain.models.sanction import ReconciliationReport
from sanctionlog.exceptions import ConfigurationError, IncompleteReportError

logger = logging.getLogger(__name__)


class ReportWriter:
    """Persists complete reports as indented JSON."""

    def __init__(self, output_path: str | Path) -> None:
        self._output_path = Path(output_path)

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(self, report: ReconciliationReport) -> Path:
        if not report.complete:
            raise IncompleteReportError("Refusing to persist a report from an unfinished run")

        if report.failures:
            logger.warning(
                "Persisting provisional snapshot: %d transactions failed", len(report.failures)
            )

        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        self._output_path.write_text(json.dumps(report.to_artifact(), indent=2))
        logger.info("Results saved to: %s", self._output_path)
        return self._output_path


def load_net_addresses(path: str | Path) -> list[str]:
    """Read ``netSanctionedAddresses`` from a snapshot for downstream configuration.

    The list must be sorted, free of duplicates and EIP-55 checksummed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"No sanction list found at {path}")

    try:
        artifact = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Sanction list {path} is not valid JSON: {e}") from e

    addresses = artifact.get("netSanctionedAddresses") if isinstance(artifact, dict) else None
    if not isinstance(addresses, list):
        raise ConfigurationError(f"Sanction list {path} has no netSanctionedAddresses list")

    bad = [a for a in addresses if not isinstance(a, str) or not is_checksum_address(a)]
    if bad:
        raise ConfigurationError(f"Sanction list {path} has non-checksummed entries: {bad[:3]}")
    if addresses != sorted(set(addresses)):
        raise ConfigurationError(f"Sanction list {path} is not sorted and deduplicated")
    return addresses
