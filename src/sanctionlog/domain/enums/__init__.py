from sanctionlog.domain.enums.sanction import RunStatus, SanctionEventKind

__all__ = [
    "RunStatus",
    "SanctionEventKind",
]
