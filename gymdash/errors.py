from __future__ import annotations


class StoreError(RuntimeError):
    """Raised by a record store when a read cannot be served."""


class SourceUnavailable(RuntimeError):
    """A required read failed; the whole dashboard load is void."""

    default_message = "Failed to load dashboard stats"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EnrichmentDegraded(RuntimeError):
    """The user identity lookup failed; bookings are shown without identities."""


__all__ = ["EnrichmentDegraded", "SourceUnavailable", "StoreError"]
