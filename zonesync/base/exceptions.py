"""
Zonesync exception hierarchy.

Every provider error inherits from :class:`ZoneSyncError`.  DNS failures
raised by the injected client or by the adapter itself derive from
:class:`DNSError` so callers can wrap ``records`` / ``apply_changes``
with a single ``except`` clause.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zonesync.base.endpoint import Endpoint


# ── Base ──────────────────────────────────────────────────────────────
class ZoneSyncError(Exception):
    """Root exception for all zonesync errors."""


# ── DNS ───────────────────────────────────────────────────────────────
class DNSError(ZoneSyncError):
    """Base exception for DNS operations."""


class ZoneNotFoundError(DNSError):
    """DNS zone not found."""


class RecordNotFoundError(DNSError):
    """DNS record set not found."""


class DNSAuthenticationError(DNSError):
    """The provider rejected the configured credentials."""


class UnsupportedRecordTypeError(DNSError):
    """Endpoint record type has no provider value container."""


class ChangeApplyError(DNSError):
    """One or more mutations of a batch failed.

    Only raised when the provider runs with ``continue_on_error``; in the
    default fail-fast mode the first provider error propagates as-is.

    Attributes:
        failures: ``(endpoint, exception)`` pairs in execution order.
    """

    def __init__(self, failures: list[tuple[Endpoint, Exception]]) -> None:
        self.failures = failures
        summary = "; ".join(f"{ep.dns_name} ({ep.record_type}): {exc}" for ep, exc in failures)
        super().__init__(f"{len(failures)} change(s) failed: {summary}")
