"""Configuration-time allow-lists for zones."""

from __future__ import annotations

from typing import Iterable


def _normalize_domain(domain: str) -> str:
    return domain.strip().rstrip(".").lower()


def is_subdomain(name: str, suffix: str) -> bool:
    """Return True if *name* equals *suffix* or lies below it.

    Matching is dot-boundary aware: ``foo.example.com`` is below
    ``example.com`` but ``fooexample.com`` is not.
    """
    name = _normalize_domain(name)
    suffix = _normalize_domain(suffix)
    return name == suffix or name.endswith("." + suffix)


class DomainFilter:
    """Allow zones whose name ends with one of the configured domains.

    Empty entries are ignored; a filter with no entries allows everything.
    """

    def __init__(self, domains: Iterable[str] | None = None) -> None:
        self.filters = [d for d in (_normalize_domain(x) for x in domains or []) if d]

    def match(self, domain: str) -> bool:
        if not self.filters:
            return True
        return any(is_subdomain(domain, f) for f in self.filters)

    def __repr__(self) -> str:
        return f"DomainFilter({self.filters!r})"


class ZoneIDFilter:
    """Allow zones whose provider identifier is listed exactly."""

    def __init__(self, zone_ids: Iterable[str] | None = None) -> None:
        self.zone_ids = [z.strip() for z in zone_ids or [] if z.strip()]

    def match(self, zone_id: str) -> bool:
        if not self.zone_ids:
            return True
        return zone_id in self.zone_ids

    def __repr__(self) -> str:
        return f"ZoneIDFilter({self.zone_ids!r})"
