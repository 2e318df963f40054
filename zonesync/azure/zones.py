"""Zone listing and name-to-zone resolution."""

from __future__ import annotations

from typing import Iterable

from zonesync.azure.client import DNSClientBlueprint
from zonesync.azure.models import Zone
from zonesync.base.filters import DomainFilter, ZoneIDFilter, is_subdomain


class ZoneDirectory:
    """Zones of the client's scope that pass both allow-lists."""

    def __init__(
        self,
        client: DNSClientBlueprint,
        domain_filter: DomainFilter | None = None,
        zone_id_filter: ZoneIDFilter | None = None,
    ) -> None:
        self.client = client
        self.domain_filter = domain_filter or DomainFilter()
        self.zone_id_filter = zone_id_filter or ZoneIDFilter()

    def list_zones(self) -> list[Zone]:
        """Return the filtered zones in provider order.

        Raises:
            DNSError: If the client fails to list zones.
        """
        return [
            zone
            for zone in self.client.list_zones()
            if zone.name
            and self.domain_filter.match(zone.name)
            and self.zone_id_filter.match(zone.id)
        ]


def find_zone(zones: Iterable[Zone], dns_name: str) -> Zone | None:
    """Return the zone whose name is the longest suffix of *dns_name*.

    ``None`` means the name lies outside every zone of this account.
    """
    best: Zone | None = None
    for zone in zones:
        if not is_subdomain(dns_name, zone.name):
            continue
        if best is None or len(zone.name.rstrip(".")) > len(best.name.rstrip(".")):
            best = zone
    return best
