"""Azure DNS implementation of the provider blueprint."""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from zonesync.azure.client import AzureDNSClient, DNSClientBlueprint
from zonesync.azure.models import RecordSet, Zone
from zonesync.azure.translator import relative_record_set_name, to_endpoint, to_record_set
from zonesync.azure.zones import ZoneDirectory, find_zone
from zonesync.base.config import AzureConfig
from zonesync.base.endpoint import Endpoint
from zonesync.base.exceptions import ChangeApplyError, UnsupportedRecordTypeError
from zonesync.base.filters import DomainFilter, ZoneIDFilter
from zonesync.base.logger import zs_logger
from zonesync.base.plan import Changes
from zonesync.base.provider import ProviderBlueprint

_PROVIDER = "azure"


class _Change(NamedTuple):
    zone: Zone
    relative_name: str
    endpoint: Endpoint
    # set on create-or-update changes once translated
    record_set: RecordSet | None = None

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.zone.name.lower(), self.relative_name.lower(), self.endpoint.record_type)


class AzureProvider(ProviderBlueprint):
    """Azure DNS provider.

    Attributes:
        client: Zone and record-set client capability.
        zones: Filtered zone directory built from the config's allow-lists.
        dry_run: Log mutations instead of issuing them.
        continue_on_error: Attempt every mutation and raise
            :class:`ChangeApplyError` at the end instead of failing fast.
        default_ttl: TTL written for endpoints without one.
    """

    def __init__(self, config: AzureConfig, client: DNSClientBlueprint | None = None) -> None:
        """Initialize the provider.

        Args:
            config: Validated Azure configuration.
            client: Client capability; an :class:`AzureDNSClient` built from
                *config* when omitted.
        """
        self.client = client or AzureDNSClient(config)
        self.zones = ZoneDirectory(
            self.client,
            DomainFilter(config.domain_filter),
            ZoneIDFilter(config.zone_id_filter),
        )
        self.dry_run = config.dry_run
        self.continue_on_error = config.continue_on_error
        self.default_ttl = config.default_ttl

    # --- Read path ---

    def records(self) -> list[Endpoint]:
        """List the endpoints of every filtered zone.

        Zone order and the provider's record-set order are preserved.
        Record sets the translator rejects are skipped.

        Raises:
            DNSError: If any zone or record-set listing fails.
        """
        endpoints: list[Endpoint] = []
        for zone in self.zones.list_zones():
            for record_set in self.client.list_record_sets(zone.name):
                endpoint = to_endpoint(zone, record_set)
                if endpoint is None:
                    zs_logger.debug(
                        f"Skipping record set '{record_set.name}' of type '{record_set.type}'",
                        provider=_PROVIDER,
                        zone=zone.name,
                        operation="records",
                    )
                    continue
                zs_logger.debug(
                    f"Found {endpoint.record_type} record for '{endpoint.dns_name}' "
                    f"with target '{endpoint.target}'",
                    provider=_PROVIDER,
                    zone=zone.name,
                    operation="records",
                )
                endpoints.append(endpoint)
        return endpoints

    # --- Write path ---

    def apply_changes(self, changes: Changes) -> None:
        """Apply a mutation batch to Azure DNS.

        Deletes run before create-or-updates, each in batch order. An
        ``update_old`` entry only produces a delete when no create or
        ``update_new`` entry rewrites the same (zone, name, type) key.

        Raises:
            DNSError: The first failing mutation's error (fail-fast), or
                :class:`ChangeApplyError` with every failure when
                ``continue_on_error`` is set.
        """
        zones = self.zones.list_zones()
        ignored: set[str] = set()

        upserts = self._map_changes(zones, changes.create, ignored)
        upserts += self._map_changes(zones, changes.update_new, ignored)
        rewritten = {change.key for change in upserts}

        deletes: list[_Change] = []
        seen: set[tuple[str, str, str]] = set()
        for change in self._map_changes(zones, changes.delete, ignored):
            if change.key not in seen:
                seen.add(change.key)
                deletes.append(change)
        for change in self._map_changes(zones, changes.update_old, ignored):
            if change.key not in rewritten and change.key not in seen:
                seen.add(change.key)
                deletes.append(change)

        failures: list[tuple[Endpoint, Exception]] = []
        upserts = self._translate(upserts, failures)
        for change in deletes:
            self._run(self._delete, change, failures)
        for change in upserts:
            self._run(self._upsert, change, failures)

        if failures:
            raise ChangeApplyError(failures)

    def _map_changes(self, zones: list[Zone], endpoints: list[Endpoint], ignored: set[str]) -> list[_Change]:
        mapped: list[_Change] = []
        for endpoint in endpoints:
            zone = find_zone(zones, endpoint.dns_name)
            if zone is None:
                if endpoint.dns_name not in ignored:
                    ignored.add(endpoint.dns_name)
                    zs_logger.info(
                        f"Ignoring changes to '{endpoint.dns_name}' because no matching zone was found",
                        provider=_PROVIDER,
                        operation="apply_changes",
                    )
                continue
            mapped.append(_Change(zone, relative_record_set_name(endpoint.dns_name, zone.name), endpoint))
        return mapped

    def _translate(self, upserts: list[_Change], failures: list[tuple[Endpoint, Exception]]) -> list[_Change]:
        """Attach the record set each create-or-update will write.

        Runs before any provider call, so an untranslatable batch fails
        without touching the zone. With ``continue_on_error`` the bad
        entries are recorded as failures and left out.
        """
        translated: list[_Change] = []
        for change in upserts:
            try:
                record_set = to_record_set(change.zone.name, change.endpoint, self.default_ttl)
            except UnsupportedRecordTypeError as e:
                if not self.continue_on_error:
                    raise
                zs_logger.error(
                    f"Cannot translate {change.endpoint}: {e}",
                    provider=_PROVIDER,
                    zone=change.zone.name,
                    operation="create_or_update",
                )
                failures.append((change.endpoint, e))
                continue
            translated.append(change._replace(record_set=record_set))
        return translated

    def _run(
        self,
        action: Callable[[_Change], None],
        change: _Change,
        failures: list[tuple[Endpoint, Exception]],
    ) -> None:
        if not self.continue_on_error:
            action(change)
            return
        try:
            action(change)
        except Exception as e:
            zs_logger.log_operation(
                logging.ERROR,
                f"Failed to apply change for {change.endpoint}: {e}",
                provider=_PROVIDER,
                zone=change.zone.name,
                exc_info=True,
            )
            failures.append((change.endpoint, e))

    def _delete(self, change: _Change) -> None:
        endpoint = change.endpoint
        if self.dry_run:
            zs_logger.info(
                f"Would delete {endpoint.record_type} record named '{change.relative_name}'",
                provider=_PROVIDER,
                zone=change.zone.name,
                operation="delete",
                dry_run=True,
            )
            return
        zs_logger.info(
            f"Deleting {endpoint.record_type} record named '{change.relative_name}'",
            provider=_PROVIDER,
            zone=change.zone.name,
            operation="delete",
        )
        self.client.delete(change.zone.name, change.relative_name, endpoint.record_type)

    def _upsert(self, change: _Change) -> None:
        endpoint = change.endpoint
        if self.dry_run:
            zs_logger.info(
                f"Would update {endpoint.record_type} record named '{change.relative_name}' "
                f"to '{endpoint.target}'",
                provider=_PROVIDER,
                zone=change.zone.name,
                operation="create_or_update",
                dry_run=True,
            )
            return
        zs_logger.info(
            f"Updating {endpoint.record_type} record named '{change.relative_name}' "
            f"to '{endpoint.target}'",
            provider=_PROVIDER,
            zone=change.zone.name,
            operation="create_or_update",
        )
        self.client.create_or_update(change.zone.name, change.relative_name, endpoint.record_type, change.record_set)
