"""Zone and record-set client capability, and its Azure DNS implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, NoReturn

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    ResourceNotFoundError,
    ServiceRequestError,
)
from azure.identity import ClientSecretCredential, DefaultAzureCredential, ManagedIdentityCredential
from azure.mgmt.dns import DnsManagementClient
from azure.mgmt.dns.models import (
    ARecord as SdkARecord,
    CnameRecord as SdkCnameRecord,
    RecordSet as SdkRecordSet,
    TxtRecord as SdkTxtRecord,
)

from zonesync.azure.models import ARecord, CnameRecord, RecordSet, TxtRecord, Zone
from zonesync.base.config import AzureConfig
from zonesync.base.exceptions import DNSAuthenticationError, DNSError, ZoneNotFoundError
from zonesync.base.retry import retry


class DNSClientBlueprint(ABC):
    """The four provider operations the adapter depends on.

    Implementations own authentication, pagination and transport retries;
    the adapter calls each operation once and treats it as succeed-or-fail.
    """

    @abstractmethod
    def list_zones(self) -> list[Zone]:
        """List every zone visible to the configured scope, all pages."""

    @abstractmethod
    def list_record_sets(self, zone_name: str) -> list[RecordSet]:
        """List every record set of *zone_name*, all pages."""

    @abstractmethod
    def create_or_update(
        self,
        zone_name: str,
        relative_name: str,
        record_type: str,
        record_set: RecordSet,
    ) -> RecordSet:
        """Unconditionally write a record set, returning the stored value."""

    @abstractmethod
    def delete(self, zone_name: str, relative_name: str, record_type: str) -> None:
        """Delete the record set keyed by (zone, relative name, type)."""


# The request never reached the service, so repeating it is safe even
# for mutations.
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    ServiceRequestError,
    ConnectionError,
    TimeoutError,
)

_ERROR_MAP: dict[type[AzureError], type[DNSError]] = {
    ResourceNotFoundError: ZoneNotFoundError,
    ClientAuthenticationError: DNSAuthenticationError,
}


def _handle(e: AzureError, msg: str) -> NoReturn:
    exc = next((v for k, v in _ERROR_MAP.items() if isinstance(e, k)), DNSError)
    raise exc(msg) from e


def build_credential(config: AzureConfig) -> Any:
    """Pick the azure-identity credential matching *config*."""
    if config.client_secret:
        return ClientSecretCredential(
            tenant_id=config.tenant_id,
            client_id=config.client_id,
            client_secret=config.client_secret,
        )
    if config.use_managed_identity:
        if config.client_id:
            return ManagedIdentityCredential(client_id=config.client_id)
        return ManagedIdentityCredential()
    return DefaultAzureCredential()


def _from_sdk(record_set: Any) -> RecordSet:
    a_records = record_set.a_records
    cname_record = record_set.cname_record
    txt_records = record_set.txt_records
    return RecordSet(
        name=record_set.name,
        type=record_set.type,
        ttl=record_set.ttl,
        a_records=[ARecord(ipv4_address=a.ipv4_address) for a in a_records if a.ipv4_address]
        if a_records
        else None,
        cname_record=CnameRecord(cname=cname_record.cname)
        if cname_record is not None and cname_record.cname
        else None,
        txt_records=[TxtRecord(value=list(t.value or [])) for t in txt_records] if txt_records else None,
    )


def _to_sdk(record_set: RecordSet) -> SdkRecordSet:
    return SdkRecordSet(
        ttl=record_set.ttl,
        a_records=[SdkARecord(ipv4_address=a.ipv4_address) for a in record_set.a_records]
        if record_set.a_records is not None
        else None,
        cname_record=SdkCnameRecord(cname=record_set.cname_record.cname)
        if record_set.cname_record is not None
        else None,
        txt_records=[SdkTxtRecord(value=list(t.value)) for t in record_set.txt_records]
        if record_set.txt_records is not None
        else None,
    )


class AzureDNSClient(DNSClientBlueprint):
    """Azure DNS client scoped to one resource group.

    Attributes:
        client: azure-mgmt-dns management client.
        resource_group: Resource group holding the zones.
    """

    def __init__(self, config: AzureConfig, dns_client: DnsManagementClient | None = None) -> None:
        """Initialize the DNS management client.

        Args:
            config: Azure configuration object; ``subscription_id`` and
                ``resource_group`` are guaranteed by the validator.
            dns_client: Pre-built management client, mainly for tests.
        """
        assert config.resource_group is not None  # guaranteed by AzureConfig validator
        self.resource_group: str = config.resource_group
        self.client = dns_client or DnsManagementClient(build_credential(config), config.subscription_id)

    def list_zones(self) -> list[Zone]:
        """List all DNS zones in the resource group.

        Raises:
            ZoneNotFoundError: If the resource group does not exist.
            DNSError: On Azure API failure.
        """
        try:
            return self._list_zones()
        except AzureError as e:
            _handle(e, f"Failed to list zones in resource group '{self.resource_group}'")

    def list_record_sets(self, zone_name: str) -> list[RecordSet]:
        """List all record sets of a zone.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            DNSError: On Azure API failure.
        """
        try:
            return self._list_record_sets(zone_name)
        except AzureError as e:
            _handle(e, f"Failed to list record sets in zone '{zone_name}'")

    def create_or_update(
        self,
        zone_name: str,
        relative_name: str,
        record_type: str,
        record_set: RecordSet,
    ) -> RecordSet:
        """Write a record set without If-Match / If-None-Match preconditions.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            DNSError: On Azure API failure.
        """
        try:
            result = self._create_or_update(zone_name, relative_name, record_type, _to_sdk(record_set))
            return _from_sdk(result)
        except AzureError as e:
            _handle(e, f"Failed to write {record_type} record '{relative_name}' in zone '{zone_name}'")

    def delete(self, zone_name: str, relative_name: str, record_type: str) -> None:
        """Delete a record set.

        Raises:
            DNSError: On Azure API failure.
        """
        try:
            self._delete(zone_name, relative_name, record_type)
        except AzureError as e:
            _handle(e, f"Failed to delete {record_type} record '{relative_name}' from zone '{zone_name}'")

    # --- SDK calls ---

    @retry(retryable_exceptions=TRANSIENT_ERRORS)
    def _list_zones(self) -> list[Zone]:
        # ItemPaged follows next links while iterating
        return [
            Zone(id=z.id, name=z.name)
            for z in self.client.zones.list_by_resource_group(self.resource_group)
        ]

    @retry(retryable_exceptions=TRANSIENT_ERRORS)
    def _list_record_sets(self, zone_name: str) -> list[RecordSet]:
        return [
            _from_sdk(r)
            for r in self.client.record_sets.list_by_dns_zone(self.resource_group, zone_name)
        ]

    @retry(retryable_exceptions=TRANSIENT_ERRORS)
    def _create_or_update(
        self, zone_name: str, relative_name: str, record_type: str, parameters: SdkRecordSet
    ) -> Any:
        return self.client.record_sets.create_or_update(
            resource_group_name=self.resource_group,
            zone_name=zone_name,
            relative_record_set_name=relative_name,
            record_type=record_type,
            parameters=parameters,
        )

    @retry(retryable_exceptions=TRANSIENT_ERRORS)
    def _delete(self, zone_name: str, relative_name: str, record_type: str) -> None:
        self.client.record_sets.delete(
            resource_group_name=self.resource_group,
            zone_name=zone_name,
            relative_record_set_name=relative_name,
            record_type=record_type,
        )
