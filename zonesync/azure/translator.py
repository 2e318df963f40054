"""Mapping between Azure record sets and normalized endpoints.

Reading is partial: provider bookkeeping records (NS, SOA) and anything
without an extractable value translate to ``None`` and never reach the
planner. Writing is total for the supported record types.
"""

from __future__ import annotations

from zonesync.azure.models import (
    APEX,
    TYPE_PREFIX,
    ARecord,
    CnameRecord,
    RecordSet,
    TxtRecord,
    Zone,
)
from zonesync.base.config import DEFAULT_TTL
from zonesync.base.endpoint import (
    Endpoint,
    RECORD_TYPE_A,
    RECORD_TYPE_CNAME,
    RECORD_TYPE_TXT,
    SUPPORTED_RECORD_TYPES,
)
from zonesync.base.exceptions import UnsupportedRecordTypeError


def format_dns_name(relative_name: str, zone_name: str) -> str:
    if relative_name == APEX:
        return zone_name
    return f"{relative_name}.{zone_name}"


def relative_record_set_name(dns_name: str, zone_name: str) -> str:
    """Strip *zone_name* from *dns_name*; the apex becomes ``@``."""
    dns_name = dns_name.rstrip(".")
    zone_name = zone_name.rstrip(".")
    if dns_name.lower() == zone_name.lower():
        return APEX
    suffix = "." + zone_name
    if dns_name.lower().endswith(suffix.lower()):
        return dns_name[: -len(suffix)]
    return dns_name


def extract_record_type(type_tag: str) -> str:
    """Return the bare record type of a provider tag.

    >>> extract_record_type("Microsoft.Network/dnszones/CNAME")
    'CNAME'
    """
    return type_tag.rsplit("/", 1)[-1]


def extract_target(record_set: RecordSet) -> str | None:
    """Return the single target value of *record_set*, if any.

    Only the first value is used for A and TXT record sets.
    """
    if record_set.a_records:
        return record_set.a_records[0].ipv4_address
    if record_set.cname_record is not None:
        return record_set.cname_record.cname
    if record_set.txt_records and record_set.txt_records[0].value:
        return record_set.txt_records[0].value[0]
    return None


def to_endpoint(zone: Zone, record_set: RecordSet) -> Endpoint | None:
    """Translate a listed record set into an endpoint.

    Returns:
        The endpoint, or ``None`` when the record set has no name or type,
        is of an unsupported or reserved type, or holds no value.
    """
    if not record_set.name or not record_set.type:
        return None
    record_type = extract_record_type(record_set.type)
    if record_type not in SUPPORTED_RECORD_TYPES:
        return None
    target = extract_target(record_set)
    if target is None:
        return None
    return Endpoint(
        dns_name=format_dns_name(record_set.name, zone.name),
        record_type=record_type,
        target=target,
        ttl=record_set.ttl,
    )


def to_record_set(zone_name: str, endpoint: Endpoint, default_ttl: int = DEFAULT_TTL) -> RecordSet:
    """Build the record set that stores *endpoint* in zone *zone_name*.

    Raises:
        UnsupportedRecordTypeError: If the endpoint type has no value
            container (anything but A, CNAME and TXT).
    """
    record_set = RecordSet(
        name=relative_record_set_name(endpoint.dns_name, zone_name),
        type=TYPE_PREFIX + endpoint.record_type,
        ttl=endpoint.ttl if endpoint.ttl_configured else default_ttl,
    )
    if endpoint.record_type == RECORD_TYPE_A:
        record_set.a_records = [ARecord(ipv4_address=endpoint.target)]
    elif endpoint.record_type == RECORD_TYPE_CNAME:
        record_set.cname_record = CnameRecord(cname=endpoint.target)
    elif endpoint.record_type == RECORD_TYPE_TXT:
        record_set.txt_records = [TxtRecord(value=[endpoint.target])]
    else:
        raise UnsupportedRecordTypeError(
            f"Unsupported record type '{endpoint.record_type}' for '{endpoint.dns_name}'"
        )
    return record_set
