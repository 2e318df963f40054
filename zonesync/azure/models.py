"""Provider-side shapes of Azure DNS zones and record sets.

These mirror the subset of ``azure.mgmt.dns.models`` the adapter reads
and writes, so the translator and provider never touch SDK objects.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Relative record-set name of the zone apex.
APEX = "@"
# Azure prefixes every record-set type with its resource path.
TYPE_PREFIX = "Microsoft.Network/dnszones/"


class Zone(BaseModel):
    id: str
    name: str


class ARecord(BaseModel):
    ipv4_address: str


class CnameRecord(BaseModel):
    cname: str


class TxtRecord(BaseModel):
    value: list[str] = Field(default_factory=list)


class RecordSet(BaseModel):
    """One (name, type) pair stored in a zone.

    Only the value container matching ``type`` is populated; record sets
    of other types (NS, SOA, MX, ...) carry none of them.
    """

    name: str | None = None
    type: str | None = None
    ttl: int | None = None
    a_records: list[ARecord] | None = None
    cname_record: CnameRecord | None = None
    txt_records: list[TxtRecord] | None = None
