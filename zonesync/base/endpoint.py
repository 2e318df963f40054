"""Normalized, provider-agnostic DNS record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

RECORD_TYPE_A = "A"
RECORD_TYPE_CNAME = "CNAME"
RECORD_TYPE_TXT = "TXT"

# Any other type string is allowed on an Endpoint but has no
# translation to a provider record set.
SUPPORTED_RECORD_TYPES = frozenset({RECORD_TYPE_A, RECORD_TYPE_CNAME, RECORD_TYPE_TXT})


class Endpoint(BaseModel):
    """A single DNS record as seen by the planner.

    Attributes:
        dns_name: Fully-qualified name, without trailing dot.
        record_type: ``A``, ``CNAME``, ``TXT`` or another type tag.
        target: Record value; meaning depends on the type.
        ttl: Time-to-live in seconds, ``None`` for the provider default.
    """

    model_config = ConfigDict(frozen=True)

    dns_name: str
    record_type: str
    target: str = ""
    ttl: int | None = None

    @field_validator("dns_name")
    @classmethod
    def strip_trailing_dot(cls, value: str) -> str:
        return value.rstrip(".")

    @property
    def ttl_configured(self) -> bool:
        return self.ttl is not None

    def __str__(self) -> str:
        ttl = "" if self.ttl is None else self.ttl
        return f"{self.dns_name} {ttl} IN {self.record_type} {self.target}"


def new_endpoint(dns_name: str, target: str, record_type: str, ttl: int | None = None) -> Endpoint:
    """Positional shorthand for :class:`Endpoint`."""
    return Endpoint(dns_name=dns_name, target=target, record_type=record_type, ttl=ttl)
