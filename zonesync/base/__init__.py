"""Provider-agnostic building blocks.

Import the endpoint model, the mutation batch and the provider blueprint
to type-hint planner code or to write a custom provider.
"""

from .endpoint import (
    Endpoint,
    new_endpoint,
    RECORD_TYPE_A,
    RECORD_TYPE_CNAME,
    RECORD_TYPE_TXT,
    SUPPORTED_RECORD_TYPES,
)
from .plan import Changes
from .filters import DomainFilter, ZoneIDFilter
from .provider import ProviderBlueprint
from .supported_providers import existing_cloud_providers


__all__ = [
    "Endpoint",
    "new_endpoint",
    "RECORD_TYPE_A",
    "RECORD_TYPE_CNAME",
    "RECORD_TYPE_TXT",
    "SUPPORTED_RECORD_TYPES",
    "Changes",
    "DomainFilter",
    "ZoneIDFilter",
    "ProviderBlueprint",
    "existing_cloud_providers",
]
