"""zonesync — reconcile planned DNS changes against a cloud DNS zone.

Entry point for the library. Import :func:`provider_factory` to build a
provider, then read its records and apply the planner's changes::

    from zonesync import Changes, provider_factory

    provider = provider_factory("azure", {"subscription_id": "...", "resource_group": "dns"})
    current = provider.records()
    provider.apply_changes(Changes(create=[...]))
"""

from .base import (
    Changes,
    Endpoint,
    ProviderBlueprint,
    new_endpoint,
)
from .factory import provider_factory

__all__ = [
    "Changes",
    "Endpoint",
    "ProviderBlueprint",
    "new_endpoint",
    "provider_factory",
]
