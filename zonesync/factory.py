"""Provider factory.

Provides :func:`provider_factory`, the single entry-point for creating a
DNS provider.  The function validates the raw config dict against the
provider's config model and returns a ready provider instance.
"""

from typing import Any

from zonesync.azure import AzureProvider
from zonesync.azure.client import DNSClientBlueprint
from zonesync.base import ProviderBlueprint, existing_cloud_providers
from zonesync.base.config import validate_config


# cloud_provider -> provider class
_PROVIDER_REGISTRY: dict[str, type] = {
    "azure": AzureProvider,
}


def provider_factory(
    cloud_provider: existing_cloud_providers,
    config: dict[str, Any],
    client: DNSClientBlueprint | None = None,
) -> ProviderBlueprint:
    """
    Create a DNS provider for the given cloud.
    Args:
        cloud_provider: The cloud provider (e.g. 'azure').
        config: Configuration dictionary to initialize the provider.
        client: Optional zone/record-set client; the provider builds its
            SDK-backed client when omitted.
    Returns:
        An instance of the requested provider class.
    Raises:
        ValueError: If the cloud provider is not supported.
        pydantic.ValidationError: If the config is invalid.
    """
    if cloud_provider not in _PROVIDER_REGISTRY:
        raise ValueError(f"Unsupported cloud provider: {cloud_provider}")

    provider_class = _PROVIDER_REGISTRY[cloud_provider]
    configObj = validate_config(cloud_provider, config)
    return provider_class(configObj, client=client)
