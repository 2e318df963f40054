"""Azure DNS provider."""

from .client import AzureDNSClient, DNSClientBlueprint
from .provider import AzureProvider

__all__ = ["AzureDNSClient", "DNSClientBlueprint", "AzureProvider"]
