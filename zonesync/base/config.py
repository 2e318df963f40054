"""
Pydantic configuration models for DNS providers.

Validates provider configs at initialization time instead of
silently passing bad values to SDK clients.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TTL = 300


class AzureConfig(BaseModel):
    """Configuration for the Azure DNS provider.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AZURE_SUBSCRIPTION_ID, AZURE_RESOURCE_GROUP,
       AZURE_TENANT_ID, AZURE_CLIENT_ID, AZURE_CLIENT_SECRET).
    3. If neither is set, credential fields are left as None so
       ``DefaultAzureCredential`` can fall back to its own chain
       (managed identity, Azure CLI login, etc.).

    ``subscription_id`` and ``resource_group`` are always required.
    """

    model_config = ConfigDict(extra="forbid")

    subscription_id: str | None = Field(default=None, description="Azure subscription ID")
    resource_group: str | None = Field(default=None, description="Resource group holding the DNS zones")
    tenant_id: str | None = Field(default=None, description="Azure AD tenant ID")
    client_id: str | None = Field(default=None, description="Service principal or user-assigned identity client ID")
    client_secret: str | None = Field(default=None, description="Service principal secret")
    use_managed_identity: bool = Field(default=False, description="Authenticate with a managed identity")

    domain_filter: list[str] = Field(default_factory=list, description="Zone name suffixes to manage")
    zone_id_filter: list[str] = Field(default_factory=list, description="Zone IDs to manage")
    dry_run: bool = Field(default=False, description="Log mutations instead of issuing them")
    continue_on_error: bool = Field(
        default=False, description="Attempt every mutation and report failures together"
    )
    default_ttl: int = Field(default=DEFAULT_TTL, gt=0, description="TTL for endpoints without one")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing settings."""
        env_map = {
            "subscription_id": "AZURE_SUBSCRIPTION_ID",
            "resource_group": "AZURE_RESOURCE_GROUP",
            "tenant_id": "AZURE_TENANT_ID",
            "client_id": "AZURE_CLIENT_ID",
            "client_secret": "AZURE_CLIENT_SECRET",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        return values

    @model_validator(mode="after")
    def validate_scope(self) -> AzureConfig:
        """Ensure the subscription and resource group are known."""
        if not self.subscription_id:
            raise ValueError(
                "Azure subscription_id is required. Set it explicitly or via "
                "the AZURE_SUBSCRIPTION_ID environment variable."
            )
        if not self.resource_group:
            raise ValueError(
                "Azure resource_group is required. Set it explicitly or via "
                "the AZURE_RESOURCE_GROUP environment variable."
            )
        return self


# camelCase keys of the cloud-provider ``azure.json`` file
_AZURE_FILE_KEYS = {
    "tenantId": "tenant_id",
    "subscriptionId": "subscription_id",
    "resourceGroup": "resource_group",
    "aadClientId": "client_id",
    "aadClientSecret": "client_secret",
    "useManagedIdentityExtension": "use_managed_identity",
}


def load_azure_config_file(path: str | Path) -> dict[str, Any]:
    """Read an ``azure.json`` credentials file into config-dict form.

    ``userAssignedIdentityID`` takes precedence over ``aadClientId`` when
    managed identity is enabled.

    Raises:
        ValueError: If the file is missing or is not valid JSON.
    """
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Azure config file not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid Azure config file {path}: {e}") from e

    config = {field: raw[key] for key, field in _AZURE_FILE_KEYS.items() if raw.get(key) not in (None, "")}
    if config.get("use_managed_identity") and raw.get("userAssignedIdentityID"):
        config["client_id"] = raw["userAssignedIdentityID"]
        config.pop("client_secret", None)
    return config


# Map provider names to their config models for dynamic validation
CONFIG_REGISTRY: dict[str, type[BaseModel]] = {
    "azure": AzureConfig,
}


def validate_config(cloud_provider: str, config: dict) -> BaseModel:
    """Validate and return a typed config model for the given provider.

    Args:
        cloud_provider: The cloud provider name (e.g. 'azure').
        config: Raw configuration dictionary.

    Returns:
        A validated Pydantic config model.

    Raises:
        ValueError: If the provider is unknown.
        pydantic.ValidationError: If the config is invalid.
    """
    model = CONFIG_REGISTRY.get(cloud_provider)
    if model is None:
        raise ValueError(f"No config model registered for provider: {cloud_provider}")
    return model(**config)


__all__ = [
    "AzureConfig",
    "CONFIG_REGISTRY",
    "DEFAULT_TTL",
    "load_azure_config_file",
    "validate_config",
]
