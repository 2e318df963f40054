"""Tests for core infrastructure modules."""

from unittest.mock import patch
import json
import logging
import pytest
from pydantic import ValidationError

from zonesync.base.config import AzureConfig, DEFAULT_TTL, load_azure_config_file, validate_config
from zonesync.base.endpoint import Endpoint, new_endpoint
from zonesync.base.exceptions import ChangeApplyError, DNSError
from zonesync.base.logger import ZoneSyncLogger, StructuredFormatter
from zonesync.base.plan import Changes
from zonesync.base.retry import retry

_AZURE_ENV = (
    "AZURE_SUBSCRIPTION_ID",
    "AZURE_RESOURCE_GROUP",
    "AZURE_TENANT_ID",
    "AZURE_CLIENT_ID",
    "AZURE_CLIENT_SECRET",
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in _AZURE_ENV:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestAzureConfig:
    def test_explicit_values(self, clean_env):
        cfg = AzureConfig(subscription_id="sub", resource_group="dns", domain_filter=["example.com"])
        assert cfg.subscription_id == "sub"
        assert cfg.domain_filter == ["example.com"]
        assert cfg.zone_id_filter == []
        assert cfg.dry_run is False
        assert cfg.default_ttl == DEFAULT_TTL

    def test_env_fallback(self, clean_env):
        clean_env.setenv("AZURE_SUBSCRIPTION_ID", "env-sub")
        clean_env.setenv("AZURE_RESOURCE_GROUP", "env-rg")
        clean_env.setenv("AZURE_CLIENT_SECRET", "env-secret")
        cfg = AzureConfig()
        assert cfg.subscription_id == "env-sub"
        assert cfg.resource_group == "env-rg"
        assert cfg.client_secret == "env-secret"

    def test_missing_subscription(self, clean_env):
        with pytest.raises(ValidationError, match="subscription_id"):
            AzureConfig(resource_group="dns")

    def test_missing_resource_group(self, clean_env):
        with pytest.raises(ValidationError, match="resource_group"):
            AzureConfig(subscription_id="sub")

    def test_unknown_field(self, clean_env):
        with pytest.raises(ValidationError):
            AzureConfig(subscription_id="sub", resource_group="dns", region="westeurope")

    def test_ttl_must_be_positive(self, clean_env):
        with pytest.raises(ValidationError):
            AzureConfig(subscription_id="sub", resource_group="dns", default_ttl=0)


class TestAzureConfigFile:
    def test_service_principal(self, tmp_path):
        path = tmp_path / "azure.json"
        path.write_text(json.dumps({
            "tenantId": "t",
            "subscriptionId": "s",
            "resourceGroup": "rg",
            "aadClientId": "c",
            "aadClientSecret": "secret",
        }))
        assert load_azure_config_file(path) == {
            "tenant_id": "t",
            "subscription_id": "s",
            "resource_group": "rg",
            "client_id": "c",
            "client_secret": "secret",
        }

    def test_user_assigned_identity(self, tmp_path):
        path = tmp_path / "azure.json"
        path.write_text(json.dumps({
            "subscriptionId": "s",
            "resourceGroup": "rg",
            "aadClientId": "c",
            "aadClientSecret": "",
            "useManagedIdentityExtension": True,
            "userAssignedIdentityID": "identity",
        }))
        config = load_azure_config_file(path)
        assert config["use_managed_identity"] is True
        assert config["client_id"] == "identity"
        assert "client_secret" not in config

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_azure_config_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "azure.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid"):
            load_azure_config_file(path)


class TestValidateConfig:
    def test_azure(self, clean_env):
        cfg = validate_config("azure", {"subscription_id": "s", "resource_group": "rg"})
        assert isinstance(cfg, AzureConfig)
        assert cfg.resource_group == "rg"

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="No config model"):
            validate_config("aws", {"key": "val"})


# ══════════════════════════════════════════════════════════════════════
# Endpoint / Changes
# ══════════════════════════════════════════════════════════════════════

class TestEndpoint:
    def test_trailing_dot_stripped(self):
        assert new_endpoint("www.example.com.", "1.1.1.1", "A").dns_name == "www.example.com"

    def test_equality_uses_all_fields(self):
        assert new_endpoint("a.com", "1.1.1.1", "A", 60) == new_endpoint("a.com", "1.1.1.1", "A", 60)
        assert new_endpoint("a.com", "1.1.1.1", "A", 60) != new_endpoint("a.com", "1.1.1.1", "A")

    def test_frozen(self):
        ep = new_endpoint("a.com", "1.1.1.1", "A")
        with pytest.raises(ValidationError):
            ep.target = "2.2.2.2"

    def test_str(self):
        assert str(new_endpoint("a.com", "1.1.1.1", "A", 60)) == "a.com 60 IN A 1.1.1.1"


class TestChanges:
    def test_defaults_empty(self):
        assert Changes().is_empty()

    def test_from_json(self):
        changes = Changes.model_validate_json(json.dumps({
            "create": [{"dns_name": "a.example.com", "record_type": "A", "target": "1.1.1.1", "ttl": 60}],
        }))
        assert changes.create == [Endpoint(dns_name="a.example.com", record_type="A", target="1.1.1.1", ttl=60)]
        assert not changes.is_empty()

    def test_unpaired_updates(self):
        with pytest.raises(ValidationError, match="update_new"):
            Changes(update_old=[new_endpoint("a.com", "1.1.1.1", "A")])


class TestChangeApplyError:
    def test_message(self):
        err = ChangeApplyError([(new_endpoint("a.com", "1.1.1.1", "A"), DNSError("boom"))])
        assert isinstance(err, DNSError)
        assert "1 change(s) failed" in str(err)
        assert "a.com (A): boom" in str(err)


# ══════════════════════════════════════════════════════════════════════
# Retry
# ══════════════════════════════════════════════════════════════════════

class TestRetry:
    def test_success_no_retry(self):
        call_count = 0

        @retry(max_attempts=3, base_delay=0)
        def ok():
            nonlocal call_count
            call_count += 1
            return "ok"

        assert ok() == "ok"
        assert call_count == 1

    @patch("zonesync.base.retry.time.sleep")
    def test_backoff(self, mock_sleep):
        call_count = 0

        @retry(max_attempts=3, base_delay=1.0, backoff_factor=2.0)
        def fail_twice():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ConnectionError("reset")
            return "ok"

        assert fail_twice() == "ok"
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    def test_max_attempts_exceeded(self):
        @retry(max_attempts=2, base_delay=0, retryable_exceptions=(ValueError,))
        def always_fail():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            always_fail()

    def test_non_transient_raises_immediately(self):
        call_count = 0

        @retry(max_attempts=3, base_delay=0)
        def dns_error():
            nonlocal call_count
            call_count += 1
            raise DNSError("not retryable")

        with pytest.raises(DNSError):
            dns_error()
        assert call_count == 1

    def test_invalid_attempts(self):
        with pytest.raises(ValueError):
            retry(max_attempts=0)


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestZoneSyncLogger:
    def test_log_operation(self, capfd):
        logger = ZoneSyncLogger("test_zs")
        logger.set_level(logging.DEBUG)
        logger.info("deleting record", provider="azure", zone="example.com", operation="delete")
        captured = capfd.readouterr()
        assert "deleting record" in captured.err
        assert "example.com" in captured.err

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.zone = "example.com"
        record.dry_run = True
        record.request_id = "abc"
        output = json.loads(fmt.format(record))
        assert output["zone"] == "example.com"
        assert output["dry_run"] is True
        assert output["request_id"] == "abc"
        assert "provider" not in output
