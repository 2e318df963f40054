"""Tests for the zonesync command line."""

from unittest.mock import patch, MagicMock
import json
import pytest

from zonesync.base.endpoint import new_endpoint
from zonesync.base.exceptions import DNSError
from zonesync.base.plan import Changes
from zonesync.cli import main


@pytest.fixture
def provider():
    with patch("zonesync.factory.provider_factory") as factory:
        mock_provider = MagicMock()
        factory.return_value = mock_provider
        yield factory, mock_provider


class TestRecordsCommand:
    def test_prints_endpoints(self, provider, capsys):
        factory, mock_provider = provider
        mock_provider.records.return_value = [new_endpoint("www.example.com", "1.2.3.4", "A", 60)]

        main(["-c", '{"resource_group": "dns"}', "records"])

        factory.assert_called_once_with("azure", {"resource_group": "dns"})
        out = json.loads(capsys.readouterr().out)
        assert out == [{"dns_name": "www.example.com", "record_type": "A", "target": "1.2.3.4", "ttl": 60}]

    def test_listing_failure(self, provider, capsys):
        _, mock_provider = provider
        mock_provider.records.side_effect = DNSError("Failed to list zones")
        with pytest.raises(SystemExit) as excinfo:
            main(["records"])
        assert excinfo.value.code == 1
        assert "Failed to list zones" in capsys.readouterr().err

    def test_invalid_config_json(self, provider, capsys):
        with pytest.raises(SystemExit):
            main(["-c", "{oops", "records"])
        assert "Invalid --config JSON" in capsys.readouterr().err


class TestApplyCommand:
    def test_applies_batch(self, provider, tmp_path, capsys):
        factory, mock_provider = provider
        path = tmp_path / "changes.json"
        path.write_text(json.dumps({
            "create": [{"dns_name": "new.example.com", "record_type": "A", "target": "1.1.1.1"}],
            "delete": [{"dns_name": "old.example.com", "record_type": "A"}],
        }))

        main(["--dry-run", "apply", "--changes", str(path)])

        factory.assert_called_once_with("azure", {"dry_run": True})
        mock_provider.apply_changes.assert_called_once_with(Changes(
            create=[new_endpoint("new.example.com", "1.1.1.1", "A")],
            delete=[new_endpoint("old.example.com", "", "A")],
        ))
        assert capsys.readouterr().out.strip() == "OK"

    def test_config_file(self, provider, tmp_path):
        factory, _ = provider
        azure_json = tmp_path / "azure.json"
        azure_json.write_text(json.dumps({"subscriptionId": "s", "resourceGroup": "rg"}))
        changes = tmp_path / "changes.json"
        changes.write_text("{}")

        main(["-f", str(azure_json), "-c", '{"resource_group": "override"}', "apply", "--changes", str(changes)])

        factory.assert_called_once_with("azure", {"subscription_id": "s", "resource_group": "override"})

    def test_invalid_changes_file(self, provider, tmp_path, capsys):
        path = tmp_path / "changes.json"
        path.write_text(json.dumps({"update_new": [{"dns_name": "a.com", "record_type": "A"}]}))
        with pytest.raises(SystemExit):
            main(["apply", "--changes", str(path)])
        assert "Invalid --changes file" in capsys.readouterr().err

    def test_apply_failure(self, provider, tmp_path, capsys):
        _, mock_provider = provider
        mock_provider.apply_changes.side_effect = DNSError("Failed to delete")
        path = tmp_path / "changes.json"
        path.write_text("{}")
        with pytest.raises(SystemExit) as excinfo:
            main(["apply", "--changes", str(path)])
        assert excinfo.value.code == 1
