"""Test data models and configuration."""

import json

import pytest
from pydantic import ValidationError

from upgrade_assistant.model.config import AssistantConfig, load_config
from upgrade_assistant.model.deprecation import (
    DeprecationAPIResponse,
    DeprecationInfo,
    DeprecationLevel,
    EnrichedDeprecationInfo,
)
from upgrade_assistant.model.status import ReportFormat, UpgradeAssistantStatus


class TestDeprecationAPIResponse:
    def test_missing_categories_default_to_empty(self):
        """Test absent categories are defaulted at the boundary."""
        response = DeprecationAPIResponse.model_validate({"cluster_settings": []})

        assert response.ml_settings == []
        assert response.node_settings == []
        assert response.index_settings == {}

    def test_index_order_preserved(self):
        """Test index settings keep the response key order."""
        response = DeprecationAPIResponse.model_validate(
            {"index_settings": {"zeta": [], "alpha": [], "mid": []}}
        )

        assert list(response.index_settings) == ["zeta", "alpha", "mid"]

    def test_malformed_warning_rejected(self):
        """Test warnings without a message fail validation."""
        with pytest.raises(ValidationError):
            DeprecationAPIResponse.model_validate({"cluster_settings": [{"level": "warning"}]})


class TestDeprecationInfo:
    def test_model_config(self):
        """Test extra fields and field-name population are enabled."""
        assert DeprecationInfo.model_config["extra"] == "allow"
        assert EnrichedDeprecationInfo.model_config["populate_by_name"] is True
        assert UpgradeAssistantStatus.model_config["populate_by_name"] is True

    def test_extra_fields_kept(self):
        """Test source specific context is preserved."""
        info = DeprecationInfo(level="warning", message="m", resolve_during_rolling_upgrade=True)

        assert info.model_dump()["resolve_during_rolling_upgrade"] is True

    def test_is_critical(self):
        assert DeprecationInfo(level=DeprecationLevel.CRITICAL.value, message="m").is_critical
        assert not DeprecationInfo(level="warning", message="m").is_critical


class TestEnrichedDeprecationInfo:
    def test_defaults(self):
        info = EnrichedDeprecationInfo(level="info", message="m")

        assert info.index is None
        assert info.reindex is False
        assert info.needs_default_fields is False
        assert info.blocker_for_reindexing is None

    def test_aliases(self):
        """Test camelCase names are accepted and produced."""
        info = EnrichedDeprecationInfo(
            level="warning", message="m", needsDefaultFields=True, blockerForReindexing="index-closed"
        )
        dumped = info.model_dump(by_alias=True)

        assert info.needs_default_fields is True
        assert dumped["needsDefaultFields"] is True
        assert dumped["blockerForReindexing"] == "index-closed"


class TestUpgradeAssistantStatus:
    def test_serialized_names(self):
        status = UpgradeAssistantStatus(ready_for_upgrade=True)

        assert status.model_dump(by_alias=True) == {
            "readyForUpgrade": True,
            "cluster": [],
            "indices": [],
        }

    def test_report_format_values(self):
        assert [f.value for f in ReportFormat] == ["text", "json", "yaml"]


class TestConfig:
    def test_defaults(self):
        config = load_config(None, environ={})

        assert config.url == "http://localhost:9200"
        assert config.apm_indices == ["apm-*"]
        assert config.cloud_enabled is False
        assert config.verify_certs is True

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "assistant.yaml"
        path.write_text(
            "url: https://es.example.com:9243\n"
            "cloud_enabled: true\n"
            "apm_indices:\n"
            "  - apm-*-transaction\n"
        )

        config = load_config(path, environ={})

        assert config.url == "https://es.example.com:9243"
        assert config.cloud_enabled is True
        assert config.apm_indices == ["apm-*-transaction"]

    def test_load_json(self, tmp_path):
        path = tmp_path / "assistant.json"
        path.write_text(json.dumps({"username": "elastic", "verify_certs": False}))

        config = load_config(path, environ={})

        assert config.username == "elastic"
        assert config.verify_certs is False

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml", environ={})

        assert config == AssistantConfig()

    def test_non_mapping_file_rejected(self, tmp_path):
        path = tmp_path / "assistant.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path, environ={})

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "assistant.yaml"
        path.write_text("url: http://from-file:9200\nusername: file-user\n")

        config = load_config(path, environ={"ES_URL": "http://from-env:9200", "ES_API_KEY": "k"})

        assert config.url == "http://from-env:9200"
        assert config.username == "file-user"
        assert config.api_key == "k"

    def test_merged_ignores_none(self):
        config = AssistantConfig(url="http://a:9200", cloud_enabled=True)

        merged = config.merged(url=None, cloud_enabled=False, apm_indices=["x-*"])

        assert merged.url == "http://a:9200"
        assert merged.cloud_enabled is False
        assert merged.apm_indices == ["x-*"]
