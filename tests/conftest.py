"""Test configuration and fixtures."""

import pytest
from unittest.mock import AsyncMock, Mock
from typing import Any, Dict, List, Optional

pytest_plugins = ("pytest_asyncio",)

from upgrade_assistant.es.client import EsClient


def make_mock_es_client(
    deprecations: Optional[Dict[str, Any]] = None,
    mappings: Optional[Dict[str, Any]] = None,
    cat_rows: Optional[List[Dict[str, str]]] = None,
):
    """Build a mock client answering each endpoint with canned data."""
    responses = {
        "transport.request": deprecations if deprecations is not None else {},
        "indices.getMapping": mappings or {},
        "cat.indices": cat_rows or [],
    }

    client = Mock(spec=EsClient)
    client.call_as_current_user = AsyncMock(
        side_effect=lambda endpoint, params: responses[endpoint]
    )
    return client


@pytest.fixture
def mock_es_client_factory():
    """Factory for mock Elasticsearch clients."""
    return make_mock_es_client


@pytest.fixture
def sample_deprecations():
    """Sample migration API response."""
    return {
        "cluster_settings": [
            {
                "level": "warning",
                "message": "Security realm settings structure changed",
                "url": "https://www.elastic.co/guide/en/elasticsearch/reference/7.0/breaking-changes-7.0.html",
            }
        ],
        "ml_settings": [
            {"level": "info", "message": "Datafeed [feed-1] uses deprecated query options"}
        ],
        "node_settings": [
            {
                "level": "critical",
                "message": "Discovery configuration is required in production mode",
                "details": "discovery.seed_hosts is not set",
            }
        ],
        "index_settings": {
            "logs-2018": [
                {
                    "level": "critical",
                    "message": "Index created before 6.0",
                    "details": "This index was created using version: 5.6.4",
                }
            ],
            "metrics": [
                {
                    "level": "warning",
                    "message": "Number of fields exceeds automatic field expansion limit",
                    "details": "This index has [1500] fields",
                }
            ],
            ".kibana_1": [{"level": "critical", "message": "Index created before 6.0"}],
            "apm-6.8.0-span": [{"level": "critical", "message": "Index created before 6.0"}],
        },
    }


@pytest.fixture
def apm_mappings():
    """Sample mapping response for APM index patterns."""
    return {
        "apm-6.8.0-span": {"mappings": {"_meta": {"version": "6.8.0"}}},
        "apm-7.2.0-span": {"mappings": {"_meta": {"version": "7.2.0"}}},
    }
