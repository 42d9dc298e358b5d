"""Elasticsearch interaction module."""

from .client import EsApiError, EsClient
from .indices import check_indices_state, is_system_index

__all__ = ["EsApiError", "EsClient", "check_indices_state", "is_system_index"]
