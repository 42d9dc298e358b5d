"""Test index classification and state checks."""

import pytest
from unittest.mock import AsyncMock

from upgrade_assistant.es.indices import check_indices_state, is_system_index


def test_is_system_index():
    assert is_system_index(".kibana_1") is True
    assert is_system_index(".security-7") is True
    assert is_system_index("logs-2018") is False
    assert is_system_index("apm-.x") is False


@pytest.mark.asyncio
async def test_check_indices_state():
    """Test cat indices rows are mapped to index states."""
    call_as_user = AsyncMock(
        return_value=[
            {"index": "idx1", "status": "open", "health": "green"},
            {"index": "idx2", "status": "close"},
        ]
    )

    states = await check_indices_state(call_as_user, ["idx1", "idx2"])

    assert states == {"idx1": "open", "idx2": "close"}
    call_as_user.assert_awaited_once_with(
        "cat.indices", {"index": ["idx1", "idx2"], "format": "json", "expand_wildcards": "all"}
    )


@pytest.mark.asyncio
async def test_check_indices_state_propagates_errors():
    """Test probe failures are raised to the caller."""
    call_as_user = AsyncMock(side_effect=ConnectionError("refused"))

    with pytest.raises(ConnectionError):
        await check_indices_state(call_as_user, ["idx1"])
