"""
Tests for ToolRuntime wiring and session reset.
"""

import json
import logging

import pytest

from hedera_agent.runtime import ToolRuntime


@pytest.fixture
def runtime(mock_client, cache):
    return ToolRuntime(mock_client, cache, is_custodial=True)


class TestToolRuntime:

    @pytest.mark.asyncio
    async def test_call_tool_returns_envelope(self, runtime):
        result = json.loads(await runtime.call_tool("sauceswap_get_pools", {"pageSize": 2}))

        assert result["status"] == "success"
        assert result["pagination"]["totalCount"] == 5

    @pytest.mark.asyncio
    async def test_unknown_tool(self, runtime):
        content = await runtime.call_tool("hedera_transfer_hbar", {})

        assert "is not a valid tool" in content

    @pytest.mark.asyncio
    async def test_reset_session_forces_refetch(self, runtime, mock_client, cache):
        await runtime.call_tool("sauceswap_get_pools")

        assert runtime.reset_session() is True
        assert cache.get("0.0.123456") is None

        await runtime.call_tool("sauceswap_get_pools")
        assert mock_client.get_sauceswap_pools.await_count == 2

    def test_reset_session_without_snapshot(self, runtime):
        assert runtime.reset_session() is False

    def test_reset_session_default_key(self, mock_client, cache):
        mock_client.account_id = None
        cache.set("default", [1])

        assert ToolRuntime(mock_client, cache).reset_session() is True

    @pytest.mark.asyncio
    async def test_close_logs_cache_stats(self, runtime, mock_client, caplog):
        await runtime.call_tool("sauceswap_get_pools")

        with caplog.at_level(logging.DEBUG, logger="hedera_agent.runtime"):
            await runtime.close()

        record = caplog.records[-1]
        assert record.extra_fields["sessions"] == 1
        assert record.extra_fields["entries"]["0.0.123456"]["item_count"] == 5
        mock_client.close.assert_awaited_once()
