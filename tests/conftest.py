"""Shared fixtures for tool, cache and dispatcher tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from hedera_agent.utils.cache import SessionResultCache


def make_pool(pool_id, symbol_a, symbol_b, lp_symbol=None):
    """SaucerSwap pool record in the shape the /pools endpoint returns."""
    return {
        "id": pool_id,
        "contractId": f"0.0.{1062795 + pool_id}",
        "lpToken": {
            "id": f"0.0.{1062796 + pool_id}",
            "name": f"SS-LP {symbol_a} - {symbol_b}",
            "symbol": lp_symbol or f"{symbol_a} - {symbol_b}",
            "decimals": 8,
            "priceUsd": 1.735,
        },
        "lpTokenReserve": "4055259041563",
        "tokenA": {
            "id": f"0.0.{731861 + pool_id}",
            "name": symbol_a,
            "symbol": symbol_a,
            "decimals": 6,
            "priceUsd": 0.039,
        },
        "tokenReserveA": "901185654687",
        "tokenB": {
            "id": f"0.0.{1062664 + pool_id}",
            "name": symbol_b,
            "symbol": symbol_b,
            "decimals": 8,
            "priceUsd": 0.178,
        },
        "tokenReserveB": "19800241693615",
    }


@pytest.fixture
def sample_pools():
    """Five pools; three of them pair with HBAR."""
    return [
        make_pool(0, "SAUCE", "HBAR"),
        make_pool(1, "USDC", "HBAR"),
        make_pool(2, "USDC", "SAUCE"),
        make_pool(3, "XSAUCE", "HBAR"),
        make_pool(4, "DOVU", "USDC"),
    ]


@pytest.fixture
def mock_client(sample_pools):
    """Ledger client stand-in with async query methods."""
    client = MagicMock()
    client.account_id = "0.0.123456"
    client.get_sauceswap_pools = AsyncMock(return_value=sample_pools)
    client.get_sauceswap_pool_rates = AsyncMock(return_value=[{"poolId": 1, "close": 0.178}])
    client.get_hbar_balance = AsyncMock(
        return_value={"accountId": "0.0.123456", "tinybars": 250000000, "hbar": "2.5"}
    )
    client.get_hts_balance = AsyncMock()
    client.get_all_token_balances = AsyncMock(return_value=[])
    client.get_token_holders = AsyncMock(return_value=[])
    client.get_pending_airdrops = AsyncMock(return_value=[])
    client.get_topic_info = AsyncMock(return_value={"topic_id": "0.0.5005", "memo": "hello"})
    client.get_topic_messages = AsyncMock(return_value=[])
    client.close = AsyncMock()
    return client


@pytest.fixture
def cache():
    return SessionResultCache()
