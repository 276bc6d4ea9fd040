"""
Hedera Ledger Client

Read-only access to the Hedera mirror node REST API and the SaucerSwap
DEX API. Every method raises a LedgerError subclass on failure; callers
turn those into result envelopes.
"""

import asyncio
import base64
import binascii
import time
from urllib.parse import quote
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp

from hedera_agent.ledger.errors import (
    LedgerConnectionError,
    LedgerError,
    LedgerHTTPError,
    LedgerNotFoundError,
    LedgerRateLimitError,
)
from hedera_agent.utils.logging import get_logger
from hedera_agent.utils.retry import retry_with_backoff

logger = get_logger(__name__)

TINYBARS_PER_HBAR = Decimal(100_000_000)

# Seconds per candle for each SaucerSwap conversion rate interval
INTERVAL_SECONDS = {
    'FIVEMIN': 5 * 60,
    'HOUR': 60 * 60,
    'DAY': 24 * 60 * 60,
    'WEEK': 7 * 24 * 60 * 60,
}

# Candles requested per conversion rate lookup
RATE_CANDLES = 24


def to_display_units(amount: int, decimals: int) -> Decimal:
    """Convert a base-unit token amount to display units"""
    return Decimal(amount) / (Decimal(10) ** decimals)


def decode_topic_message(message: str) -> str:
    """Decode a base64 HCS payload, falling back to the raw value"""
    try:
        return base64.b64decode(message, validate=True).decode('utf-8', errors='replace')
    except (binascii.Error, ValueError):
        return message


class HederaLedgerClient:
    """
    Async client for mirror node and SaucerSwap queries.

    The aiohttp session is created lazily and reused across calls; call
    `close()` (or use the client as an async context manager) on shutdown.
    """

    MAX_PAGES = 20  # cap on mirror node `links.next` hops

    def __init__(
        self,
        account_id: Optional[str] = None,
        network: str = 'testnet',
        mirror_node_url: Optional[str] = None,
        saucerswap_api_url: Optional[str] = None,
        saucerswap_api_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the client.

        Args:
            account_id: Operator account used when a tool omits one
            network: mainnet, testnet or previewnet
            mirror_node_url: Mirror node base URL override
            saucerswap_api_url: SaucerSwap API base URL override
            saucerswap_api_key: Optional SaucerSwap API key
            timeout: Total request timeout in seconds
        """
        self.account_id = account_id or None
        self.network = network
        self.mirror_node_url = (mirror_node_url or f"https://{network}.mirrornode.hedera.com").rstrip('/')
        self.saucerswap_api_url = (
            saucerswap_api_url
            or ('https://api.saucerswap.finance' if network == 'mainnet' else 'https://test-api.saucerswap.finance')
        ).rstrip('/')
        self.saucerswap_api_key = saucerswap_api_key
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_settings(cls, settings) -> 'HederaLedgerClient':
        """Build a client from the application settings"""
        return cls(
            account_id=settings.hedera_account_id,
            network=settings.hedera_network,
            mirror_node_url=settings.mirror_node_url,
            saucerswap_api_url=settings.saucerswap_api_url,
            saucerswap_api_key=settings.saucerswap_api_key,
            timeout=settings.http_timeout,
        )

    async def __aenter__(self) -> 'HederaLedgerClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure aiohttp session exists"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )

    @retry_with_backoff(max_retries=3, initial_delay=1.0)
    async def _get_json(
        self,
        url: str,
        params: Optional[Sequence[Tuple[str, str]]] = None,
        headers: Optional[Dict[str, str]] = None,
        what: str = 'data',
    ) -> Any:
        """
        GET a JSON document.

        Raises:
            LedgerNotFoundError: On 404
            LedgerRateLimitError: On 429
            LedgerHTTPError: On any other non-200 status
            LedgerConnectionError: On transport failure or timeout
        """
        await self._ensure_session()

        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                if response.status == 200:
                    return await response.json()

                message = f"Error fetching {what}: {response.status} - {response.reason}"
                logger.warning(message)

                if response.status == 404:
                    raise LedgerNotFoundError(message)
                if response.status == 429:
                    retry_after = response.headers.get('Retry-After')
                    raise LedgerRateLimitError(
                        message,
                        retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
                    )
                raise LedgerHTTPError(message, status=response.status)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise LedgerConnectionError(f"Failed to get {what}: {str(e) or type(e).__name__}") from e

    async def _get_mirror(self, path: str, params: Optional[Sequence[Tuple[str, str]]] = None, what: str = 'data') -> Any:
        return await self._get_json(f"{self.mirror_node_url}/api/v1{path}", params=params, what=what)

    async def _get_mirror_paginated(
        self,
        path: str,
        key: str,
        params: Optional[Sequence[Tuple[str, str]]] = None,
        what: str = 'data',
    ) -> List[Dict[str, Any]]:
        """
        Collect `key` records across mirror node pages by following `links.next`.
        """
        records: List[Dict[str, Any]] = []
        url = f"{self.mirror_node_url}/api/v1{path}"

        for _ in range(self.MAX_PAGES):
            payload = await self._get_json(url, params=params, what=what)
            records.extend(payload.get(key) or [])

            next_link = (payload.get('links') or {}).get('next')
            if not next_link:
                break
            # next links already carry the query string
            url = f"{self.mirror_node_url}{next_link}"
            params = None
        else:
            logger.warning(f"Stopped paging {what} after {self.MAX_PAGES} pages")

        return records

    def _saucerswap_headers(self) -> Optional[Dict[str, str]]:
        if self.saucerswap_api_key:
            return {'x-api-key': self.saucerswap_api_key}
        return None

    # ------------------------------------------------------------------
    # SaucerSwap
    # ------------------------------------------------------------------

    async def get_sauceswap_pools(self) -> List[Dict[str, Any]]:
        """
        Fetch every SaucerSwap pool.

        Returns:
            List of pool records with lpToken, tokenA and tokenB descriptors
        """
        pools = await self._get_json(
            f"{self.saucerswap_api_url}/pools",
            headers=self._saucerswap_headers(),
            what='pools',
        )
        if not isinstance(pools, list):
            raise LedgerError("Unexpected pools response from SaucerSwap")
        logger.debug(f"Fetched {len(pools)} SaucerSwap pools")
        return pools

    async def get_sauceswap_pool_rates(
        self,
        pool_id: str,
        interval: str = 'HOUR',
        inverted: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Fetch recent conversion rate candles for a pool.

        Args:
            pool_id: SaucerSwap pool id
            interval: FIVEMIN, HOUR, DAY or WEEK
            inverted: Quote tokenA in terms of tokenB instead

        Returns:
            List of candles (open/high/low/close/avg, volume, liquidity)
        """
        now = int(time.time())
        params = [
            ('interval', interval),
            ('from', str(now - INTERVAL_SECONDS[interval] * RATE_CANDLES)),
            ('to', str(now)),
            ('inverted', 'true' if inverted else 'false'),
        ]
        return await self._get_json(
            f"{self.saucerswap_api_url}/pools/conversionRates/{quote(str(pool_id), safe='')}",
            params=params,
            headers=self._saucerswap_headers(),
            what='pool conversion rates',
        )

    # ------------------------------------------------------------------
    # Accounts and tokens
    # ------------------------------------------------------------------

    async def get_hbar_balance(self, account_id: str) -> Dict[str, Any]:
        """
        Get the HBAR balance of an account.

        Returns:
            {"accountId", "tinybars", "hbar"}
        """
        payload = await self._get_mirror('/balances', params=[('account.id', account_id)], what='HBAR balance')
        balances = payload.get('balances') or []
        if not balances:
            raise LedgerNotFoundError(f"Account {account_id} not found")

        tinybars = int(balances[0].get('balance', 0))
        return {
            'accountId': account_id,
            'tinybars': tinybars,
            'hbar': str(Decimal(tinybars) / TINYBARS_PER_HBAR),
        }

    async def get_token_details(self, token_id: str) -> Dict[str, Any]:
        """Get token metadata (name, symbol, decimals, supply)"""
        return await self._get_mirror(f"/tokens/{token_id}", what='token details')

    async def get_hts_balance(self, token_id: str, account_id: str) -> Dict[str, Any]:
        """
        Get one token's balance for an account.

        Returns:
            Balance in base units plus display units using the token's decimals
        """
        details = await self.get_token_details(token_id)
        payload = await self._get_mirror(
            f"/tokens/{token_id}/balances",
            params=[('account.id', account_id)],
            what='token balance',
        )
        balances = payload.get('balances') or []
        amount = int(balances[0].get('balance', 0)) if balances else 0
        decimals = int(details.get('decimals') or 0)

        return {
            'accountId': account_id,
            'tokenId': token_id,
            'tokenSymbol': details.get('symbol'),
            'tokenName': details.get('name'),
            'tokenDecimals': decimals,
            'balance': amount,
            'balanceInDisplayUnit': str(to_display_units(amount, decimals)),
        }

    async def get_all_token_balances(self, account_id: str) -> List[Dict[str, Any]]:
        """
        Get every token balance held by an account, with token metadata.
        """
        payload = await self._get_mirror('/balances', params=[('account.id', account_id)], what='token balances')
        balances = payload.get('balances') or []
        if not balances:
            return []

        tokens = balances[0].get('tokens') or []
        details = await asyncio.gather(*(self.get_token_details(t['token_id']) for t in tokens))

        results = []
        for token, info in zip(tokens, details):
            decimals = int(info.get('decimals') or 0)
            amount = int(token.get('balance', 0))
            results.append({
                'tokenId': token['token_id'],
                'tokenSymbol': info.get('symbol'),
                'tokenName': info.get('name'),
                'tokenDecimals': decimals,
                'balance': amount,
                'balanceInDisplayUnit': str(to_display_units(amount, decimals)),
            })
        return results

    async def get_token_holders(self, token_id: str, threshold: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Get accounts holding a token.

        Args:
            token_id: Token id
            threshold: Minimum balance in base units
        """
        params = [('limit', '100')]
        if threshold is not None:
            params.append(('account.balance', f"gte:{threshold}"))
        return await self._get_mirror_paginated(
            f"/tokens/{token_id}/balances", 'balances', params=params, what='token holders'
        )

    async def get_pending_airdrops(self, account_id: str) -> List[Dict[str, Any]]:
        """Get airdrops waiting to be claimed by an account"""
        return await self._get_mirror_paginated(
            f"/accounts/{account_id}/airdrops/pending", 'airdrops', what='pending airdrops'
        )

    # ------------------------------------------------------------------
    # Consensus service
    # ------------------------------------------------------------------

    async def get_topic_info(self, topic_id: str) -> Dict[str, Any]:
        """Get HCS topic metadata"""
        return await self._get_mirror(f"/topics/{topic_id}", what='topic info')

    async def get_topic_messages(
        self,
        topic_id: str,
        lower_timestamp: Optional[str] = None,
        upper_timestamp: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get messages posted to a topic, oldest first.

        Timestamps use the mirror node `seconds.nanoseconds` format.
        """
        params = [('limit', '100')]
        if lower_timestamp:
            params.append(('timestamp', f"gte:{lower_timestamp}"))
        if upper_timestamp:
            params.append(('timestamp', f"lte:{upper_timestamp}"))

        messages = await self._get_mirror_paginated(
            f"/topics/{topic_id}/messages", 'messages', params=params, what='topic messages'
        )
        for message in messages:
            message['decodedMessage'] = decode_topic_message(message.get('message', ''))
        return messages

    async def close(self) -> None:
        """Close the aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()
