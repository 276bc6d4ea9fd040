"""SaucerSwap DEX tools: paginated pool listing and pool conversion rates."""

from hedera_agent.tools.base import LedgerTool, RunConfig
from hedera_agent.tools.filtering import filter_pools
from hedera_agent.tools.pagination import paginate
from hedera_agent.tools.schemas import (
    CONVERSION_RATE_INTERVALS,
    PoolRatesArgs,
    PoolsPageArgs,
    ResultEnvelope,
)
from hedera_agent.utils.cache import SessionResultCache, session_key_for
from hedera_agent.utils.logging import get_logger, log_with_data

logger = get_logger(__name__)

INVALID_PAGINATION_MESSAGE = (
    "Invalid pagination parameters. Page must be >= 1 and pageSize must be between 1 and 100."
)


class SauceSwapPoolsTool(LedgerTool):
    """
    Lists SaucerSwap pools a page at a time.

    The full pool list is fetched once per session and kept in the injected
    cache; later pages (and differently filtered views) are served from that
    snapshot until the agent asks for `refresh`.
    """

    name = "sauceswap_get_pools"
    description = """Fetches all available pools from SaucerSwap with their token information and liquidity data.
Inputs (input is a JSON string):
- **page** (*number*, optional): Page number to retrieve. Default: 1.
- **pageSize** (*number*, optional): Number of pools per page (1-100). Default: 10.
- **refresh** (*boolean*, optional): Force refresh data from API instead of cache. Default: false.
- **filter** (*string*, optional): Filter pools by token symbol (e.g. "HBAR" to get only HBAR pools). Default: none.

Always relay pagination.paginationSummary and pagination.navigationGuide to the user.

Example usage:
Get first page of pools (10 pools per page):
'{"page": 1, "pageSize": 10}'

Get only HBAR pools:
'{"filter": "HBAR"}'"""
    args_model = PoolsPageArgs
    invalid_messages = {
        'page': INVALID_PAGINATION_MESSAGE,
        'pageSize': INVALID_PAGINATION_MESSAGE,
    }

    def __init__(self, client, cache: SessionResultCache):
        super().__init__(client)
        self.cache = cache

    async def _run(self, args: PoolsPageArgs, config: RunConfig) -> ResultEnvelope:
        session_key = session_key_for(self.client.account_id)

        pools = None if args.refresh else self.cache.get(session_key)
        if pools is None:
            logger.info("Fetching fresh pools data from SaucerSwap API...")
            fetched = await self.client.get_sauceswap_pools()
            self.cache.set(session_key, fetched)
            pools = self.cache.get(session_key)
            log_with_data(logger, "info", "Cached pools snapshot", session=session_key, pool_count=len(pools))
        else:
            logger.info(f"Using cached pools data. Total pools: {len(pools)}")

        filtered = filter_pools(pools, args.filter)
        if args.filter:
            logger.info(f"Applied filter \"{args.filter}\". Filtered pools: {len(filtered)}")

        page = paginate(filtered, args.page, args.page_size, item_label='pools')

        return ResultEnvelope.success(
            "SaucerSwap pools retrieved successfully",
            data=page.items,
            pagination=page.to_dict(),
            filter=args.filter or None,
        )


class SauceSwapPoolConversionRatesTool(LedgerTool):
    name = "sauceswap_get_pool_conversion_rate"
    description = f"""Fetches the latest conversion rates for a SaucerSwap pool.
Inputs (input is a JSON string):
- **poolId** (*string*, required): The ID of the SaucerSwap pool to fetch conversion rates for.
- **interval** (*string*, optional): Data interval. Options: {", ".join(CONVERSION_RATE_INTERVALS)}. Default: HOUR.
- **inverted** (*boolean*, optional): Whether to invert the conversion rate. Default: false.

Example usage:
'{{"poolId": "213", "interval": "DAY", "inverted": true}}'"""
    args_model = PoolRatesArgs
    required_messages = {'poolId': "Pool ID is required"}
    invalid_messages = {
        'poolId': "Invalid pool ID. Expected a numeric SaucerSwap pool id (e.g. 213)",
        'interval': f"Invalid interval. Valid options: {', '.join(CONVERSION_RATE_INTERVALS)}",
    }

    async def _run(self, args: PoolRatesArgs, config: RunConfig) -> ResultEnvelope:
        rates = await self.client.get_sauceswap_pool_rates(args.pool_id, args.interval, args.inverted)
        return ResultEnvelope.success("Pool conversion rates retrieved", data=rates)
