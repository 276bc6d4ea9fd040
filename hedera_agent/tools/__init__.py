"""
Agent tools

Every tool returns a JSON ResultEnvelope:
- status: "success" | "error"
- message: str
- data: tool payload (success only)
- code: error code (error only)
- pagination / filter: paginated tools only

Tools available:
- SaucerSwap: sauceswap_get_pools, sauceswap_get_pool_conversion_rate
- HBAR / HTS: hedera_get_hbar_balance, hedera_get_hts_balance,
  hedera_get_all_token_balances, hedera_get_token_holders,
  hedera_get_pending_airdrops
- HCS: hedera_get_topic_info, hedera_get_topic_messages
"""

from typing import List

from hedera_agent.tools.accounts import (
    AllTokenBalancesTool,
    HbarBalanceTool,
    HtsBalanceTool,
    PendingAirdropsTool,
    TokenHoldersTool,
)
from hedera_agent.tools.base import LedgerTool, parse_tool_input, ArgumentError, CUSTODIAL_FLAG
from hedera_agent.tools.sauceswap import SauceSwapPoolConversionRatesTool, SauceSwapPoolsTool
from hedera_agent.tools.schemas import ResultEnvelope
from hedera_agent.tools.topics import TopicInfoTool, TopicMessagesTool
from hedera_agent.utils.cache import SessionResultCache
from hedera_agent.utils.logging import get_logger

logger = get_logger(__name__)


def create_hedera_tools(client, cache: SessionResultCache) -> List[LedgerTool]:
    """
    Build every agent tool around a shared ledger client.

    Args:
        client: HederaLedgerClient (or a stand-in with the same methods)
        cache: Session cache used by the paginated pool listing
    """
    tools = [
        HbarBalanceTool(client),
        HtsBalanceTool(client),
        AllTokenBalancesTool(client),
        TokenHoldersTool(client),
        PendingAirdropsTool(client),
        TopicInfoTool(client),
        TopicMessagesTool(client),
        SauceSwapPoolConversionRatesTool(client),
        SauceSwapPoolsTool(client, cache),
    ]
    logger.info(f"Total tools created: {len(tools)}")
    return tools


__all__ = [
    'ArgumentError',
    'CUSTODIAL_FLAG',
    'LedgerTool',
    'ResultEnvelope',
    'create_hedera_tools',
    'parse_tool_input',
]
