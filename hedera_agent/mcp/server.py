"""
Hedera MCP Server

Model Context Protocol server exposing the Hedera tools over stdio. Each MCP
tool forwards to the shared ToolRuntime, so calls go through the same
execution-mode node as the chat agent.

All tools return a JSON ResultEnvelope string:
- status: "success" | "error"
- message: str
- data / code: payload on success, error code on error
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from hedera_agent.runtime import ToolRuntime

# Initialize FastMCP server
mcp = FastMCP("hedera-agent")

# Shared runtime (initialized on first use)
runtime: Optional[ToolRuntime] = None


def get_runtime() -> ToolRuntime:
    """Get or initialize the tool runtime."""
    global runtime
    if runtime is None:
        from config.settings import settings
        runtime = ToolRuntime.from_settings(settings)
    return runtime


async def call_tool(tool_name: str, **kwargs) -> str:
    """Call a tool by name through the execution-mode node."""
    arguments = {key: value for key, value in kwargs.items() if value is not None}
    return await get_runtime().call_tool(tool_name, arguments)


# =============================================================================
# SaucerSwap
# =============================================================================

@mcp.tool()
async def sauceswap_get_pools(
    page: int = 1,
    page_size: int = 10,
    refresh: bool = False,
    filter: Optional[str] = None,
) -> str:
    """List SaucerSwap pools a page at a time.

    Args:
        page: Page number to retrieve (default 1)
        page_size: Pools per page, 1-100 (default 10)
        refresh: Re-fetch pools from SaucerSwap instead of the cached snapshot
        filter: Only pools whose token or LP symbol contains this text
    """
    return await call_tool(
        "sauceswap_get_pools", page=page, pageSize=page_size, refresh=refresh, filter=filter
    )


@mcp.tool()
async def sauceswap_get_pool_conversion_rate(
    pool_id: str,
    interval: str = "HOUR",
    inverted: bool = False,
) -> str:
    """Get recent conversion rates for a SaucerSwap pool.

    Args:
        pool_id: SaucerSwap pool id
        interval: FIVEMIN, HOUR, DAY or WEEK (default HOUR)
        inverted: Invert the conversion rate
    """
    return await call_tool(
        "sauceswap_get_pool_conversion_rate", poolId=pool_id, interval=interval, inverted=inverted
    )


# =============================================================================
# HBAR / HTS
# =============================================================================

@mcp.tool()
async def hedera_get_hbar_balance(account_id: Optional[str] = None) -> str:
    """Get the HBAR balance of an account (defaults to the operator account)."""
    return await call_tool("hedera_get_hbar_balance", accountId=account_id)


@mcp.tool()
async def hedera_get_hts_balance(token_id: str, account_id: Optional[str] = None) -> str:
    """Get one token's balance for an account (defaults to the operator account)."""
    return await call_tool("hedera_get_hts_balance", tokenId=token_id, accountId=account_id)


@mcp.tool()
async def hedera_get_all_token_balances(account_id: Optional[str] = None) -> str:
    """Get every token balance held by an account."""
    return await call_tool("hedera_get_all_token_balances", accountId=account_id)


@mcp.tool()
async def hedera_get_token_holders(token_id: str, threshold: Optional[int] = None) -> str:
    """List accounts holding a token, optionally above a minimum balance."""
    return await call_tool("hedera_get_token_holders", tokenId=token_id, threshold=threshold)


@mcp.tool()
async def hedera_get_pending_airdrops(account_id: Optional[str] = None) -> str:
    """List airdrops waiting to be claimed by an account."""
    return await call_tool("hedera_get_pending_airdrops", accountId=account_id)


# =============================================================================
# HCS
# =============================================================================

@mcp.tool()
async def hedera_get_topic_info(topic_id: str) -> str:
    """Get metadata for an HCS topic."""
    return await call_tool("hedera_get_topic_info", topicId=topic_id)


@mcp.tool()
async def hedera_get_topic_messages(
    topic_id: str,
    lower_timestamp: Optional[str] = None,
    upper_timestamp: Optional[str] = None,
) -> str:
    """Get messages posted to an HCS topic, decoded to text.

    Args:
        topic_id: Topic to read
        lower_timestamp: Only messages at or after this consensus timestamp
        upper_timestamp: Only messages at or before this consensus timestamp
    """
    return await call_tool(
        "hedera_get_topic_messages",
        topicId=topic_id,
        lowerTimestamp=lower_timestamp,
        upperTimestamp=upper_timestamp,
    )


def run_server():
    """Run the MCP server over stdio."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
