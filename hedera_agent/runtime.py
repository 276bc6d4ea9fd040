"""
Tool runtime

Owns the ledger client, the session cache, the tools and the dispatcher
node, so that every surface (chat agent, MCP server) reaches the tools
through the same execution-mode node.
"""

import uuid
from typing import Any, Dict, List, Optional

from hedera_agent.bot.tool_node import (
    ToolCall,
    ToolExecutor,
    ToolMessage,
    with_execution_mode,
)
from hedera_agent.ledger.client import HederaLedgerClient
from hedera_agent.tools import LedgerTool, create_hedera_tools
from hedera_agent.utils.cache import SessionResultCache, session_key_for
from hedera_agent.utils.logging import get_logger, log_with_data

logger = get_logger(__name__)


class ToolRuntime:
    """Client, cache, tools and the execution-mode node, wired together."""

    def __init__(
        self,
        client,
        cache: Optional[SessionResultCache] = None,
        is_custodial: bool = True,
        tools: Optional[List[LedgerTool]] = None,
    ):
        self.client = client
        self.cache = cache if cache is not None else SessionResultCache()
        self.tools = tools if tools is not None else create_hedera_tools(client, self.cache)
        self.executor = ToolExecutor(self.tools)
        self.tool_node = with_execution_mode(self.executor, is_custodial=is_custodial)

    @classmethod
    def from_settings(cls, settings) -> 'ToolRuntime':
        return cls(
            HederaLedgerClient.from_settings(settings),
            is_custodial=settings.custodial_mode,
        )

    @property
    def tool_names(self) -> List[str]:
        return [tool.name for tool in self.tools]

    async def run_tool_calls(self, calls: List[ToolCall], config: Optional[Dict[str, Any]] = None) -> List[ToolMessage]:
        """Run a batch of tool calls through the execution-mode node"""
        state = {'messages': [{'role': 'assistant', 'tool_calls': calls}]}
        result = await self.tool_node(state, config)
        return result['messages']

    async def call_tool(self, tool_name: str, tool_input: Any = None, config: Optional[Dict[str, Any]] = None) -> str:
        """
        Call one tool by name.

        Returns:
            The tool's JSON envelope, or the node's error message text
        """
        call = ToolCall(id=f"call_{uuid.uuid4().hex[:12]}", name=tool_name, args=tool_input or {})
        messages = await self.run_tool_calls([call], config)
        return messages[0].content

    def reset_session(self) -> bool:
        """
        Forget the cached snapshot for the operator account.

        Returns:
            True if a snapshot was dropped
        """
        session_key = session_key_for(self.client.account_id)
        dropped = self.cache.clear(session_key)
        log_with_data(logger, "info", "Session cache cleared", session=session_key, dropped=dropped)
        return dropped

    async def close(self) -> None:
        log_with_data(logger, "debug", "Session cache at shutdown", **self.cache.get_stats())
        await self.client.close()
