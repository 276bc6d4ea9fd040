"""
Conversational Agent for Hedera ledger queries

Claude function calling over the Hedera tools. Every tool_use block the
model emits is executed through the runtime's execution-mode node, so tool
calls always carry the configured execution mode and tool failures come back
as tool results rather than exceptions.
"""

import time
from collections import defaultdict
from datetime import date
from typing import Any, Dict, List, Optional

import anthropic

from hedera_agent.bot.prompts import SYSTEM_PROMPT
from hedera_agent.bot.tool_node import ToolCall, ToolMessage
from hedera_agent.runtime import ToolRuntime
from hedera_agent.utils.logging import get_logger

logger = get_logger(__name__)

# Session history TTL in seconds (30 minutes)
SESSION_HISTORY_TTL = 1800

# Upper bound on model/tool round trips for one user message
MAX_TOOL_ROUNDS = 10


class ConversationalAgent:
    """
    LLM-first conversational agent using Claude function calling.

    Keeps a short text history per session; tool rounds live only inside a
    single `process` call.
    """

    def __init__(
        self,
        runtime: ToolRuntime,
        anthropic_api_key: str = None,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 4096,
        max_context_messages: int = 20,
        network: str = "testnet",
        client: Optional[anthropic.Anthropic] = None,
    ):
        """
        Initialize the conversational agent.

        Args:
            runtime: Tool runtime (tools plus execution-mode node)
            anthropic_api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            model: Claude model to use
            max_tokens: Token limit for each model response
            max_context_messages: Messages kept per session
            network: Hedera network named in the system prompt
            client: Pre-built Anthropic client (tests)
        """
        self.runtime = runtime
        self.client = client or anthropic.Anthropic(api_key=anthropic_api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.max_context_messages = max_context_messages
        self.network = network

        # {session_id: {'messages': [...], 'last_access': timestamp}}
        self.session_history: Dict[str, Dict] = defaultdict(lambda: {'messages': [], 'last_access': 0})

        logger.info(f"ConversationalAgent initialized with model: {model}")
        logger.info(f"Tools available: {', '.join(runtime.tool_names)}")

    @classmethod
    def from_settings(cls, settings, runtime: ToolRuntime) -> 'ConversationalAgent':
        claude = settings.claude_config
        return cls(
            runtime,
            anthropic_api_key=claude['api_key'],
            model=claude['model'],
            max_tokens=claude['max_tokens'],
            max_context_messages=settings.max_context_messages,
            network=settings.hedera_network,
        )

    @property
    def tool_definitions(self) -> List[Dict[str, Any]]:
        """Tool specs in Anthropic's format, derived from the argument models"""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "input_schema": tool.input_schema,
            }
            for tool in self.runtime.tools
        ]

    def system_prompt(self) -> str:
        return SYSTEM_PROMPT.format(
            network=self.network,
            account_id=self.runtime.client.account_id or "not configured",
            current_date=date.today().isoformat(),
        )

    def _cleanup_old_sessions(self):
        """Remove session histories that haven't been accessed recently."""
        current_time = time.time()
        expired = [
            sid for sid, data in self.session_history.items()
            if current_time - data['last_access'] > SESSION_HISTORY_TTL
        ]
        for sid in expired:
            del self.session_history[sid]
        if expired:
            logger.debug(f"Cleaned up {len(expired)} expired session histories")

    def _add_to_history(self, session_id: str, role: str, content: str):
        history = self.session_history[session_id]
        history['messages'].append({'role': role, 'content': content})
        history['last_access'] = time.time()

        if len(history['messages']) > self.max_context_messages:
            history['messages'] = history['messages'][-self.max_context_messages:]
            # Anthropic requires the first message to come from the user
            while history['messages'] and history['messages'][0]['role'] != 'user':
                history['messages'].pop(0)

    def _get_history(self, session_id: str) -> List[Dict]:
        if session_id not in self.session_history:
            return []
        self.session_history[session_id]['last_access'] = time.time()
        return list(self.session_history[session_id]['messages'])

    def clear_context(self, session_id: str) -> int:
        """Forget a session's history; returns the number of messages dropped"""
        history = self.session_history.pop(session_id, None)
        return len(history['messages']) if history else 0

    def _create_message(self, messages: List[Dict]) -> Any:
        return self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=self.system_prompt(),
            tools=self.tool_definitions,
            messages=messages,
        )

    @staticmethod
    def _tool_results(tool_use_blocks: List[Any], tool_messages: List[ToolMessage]) -> List[Dict]:
        """
        One tool_result per tool_use block.

        When the node collapsed a failure into a single message, calls without
        their own result reuse that error text.
        """
        by_id = {message.tool_call_id: message for message in tool_messages}
        fallback = next((m for m in tool_messages if m.status == 'error'), None)

        results = []
        for block in tool_use_blocks:
            message = by_id.get(block.id) or fallback
            content = message.content if message else "Error: tool produced no result"
            results.append({
                "type": "tool_result",
                "tool_use_id": block.id,
                "content": content,
                "is_error": message is None or message.status == 'error',
            })
        return results

    async def process(self, message: str, session_id: str = "default") -> Dict[str, Any]:
        """
        Answer one user message, running tools as the model requests them.

        Returns:
            Dict with 'text', 'tools_used' and, on failure, 'error'
        """
        self._cleanup_old_sessions()
        start_time = time.time()

        messages = self._get_history(session_id)
        logger.info(f"USER_QUERY | session={session_id} | history_msgs={len(messages)} | query={message[:200]}")

        messages.append({"role": "user", "content": message})
        self._add_to_history(session_id, "user", message)

        tools_used: List[str] = []
        try:
            response = self._create_message(messages)

            rounds = 0
            while response.stop_reason == "tool_use" and rounds < MAX_TOOL_ROUNDS:
                rounds += 1
                tool_use_blocks = [block for block in response.content if block.type == "tool_use"]
                calls = [ToolCall(id=block.id, name=block.name, args=block.input) for block in tool_use_blocks]
                tools_used.extend(call.name for call in calls)

                tool_messages = await self.runtime.run_tool_calls(calls)

                messages.append({"role": "assistant", "content": response.content})
                messages.append({"role": "user", "content": self._tool_results(tool_use_blocks, tool_messages)})

                response = self._create_message(messages)

            text_blocks = [block.text for block in response.content if getattr(block, 'type', None) == 'text']
            final_text = "\n".join(text_blocks) if text_blocks else "I processed your request but have no additional information to share."

            self._add_to_history(session_id, "assistant", final_text)

            processing_time_ms = int((time.time() - start_time) * 1000)
            logger.info(
                f"AGENT_RESPONSE | session={session_id} | tools={','.join(tools_used) or 'none'} "
                f"| time_ms={processing_time_ms} | response_len={len(final_text)}"
            )

            return {"text": final_text, "tools_used": tools_used}

        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            return {
                "text": f"I encountered an error processing your request: {e}",
                "tools_used": tools_used,
                "error": True,
            }
