"""
Tool execution node and the execution-mode dispatcher wrapped around it.

The agent hands the node a state whose last message carries the pending tool
calls. `ToolExecutor` runs them; `with_execution_mode` wraps any executor so
that every call runs with the execution mode flag set in the call context and
so that a failing tool becomes a readable tool message instead of an
exception.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union

from hedera_agent.tools.base import CUSTODIAL_FLAG, LedgerTool, RunConfig
from hedera_agent.utils.logging import get_contextual_logger, get_logger

logger = get_logger(__name__)

State = Dict[str, Any]


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""
    id: str
    name: str
    args: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> 'ToolCall':
        """Accept a ToolCall, a {"id","name","args"} dict or an OpenAI-style function call dict"""
        if isinstance(raw, ToolCall):
            return raw
        if 'function' in raw:
            function = raw['function']
            return cls(id=raw.get('id', ''), name=function.get('name', ''), args=function.get('arguments'))
        return cls(id=raw.get('id', ''), name=raw.get('name', ''), args=raw.get('args'))


@dataclass
class ToolMessage:
    """Result of one tool call, addressed back to the call that produced it."""
    content: str
    tool_call_id: Optional[str]
    name: Optional[str] = None
    status: str = 'success'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'role': 'tool',
            'content': self.content,
            'tool_call_id': self.tool_call_id,
            'name': self.name,
            'status': self.status,
        }


@dataclass
class DispatchSuccess:
    messages: List[ToolMessage] = field(default_factory=list)


@dataclass
class DispatchFailure:
    error: str
    tool_call_id: Optional[str] = None


DispatchResult = Union[DispatchSuccess, DispatchFailure]
ToolRunner = Callable[[State, Optional[RunConfig]], Awaitable[DispatchResult]]
ToolNode = Callable[[State, Optional[RunConfig]], Awaitable[State]]


def pending_tool_calls(state: State) -> List[ToolCall]:
    """Tool calls carried by the last message of the state"""
    messages = state.get('messages') or []
    if not messages:
        return []

    last = messages[-1]
    if isinstance(last, dict):
        raw_calls = last.get('tool_calls') or (last.get('additional_kwargs') or {}).get('tool_calls') or []
    else:
        raw_calls = getattr(last, 'tool_calls', None) or []
    return [ToolCall.from_raw(call) for call in raw_calls]


def with_mode(config: Optional[RunConfig], is_custodial: bool) -> RunConfig:
    """Copy of `config` with the execution mode merged into `configurable`"""
    config = config or {}
    return {
        **config,
        'configurable': {
            **(config.get('configurable') or {}),
            CUSTODIAL_FLAG: is_custodial,
        },
    }


class ToolExecutor:
    """
    Runs the pending tool calls of a state against a set of tools.

    Calls run one after another in the order the model issued them. An unknown
    tool name produces an error tool message; an exception raised by a tool
    stops the batch and is reported as a DispatchFailure.
    """

    def __init__(self, tools: Iterable[LedgerTool]):
        self.tools: Dict[str, LedgerTool] = {tool.name: tool for tool in tools}

    async def __call__(self, state: State, config: Optional[RunConfig] = None) -> DispatchResult:
        messages = []
        for call in pending_tool_calls(state):
            tool = self.tools.get(call.name)
            if tool is None:
                messages.append(ToolMessage(
                    content=f"Error: {call.name} is not a valid tool, try one of [{', '.join(self.tools)}].",
                    tool_call_id=call.id,
                    name=call.name,
                    status='error',
                ))
                continue

            try:
                content = await tool.invoke(call.args, config)
            except Exception as e:
                logger.error(f"Tool {call.name} raised: {e}", exc_info=True)
                return DispatchFailure(error=str(e) or type(e).__name__, tool_call_id=call.id)

            messages.append(ToolMessage(content=content, tool_call_id=call.id, name=call.name))

        return DispatchSuccess(messages=messages)


def with_execution_mode(runner: ToolRunner, is_custodial: bool = True) -> ToolNode:
    """
    Wrap a tool runner so every invocation carries the execution mode.

    The returned node derives a new call context with
    `configurable.isCustodial` set (the caller's context is left untouched),
    delegates the unchanged state to `runner`, and always returns
    `{"messages": [...]}`. A DispatchFailure, or an exception escaping
    `runner`, becomes one error tool message for the originating call.
    """

    async def node(state: State, config: Optional[RunConfig] = None) -> State:
        calls = pending_tool_calls(state)
        mode_config = with_mode(config, is_custodial)

        for call in calls:
            call_logger = get_contextual_logger(__name__, tool=call.name, tool_call_id=call.id)
            arguments = call.args if isinstance(call.args, str) else json.dumps(call.args, default=str)
            call_logger.info(
                f"Setting up {'custodial' if is_custodial else 'non-custodial'} mode for tool call: {call.name}"
            )
            call_logger.debug(f"Tool arguments: {arguments}")

        try:
            result = await runner(state, mode_config)
        except Exception as e:
            logger.error(f"Error executing tool: {e}", exc_info=True)
            result = DispatchFailure(error=str(e) or type(e).__name__)

        if isinstance(result, DispatchSuccess):
            return {'messages': result.messages}

        tool_call_id = result.tool_call_id or (calls[0].id if calls else None)
        logger.warning(f"Tool call {tool_call_id} failed: {result.error}")
        return {
            'messages': [
                ToolMessage(
                    content=f"Error: Could not execute the requested tool. {result.error or 'Unknown error'}",
                    tool_call_id=tool_call_id,
                    status='error',
                )
            ]
        }

    return node
