"""Chat agent and the execution-mode tool node it dispatches through"""

from .tool_node import (
    DispatchFailure,
    DispatchSuccess,
    ToolCall,
    ToolExecutor,
    ToolMessage,
    with_execution_mode,
)

__all__ = [
    'DispatchFailure',
    'DispatchSuccess',
    'ToolCall',
    'ToolExecutor',
    'ToolMessage',
    'with_execution_mode',
]
