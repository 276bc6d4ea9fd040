"""
Base class and input handling shared by every agent tool.

A tool is invoked as `invoke(tool_input, config)` where `tool_input` is a
JSON string or a dict and `config` is the call context
(`{"configurable": {"isCustodial": bool, ...}}`). It always returns a JSON
encoded ResultEnvelope; errors never propagate past `invoke`.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from hedera_agent.ledger.errors import ErrorCode, LedgerError
from hedera_agent.tools.schemas import ResultEnvelope, ToolArgs
from hedera_agent.utils.logging import get_logger

logger = get_logger(__name__)

CUSTODIAL_FLAG = 'isCustodial'

# An empty string for a required identifier counts as missing
MISSING_ERROR_TYPES = ('missing', 'string_too_short')

RunConfig = Dict[str, Any]
ArgsT = TypeVar('ArgsT', bound=ToolArgs)


@dataclass
class ArgumentError:
    """Typed failure produced when tool input cannot be decoded or validated."""
    message: str
    code: str = ErrorCode.VALIDATION_ERROR
    fields: List[str] = field(default_factory=list)


def is_custodial(config: Optional[RunConfig]) -> bool:
    """Read the execution mode flag from a call context"""
    configurable = (config or {}).get('configurable') or {}
    return configurable.get(CUSTODIAL_FLAG) is True


def wire_name(args_model: Type[ToolArgs], location: Any) -> str:
    """Wire name (alias) of the field a validation error points at"""
    field_info = args_model.model_fields.get(location) if isinstance(location, str) else None
    if field_info is not None and field_info.alias:
        return field_info.alias
    return str(location)


def format_validation_error(exc: ValidationError) -> str:
    """Generic one-line description of a pydantic validation failure"""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error['loc']) or 'input'
        parts.append(f"{location}: {error['msg']}")
    return f"Invalid input: {'; '.join(parts)}"


def parse_tool_input(
    raw: Any,
    args_model: Type[ArgsT],
    describe: Optional[Callable[[ValidationError], str]] = None,
) -> Union[ArgsT, ArgumentError]:
    """
    Decode raw tool input into a validated argument record.

    Args:
        raw: JSON string, dict, or None/empty for "no arguments"
        args_model: Pydantic model describing the tool's arguments
        describe: Optional hook turning a ValidationError into a message

    Returns:
        An `args_model` instance, or an ArgumentError
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        payload: Any = {}
    elif isinstance(raw, str):
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            return ArgumentError(f"Invalid JSON input: {e.msg}")
    else:
        payload = raw

    if not isinstance(payload, dict):
        return ArgumentError("Tool input must be a JSON object")

    try:
        return args_model.model_validate(payload)
    except ValidationError as e:
        message = describe(e) if describe else format_validation_error(e)
        fields = [wire_name(args_model, error['loc'][0]) for error in e.errors() if error['loc']]
        return ArgumentError(message, fields=fields)


class LedgerTool:
    """
    Base class for tools backed by the ledger client.

    Subclasses set `name`, `description`, `args_model` and implement `_run`.
    `required_messages` / `invalid_messages` map an argument's wire name to
    the message reported when it is missing / fails validation.
    """

    name: str = ''
    description: str = ''
    args_model: Type[ToolArgs] = ToolArgs
    required_messages: Dict[str, str] = {}
    invalid_messages: Dict[str, str] = {}

    def __init__(self, client):
        self.client = client

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the tool arguments, keyed by wire names"""
        return self.args_model.model_json_schema(by_alias=True)

    def describe_validation_error(self, exc: ValidationError) -> str:
        messages: List[str] = []
        for error in exc.errors():
            field_name = wire_name(self.args_model, error['loc'][0]) if error['loc'] else ''
            if error['type'] in MISSING_ERROR_TYPES:
                message = self.required_messages.get(field_name)
            else:
                message = self.invalid_messages.get(field_name)
            if message is None:
                return format_validation_error(exc)
            if message not in messages:
                messages.append(message)
        return " ".join(messages)

    def default_account(self, account_id: Optional[str]) -> Optional[str]:
        """Requested account, or the operator account"""
        return account_id or self.client.account_id

    async def invoke(self, tool_input: Any = None, config: Optional[RunConfig] = None) -> str:
        """
        Run the tool and return a JSON result envelope.

        Args:
            tool_input: JSON string or dict of arguments
            config: Call context carrying `configurable.isCustodial`
        """
        mode = 'custodial' if is_custodial(config) else 'non-custodial'
        logger.info(f"{self.name} tool has been called ({mode})")

        args = parse_tool_input(tool_input, self.args_model, self.describe_validation_error)
        if isinstance(args, ArgumentError):
            logger.warning(f"{self.name} rejected input: {args.message}")
            return ResultEnvelope.error(args.message, args.code).to_json()

        try:
            envelope = await self._run(args, config or {})
        except LedgerError as e:
            logger.error(f"{self.name} failed: {e.message}")
            envelope = ResultEnvelope.error(e.message or "Unknown error occurred", e.code)
        except Exception as e:
            logger.error(f"{self.name} failed with unexpected error: {e}", exc_info=True)
            envelope = ResultEnvelope.error(str(e) or "Unknown error occurred")

        return envelope.to_json()

    async def _run(self, args: ToolArgs, config: RunConfig) -> ResultEnvelope:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
