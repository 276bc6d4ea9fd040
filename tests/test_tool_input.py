"""
Tests for tool input decoding and the result envelope.
"""

import json

import pytest

from hedera_agent.ledger.errors import ErrorCode
from hedera_agent.tools.base import ArgumentError, is_custodial, parse_tool_input
from hedera_agent.tools.sauceswap import (
    INVALID_PAGINATION_MESSAGE,
    SauceSwapPoolConversionRatesTool,
    SauceSwapPoolsTool,
)
from hedera_agent.tools.schemas import (
    PoolRatesArgs,
    PoolsPageArgs,
    ResultEnvelope,
    TopicMessagesArgs,
)


class TestParseToolInput:
    """Tests for parse_tool_input()"""

    def test_defaults_from_empty_input(self):
        for raw in (None, "", "   ", {}, "{}"):
            args = parse_tool_input(raw, PoolsPageArgs)
            assert isinstance(args, PoolsPageArgs)
            assert args.page == 1
            assert args.page_size == 10
            assert args.refresh is False
            assert args.filter == ""

    def test_string_and_dict_forms_agree(self):
        raw = {"page": 2, "pageSize": 5, "filter": "HBAR", "refresh": True}

        from_dict = parse_tool_input(raw, PoolsPageArgs)
        from_string = parse_tool_input(json.dumps(raw), PoolsPageArgs)

        assert from_dict == from_string
        assert from_dict.page_size == 5

    def test_snake_case_names_accepted(self):
        args = parse_tool_input({"page_size": 7}, PoolsPageArgs)

        assert args.page_size == 7

    def test_unknown_keys_ignored(self):
        args = parse_tool_input({"page": 3, "sortBy": "tvl"}, PoolsPageArgs)

        assert args.page == 3

    def test_invalid_json(self):
        result = parse_tool_input("{page: 1", PoolsPageArgs)

        assert isinstance(result, ArgumentError)
        assert result.message.startswith("Invalid JSON input")
        assert result.code == ErrorCode.VALIDATION_ERROR

    def test_non_object_input(self):
        result = parse_tool_input("[1, 2]", PoolsPageArgs)

        assert isinstance(result, ArgumentError)
        assert result.message == "Tool input must be a JSON object"

    @pytest.mark.parametrize("raw", [{"page": 0}, {"pageSize": 0}, {"pageSize": 101}, {"page": -2}])
    def test_out_of_range_pagination(self, raw):
        result = parse_tool_input(raw, PoolsPageArgs)

        assert isinstance(result, ArgumentError)

    def test_missing_required_field_records_field(self):
        result = parse_tool_input({"interval": "DAY"}, PoolRatesArgs)

        assert isinstance(result, ArgumentError)
        assert result.fields == ["poolId"]

    def test_interval_case_insensitive(self):
        args = parse_tool_input({"poolId": "1", "interval": "day"}, PoolRatesArgs)

        assert args.interval == "DAY"

    def test_numeric_pool_id_becomes_text(self):
        args = parse_tool_input({"poolId": 213}, PoolRatesArgs)

        assert args.pool_id == "213"
        assert args.interval == "HOUR"
        assert args.inverted is False

    def test_timestamp_format(self):
        ok = parse_tool_input({"topicId": "0.0.5005", "lowerTimestamp": "1700000000.000000001"}, TopicMessagesArgs)
        bad = parse_tool_input({"topicId": "0.0.5005", "lowerTimestamp": "yesterday"}, TopicMessagesArgs)

        assert ok.lower_timestamp == "1700000000.000000001"
        assert isinstance(bad, ArgumentError)


class TestToolValidationMessages:
    """Per-tool validation messages"""

    def test_pagination_message(self, mock_client, cache):
        tool = SauceSwapPoolsTool(mock_client, cache)
        result = parse_tool_input({"page": 0, "pageSize": 500}, tool.args_model, tool.describe_validation_error)

        # one message even though both fields failed
        assert result.message == INVALID_PAGINATION_MESSAGE

    def test_pool_id_required(self, mock_client):
        tool = SauceSwapPoolConversionRatesTool(mock_client)

        for raw in ({}, {"poolId": ""}):
            result = parse_tool_input(raw, tool.args_model, tool.describe_validation_error)
            assert result.message == "Pool ID is required"

    def test_interval_message(self, mock_client):
        tool = SauceSwapPoolConversionRatesTool(mock_client)
        result = parse_tool_input({"poolId": "1", "interval": "MONTH"}, tool.args_model, tool.describe_validation_error)

        assert result.message == "Invalid interval. Valid options: FIVEMIN, HOUR, DAY, WEEK"

    def test_pagination_message_for_snake_case_input(self, mock_client, cache):
        tool = SauceSwapPoolsTool(mock_client, cache)

        for raw in ({"page_size": 0}, {"page_size": 101}):
            result = parse_tool_input(raw, tool.args_model, tool.describe_validation_error)
            assert result.message == INVALID_PAGINATION_MESSAGE
            assert result.fields == ["pageSize"]

    @pytest.mark.parametrize("raw", [{"page": True}, {"pageSize": False}, {"page_size": True}])
    def test_boolean_pagination_rejected(self, mock_client, cache, raw):
        tool = SauceSwapPoolsTool(mock_client, cache)
        result = parse_tool_input(raw, tool.args_model, tool.describe_validation_error)

        assert isinstance(result, ArgumentError)
        assert result.message == INVALID_PAGINATION_MESSAGE

    @pytest.mark.parametrize("pool_id", ["1/../../x", "abc", "12 ", True])
    def test_non_numeric_pool_id_rejected(self, mock_client, pool_id):
        tool = SauceSwapPoolConversionRatesTool(mock_client)
        result = parse_tool_input({"poolId": pool_id}, tool.args_model, tool.describe_validation_error)

        assert isinstance(result, ArgumentError)
        assert result.message.startswith("Invalid pool ID")

    def test_unmapped_field_uses_generic_message(self, mock_client, cache):
        tool = SauceSwapPoolsTool(mock_client, cache)
        result = parse_tool_input({"refresh": "sometimes"}, tool.args_model, tool.describe_validation_error)

        assert result.message.startswith("Invalid input: refresh")

    def test_input_schema_uses_wire_names(self, mock_client, cache):
        schema = SauceSwapPoolsTool(mock_client, cache).input_schema

        assert "pageSize" in schema["properties"]
        assert "page_size" not in schema["properties"]


class TestIsCustodial:
    """Tests for is_custodial()"""

    def test_flag_values(self):
        assert is_custodial({"configurable": {"isCustodial": True}}) is True
        assert is_custodial({"configurable": {"isCustodial": False}}) is False
        assert is_custodial({"configurable": {}}) is False
        assert is_custodial({}) is False
        assert is_custodial(None) is False

    def test_truthy_non_bool_is_not_custodial(self):
        assert is_custodial({"configurable": {"isCustodial": "yes"}}) is False


class TestResultEnvelope:
    """Tests for the envelope wire format"""

    def test_success_has_data_and_no_code(self):
        payload = json.loads(ResultEnvelope.success("ok", data=[1, 2]).to_json())

        assert payload == {"status": "success", "message": "ok", "data": [1, 2]}

    def test_error_has_code_and_no_data(self):
        payload = json.loads(ResultEnvelope.error("boom", "NOT_FOUND").to_json())

        assert payload == {"status": "error", "message": "boom", "code": "NOT_FOUND"}

    def test_error_code_defaults_to_unknown(self):
        payload = ResultEnvelope.error("boom").to_payload()

        assert payload["code"] == ErrorCode.UNKNOWN_ERROR

    def test_paginated_success_carries_pagination_and_null_filter(self):
        envelope = ResultEnvelope.success("ok", data=[], pagination={"page": 1}, filter=None)
        payload = json.loads(envelope.to_json())

        assert payload["pagination"] == {"page": 1}
        assert "filter" in payload
        assert payload["filter"] is None
        assert "code" not in payload
