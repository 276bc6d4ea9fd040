"""Hedera Consensus Service (HCS) topic query tools."""

from hedera_agent.tools.base import LedgerTool, RunConfig
from hedera_agent.tools.schemas import ResultEnvelope, TopicArgs, TopicMessagesArgs

TOPIC_REQUIRED = "Topic ID is required"
INVALID_TOPIC = "Invalid topic ID. Expected format: shard.realm.num (e.g. 0.0.1234)"
INVALID_TIMESTAMP = "Invalid timestamp. Expected seconds.nanoseconds (e.g. 1700000000.000000000)"


class TopicInfoTool(LedgerTool):
    name = "hedera_get_topic_info"
    description = """Retrieves metadata for an HCS topic (memo, keys, auto-renew settings).
Inputs (input is a JSON string):
- **topicId** (*string*, required): Topic to query."""
    args_model = TopicArgs
    required_messages = {'topicId': TOPIC_REQUIRED}
    invalid_messages = {'topicId': INVALID_TOPIC}

    async def _run(self, args: TopicArgs, config: RunConfig) -> ResultEnvelope:
        info = await self.client.get_topic_info(args.topic_id)
        return ResultEnvelope.success("Topic info retrieved", data=info)


class TopicMessagesTool(LedgerTool):
    name = "hedera_get_topic_messages"
    description = """Retrieves messages posted to an HCS topic, decoded to text.
Inputs (input is a JSON string):
- **topicId** (*string*, required): Topic to read.
- **lowerTimestamp** (*string*, optional): Only messages at or after this consensus timestamp.
- **upperTimestamp** (*string*, optional): Only messages at or before this consensus timestamp."""
    args_model = TopicMessagesArgs
    required_messages = {'topicId': TOPIC_REQUIRED}
    invalid_messages = {
        'topicId': INVALID_TOPIC,
        'lowerTimestamp': INVALID_TIMESTAMP,
        'upperTimestamp': INVALID_TIMESTAMP,
    }

    async def _run(self, args: TopicMessagesArgs, config: RunConfig) -> ResultEnvelope:
        messages = await self.client.get_topic_messages(
            args.topic_id, args.lower_timestamp, args.upper_timestamp
        )
        return ResultEnvelope.success(f"Found {len(messages)} topic messages", data=messages)
