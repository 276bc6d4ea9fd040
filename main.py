#!/usr/bin/env python3
"""
Hedera Agent - Entry Point

Usage:
    python main.py chat                 # interactive chat loop
    python main.py chat --once "..."    # answer one question and exit
    python main.py mcp                  # MCP server over stdio

Required environment variables (chat):
    HEDERA_ACCOUNT_ID, HEDERA_PRIVATE_KEY, HEDERA_NETWORK, ANTHROPIC_API_KEY
"""
import argparse
import asyncio
import sys

from config.settings import settings
from hedera_agent.utils.logging import setup_logging, get_logger

logger = get_logger(__name__)


def print_banner():
    print("=" * 52)
    print("Welcome to the Hedera Agent!")
    print("You can ask questions about your Hedera account,")
    print("token balances, topics and SaucerSwap pools.")
    print("Type 'clear' to start over, 'exit' to quit.")
    print("=" * 52)


async def run_chat(once: str = None) -> int:
    """Run the chat loop (or a single question)."""
    from hedera_agent.bot.conversational_agent import ConversationalAgent
    from hedera_agent.runtime import ToolRuntime

    runtime = ToolRuntime.from_settings(settings)
    agent = ConversationalAgent.from_settings(settings, runtime)
    session_id = settings.hedera_account_id or "default"

    try:
        if once:
            result = await agent.process(once, session_id=session_id)
            print(f"Agent: {result['text']}")
            return 1 if result.get('error') else 0

        print_banner()
        loop = asyncio.get_running_loop()
        while True:
            user_input = (await loop.run_in_executor(None, input, "You: ")).strip()
            if user_input.lower() == 'exit':
                print("Goodbye!")
                return 0
            if user_input.lower() == 'clear':
                dropped = agent.clear_context(session_id)
                runtime.reset_session()
                print(f"Cleared {dropped} messages and the cached pool list.")
                continue
            if not user_input:
                continue

            result = await agent.process(user_input, session_id=session_id)
            print(f"Agent: {result['text']}")
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
        return 0
    finally:
        await runtime.close()


def main() -> int:
    parser = argparse.ArgumentParser(description='Hedera ledger agent')
    subparsers = parser.add_subparsers(dest='command', required=True)

    chat_parser = subparsers.add_parser('chat', help='Chat with the agent in the terminal')
    chat_parser.add_argument('--once', metavar='QUESTION', help='Answer one question and exit')

    subparsers.add_parser('mcp', help='Run the MCP server over stdio')

    args = parser.parse_args()

    setup_logging()

    logger.info("=" * 60)
    logger.info("HEDERA AGENT CONFIGURATION")
    logger.info("=" * 60)
    for key, value in settings.to_dict().items():
        logger.info(f"  {key}: {value}")

    if args.command == 'mcp':
        from hedera_agent.mcp.server import run_server
        run_server()
        return 0

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error(str(e))
        return 1

    return asyncio.run(run_chat(once=args.once))


if __name__ == '__main__':
    sys.exit(main())
