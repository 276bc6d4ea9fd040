"""Hedera ledger and SaucerSwap tools for Claude agents"""

__version__ = "0.1.0"
