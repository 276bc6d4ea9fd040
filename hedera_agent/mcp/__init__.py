"""
MCP (Model Context Protocol) Server Package

Exposes the Hedera agent tools to MCP clients over stdio.
"""
