"""
Solafon MCP server package.

This package exposes the Solafon Bot API and Wallet API as MCP tools, plus a
few static prompts and reference documents. See DESIGN.md for full details.
"""

SERVER_NAME = "solafon"
__version__ = "1.0.0"

__all__ = ["SERVER_NAME", "__version__", "config"]
