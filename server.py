#!/usr/bin/env python3
"""
BigQuery Data Scout MCP Server

A Model Context Protocol server for profiling BigQuery tables with Dataplex data scans.
"""

import logging
import sys

from fastmcp import FastMCP

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("BigQuery Data Scout")

# When running as __main__, tool modules import from 'server'
# so 'server' must point to __main__ to share the mcp instance
if __name__ == "__main__":
    sys.modules["server"] = sys.modules["__main__"]

# Import tool modules to register @mcp.tool() decorated functions
# IMPORTANT: Must import AFTER mcp instance is created (above)
import src.tools.datascans  # noqa: E402, F401


def main():
    """Main entry point for the MCP server."""
    # Configuration is loaded on the first tool call so startup stays fast
    logger.info("🚀 Starting BigQuery Data Scout MCP Server...")
    logger.info(f"   📦 {len(src.tools.datascans.__all__)} tools registered")
    logger.info("   (Configuration will be loaded on first request)")

    # Run the server
    mcp.run()


if __name__ == "__main__":
    main()
