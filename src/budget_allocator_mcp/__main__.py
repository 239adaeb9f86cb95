"""
CLI entry point for the budget allocator MCP server.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from budget_allocator_mcp.server import run_server


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Budget Allocator MCP Server - Allocate income and track budgets through MCP"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory for budget state files (default: BUDGET_DATA_DIR or ~/.budget-allocator)",
    )
    parser.add_argument(
        "--user-id",
        help="User whose budget to serve (default: BUDGET_USER_ID or 'default')",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # MCP uses stdout for protocol, so log to stderr
    )

    # Run the server
    try:
        asyncio.run(run_server(data_dir=args.data_dir, user_id=args.user_id))
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.exception("Server error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
