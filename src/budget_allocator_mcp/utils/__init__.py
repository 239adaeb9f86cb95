"""
Utility functions for Budget Allocator MCP.
"""

from budget_allocator_mcp.utils.date_utils import (
    format_month_key,
    get_month_name,
    get_month_range,
    parse_month_key,
    parse_period,
)
from budget_allocator_mcp.utils.formatting import format_amount

__all__ = [
    "format_amount",
    "format_month_key",
    "get_month_name",
    "get_month_range",
    "parse_month_key",
    "parse_period",
]
