"""
Budget Allocator MCP - income allocation and threshold alerts over MCP.
"""

__version__ = "0.1.0"
