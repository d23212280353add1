"""
MCP tool catalogue. Importing this package registers every tool.
"""

from . import cluster, pods, deployments, services, config, workloads, resources, metrics  # noqa: F401
from .registry import KubectlCall, ToolDefinition, get_tool, list_tools

__all__ = ["KubectlCall", "ToolDefinition", "get_tool", "list_tools"]
