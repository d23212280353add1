"""
kube-mcp: Kubernetes cluster operations exposed as MCP tools, backed by kubectl.
"""

__version__ = "0.1.0"
