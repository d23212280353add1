"""
Exception types raised while dispatching tool calls.
"""

from typing import Optional


class KubeMCPError(Exception):
    """Base class for errors reported back to the caller as a flagged response."""


class UnknownToolError(KubeMCPError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolArgumentError(KubeMCPError):
    """A tool was called without one of its required arguments."""


class KubectlError(KubeMCPError):
    """
    kubectl exited with a nonzero status or could not be started.

    The message is the captured error text, unmodified.
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode
