"""
Tool dispatcher.
Maps a tool name and its arguments to one kubectl invocation and shapes the result.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional

from ..connection.connector import ClusterConnector
from ..errors import KubeMCPError, KubectlError, ToolArgumentError, UnknownToolError
from ..tools import KubectlCall, ToolDefinition, get_tool

logger = logging.getLogger(__name__)


class ToolResponse(NamedTuple):
    text: str
    is_error: bool = False


class ToolDispatcher:
    """
    ToolDispatcher runs tool calls against a ClusterConnector.

    Calls are independent: nothing is kept between them, and a failing call
    has no effect on the next one.
    """

    def __init__(self, connector: ClusterConnector, default_namespace: Optional[str] = None):
        """
        Initialize a new ToolDispatcher instance.

        Args:
            connector: ClusterConnector used to run kubectl
            default_namespace: Namespace for calls that omit one; defaults to the connector's
        """
        self.connector = connector
        self.default_namespace = default_namespace or connector.namespace

    def resolve_namespace(self, arguments: Dict[str, Any]) -> str:
        return arguments.get("namespace") or self.default_namespace

    def build(self, name: str, arguments: Dict[str, Any]) -> KubectlCall:
        """
        Build the kubectl call for a tool without running it.

        Raises:
            UnknownToolError: name is not a registered tool
            ToolArgumentError: a required argument is missing
        """
        definition = self._lookup(name, arguments)
        return definition.build(arguments, self.resolve_namespace(arguments))

    def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """
        Run a tool and return its response text.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            str: Response text

        Raises:
            UnknownToolError: name is not a registered tool
            ToolArgumentError: a required argument is missing
            KubectlError: kubectl failed; the message is the captured error text
        """
        arguments = arguments or {}
        definition = self._lookup(name, arguments)
        namespace = self.resolve_namespace(arguments)
        call = definition.build(arguments, namespace)

        logger.info(f"Running tool {name}")
        result = self.connector.run_command(call.args, stdin=call.stdin)

        if not result["success"]:
            message = definition.failure_text(result)
            logger.error(f"Tool {name} failed (exit status {result['returncode']}): {message.strip()}")
            raise KubectlError(message, returncode=result["returncode"])

        return definition.shape(result, arguments, namespace)

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        """
        Run a tool, converting every failure into an error-flagged response.

        Returns:
            ToolResponse: text and error flag
        """
        try:
            return ToolResponse(self.dispatch(name, arguments))
        except KubeMCPError as e:
            return ToolResponse(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception(f"Unexpected error in tool {name}")
            return ToolResponse(f"Error: {e}", is_error=True)

    def _lookup(self, name: str, arguments: Dict[str, Any]) -> ToolDefinition:
        definition = get_tool(name)
        if definition is None:
            raise UnknownToolError(name)

        missing = definition.missing_arguments(arguments)
        if missing:
            raise ToolArgumentError(f"Missing required argument(s) for {name}: {', '.join(missing)}")

        return definition
