"""
Tool registry.

Every MCP tool is a ToolDefinition pairing a pure argument builder, which turns
the call arguments into a kubectl invocation, with a result shaper, which turns
the captured output into response text. Builders never run processes and
shapers never build arguments.
"""

import json
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from mcp.types import Tool


class KubectlCall(NamedTuple):
    args: List[str]
    stdin: Optional[str] = None


Builder = Callable[[Dict[str, Any], str], KubectlCall]
Shaper = Callable[[Dict[str, Any], Dict[str, Any], str], str]


def raw_output(result: Dict[str, Any], arguments: Dict[str, Any], namespace: str) -> str:
    return result["output"]


class ToolDefinition:
    """
    One advertised tool.

    Attributes:
        name: Tool name as seen by MCP clients
        description: One-line description
        build: Builder returning the kubectl call for given arguments and namespace
        shape: Shaper producing the response text from a successful result
        properties: JSON-schema properties of the arguments
        required: Names of required arguments
        failure_message: Text used when kubectl fails without writing to stderr
        describe_failure: Optional override producing the error text of a failed result
    """

    def __init__(
        self,
        name: str,
        description: str,
        build: Builder,
        shape: Optional[Shaper] = None,
        properties: Optional[Dict[str, Any]] = None,
        required: Optional[List[str]] = None,
        failure_message: Optional[str] = None,
        describe_failure: Optional[Callable[[Dict[str, Any]], str]] = None,
    ):
        self.name = name
        self.description = description
        self.build = build
        self.shape = shape or raw_output
        self.properties = properties or {}
        self.required = required or []
        self.failure_message = failure_message
        self.describe_failure = describe_failure

    def input_schema(self) -> Dict[str, Any]:
        schema = {"type": "object", "properties": self.properties}
        if self.required:
            schema["required"] = list(self.required)
        return schema

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema())

    def missing_arguments(self, arguments: Dict[str, Any]) -> List[str]:
        return [key for key in self.required if arguments.get(key) in (None, "")]

    def failure_text(self, result: Dict[str, Any]) -> str:
        if self.describe_failure:
            return self.describe_failure(result)
        if result["error"]:
            return result["error"]
        if self.failure_message:
            return self.failure_message
        return f"kubectl exited with status {result['returncode']}"


TOOL_REGISTRY: Dict[str, ToolDefinition] = {}


def tool(
    name: str,
    description: str,
    properties: Optional[Dict[str, Any]] = None,
    required: Optional[List[str]] = None,
    shape: Optional[Shaper] = None,
    failure_message: Optional[str] = None,
    describe_failure: Optional[Callable[[Dict[str, Any]], str]] = None,
) -> Callable[[Builder], Builder]:
    """Register the decorated builder as a tool."""

    def decorator(build: Builder) -> Builder:
        if name in TOOL_REGISTRY:
            raise ValueError(f"Tool '{name}' is already registered")
        TOOL_REGISTRY[name] = ToolDefinition(
            name=name,
            description=description,
            build=build,
            shape=shape,
            properties=properties,
            required=required,
            failure_message=failure_message,
            describe_failure=describe_failure,
        )
        return build

    return decorator


def get_tool(name: str) -> Optional[ToolDefinition]:
    return TOOL_REGISTRY.get(name)


def list_tools() -> List[ToolDefinition]:
    return list(TOOL_REGISTRY.values())


# Shared schema fragments

NAMESPACE = {"type": "string", "description": "Namespace (omit for default namespace)"}
ALL_NAMESPACES = {"type": "boolean", "description": "List across all namespaces"}
LIST_PROPERTIES = {"namespace": NAMESPACE, "all_namespaces": ALL_NAMESPACES}


def named(kind: str, **extra: Any) -> Dict[str, Any]:
    """Properties for a tool addressing one namespaced resource by name."""
    properties = {
        "name": {"type": "string", "description": f"{kind} name"},
        "namespace": NAMESPACE,
    }
    properties.update(extra)
    return properties


# Shared argument helpers

def scope(arguments: Dict[str, Any], namespace: str) -> List[str]:
    """Namespace-scoping flags for list style commands."""
    if arguments.get("all_namespaces"):
        return ["--all-namespaces"]
    return ["-n", namespace]


def as_count(value: Any) -> str:
    """Render a JSON number as kubectl expects it (3.0 -> "3")."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def literals(data: Dict[str, Any]) -> List[str]:
    return [f"--from-literal={key}={value}" for key, value in (data or {}).items()]


def force_flags(arguments: Dict[str, Any]) -> List[str]:
    return ["--force", "--grace-period=0"] if arguments.get("force") else []


# Shared shaping helpers

def parse_json(result: Dict[str, Any]) -> Dict[str, Any]:
    return json.loads(result["output"])


def compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop fields that are absent (None)."""
    return {key: value for key, value in data.items() if value is not None}


def dump_json(data: Any) -> str:
    """Pretty-print a response, dropping top-level fields that are absent."""
    if isinstance(data, dict):
        data = compact(data)
    return json.dumps(data, indent=2, ensure_ascii=False)


def pretty_json(result: Dict[str, Any], arguments: Dict[str, Any], namespace: str) -> str:
    return json.dumps(parse_json(result), indent=2, ensure_ascii=False)
