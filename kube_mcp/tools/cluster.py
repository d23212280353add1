"""
Cluster-scoped tools: cluster info, nodes, namespaces and kubectl contexts.
"""

from typing import Any, Dict, List

from .registry import KubectlCall, dump_json, parse_json, tool

NODE_NAME = {"name": {"type": "string", "description": "Node name"}}


def _node_status(conditions: List[Dict[str, Any]]) -> str:
    for condition in conditions:
        if condition.get("type") == "Ready":
            return "Ready" if condition.get("status") == "True" else "NotReady"
    return "NotReady"


def shape_node(result, arguments, namespace):
    node = parse_json(result)
    metadata = node.get("metadata", {})
    status = node.get("status", {})
    conditions = status.get("conditions") or []
    return dump_json({
        "name": metadata.get("name"),
        "labels": metadata.get("labels"),
        "status": _node_status(conditions),
        "conditions": status.get("conditions"),
        "capacity": status.get("capacity"),
        "allocatable": status.get("allocatable"),
        "nodeInfo": status.get("nodeInfo"),
    })


@tool("k8s_get_cluster_info",
      "Get Kubernetes cluster information including server version and endpoints")
def get_cluster_info(arguments, namespace):
    return KubectlCall(["cluster-info"])


@tool("k8s_list_nodes",
      "List all nodes in the cluster with their status, roles, and resource information")
def list_nodes(arguments, namespace):
    return KubectlCall(["get", "nodes", "-o", "wide"])


@tool("k8s_get_node", "Get detailed information about a specific node",
      properties=NODE_NAME, required=["name"], shape=shape_node)
def get_node(arguments, namespace):
    return KubectlCall(["get", "node", arguments["name"], "-o", "json"])


@tool("k8s_describe_node",
      "Get full description of a node including conditions, capacity, and allocatable resources",
      properties=NODE_NAME, required=["name"])
def describe_node(arguments, namespace):
    return KubectlCall(["describe", "node", arguments["name"]])


# Namespaces

@tool("k8s_list_namespaces", "List all namespaces in the cluster")
def list_namespaces(arguments, namespace):
    return KubectlCall(["get", "namespaces", "-o", "wide"])


@tool("k8s_create_namespace", "Create a new namespace",
      properties={"name": {"type": "string", "description": "Namespace name to create"}},
      required=["name"],
      shape=lambda result, arguments, namespace: f"Namespace '{arguments['name']}' created successfully")
def create_namespace(arguments, namespace):
    return KubectlCall(["create", "namespace", arguments["name"]])


@tool("k8s_delete_namespace",
      "Delete a namespace (WARNING: This will delete all resources in the namespace)",
      properties={"name": {"type": "string", "description": "Namespace name to delete"}},
      required=["name"],
      shape=lambda result, arguments, namespace: f"Namespace '{arguments['name']}' deleted")
def delete_namespace(arguments, namespace):
    return KubectlCall(["delete", "namespace", arguments["name"]])


# Contexts

@tool("k8s_get_contexts", "List all available kubectl contexts")
def get_contexts(arguments, namespace):
    return KubectlCall(["config", "get-contexts"])


@tool("k8s_current_context", "Get the current kubectl context",
      shape=lambda result, arguments, namespace: result["output"].strip())
def current_context(arguments, namespace):
    return KubectlCall(["config", "current-context"])
