"""
Pod tools.
"""

import shlex
from typing import Any, Dict

from .registry import (
    KubectlCall, LIST_PROPERTIES, as_count, compact, dump_json, force_flags, named, parse_json, scope, tool,
)

CONTAINER = {"type": "string", "description": "Container name (if pod has multiple containers)"}


def shape_pod(result, arguments, namespace):
    pod = parse_json(result)
    metadata = pod.get("metadata", {})
    spec = pod.get("spec", {})
    status = pod.get("status", {})
    return dump_json({
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
        "status": status.get("phase"),
        "podIP": status.get("podIP"),
        "nodeName": spec.get("nodeName"),
        "containers": [
            compact({"name": c.get("name"), "image": c.get("image"), "ports": c.get("ports")})
            for c in spec.get("containers", [])
        ],
        "conditions": status.get("conditions"),
        "containerStatuses": status.get("containerStatuses"),
    })


def shape_exec(result, arguments, namespace):
    return result["output"] + result["error"]


def describe_exec_failure(result: Dict[str, Any]) -> str:
    # exec output is kept on failure
    output = result["output"] + result["error"]
    if result["returncode"] < 0:
        return output
    return f"Command exited with status {result['returncode']}\n{output}"


@tool("k8s_list_pods", "List pods in a namespace or all namespaces",
      properties=dict(LIST_PROPERTIES, label_selector={
          "type": "string", "description": "Label selector (e.g., 'app=nginx')"}))
def list_pods(arguments, namespace):
    args = ["get", "pods", "-o", "wide"] + scope(arguments, namespace)
    if arguments.get("label_selector"):
        args.extend(["-l", arguments["label_selector"]])
    return KubectlCall(args)


@tool("k8s_get_pod", "Get detailed information about a specific pod",
      properties=named("Pod"), required=["name"], shape=shape_pod)
def get_pod(arguments, namespace):
    return KubectlCall(["get", "pod", arguments["name"], "-n", namespace, "-o", "json"])


@tool("k8s_describe_pod", "Get full description of a pod including events",
      properties=named("Pod"), required=["name"])
def describe_pod(arguments, namespace):
    return KubectlCall(["describe", "pod", arguments["name"], "-n", namespace])


@tool("k8s_get_pod_logs", "Get logs from a pod container",
      properties=named(
          "Pod",
          container=CONTAINER,
          tail={"type": "number", "description": "Number of lines to show from end of logs"},
          previous={"type": "boolean", "description": "Get logs from previous instance of container"},
          since={"type": "string",
                 "description": "Only return logs newer than a relative duration (e.g., 5m, 1h)"},
      ),
      required=["name"],
      shape=lambda result, arguments, namespace: result["output"] or "No logs available")
def get_pod_logs(arguments, namespace):
    args = ["logs", arguments["name"], "-n", namespace]
    if arguments.get("container"):
        args.extend(["-c", arguments["container"]])
    if arguments.get("previous"):
        args.append("--previous")
    if arguments.get("tail"):
        args.extend(["--tail", as_count(arguments["tail"])])
    if arguments.get("since"):
        args.extend(["--since", arguments["since"]])
    return KubectlCall(args)


@tool("k8s_delete_pod", "Delete a pod",
      properties=named("Pod", force={"type": "boolean", "description": "Force delete the pod immediately"}),
      required=["name"],
      shape=lambda result, arguments, namespace:
          f"Pod '{arguments['name']}' deleted from namespace '{namespace}'")
def delete_pod(arguments, namespace):
    return KubectlCall(["delete", "pod", arguments["name"], "-n", namespace] + force_flags(arguments))


@tool("k8s_exec_pod", "Execute a command in a pod container",
      properties=named(
          "Pod",
          container=CONTAINER,
          command={"type": "string",
                   "description": "Command to execute (e.g., 'ls -la' or 'cat /etc/hosts')"},
      ),
      required=["name", "command"],
      shape=shape_exec,
      describe_failure=describe_exec_failure)
def exec_pod(arguments, namespace):
    args = ["exec", arguments["name"], "-n", namespace]
    if arguments.get("container"):
        args.extend(["-c", arguments["container"]])
    args.append("--")
    args.extend(shlex.split(arguments["command"]))
    return KubectlCall(args)
