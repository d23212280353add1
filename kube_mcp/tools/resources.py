"""
Generic resource tools: manifests, deletion by type, events and raw YAML.
"""

from .registry import KubectlCall, NAMESPACE, force_flags, scope, tool

RESOURCE = {
    "resource_type": {"type": "string", "description": "Resource type (e.g., pod, deployment, service)"},
    "name": {"type": "string", "description": "Resource name"},
    "namespace": NAMESPACE,
}


@tool("k8s_apply_manifest", "Apply a YAML or JSON manifest to the cluster",
      properties={
          "manifest": {"type": "string", "description": "YAML or JSON manifest content"},
          "namespace": {"type": "string", "description": "Namespace to apply to"},
          "dry_run": {"type": "boolean", "description": "Perform a dry-run without making changes"},
      },
      required=["manifest"],
      shape=lambda result, arguments, namespace: result["output"] + result["error"])
def apply_manifest(arguments, namespace):
    args = ["apply", "-f", "-"]
    # only scope explicitly; manifests may carry their own namespaces
    if arguments.get("namespace"):
        args.extend(["-n", namespace])
    if arguments.get("dry_run"):
        args.append("--dry-run=client")
    return KubectlCall(args, stdin=arguments["manifest"])


@tool("k8s_delete_resource", "Delete a resource by type and name",
      properties=dict(RESOURCE, force={"type": "boolean", "description": "Force delete"}),
      required=["resource_type", "name"],
      shape=lambda result, arguments, namespace:
          f"{arguments['resource_type']} '{arguments['name']}' deleted from namespace '{namespace}'")
def delete_resource(arguments, namespace):
    return KubectlCall(
        ["delete", arguments["resource_type"], arguments["name"], "-n", namespace] + force_flags(arguments)
    )


@tool("k8s_get_events", "Get cluster events, optionally filtered by namespace",
      properties={
          "namespace": {"type": "string", "description": "Namespace to filter events"},
          "all_namespaces": {"type": "boolean", "description": "Get events from all namespaces"},
      })
def get_events(arguments, namespace):
    return KubectlCall(["get", "events", "--sort-by=.lastTimestamp"] + scope(arguments, namespace))


@tool("k8s_get_resource_yaml", "Get any resource as YAML",
      properties=RESOURCE, required=["resource_type", "name"])
def get_resource_yaml(arguments, namespace):
    return KubectlCall(
        ["get", arguments["resource_type"], arguments["name"], "-n", namespace, "-o", "yaml"]
    )


@tool("k8s_get_all", "Get all common resources in a namespace", properties={"namespace": NAMESPACE})
def get_all(arguments, namespace):
    return KubectlCall(["get", "all", "-n", namespace, "-o", "wide"])
