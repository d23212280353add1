"""
Deployment and rollout tools.
"""

from .registry import KubectlCall, LIST_PROPERTIES, as_count, compact, dump_json, named, parse_json, scope, tool

REPLICAS = {"type": "number", "description": "Number of replicas"}


def shape_deployment(result, arguments, namespace):
    deployment = parse_json(result)
    metadata = deployment.get("metadata", {})
    spec = deployment.get("spec", {})
    status = deployment.get("status", {})
    containers = spec.get("template", {}).get("spec", {}).get("containers", [])
    return dump_json({
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
        "replicas": spec.get("replicas"),
        "availableReplicas": status.get("availableReplicas"),
        "readyReplicas": status.get("readyReplicas"),
        "strategy": spec.get("strategy"),
        "containers": [compact({"name": c.get("name"), "image": c.get("image")}) for c in containers],
        "conditions": status.get("conditions"),
    })


def scale_args(kind, arguments, namespace):
    return ["scale", kind, arguments["name"], "-n", namespace, f"--replicas={as_count(arguments['replicas'])}"]


@tool("k8s_list_deployments", "List deployments in a namespace or all namespaces",
      properties=LIST_PROPERTIES)
def list_deployments(arguments, namespace):
    return KubectlCall(["get", "deployments", "-o", "wide"] + scope(arguments, namespace))


@tool("k8s_get_deployment", "Get detailed information about a deployment",
      properties=named("Deployment"), required=["name"], shape=shape_deployment)
def get_deployment(arguments, namespace):
    return KubectlCall(["get", "deployment", arguments["name"], "-n", namespace, "-o", "json"])


@tool("k8s_describe_deployment", "Get full description of a deployment including events and conditions",
      properties=named("Deployment"), required=["name"])
def describe_deployment(arguments, namespace):
    return KubectlCall(["describe", "deployment", arguments["name"], "-n", namespace])


@tool("k8s_scale_deployment", "Scale a deployment to a specific number of replicas",
      properties=named("Deployment", replicas=REPLICAS),
      required=["name", "replicas"],
      shape=lambda result, arguments, namespace:
          f"Deployment '{arguments['name']}' scaled to {as_count(arguments['replicas'])} replicas")
def scale_deployment(arguments, namespace):
    return KubectlCall(scale_args("deployment", arguments, namespace))


@tool("k8s_restart_deployment", "Perform a rolling restart of a deployment",
      properties=named("Deployment"), required=["name"],
      shape=lambda result, arguments, namespace: f"Deployment '{arguments['name']}' restarted")
def restart_deployment(arguments, namespace):
    return KubectlCall(["rollout", "restart", "deployment", arguments["name"], "-n", namespace])


@tool("k8s_update_deployment_image", "Update the container image of a deployment",
      properties=named(
          "Deployment",
          container={"type": "string", "description": "Container name"},
          image={"type": "string", "description": "New image (e.g., nginx:1.21)"},
      ),
      required=["name", "container", "image"],
      shape=lambda result, arguments, namespace: (
          f"Deployment '{arguments['name']}' container '{arguments['container']}' "
          f"updated to image '{arguments['image']}'"))
def update_deployment_image(arguments, namespace):
    return KubectlCall([
        "set", "image", f"deployment/{arguments['name']}",
        f"{arguments['container']}={arguments['image']}",
        "-n", namespace,
    ])


# Rollouts

@tool("k8s_rollout_status", "Get the status of a deployment rollout",
      properties=named("Deployment"), required=["name"])
def rollout_status(arguments, namespace):
    return KubectlCall(["rollout", "status", "deployment", arguments["name"], "-n", namespace])


@tool("k8s_rollout_history", "Get the rollout history of a deployment",
      properties=named("Deployment"), required=["name"])
def rollout_history(arguments, namespace):
    return KubectlCall(["rollout", "history", "deployment", arguments["name"], "-n", namespace])


@tool("k8s_rollout_undo", "Undo the last rollout of a deployment",
      properties=named("Deployment", revision={
          "type": "number", "description": "Specific revision to rollback to"}),
      required=["name"])
def rollout_undo(arguments, namespace):
    args = ["rollout", "undo", "deployment", arguments["name"], "-n", namespace]
    if arguments.get("revision"):
        args.append(f"--to-revision={as_count(arguments['revision'])}")
    return KubectlCall(args)
