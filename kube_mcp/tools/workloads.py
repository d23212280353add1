"""
StatefulSet and DaemonSet tools.
"""

from .deployments import REPLICAS, scale_args
from .registry import KubectlCall, LIST_PROPERTIES, as_count, named, pretty_json, scope, tool


@tool("k8s_list_statefulsets", "List StatefulSets in a namespace", properties=LIST_PROPERTIES)
def list_statefulsets(arguments, namespace):
    return KubectlCall(["get", "statefulsets", "-o", "wide"] + scope(arguments, namespace))


@tool("k8s_get_statefulset", "Get StatefulSet details",
      properties=named("StatefulSet"), required=["name"], shape=pretty_json)
def get_statefulset(arguments, namespace):
    return KubectlCall(["get", "statefulset", arguments["name"], "-n", namespace, "-o", "json"])


@tool("k8s_scale_statefulset", "Scale a StatefulSet to a specific number of replicas",
      properties=named("StatefulSet", replicas=REPLICAS),
      required=["name", "replicas"],
      shape=lambda result, arguments, namespace:
          f"StatefulSet '{arguments['name']}' scaled to {as_count(arguments['replicas'])} replicas")
def scale_statefulset(arguments, namespace):
    return KubectlCall(scale_args("statefulset", arguments, namespace))


@tool("k8s_list_daemonsets", "List DaemonSets in a namespace", properties=LIST_PROPERTIES)
def list_daemonsets(arguments, namespace):
    return KubectlCall(["get", "daemonsets", "-o", "wide"] + scope(arguments, namespace))


@tool("k8s_get_daemonset", "Get DaemonSet details",
      properties=named("DaemonSet"), required=["name"], shape=pretty_json)
def get_daemonset(arguments, namespace):
    return KubectlCall(["get", "daemonset", arguments["name"], "-n", namespace, "-o", "json"])
