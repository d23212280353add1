"""
Resource usage tools backed by `kubectl top`; these need metrics-server in the cluster.
"""

from .registry import KubectlCall, scope, tool

METRICS_UNAVAILABLE = "Metrics server may not be installed"


@tool("k8s_top_nodes", "Show resource usage (CPU/memory) for nodes",
      failure_message=METRICS_UNAVAILABLE)
def top_nodes(arguments, namespace):
    return KubectlCall(["top", "nodes"])


@tool("k8s_top_pods", "Show resource usage (CPU/memory) for pods",
      properties={
          "namespace": {"type": "string", "description": "Namespace"},
          "all_namespaces": {"type": "boolean", "description": "Show pods from all namespaces"},
      },
      failure_message=METRICS_UNAVAILABLE)
def top_pods(arguments, namespace):
    return KubectlCall(["top", "pods"] + scope(arguments, namespace))
