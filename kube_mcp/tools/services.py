"""
Networking tools: services and ingresses.
"""

from .registry import KubectlCall, LIST_PROPERTIES, dump_json, named, parse_json, pretty_json, scope, tool


def shape_service(result, arguments, namespace):
    service = parse_json(result)
    metadata = service.get("metadata", {})
    spec = service.get("spec", {})
    return dump_json({
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
        "type": spec.get("type"),
        "clusterIP": spec.get("clusterIP"),
        "externalIPs": spec.get("externalIPs"),
        "ports": spec.get("ports"),
        "selector": spec.get("selector"),
    })


@tool("k8s_list_services", "List services in a namespace or all namespaces",
      properties=LIST_PROPERTIES)
def list_services(arguments, namespace):
    return KubectlCall(["get", "services", "-o", "wide"] + scope(arguments, namespace))


@tool("k8s_get_service", "Get detailed information about a service",
      properties=named("Service"), required=["name"], shape=shape_service)
def get_service(arguments, namespace):
    return KubectlCall(["get", "service", arguments["name"], "-n", namespace, "-o", "json"])


@tool("k8s_describe_service", "Get full description of a service including endpoints",
      properties=named("Service"), required=["name"])
def describe_service(arguments, namespace):
    return KubectlCall(["describe", "service", arguments["name"], "-n", namespace])


@tool("k8s_list_ingresses", "List Ingresses in a namespace", properties=LIST_PROPERTIES)
def list_ingresses(arguments, namespace):
    return KubectlCall(["get", "ingress", "-o", "wide"] + scope(arguments, namespace))


@tool("k8s_get_ingress", "Get Ingress details",
      properties=named("Ingress"), required=["name"], shape=pretty_json)
def get_ingress(arguments, namespace):
    return KubectlCall(["get", "ingress", arguments["name"], "-n", namespace, "-o", "json"])
