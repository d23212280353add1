"""
ConfigMap and Secret tools.

Secret values are only decoded when the caller asks for it with decode=true;
otherwise only the key names are returned.
"""

import base64
import binascii
import logging
from typing import Dict

from .registry import KubectlCall, LIST_PROPERTIES, dump_json, literals, named, parse_json, scope, tool

logger = logging.getLogger(__name__)

DATA = {"type": "object", "description": "Key-value pairs"}
INVALID_VALUE = "<invalid base64>"


def decode_value(value: str) -> str:
    """Base64-decode one Secret value, tolerating whitespace and missing padding."""
    value = "".join(value.split())
    return base64.b64decode(value + "=" * (-len(value) % 4)).decode("utf-8", errors="replace")


def decode_values(data: Dict[str, str]) -> Dict[str, str]:
    """
    Base64-decode every value of a Secret's data mapping.

    A value that cannot be decoded is reported as INVALID_VALUE; the other keys
    are still decoded.
    """
    decoded = {}
    for key, value in data.items():
        try:
            decoded[key] = decode_value(value)
        except binascii.Error as e:
            logger.warning(f"Secret key '{key}' is not valid base64: {e}")
            decoded[key] = INVALID_VALUE
    return decoded


def shape_configmap(result, arguments, namespace):
    configmap = parse_json(result)
    metadata = configmap.get("metadata", {})
    return dump_json({
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
        "data": configmap.get("data"),
    })


def shape_secret(result, arguments, namespace):
    secret = parse_json(result)
    metadata = secret.get("metadata", {})
    data = secret.get("data") or {}
    response = {
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
        "type": secret.get("type"),
        "keys": list(data.keys()),
    }
    if arguments.get("decode") and data:
        response["decodedData"] = decode_values(data)
    return dump_json(response)


# ConfigMaps

@tool("k8s_list_configmaps", "List ConfigMaps in a namespace", properties=LIST_PROPERTIES)
def list_configmaps(arguments, namespace):
    return KubectlCall(["get", "configmaps"] + scope(arguments, namespace))


@tool("k8s_get_configmap", "Get ConfigMap details and data",
      properties=named("ConfigMap"), required=["name"], shape=shape_configmap)
def get_configmap(arguments, namespace):
    return KubectlCall(["get", "configmap", arguments["name"], "-n", namespace, "-o", "json"])


@tool("k8s_create_configmap", "Create a ConfigMap from literal values",
      properties=named("ConfigMap", data=DATA), required=["name", "data"],
      shape=lambda result, arguments, namespace:
          f"ConfigMap '{arguments['name']}' created in namespace '{namespace}'")
def create_configmap(arguments, namespace):
    return KubectlCall(["create", "configmap", arguments["name"], "-n", namespace] + literals(arguments["data"]))


@tool("k8s_delete_configmap", "Delete a ConfigMap",
      properties=named("ConfigMap"), required=["name"],
      shape=lambda result, arguments, namespace:
          f"ConfigMap '{arguments['name']}' deleted from namespace '{namespace}'")
def delete_configmap(arguments, namespace):
    return KubectlCall(["delete", "configmap", arguments["name"], "-n", namespace])


# Secrets

@tool("k8s_list_secrets", "List secrets in a namespace (values are not shown)", properties=LIST_PROPERTIES)
def list_secrets(arguments, namespace):
    return KubectlCall(["get", "secrets"] + scope(arguments, namespace))


@tool("k8s_get_secret", "Get secret metadata (values are base64 encoded)",
      properties=named("Secret", decode={
          "type": "boolean", "description": "Decode base64 values (be careful with sensitive data)"}),
      required=["name"], shape=shape_secret)
def get_secret(arguments, namespace):
    return KubectlCall(["get", "secret", arguments["name"], "-n", namespace, "-o", "json"])


@tool("k8s_create_secret", "Create a generic secret from literal values",
      properties=named(
          "Secret",
          data=DATA,
          type={"type": "string", "description": "Secret type (default: generic)"},
      ),
      required=["name", "data"],
      shape=lambda result, arguments, namespace:
          f"Secret '{arguments['name']}' created in namespace '{namespace}'")
def create_secret(arguments, namespace):
    secret_type = arguments.get("type") or "generic"
    return KubectlCall(
        ["create", "secret", secret_type, arguments["name"], "-n", namespace] + literals(arguments["data"])
    )


@tool("k8s_delete_secret", "Delete a secret",
      properties=named("Secret"), required=["name"],
      shape=lambda result, arguments, namespace:
          f"Secret '{arguments['name']}' deleted from namespace '{namespace}'")
def delete_secret(arguments, namespace):
    return KubectlCall(["delete", "secret", arguments["name"], "-n", namespace])
