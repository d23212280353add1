"""
Test configuration and fixtures for kube-mcp tests.
"""
import os
import pytest
import tempfile
from unittest.mock import Mock

from kube_mcp.dispatch import ToolDispatcher


def kubectl_result(output="", error="", returncode=0):
    """A run_command result as returned by the connectors."""
    return {
        "success": returncode == 0,
        "output": output,
        "error": error,
        "returncode": returncode,
    }


@pytest.fixture(scope="session")
def dummy_kubeconfig():
    """Create a dummy kubeconfig file for testing."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='-kubeconfig', delete=False) as f:
        f.write("""
apiVersion: v1
kind: Config
clusters:
- cluster:
    server: https://dummy-server:6443
  name: dummy-cluster
contexts:
- context:
    cluster: dummy-cluster
    user: dummy-user
  name: dummy-context
current-context: dummy-context
users:
- name: dummy-user
  user:
    token: dummy-token
""")
    yield f.name
    if os.path.exists(f.name):
        os.unlink(f.name)


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Keep the developer's cluster settings out of the tests."""
    for name in (
        "KUBECONFIG", "K8S_CONTEXT", "K8S_DEFAULT_NAMESPACE", "KUBECTL_PATH",
        "K8S_SSH_HOST", "K8S_SSH_USER", "K8S_SSH_KEY", "K8S_SSH_PASSWORD",
        "K8S_SSH_ELEVATE", "K8S_COMMAND_TIMEOUT", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def connector():
    connector = Mock()
    connector.namespace = "default"
    connector.run_command.return_value = kubectl_result("ok\n")
    return connector


@pytest.fixture
def dispatcher(connector):
    return ToolDispatcher(connector, default_namespace="apps")
