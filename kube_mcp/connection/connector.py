"""
Connector module for K8s cluster connections.
Provides a unified interface over local and SSH-remote kubectl execution.
"""

import logging
from typing import Optional, Dict, Any, List

from .kubectl import KubectlConnector, DEFAULT_TIMEOUT
from .remote import RemoteKubectlConnector

logger = logging.getLogger(__name__)


class ClusterConnector:
    """
    ClusterConnector provides a unified interface for running kubectl
    against a Kubernetes cluster, either locally or through SSH.

    The execution path is chosen once, when the connector is created:
    a configured ssh_host selects remote execution.
    """

    def __init__(
        self,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        namespace: str = "default",
        kubectl_path: str = "kubectl",
        ssh_host: Optional[str] = None,
        ssh_user: Optional[str] = None,
        ssh_key: Optional[str] = None,
        ssh_password: Optional[str] = None,
        elevate: Optional[str] = "sudo",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        """
        Initialize a new ClusterConnector instance.

        Args:
            kubeconfig: Path to kubeconfig file (local mode only)
            context: Kubernetes context to use (local mode only)
            namespace: Namespace used when a tool call omits one
            kubectl_path: kubectl binary (local mode only)
            ssh_host: Remote host; switches to remote execution when set
            ssh_user: SSH user name
            ssh_key: Path to SSH private key
            ssh_password: SSH password, used when no key is given
            elevate: Command prefixed to the remote kubectl invocation
            timeout: Per-command timeout in seconds
        """
        self.kubeconfig = kubeconfig
        self.context = context
        self.namespace = namespace or "default"
        self.connected = False

        if ssh_host:
            self._connector = RemoteKubectlConnector(
                host=ssh_host,
                user=ssh_user,
                ssh_key=ssh_key,
                password=ssh_password,
                elevate=elevate,
                timeout=timeout,
            )
        else:
            self._connector = KubectlConnector(
                kubeconfig=kubeconfig,
                context=context,
                kubectl_path=kubectl_path,
                timeout=timeout,
            )

    @property
    def mode(self) -> str:
        return self._connector.mode

    def describe(self) -> str:
        """Human-readable summary of the execution path."""
        if isinstance(self._connector, RemoteKubectlConnector):
            return f"SSH remote kubectl ({self._connector.target})"

        details = ["Local kubectl"]
        if self.kubeconfig:
            details.append(f"kubeconfig={self.kubeconfig}")
        if self.context:
            details.append(f"context={self.context}")
        return ", ".join(details)

    def connect(self) -> bool:
        """
        Probe the cluster with kubectl.

        Returns:
            bool: True if kubectl answered, False otherwise
        """
        self.connected = self._connector.connect()
        return self.connected

    def get_api_version(self) -> str:
        """Get Kubernetes server API version"""
        return self._connector.get_api_version()

    def get_namespaces(self) -> List[str]:
        """Get list of available namespaces"""
        return self._connector.get_namespaces()

    def get_current_context(self) -> str:
        """Get current Kubernetes context name"""
        return self._connector.get_current_context()

    def run_command(self, args: List[str], stdin: Optional[str] = None) -> Dict[str, Any]:
        """
        Run a kubectl command through the configured execution path.

        Args:
            args: kubectl arguments
            stdin: Optional standard input text

        Returns:
            Dict containing command output and status
        """
        return self._connector.run_command(args, stdin=stdin)
