"""
RemoteKubectlConnector module for running kubectl on another host over SSH.
"""

import logging
import platform
import shlex
from typing import Optional, List

from .kubectl import KubectlConnector, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

SSH_HOST_OPTIONS = [
    "-o", "StrictHostKeyChecking=no",
    "-o", "UserKnownHostsFile=/dev/null",
]


class RemoteKubectlConnector(KubectlConnector):
    """
    Runs kubectl on a remote host through an SSH client.

    The kubectl arguments are joined into a single shell command, prefixed
    with an elevation command, and executed by one of:
      - ssh with a private key (when ssh_key is set)
      - plink (Windows) or sshpass + ssh (elsewhere) when only a password is set
      - plain ssh, relying on the local agent, when neither is set
    """

    mode = "remote"

    def __init__(
        self,
        host: str,
        user: Optional[str] = None,
        ssh_key: Optional[str] = None,
        password: Optional[str] = None,
        elevate: Optional[str] = "sudo",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        """
        Initialize a new RemoteKubectlConnector instance.

        Args:
            host: Remote host running kubectl
            user: SSH user name
            ssh_key: Path to a private key file
            password: SSH password, used only when no key is configured
            elevate: Command prefixed to kubectl on the remote side; empty disables it
            timeout: Seconds to wait for each command before killing it
        """
        super().__init__(timeout=timeout)
        self.host = host
        self.user = user
        self.ssh_key = ssh_key
        self.password = password
        self.elevate = elevate

    @property
    def target(self) -> str:
        return f"{self.user}@{self.host}" if self.user else self.host

    def remote_command(self, args: List[str]) -> str:
        """Shell command line executed on the remote host."""
        parts = ["kubectl"] + [shlex.quote(str(arg)) for arg in args]
        if self.elevate:
            parts.insert(0, self.elevate)
        return " ".join(parts)

    def build_command(self, args: List[str]) -> List[str]:
        remote_cmd = self.remote_command(args)

        if self.ssh_key:
            return (
                ["ssh", "-i", self.ssh_key]
                + SSH_HOST_OPTIONS
                + ["-o", "BatchMode=yes", self.target, remote_cmd]
            )

        if self.password:
            if platform.system().lower() == "windows":
                return ["plink", "-batch", "-pw", self.password, self.target, remote_cmd]
            return ["sshpass", "-p", self.password, "ssh"] + SSH_HOST_OPTIONS + [self.target, remote_cmd]

        return ["ssh", "-o", "StrictHostKeyChecking=no", self.target, remote_cmd]

    def _describe_command(self, cmd: List[str]) -> str:
        if self.password:
            cmd = ["****" if part == self.password else part for part in cmd]
        return " ".join(cmd)
