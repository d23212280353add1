"""
KubectlConnector module for running kubectl on the local machine.
Provides functionality to invoke the kubectl CLI through subprocess.
"""

import json
import logging
import subprocess
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


class KubectlConnector:
    """
    KubectlConnector runs kubectl commands on the local machine
    using subprocess, one process per command.
    """

    mode = "local"

    def __init__(
        self,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        kubectl_path: str = "kubectl",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        """
        Initialize a new KubectlConnector instance.

        Args:
            kubeconfig: Path to kubeconfig file. If None, kubectl picks its own default
            context: Kubernetes context to use. If None, uses current context
            kubectl_path: kubectl binary to invoke
            timeout: Seconds to wait for each command before killing it (None waits forever)
        """
        self.kubeconfig = kubeconfig
        self.context = context
        self.kubectl_path = kubectl_path
        self.timeout = timeout
        self.connected = False

    def connect(self) -> bool:
        """
        Verify that kubectl can reach the cluster.

        Returns:
            bool: True if connection was successful, False otherwise
        """
        result = self.run_command(["version", "--output=json"])

        if result["success"]:
            self.connected = True
            logger.info("Successfully connected to Kubernetes cluster using kubectl")
        else:
            self.connected = False
            logger.warning(f"kubectl may not be fully accessible: {result['error'].strip()}")

        return self.connected

    def get_api_version(self) -> str:
        """
        Get Kubernetes server API version.

        Returns:
            str: Server API version
        """
        result = self.run_command(["version", "--output=json"])
        if not result["success"]:
            raise RuntimeError(f"Failed to get API version: {result['error']}")

        try:
            version_info = json.loads(result["output"])
            server_version = version_info.get("serverVersion", {})
            return f"{server_version.get('major', '')}.{server_version.get('minor', '')}"
        except ValueError as e:
            logger.error(f"Error parsing API version: {e}")
            return "Unknown"

    def get_namespaces(self) -> List[str]:
        """
        Get list of available namespaces.

        Returns:
            List[str]: List of namespace names
        """
        result = self.run_command(["get", "namespaces", "-o", "json"])
        if not result["success"]:
            raise RuntimeError(f"Failed to get namespaces: {result['error']}")

        try:
            namespaces_info = json.loads(result["output"])
            return [item["metadata"]["name"] for item in namespaces_info.get("items", [])]
        except (ValueError, KeyError) as e:
            logger.error(f"Error parsing namespaces: {e}")
            return []

    def get_current_context(self) -> str:
        """
        Get current Kubernetes context name.

        Returns:
            str: Current context name
        """
        result = self.run_command(["config", "current-context"])
        if not result["success"]:
            raise RuntimeError(f"Failed to get current context: {result['error']}")

        return result["output"].strip()

    def run_command(self, args: List[str], stdin: Optional[str] = None) -> Dict[str, Any]:
        """
        Run a kubectl command.

        Args:
            args: kubectl arguments, without the binary itself
            stdin: Text fed to the process on standard input

        Returns:
            Dict containing command output and status
        """
        return self._execute_command(self.build_command(args), stdin=stdin)

    def build_command(self, args: List[str]) -> List[str]:
        """
        Build the full process argument list for a kubectl invocation.

        Returns:
            List[str]: Command as list of strings
        """
        cmd = [self.kubectl_path]

        if self.kubeconfig:
            cmd.append(f"--kubeconfig={self.kubeconfig}")

        if self.context:
            cmd.append(f"--context={self.context}")

        cmd.extend(str(arg) for arg in args)
        return cmd

    def _describe_command(self, cmd: List[str]) -> str:
        return " ".join(cmd)

    def _execute_command(self, cmd: List[str], stdin: Optional[str] = None) -> Dict[str, Any]:
        """
        Execute a command using subprocess.

        Args:
            cmd: Command to execute as list of strings
            stdin: Optional text to write to the process

        Returns:
            Dict containing:
                success: bool indicating command success
                output: captured standard output
                error: captured standard error, or the reason the process could not run
                returncode: command return code (-1 if it never completed)
        """
        logger.debug(f"Executing command: {self._describe_command(cmd)}")

        result = {
            "success": False,
            "output": "",
            "error": "",
            "returncode": -1
        }

        # never inherit our own stdin; in server mode it carries the MCP transport
        stdin_kwargs = {"input": stdin} if stdin is not None else {"stdin": subprocess.DEVNULL}

        try:
            process = subprocess.run(
                cmd,
                **stdin_kwargs,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                timeout=self.timeout,
                check=False
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Command timed out after {self.timeout} seconds: {cmd[0]}")
            result["error"] = f"Command timed out after {self.timeout} seconds"
            return result
        except OSError as e:
            logger.error(f"Error executing command: {e}")
            result["error"] = str(e)
            return result

        result["returncode"] = process.returncode
        result["output"] = process.stdout or ""
        result["error"] = process.stderr or ""
        result["success"] = process.returncode == 0

        if not result["success"]:
            logger.debug(f"Command exited with status {process.returncode}")

        return result
