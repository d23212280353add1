"""
Test cases for ToolDispatcher
"""
import base64
import json
from unittest.mock import patch

import pytest

from kube_mcp.dispatch import ToolDispatcher
from kube_mcp.errors import KubectlError, ToolArgumentError, UnknownToolError
from conftest import kubectl_result


class TestNamespaceResolution:
    def test_omitted_namespace_uses_default(self, dispatcher, connector):
        dispatcher.dispatch("k8s_list_pods", {})
        args = connector.run_command.call_args[0][0]
        assert args == ["get", "pods", "-o", "wide", "-n", "apps"]

    def test_explicit_namespace(self, dispatcher, connector):
        dispatcher.dispatch("k8s_list_pods", {"namespace": "x"})
        args = connector.run_command.call_args[0][0]
        assert args[args.index("-n") + 1] == "x"

    def test_all_namespaces_replaces_namespace_flag(self, dispatcher, connector):
        dispatcher.dispatch("k8s_list_pods", {"namespace": "x", "all_namespaces": True})
        args = connector.run_command.call_args[0][0]
        assert "--all-namespaces" in args
        assert "-n" not in args

    def test_default_namespace_from_connector(self, connector):
        connector.namespace = "team-a"
        dispatcher = ToolDispatcher(connector)
        assert dispatcher.resolve_namespace({}) == "team-a"
        assert dispatcher.resolve_namespace({"namespace": ""}) == "team-a"

    def test_namespace_resolved_once_per_call(self, dispatcher, connector):
        with patch.object(dispatcher, "resolve_namespace", wraps=dispatcher.resolve_namespace) as resolve:
            text = dispatcher.dispatch("k8s_delete_pod", {"name": "web-1"})
        assert resolve.call_count == 1
        assert connector.run_command.call_args[0][0][3:5] == ["-n", "apps"]
        assert text == "Pod 'web-1' deleted from namespace 'apps'"


class TestDispatch:
    def test_scale_deployment_scenario(self, dispatcher, connector):
        """Scale 'web' to 3 replicas in the default namespace"""
        text = dispatcher.dispatch("k8s_scale_deployment", {"name": "web", "replicas": 3})
        connector.run_command.assert_called_once_with(
            ["scale", "deployment", "web", "-n", "apps", "--replicas=3"], stdin=None
        )
        assert text == "Deployment 'web' scaled to 3 replicas"

    def test_float_replicas_render_as_integers(self, dispatcher, connector):
        text = dispatcher.dispatch("k8s_scale_statefulset", {"name": "db", "replicas": 2.0})
        assert "--replicas=2" in connector.run_command.call_args[0][0]
        assert text == "StatefulSet 'db' scaled to 2 replicas"

    def test_raw_output_is_returned_verbatim(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result("NAME   READY\nweb-1  1/1\n")
        assert dispatcher.dispatch("k8s_list_deployments", {}) == "NAME   READY\nweb-1  1/1\n"

    def test_apply_manifest_sends_stdin(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result("deployment.apps/web created\n", "Warning: x\n")
        text = dispatcher.dispatch("k8s_apply_manifest", {"manifest": "kind: Deployment\n", "dry_run": True})
        connector.run_command.assert_called_once_with(
            ["apply", "-f", "-", "--dry-run=client"], stdin="kind: Deployment\n"
        )
        assert text == "deployment.apps/web created\nWarning: x\n"

    def test_build_does_not_run_kubectl(self, dispatcher, connector):
        call = dispatcher.build("k8s_get_pod", {"name": "web-1"})
        assert call.args == ["get", "pod", "web-1", "-n", "apps", "-o", "json"]
        connector.run_command.assert_not_called()


class TestFailures:
    def test_nonzero_exit_raises_with_stderr(self, dispatcher, connector):
        stderr = 'Error from server (NotFound): deployments.apps "web" not found\n'
        connector.run_command.return_value = kubectl_result(error=stderr, returncode=1)
        with pytest.raises(KubectlError) as excinfo:
            dispatcher.dispatch("k8s_get_deployment", {"name": "web"})
        assert str(excinfo.value) == stderr
        assert excinfo.value.returncode == 1

    def test_nonzero_exit_response_contains_stderr_verbatim(self, dispatcher, connector):
        stderr = "error: the server doesn't have a resource type \"widgets\"\n"
        connector.run_command.return_value = kubectl_result(error=stderr, returncode=1)
        response = dispatcher.call("k8s_get_resource_yaml", {"resource_type": "widgets", "name": "a"})
        assert response.is_error
        assert response.text == f"Error: {stderr}"

    def test_top_falls_back_to_metrics_hint(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result(returncode=1)
        response = dispatcher.call("k8s_top_nodes", {})
        assert response.is_error
        assert response.text == "Error: Metrics server may not be installed"

    def test_unknown_tool_never_runs_kubectl(self, dispatcher, connector):
        with pytest.raises(UnknownToolError):
            dispatcher.dispatch("k8s_reboot_cluster", {})
        response = dispatcher.call("k8s_reboot_cluster", {})
        assert response.is_error
        assert response.text == "Error: Unknown tool: k8s_reboot_cluster"
        connector.run_command.assert_not_called()

    def test_missing_required_argument(self, dispatcher, connector):
        with pytest.raises(ToolArgumentError):
            dispatcher.dispatch("k8s_scale_deployment", {"name": "web"})
        connector.run_command.assert_not_called()

    def test_unparseable_output_is_reported(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result("not json")
        response = dispatcher.call("k8s_get_pod", {"name": "web-1"})
        assert response.is_error
        assert response.text.startswith("Error: ")

    def test_failure_does_not_affect_next_call(self, dispatcher, connector):
        connector.run_command.side_effect = [
            kubectl_result(error="boom\n", returncode=1),
            kubectl_result("default\n"),
        ]
        assert dispatcher.call("k8s_current_context", {}).is_error
        response = dispatcher.call("k8s_current_context", {})
        assert not response.is_error
        assert response.text == "default"


class TestExecPolicy:
    def test_exec_returns_stdout_and_stderr(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result("total 0\n", "ls: warning\n")
        text = dispatcher.dispatch("k8s_exec_pod", {"name": "web-1", "command": "ls -la /tmp", "container": "app"})
        connector.run_command.assert_called_once_with(
            ["exec", "web-1", "-n", "apps", "-c", "app", "--", "ls", "-la", "/tmp"], stdin=None
        )
        assert text == "total 0\nls: warning\n"

    def test_exec_splits_with_shell_rules(self, dispatcher, connector):
        dispatcher.dispatch("k8s_exec_pod", {"name": "web-1", "command": "sh -c 'echo hello world'"})
        args = connector.run_command.call_args[0][0]
        assert args[args.index("--") + 1:] == ["sh", "-c", "echo hello world"]

    def test_exec_failure_is_flagged_with_output(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result("partial\n", "cat: /nope: No such file\n", returncode=1)
        response = dispatcher.call("k8s_exec_pod", {"name": "web-1", "command": "cat /nope"})
        assert response.is_error
        assert "status 1" in response.text
        assert "partial\n" in response.text
        assert "cat: /nope: No such file\n" in response.text


class TestSecrets:
    SECRET = {
        "metadata": {"name": "db-creds", "namespace": "apps"},
        "type": "Opaque",
        "data": {
            "username": base64.b64encode(b"admin").decode(),
            "password": base64.b64encode("p@ss wörd".encode()).decode(),
        },
    }

    def test_secret_values_hidden_by_default(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result(json.dumps(self.SECRET))
        data = json.loads(dispatcher.dispatch("k8s_get_secret", {"name": "db-creds"}))
        assert data == {"name": "db-creds", "namespace": "apps", "type": "Opaque", "keys": ["username", "password"]}

    def test_secret_values_decoded_on_request(self, dispatcher, connector):
        connector.run_command.return_value = kubectl_result(json.dumps(self.SECRET))
        data = json.loads(dispatcher.dispatch("k8s_get_secret", {"name": "db-creds", "decode": True}))
        for key, value in self.SECRET["data"].items():
            assert data["decodedData"][key] == base64.b64decode(value).decode("utf-8")

    def test_unpadded_and_malformed_values(self, dispatcher, connector):
        secret = {
            "metadata": {"name": "tls", "namespace": "apps"},
            "type": "Opaque",
            "data": {"user": "YWRtaW4", "broken": "a"},
        }
        connector.run_command.return_value = kubectl_result(json.dumps(secret))
        response = dispatcher.call("k8s_get_secret", {"name": "tls", "decode": True})
        assert not response.is_error
        decoded = json.loads(response.text)["decodedData"]
        assert decoded == {"user": "admin", "broken": "<invalid base64>"}
