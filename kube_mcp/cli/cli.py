"""
CLI module for kube-mcp.
Provides the command line entry point: serving MCP over stdio, probing the
cluster, listing the tool catalogue and running single tool calls.
"""

import sys
import logging
import json
import yaml
import click

from kube_mcp.connection.connector import ClusterConnector
from kube_mcp.connection.kubectl import DEFAULT_TIMEOUT
from kube_mcp.dispatch import ToolDispatcher
from kube_mcp.server import run_server
from kube_mcp.tools import get_tool, list_tools

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


# Helper function to pretty print dict as YAML
def print_yaml(data):
    """Print data as YAML."""
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False))


# Helper function to pretty print dict as JSON
def print_json(data, indent=2):
    """Print data as JSON."""
    click.echo(json.dumps(data, indent=indent))


def print_data(ctx, data):
    if ctx.obj['output_format'] == 'json':
        print_json(data)
    else:
        print_yaml(data)


def parse_arguments(pairs, args_file=None, properties=None):
    """
    Build a tool argument mapping from KEY=VALUE pairs and an optional YAML file.

    Values are read as YAML, so numbers, booleans and inline mappings keep their type.
    Values of arguments the tool declares as strings are kept as given.
    Pairs override keys from the file.
    """
    properties = properties or {}
    arguments = {}

    if args_file:
        loaded = yaml.safe_load(args_file.read()) or {}
        if not isinstance(loaded, dict):
            raise click.BadParameter("arguments file must contain a mapping", param_hint='--args-file')
        arguments.update(loaded)

    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{pair}'", param_hint='--arg')
        if properties.get(key, {}).get('type') == 'string':
            arguments[key] = value
            continue
        try:
            parsed = yaml.safe_load(value) if value else ""
        except yaml.YAMLError:
            parsed = value
        arguments[key] = value if parsed is None else parsed

    return arguments


@click.group()
@click.option('--kubeconfig', envvar='KUBECONFIG', help='Path to kubeconfig file')
@click.option('--context', envvar='K8S_CONTEXT', help='Kubernetes context to use')
@click.option(
    '--namespace',
    envvar='K8S_DEFAULT_NAMESPACE',
    default='default',
    show_default=True,
    help='Namespace used when a tool call does not name one'
)
@click.option('--kubectl-path', envvar='KUBECTL_PATH', default='kubectl', show_default=True,
              help='kubectl binary')
@click.option('--ssh-host', envvar='K8S_SSH_HOST', help='Run kubectl on this host over SSH')
@click.option('--ssh-user', envvar='K8S_SSH_USER', help='SSH user name')
@click.option('--ssh-key', envvar='K8S_SSH_KEY', help='SSH private key file')
@click.option('--ssh-password', envvar='K8S_SSH_PASSWORD', help='SSH password (used when no key is set)')
@click.option('--elevate', envvar='K8S_SSH_ELEVATE', default='sudo', show_default=True,
              help='Command prefixed to remote kubectl; empty to disable')
@click.option('--timeout', envvar='K8S_COMMAND_TIMEOUT', type=float, default=DEFAULT_TIMEOUT,
              show_default=True, help='Seconds before a kubectl command is killed')
@click.option(
    '--log-level',
    envvar='LOG_LEVEL',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Logging level'
)
@click.option(
    '--output-format',
    type=click.Choice(['yaml', 'json']),
    default='yaml',
    help='Output format: yaml or json'
)
@click.pass_context
def cli(ctx, kubeconfig, context, namespace, kubectl_path, ssh_host, ssh_user, ssh_key,
        ssh_password, elevate, timeout, log_level, output_format):
    """
    Kubernetes cluster operations as MCP tools.

    Every tool call runs kubectl, either locally or on a remote host
    over SSH, and returns its output as text.
    """
    # Logs go to stderr; stdout carries the MCP stdio transport
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)

    ctx.ensure_object(dict)
    ctx.obj['output_format'] = output_format

    connector = ClusterConnector(
        kubeconfig=kubeconfig,
        context=context,
        namespace=namespace,
        kubectl_path=kubectl_path,
        ssh_host=ssh_host,
        ssh_user=ssh_user,
        ssh_key=ssh_key,
        ssh_password=ssh_password,
        elevate=elevate,
        timeout=timeout if timeout and timeout > 0 else None,
    )

    ctx.obj['connector'] = connector
    ctx.obj['dispatcher'] = ToolDispatcher(connector, default_namespace=namespace)


@cli.command()
@click.pass_context
def serve(ctx):
    """
    Serve the MCP tools over stdio.
    """
    run_server(ctx.obj['dispatcher'])


@cli.command()
@click.pass_context
def connect(ctx):
    """
    Check kubectl connectivity and show cluster information.
    """
    connector = ctx.obj['connector']

    click.echo(f"Connecting to Kubernetes cluster ({connector.describe()})...", err=True)

    if not connector.connect():
        click.echo("Failed to connect to Kubernetes cluster", err=True)
        sys.exit(1)

    try:
        result = {
            "success": True,
            "message": "Connected to Kubernetes cluster",
            "mode": connector.mode,
            "api_version": connector.get_api_version(),
            "context": connector.get_current_context(),
            "namespace": connector.namespace,
            "namespaces_count": len(connector.get_namespaces()),
        }
    except RuntimeError as e:
        click.echo(f"Connected, but failed to read cluster details: {e}", err=True)
        sys.exit(1)

    print_data(ctx, result)


@cli.command()
@click.pass_context
def tools(ctx):
    """
    List the available tools.
    """
    catalogue = [
        {
            "name": definition.name,
            "description": definition.description,
            "arguments": sorted(definition.properties),
            "required": definition.required,
        }
        for definition in list_tools()
    ]
    print_data(ctx, catalogue)


@cli.command()
@click.argument('tool_name')
@click.option('--arg', 'pairs', multiple=True, help='Tool argument as KEY=VALUE (repeatable)')
@click.option('--args-file', type=click.File('r'), help='YAML or JSON file with tool arguments')
@click.pass_context
def call(ctx, tool_name, pairs, args_file):
    """
    Run a single tool call and print its response.
    """
    dispatcher = ctx.obj['dispatcher']
    definition = get_tool(tool_name)
    arguments = parse_arguments(pairs, args_file, definition.properties if definition else None)

    response = dispatcher.call(tool_name, arguments)

    if response.is_error:
        click.echo(response.text, err=True)
        sys.exit(1)

    click.echo(response.text)


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == '__main__':
    main()
