from .mcp_server import SERVER_NAME, create_server, handle_call_tool, run_server

__all__ = ["SERVER_NAME", "create_server", "handle_call_tool", "run_server"]
