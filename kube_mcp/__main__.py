"""
Main entry point for kube-mcp.
This file allows running the tool as a module: python -m kube_mcp
"""

from .cli.cli import main

if __name__ == "__main__":
    main()
