"""Entry point for ``python -m trello_cli.mcp_server``."""

from trello_cli.mcp_server import main

main()
