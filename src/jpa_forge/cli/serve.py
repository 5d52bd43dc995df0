from typing import Annotated

import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console(stderr=True)


@serve_app.command("mcp")
def mcp(
    transport: Annotated[str, typer.Option(help="stdio, sse or http.")] = "stdio",
    host: Annotated[str, typer.Option(help="Bind address for network transports.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port for network transports.")] = 8002,
) -> None:
    """Start the MCP server."""
    from jpa_forge.mcp.server import create_mcp_server

    server = create_mcp_server()
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    if transport == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=transport, host=host, port=port)  # type: ignore[arg-type]
