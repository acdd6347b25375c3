"""
forumsync CLI - serve command.
"""

import typer
from rich.console import Console

console = Console()


def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(3000, "--port", "-p", envvar="PORT", help="Port to listen on"),
) -> None:
    """
    Serve the HTTP sync trigger (POST /api/sync).

    Examples:
        forumsync serve
        forumsync serve --host 0.0.0.0 --port 8080
    """
    import uvicorn

    from forumsync.server.app import app as fastapi_app

    console.print(f"[green]Serving forumsync on http://{host}:{port}[/green]")
    uvicorn.run(fastapi_app, host=host, port=port, log_level="info")
