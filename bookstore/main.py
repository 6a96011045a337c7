import json
import subprocess
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from bookstore.book import Book
from bookstore.config import configure_logging, settings
from bookstore.container import build_default_container
from bookstore.handlers.base import HandlerRequest

console = Console()

app = typer.Typer(help="Bookstore handlers CLI")


@app.callback()
def _global_options(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: LOG_LEVEL or INFO)"),
):
    """Global CLI options."""
    configure_logging(log_level)


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Serve the handlers over HTTP with uvicorn."""
    host = host or settings.api_host
    port = port or settings.api_port
    print(f"Starting server on http://{host}:{port}/")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "bookstore.api:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        args.append("--reload")
    try:
        subprocess.run(args, check=True)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] `uvicorn` could not be started. Make sure it is installed.")
        raise typer.Exit(code=1)
    except subprocess.CalledProcessError as e:
        console.print(f"[bold red]Server exited with code {e.returncode}[/]")
        raise typer.Exit(code=e.returncode)


@app.command("handlers")
def cli_handlers():
    """List the registered handlers."""
    container = build_default_container(settings)
    with container:
        rows = container.describe()

    table = Table(title="Handlers", header_style="bold cyan")
    table.add_column("Path", style="magenta", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Info", style="dim")
    for row in rows:
        table.add_row(row["path"], row["name"], row["info"])
    console.print(table)


@app.command("invoke")
def cli_invoke(path: str = typer.Argument(..., help="Path of the handler to call, e.g. /hello")):
    """Run one request through a handler in-process and print the response."""
    container = build_default_container(settings)
    with container:
        response = container.dispatch(path, HandlerRequest(path=path))
    if response is None:
        print(f"No handler registered for {path}.")
        raise typer.Exit(code=1)
    print(f"Content-Type: {response.content_type}")
    print()
    print(response.body, end="")


@app.command("book")
def cli_book(
    id: int = typer.Argument(..., help="Book id"),
    title: str = typer.Argument(..., help="Title"),
    author: str = typer.Argument(..., help="Author"),
    price: float = typer.Argument(..., help="Price"),
):
    """Build a book record and print it as JSON."""
    book = Book.create(id, title, author, price)
    print(json.dumps(book.to_dict(), ensure_ascii=False))


if __name__ == "__main__":
    app()
