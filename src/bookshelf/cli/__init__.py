"""Administrative CLI for the bookshelf service.

Serves the HTTP API, manages the database schema and the users and
categories books refer to, and issues development access tokens.
"""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from src.bookshelf.core.services import DbSessionService, JwtGeneratorService
from src.bookshelf.entities.core.user import User, UserRepository
from src.bookshelf.entities.service.category import Category, CategoryRepository
from src.bookshelf.runtime.context import get_config
from src.bookshelf.runtime.init_db import init_db as create_tables

console = Console()

app = typer.Typer(
    name="bookshelf",
    help="Bookshelf administration: server, database, users, categories and tokens",
    rich_markup_mode="rich",
)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind; defaults to app.host"),
    port: int | None = typer.Option(None, help="Port to bind; defaults to app.port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
    log_level: str = typer.Option("info", help="uvicorn log level"),
) -> None:
    """🚀 Serve the HTTP API with uvicorn."""
    app_config = get_config().app
    host = host or app_config.host
    port = port or app_config.port

    console.print(f"[green]Starting bookshelf API on {host}:{port}[/green]")
    uvicorn.run(
        "src.bookshelf.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
        access_log=False,
    )


@app.command("init-db")
def init_db() -> None:
    """🗄️ Create all database tables."""
    create_tables()
    console.print("[green]✅ Database tables created[/green]")


@app.command("add-user")
def add_user(
    user_id: str = typer.Argument(..., help="User id (the token subject)"),
    name: str = typer.Argument(..., help="Display name"),
    email: str | None = typer.Option(None, "--email", "-e", help="Email address"),
) -> None:
    """➕ Register a user who can own books."""
    db = DbSessionService()
    with db.session_scope() as session:
        repo = UserRepository(session)
        exists = repo.get(user_id) is not None
        if not exists:
            repo.create(User(id=user_id, name=name, email=email))

    if exists:
        console.print(f"[yellow]User '{user_id}' already exists[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]✅ User '{user_id}' created[/green]")


@app.command("add-category")
def add_category(
    name: str = typer.Argument(..., help="Category name"),
) -> None:
    """➕ Add a book category."""
    db = DbSessionService()
    with db.session_scope() as session:
        repo = CategoryRepository(session)
        category = repo.get_by_name(name)
        exists = category is not None
        if not exists:
            category = repo.create(Category(name=name))

    if exists:
        console.print(f"[yellow]Category '{name}' already exists[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]✅ Category '{name}' created with id {category.id}[/green]")


@app.command("list-categories")
def list_categories() -> None:
    """📋 List book categories."""
    db = DbSessionService()
    with db.session_scope() as session:
        categories = CategoryRepository(session).list_all()

    if not categories:
        console.print("[yellow]No categories found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    for category in categories:
        table.add_row(str(category.id), category.name)
    console.print(table)


@app.command("issue-token")
def issue_token(
    user_id: str = typer.Argument(..., help="User id to put in the token subject"),
    expires_in: int = typer.Option(3600, "--expires-in", help="Lifetime in seconds"),
) -> None:
    """🔑 Issue a signed access token for a user."""
    token = JwtGeneratorService().generate_jwt(user_id, expires_in_seconds=expires_in)
    console.print(f"[cyan]Access token for {user_id}[/cyan]")
    console.print(token, soft_wrap=True, highlight=False, markup=False)


if __name__ == "__main__":
    app()
