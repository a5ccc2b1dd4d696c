"""
Shop admin CLI.

Operational commands for the people running the backend: creating tables,
seeding the menu, bootstrapping the first admin account and inspecting or
revoking login sessions.

    shop-admin db-init
    shop-admin create-admin --email owner@example.com --password ...
    shop-admin session 3f2c...
"""

import pydantic
import typer
from rich.console import Console
from rich.table import Table

from rest_api.models import Base
from rest_api.seed import seed_menu
from rest_api.services.domain.user_service import UserService
from shared.config.constants import Roles
from shared.config.settings import settings
from shared.infrastructure.db import engine, get_db_context
from shared.security.token_store import TokenStoreError, build_token_store
from shared.utils.exceptions import AppException
from shared.utils.schemas import RegisterRequest, RoleInfo

app = typer.Typer(
    name="shop-admin",
    help="Shop admin backend CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================


@app.command()
def db_init():
    """Create any missing tables."""
    console.print(f"[blue]Creating tables on: {engine.url.render_as_string(hide_password=True)}[/blue]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables ready[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Insert the default navigation menu if the menu is empty."""
    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        inserted = seed_menu(db)

    if inserted:
        console.print(f"[green]✓ Inserted {inserted} menu items[/green]")
    else:
        console.print("[yellow]Menu already has items, nothing inserted[/yellow]")


# =============================================================================
# User Commands
# =============================================================================


@app.command()
def create_admin(
    email: str = typer.Option(..., help="Login email"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    name: str = typer.Option("Administrator", help="Display name"),
    phone: str = typer.Option("-", help="Contact phone"),
):
    """Register an admin account."""
    try:
        request = RegisterRequest(
            name=name,
            email=email,
            phone=phone,
            password=password,
            role=RoleInfo(role_type=Roles.ADMIN, description="Administrator"),
        )
    except pydantic.ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]✗ {field}: {error['msg']}[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        try:
            user = UserService(db).register(request)
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    console.print(f"[green]✓ Admin created: {user.email} ({user.id})[/green]")


@app.command()
def users():
    """List active users."""
    with get_db_context() as db:
        rows = UserService(db).list_active()

    if not rows:
        console.print("[yellow]No active users[/yellow]")
        return

    table = Table(title="Active users")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Role", style="green")
    table.add_column("Created")

    for user in rows:
        table.add_row(
            user.id,
            user.name,
            user.email,
            user.role.role_type,
            user.created_date.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


# =============================================================================
# Session Commands
# =============================================================================


@app.command()
def session(user_id: str = typer.Argument(..., help="User ID")):
    """Show how long a user's login session has left."""
    store = build_token_store(settings)
    try:
        ttl = store.get_ttl(user_id)
    except TokenStoreError as e:
        console.print(f"[red]✗ Token store unavailable: {e}[/red]")
        raise typer.Exit(1)
    finally:
        store.close()

    if ttl is None:
        console.print(f"[yellow]No active session for {user_id}[/yellow]")
        raise typer.Exit(1)
    console.print(f"Session for {user_id} expires in [green]{int(ttl)}s[/green]")


@app.command()
def revoke(user_id: str = typer.Argument(..., help="User ID")):
    """End a user's login session."""
    store = build_token_store(settings)
    try:
        removed = store.delete(user_id)
    except TokenStoreError as e:
        console.print(f"[red]✗ Token store unavailable: {e}[/red]")
        raise typer.Exit(1)
    finally:
        store.close()

    if removed:
        console.print(f"[green]✓ Session revoked for {user_id}[/green]")
    else:
        console.print(f"[yellow]No active session for {user_id}[/yellow]")


# =============================================================================
# Utility Commands
# =============================================================================


@app.command()
def config_check():
    """Show effective settings and production secret problems."""
    table = Table(title=f"Settings ({settings.environment})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Database", engine.url.render_as_string(hide_password=True))
    table.add_row("Token store", settings.token_store_backend)
    table.add_row("Session TTL", f"{settings.session_ttl_seconds}s")
    table.add_row("Auth enabled", str(settings.auth_enabled))
    table.add_row("Rate limit", str(settings.rate_limit_enabled))
    console.print(table)

    errors = settings.validate_production_secrets()
    if errors:
        for error in errors:
            console.print(f"[red]✗ {error}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Configuration OK[/green]")


@app.command()
def version():
    """Show version information."""
    console.print("[bold]Shop Admin API[/bold] v0.1.0")


if __name__ == "__main__":
    app()
