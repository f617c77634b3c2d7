"""
Zealthy - CLI Entry Point.

Usage:
    zealthy serve            Start the API server
    zealthy health           Check configuration
    zealthy db               Check database connection and tables
    zealthy users            List users and onboarding progress
    zealthy config           Show the onboarding page config
    zealthy --help           Show help
"""

import asyncio
import os

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="zealthy",
    help="Zealthy - configurable user onboarding.",
    add_completion=False,
)
console = Console()


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool | None = typer.Option(
        None, "--reload/--no-reload", help="Auto-reload on code changes (default: on in development)"
    ),
) -> None:
    """Start the API server."""
    import uvicorn

    from zealthy.config import settings

    # Hosting platforms set PORT
    actual_port = int(os.environ.get("PORT", port))
    if reload is None:
        reload = settings.is_development

    console.print(f"\n[bold green]Zealthy Onboarding API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print(f"[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "zealthy.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def health() -> None:
    """Check configuration."""
    from zealthy.config import get_settings

    console.print("\n[bold]Zealthy Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.zealthy_env}")
        console.print(f"   Log level: {settings.log_level}")

        if settings.supabase_url.startswith("https://"):
            console.print("[green]OK[/green] Supabase URL configured")
        else:
            console.print("[red]FAIL[/red] Supabase URL missing or invalid")
            raise typer.Exit(1)

        console.print("\n[green]All checks passed![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)


@app.command()
def db() -> None:
    """Check database connection and tables."""
    from zealthy.db.client import get_client

    console.print("\n[bold]Database Connection Check[/bold]\n")

    try:
        client = get_client()
        console.print("[green]OK[/green] Connected to Supabase")

        console.print("\n[bold]Table Status:[/bold]")
        for table in ("users", "onboarding_config"):
            try:
                result = client.table(table).select("*", count="exact").limit(0).execute()
                count = result.count if hasattr(result, "count") else "?"
                console.print(f"  [green]OK[/green] {table}: {count} rows")
            except Exception as e:
                console.print(f"  [red]FAIL[/red] {table}: {e}")

        console.print("\n[green]Database check complete![/green]")

    except Exception as e:
        console.print(f"\n[red]FAIL Database connection failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def users() -> None:
    """List users and their onboarding progress."""
    from onboarding.state import get_step_label
    from zealthy.db.client import get_all_users
    from zealthy.web.data_routes import compute_stats

    all_users = asyncio.run(get_all_users())

    if not all_users:
        console.print("[dim]No users yet.[/dim]")
        return

    table = Table(title="Users")
    table.add_column("Email")
    table.add_column("Progress")
    table.add_column("City")
    table.add_column("Birthdate")
    table.add_column("Created")

    for user in all_users:
        table.add_row(
            user.email,
            get_step_label(user.current_step, user.completed),
            user.city or "-",
            user.birthdate.isoformat() if user.birthdate else "-",
            user.created_at.strftime("%b %d, %Y %H:%M") if user.created_at else "N/A",
        )

    console.print(table)

    stats = compute_stats(all_users)
    console.print(
        f"\n[dim]Total: {stats.total} | Completed: {stats.completed} | "
        f"In progress: {stats.in_progress} | Completion rate: {stats.completion_rate}%[/dim]"
    )


@app.command()
def config() -> None:
    """Show which components are on each onboarding page."""
    from onboarding.components import COMPONENT_LABELS, PageAssignments
    from zealthy.db.client import get_onboarding_config

    assignments = PageAssignments(asyncio.run(get_onboarding_config()))

    console.print("\n[bold]Onboarding Pages[/bold]")
    for page, components in assignments.to_config().items():
        console.print(f"\n[bold blue]Page {page}[/bold blue]")
        for component in components:
            console.print(f"  • {COMPONENT_LABELS[component]} [dim]({component.value})[/dim]")

    unassigned = assignments.unassigned()
    if unassigned:
        console.print("\n[bold]Available Components[/bold]")
        for component in unassigned:
            console.print(f"  • {COMPONENT_LABELS[component]} [dim]({component.value})[/dim]")


@app.command()
def version() -> None:
    """Show version information."""
    from zealthy import __version__

    console.print(f"Zealthy version {__version__}")


if __name__ == "__main__":
    app()
