"""Serveis CLI application using Typer.

Operational commands for the Serveis backend: secret generation for
deployment configuration, creating the first admin account and the
refresh token sweep. Scheduling the sweep (cron, systemd timer, ...) is
left to the host.
"""

import asyncio
import logging
import secrets

import typer
from rich.console import Console

from serveis.application.dtos import PublicUser
from serveis.application.services import AuthenticationService
from serveis.domain.shared.exceptions import DomainException
from serveis.domain.user import UserProfile, UserRole
from serveis.infrastructure.persistence.sqlalchemy.database import (
    SessionLease,
    create_engine_from_settings,
    create_session_maker,
    create_tables,
)
from serveis.infrastructure.persistence.sqlalchemy.repositories import (
    RefreshTokenRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from serveis_auth import JWTService, PasswordHashingService
from serveis_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="serveis",
    help="Serveis Extraordinaris API - operations CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

tokens_app = typer.Typer(
    name="tokens",
    help="Refresh token maintenance",
    no_args_is_help=True,
)
app.add_typer(tokens_app)

users_app = typer.Typer(
    name="users",
    help="User administration",
    no_args_is_help=True,
)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Serveis configuration.

    Generates three required secrets:
    - JWT_ACCESS_SECRET: signs access tokens
    - JWT_REFRESH_SECRET: signs refresh tokens (always distinct from the above)
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Serveis Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    access_secret = secrets.token_urlsafe(64)
    refresh_secret = secrets.token_urlsafe(64)
    while refresh_secret == access_secret:
        refresh_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_ACCESS_SECRET[/cyan]={access_secret}")
    console.print(f"[cyan]JWT_REFRESH_SECRET[/cyan]={refresh_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env or "
        "config/.env.dev file.[/dim]\n"
    )


async def cleanup_tokens(settings: Settings) -> int:
    """Delete expired and revoked refresh tokens once. Returns the count."""
    engine = create_engine_from_settings(settings)
    try:
        lease = SessionLease(
            create_session_maker(engine),
            release_timeout=settings.db_release_timeout,
        )
        async with lease as session:
            count = await RefreshTokenRepositorySQLAlchemy(
                session,
            ).delete_expired_and_revoked()
            await session.commit()
        return count
    finally:
        await engine.dispose()


@tokens_app.command("cleanup")
def cleanup_tokens_command() -> None:
    """Delete expired and revoked refresh tokens.

    Safe to run at any time; usable sessions are never touched.
    """
    logging.basicConfig(level=logging.INFO)
    count = asyncio.run(cleanup_tokens(get_settings()))
    console.print(
        f"[bold green]Token cleanup complete:[/bold green] {count} token(s) deleted"
    )


async def create_admin(
    settings: Settings,
    email: str,
    password: str,
    name: str,
) -> PublicUser:
    """Register an active admin account directly against the database.

    This is how the first administrator is created: the API only grants
    non-default roles to callers who are already admins.
    """
    engine = create_engine_from_settings(settings)
    try:
        await create_tables(engine)
        async with create_session_maker(engine)() as session:
            service = AuthenticationService(
                user_repository=UserRepositorySQLAlchemy(session),
                token_repository=RefreshTokenRepositorySQLAlchemy(session),
                password_hasher=PasswordHashingService(rounds=settings.bcrypt_rounds),
                token_codec=JWTService(
                    access_secret=settings.jwt_access_secret.get_secret_value(),
                    refresh_secret=settings.jwt_refresh_secret.get_secret_value(),
                    issuer=settings.jwt_issuer,
                ),
            )
            user = await service.register(
                email=email,
                password=password,
                profile=UserProfile(name=name),
                role=UserRole.ADMIN,
            )
            await session.commit()
        return user
    finally:
        await engine.dispose()


@users_app.command("create-admin")
def create_admin_command(
    email: str = typer.Option(..., "--email", "-e", help="Admin email address"),
    name: str = typer.Option("Admin", "--name", "-n", help="Display name"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Admin password (prompted if omitted)",
    ),
) -> None:
    """Create an administrator account."""
    logging.basicConfig(level=logging.INFO)
    try:
        user = asyncio.run(create_admin(get_settings(), email, password, name))
    except DomainException as e:
        console.print(f"[bold red]Could not create admin:[/bold red] {e.message}")
        raise typer.Exit(code=1) from e
    console.print(
        f"[bold green]Admin created:[/bold green] {user.email} (id {user.id})"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
