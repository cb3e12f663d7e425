"""Management CLI — bootstrap tables, create users, and mint access tokens.

Usage:
    monthly-data create-tables
    monthly-data create-user --username root --email root@example.com --role admin
    monthly-data issue-token --username root
"""

import asyncio
import sys

import typer
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from monthly_data.config import get_settings
from monthly_data.core.domain_types import Role
from monthly_data.db.base import Base
from monthly_data.db.session import create_session_factory
from monthly_data.infrastructure.auth_tokens import create_access_token
from monthly_data.models.user import User
import monthly_data.models  # noqa: F401

app = typer.Typer(help="Monthly Data API management commands.")


async def _create_tables(database_url: str) -> None:
    engine, _ = create_session_factory(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _create_user(
    database_url: str, username: str, email: str, role: Role,
) -> User:
    engine, factory = create_session_factory(database_url)
    try:
        async with factory() as db:
            user = User(username=username, email=email, role=role.value)
            db.add(user)
            await db.commit()
            return user
    finally:
        await engine.dispose()


async def _find_user(database_url: str, username: str) -> User | None:
    engine, factory = create_session_factory(database_url)
    try:
        async with factory() as db:
            result = await db.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()
    finally:
        await engine.dispose()


@app.command("create-tables")
def create_tables() -> None:
    """
    Create all tables directly from the ORM metadata (development only;
    use `alembic upgrade head` elsewhere).
    """
    asyncio.run(_create_tables(get_settings().database_url))
    typer.echo("Tables created.")


@app.command("create-user")
def create_user(
    username: str = typer.Option(..., "--username", "-u"),
    email: str = typer.Option(..., "--email", "-e"),
    role: Role = typer.Option(Role.USER, "--role", "-r", case_sensitive=False),
) -> None:
    """
    Create a user and print its id.
    """
    try:
        user = asyncio.run(
            _create_user(get_settings().database_url, username, email, role),
        )
    except IntegrityError:
        typer.echo(f"User '{username}' or email '{email}' already exists.", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(user.id))


@app.command("issue-token")
def issue_token(
    username: str = typer.Option(..., "--username", "-u"),
) -> None:
    """
    Print a bearer token for an existing user.
    """
    settings = get_settings()
    user = asyncio.run(_find_user(settings.database_url, username))
    if user is None:
        typer.echo(f"User '{username}' not found.", err=True)
        raise typer.Exit(code=1)
    typer.echo(create_access_token(user.id, settings))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
