"""
Main CLI application entry point.

This module contains the Typer application and the command handlers for
anylist-cli. Each command authenticates, performs one fetch-mutate-save
cycle against AnyList, tears the session down and then renders the result.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar
from dataclasses import dataclass
import asyncio
import logging
import os
import sys

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from anylist_cli import PROG_NAME, VERSION
from anylist_cli.cli.output import Output
from anylist_cli.config.credentials import (
    CredentialStore,
    Credentials,
    resolve_credentials,
    resolve_credentials_with_source,
)
from anylist_cli.config.settings import AnyListSettings, get_settings
from anylist_cli.core.backend import load_client_factory
from anylist_cli.core.client import (
    Session,
    add_item,
    check_item,
    clear_checked,
    find_list,
    get_items,
    get_lists,
    remove_item,
    uncheck_item,
    update_item_details,
)
from anylist_cli.core.errors import (
    AnyListCliError,
    AuthenticationError,
    InvalidUsageError,
    ItemNotFoundError,
    ListNotFoundError,
    UnknownCategoryError,
    wrap_error,
)
from anylist_cli.core.types import ANYLIST_CATEGORIES, AnyListClient, AnyListList, ExitCode, resolve_category
from anylist_cli.utils.log import setup_logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Create the main Typer application
app = typer.Typer(
    name=PROG_NAME,
    help="Unofficial CLI for AnyList grocery and shopping lists",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@dataclass
class CliState:
    """Options shared by every command of one invocation."""
    settings: AnyListSettings
    json_output: bool = False
    no_color: bool = False


JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        Console(highlight=False).print(f"{PROG_NAME} {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version number",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """
    Unofficial CLI for AnyList grocery and shopping lists.

    Credentials come from [cyan]ANYLIST_EMAIL[/cyan] / [cyan]ANYLIST_PASSWORD[/cyan]
    or from the file written by [bold]anylist auth[/bold].
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        Output(no_color=no_color).error(f"Invalid configuration: {e}")
        raise typer.Exit(ExitCode.INVALID_USAGE)

    # NO_COLOR is honoured when set to any non-empty value
    no_color = no_color or bool(os.environ.get("NO_COLOR"))
    setup_logging(settings.log_level, no_color=no_color)
    ctx.obj = CliState(settings=settings, json_output=json_output, no_color=no_color)


def _state(ctx: typer.Context) -> CliState:
    return ctx.find_root().obj


def _output(ctx: typer.Context, json_output: bool = False) -> Output:
    state = _state(ctx)
    return Output(json_mode=json_output or state.json_output, no_color=state.no_color)


def _run(
    out: Output,
    coro: Awaitable[T],
    wrap: Callable[[Exception], AnyListCliError] = wrap_error,
) -> T:
    """Run a command coroutine, mapping failures to an exit code."""
    try:
        return asyncio.run(coro)
    except Exception as e:
        error = wrap(e)
        logger.debug(f"Command failed: {error!r}", exc_info=True)
        out.failure(error)
        raise typer.Exit(int(error.exit_code)) from e


def _open_session(state: CliState) -> Session:
    """Build a session from the configured credentials and client library."""
    store = CredentialStore.from_settings(state.settings)
    credentials = resolve_credentials(state.settings, store)
    factory = load_client_factory(state.settings.client)
    return Session(factory, credentials)


async def _require_list(client: AnyListClient, name: str) -> AnyListList:
    lst = await find_list(client, name)
    if lst is None:
        raise ListNotFoundError(name)
    return lst


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


# Auth commands

def _auth_error(error: Exception) -> AnyListCliError:
    if isinstance(error, AnyListCliError):
        return error
    return AuthenticationError(f"Authentication failed: {error}", original_error=error)


@app.command("auth")
def auth_command(
    ctx: typer.Context,
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Account email (prompted if omitted)"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Authenticate with AnyList (interactive)."""
    state = _state(ctx)
    out = _output(ctx, json_output)

    if not _stdin_is_tty():
        out.error(
            "Interactive authentication requires a TTY.",
            hints=["For non-interactive use, set ANYLIST_EMAIL and ANYLIST_PASSWORD environment variables."],
        )
        raise typer.Exit(ExitCode.INVALID_USAGE)

    # Keep stdout clean for the JSON result
    prompt_console = out.err_console if out.json_mode else out.console
    email = (email or Prompt.ask("Email", console=prompt_console)).strip()
    password = Prompt.ask("Password", password=True, console=prompt_console)

    if not email or not password:
        out.failure(InvalidUsageError("Email and password are required."))
        raise typer.Exit(ExitCode.INVALID_USAGE)

    credentials = Credentials(email=email, password=password)

    async def _verify():
        factory = load_client_factory(state.settings.client)
        async with Session(factory, credentials) as client:
            return await get_lists(client)

    if not out.json_mode:
        out.print("Verifying credentials...")
    lists = _run(out, _verify(), wrap=_auth_error)

    store = CredentialStore.from_settings(state.settings)
    try:
        path = store.save(credentials)
    except OSError as e:
        out.error(f"Could not save credentials: {e}")
        raise typer.Exit(ExitCode.FAILURE)

    if out.json_mode:
        out.json({
            "authenticated": True,
            "email": email,
            "lists": len(lists),
            "configPath": str(path),
        })
        return

    out.success(f"Authenticated successfully. Found {len(lists)} list{'' if len(lists) == 1 else 's'}.")
    out.dim(f"Credentials saved to {escape(str(path))}")


@app.command("logout")
def logout_command(ctx: typer.Context) -> None:
    """Clear stored credentials."""
    state = _state(ctx)
    out = _output(ctx)

    try:
        removed = CredentialStore.from_settings(state.settings).clear()
    except OSError as e:
        out.error(f"Could not clear credentials: {e}")
        raise typer.Exit(ExitCode.FAILURE)

    if out.json_mode:
        out.json({"cleared": [str(path) for path in removed]})
    else:
        out.success("Credentials cleared.")


@app.command("whoami")
def whoami_command(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """Show current authenticated user."""
    state = _state(ctx)
    out = _output(ctx, json_output)

    credentials, source = resolve_credentials_with_source(
        state.settings, CredentialStore.from_settings(state.settings)
    )
    out.whoami(credentials.email if credentials else None, source)


# List commands

@app.command("lists")
def lists_command(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """Show all lists."""
    state = _state(ctx)
    out = _output(ctx, json_output)

    async def _lists():
        async with _open_session(state) as client:
            return await get_lists(client)

    out.lists(_run(out, _lists()))


# Item commands

@app.command("items")
def items_command(
    ctx: typer.Context,
    list_name: str = typer.Argument(..., metavar="LIST", help="List name"),
    unchecked: bool = typer.Option(False, "--unchecked", help="Only show unchecked items"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Show items in a list."""
    state = _state(ctx)
    out = _output(ctx, json_output)

    async def _items():
        async with _open_session(state) as client:
            lst = await _require_list(client, list_name)
            return lst.name, get_items(lst, unchecked_only=unchecked)

    name, items = _run(out, _items())
    out.items(name, items, unchecked_only=unchecked)


@app.command("add")
def add_command(
    ctx: typer.Context,
    list_name: str = typer.Argument(..., metavar="LIST", help="List name"),
    item_name: str = typer.Argument(..., metavar="ITEM", help="Item name"),
    quantity: Optional[str] = typer.Option(None, "--quantity", "-q", help="Item quantity"),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Item category (e.g., produce, meat, dairy)"
    ),
    note: Optional[str] = typer.Option(None, "--note", "-n", help="Item notes"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Add item to a list. An existing item is unchecked and updated instead."""
    state = _state(ctx)
    out = _output(ctx, json_output)

    category_id = None
    if category:
        category_id = resolve_category(category)
        if category_id is None:
            error = UnknownCategoryError(category, list(ANYLIST_CATEGORIES))
            out.failure(error)
            raise typer.Exit(int(error.exit_code))

    async def _add():
        async with _open_session(state) as client:
            lst = await _require_list(client, list_name)
            item = await add_item(client, lst, item_name, quantity, category_id, note)
            return lst.name, item

    name, item = _run(out, _add())
    qty = f" ({item.quantity})" if item.quantity else ""
    out.item(item, f'Added "{escape(item.name)}"{escape(qty)} to {escape(name)}')


def _mutate_item(
    ctx: typer.Context,
    json_output: bool,
    list_name: str,
    item_name: str,
    action: Callable[[AnyListList], Awaitable[Any]],
):
    """Run an item mutation against a named list, failing if the item is missing."""
    state = _state(ctx)
    out = _output(ctx, json_output)

    async def _mutate():
        async with _open_session(state) as client:
            lst = await _require_list(client, list_name)
            result = await action(lst)
            if result is None or result is False:
                raise ItemNotFoundError(item_name)
            return lst.name, result

    name, result = _run(out, _mutate())
    return out, name, result


@app.command("check")
def check_command(
    ctx: typer.Context,
    list_name: str = typer.Argument(..., metavar="LIST", help="List name"),
    item_name: str = typer.Argument(..., metavar="ITEM", help="Item name"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Mark item as checked."""
    out, _, item = _mutate_item(
        ctx, json_output, list_name, item_name, lambda lst: check_item(lst, item_name)
    )
    out.item(item, f'Checked "{escape(item.name)}"')


@app.command("uncheck")
def uncheck_command(
    ctx: typer.Context,
    list_name: str = typer.Argument(..., metavar="LIST", help="List name"),
    item_name: str = typer.Argument(..., metavar="ITEM", help="Item name"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Mark item as unchecked."""
    out, _, item = _mutate_item(
        ctx, json_output, list_name, item_name, lambda lst: uncheck_item(lst, item_name)
    )
    out.item(item, f'Unchecked "{escape(item.name)}"')


@app.command("note")
def note_command(
    ctx: typer.Context,
    list_name: str = typer.Argument(..., metavar="LIST", help="List name"),
    item_name: str = typer.Argument(..., metavar="ITEM", help="Item name"),
    text: str = typer.Argument(..., metavar="TEXT", help="New notes (empty string clears them)"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Set the notes of an item."""
    out, _, item = _mutate_item(
        ctx, json_output, list_name, item_name, lambda lst: update_item_details(lst, item_name, text)
    )
    out.item(item, f'Updated notes for "{escape(item.name)}"')


@app.command("remove")
def remove_command(
    ctx: typer.Context,
    list_name: str = typer.Argument(..., metavar="LIST", help="List name"),
    item_name: str = typer.Argument(..., metavar="ITEM", help="Item name"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Remove item from a list."""
    out, name, _ = _mutate_item(
        ctx, json_output, list_name, item_name, lambda lst: remove_item(lst, item_name)
    )
    out.removed(name, item_name)


@app.command("clear")
def clear_command(
    ctx: typer.Context,
    list_name: str = typer.Argument(..., metavar="LIST", help="List name"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Remove all checked items from a list."""
    state = _state(ctx)
    out = _output(ctx, json_output)

    async def _clear():
        async with _open_session(state) as client:
            lst = await _require_list(client, list_name)
            return lst.name, await clear_checked(lst)

    name, count = _run(out, _clear())
    out.cleared(name, count)


# Help commands

@app.command("categories")
def categories_command(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List available item categories."""
    _output(ctx, json_output).categories(ANYLIST_CATEGORIES)


def main() -> None:
    """Entry point for the CLI application."""
    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
