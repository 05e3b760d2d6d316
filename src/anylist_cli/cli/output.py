"""CLI output formatting: human-readable text via Rich, or JSON."""

import json
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from anylist_cli.core.errors import AnyListCliError
from anylist_cli.core.types import ItemInfo, ListInfo


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


class Output:
    """Renders command results to stdout and errors to stderr."""

    def __init__(self, json_mode: bool = False, no_color: bool = False):
        self.json_mode = json_mode
        # No color system at all, so bold and dim are dropped along with colors
        color_system = None if no_color else "auto"
        self.console = Console(color_system=color_system, highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, color_system=color_system, highlight=False, soft_wrap=True)

    # Primitives

    def json(self, data: Any) -> None:
        self.console.out(json.dumps(data, indent=2, ensure_ascii=False), highlight=False)

    def print(self, message: str = "") -> None:
        self.console.print(message)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def dim(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def error(self, message: str, hints: Optional[Sequence[str]] = None) -> None:
        self.err_console.print(f"[red]Error:[/red] {escape(message)}")
        for hint in hints or []:
            self.err_console.print(f"[dim]{escape(hint)}[/dim]")

    def failure(self, error: AnyListCliError) -> None:
        """Report a structured error on stderr."""
        if self.json_mode:
            self.err_console.out(json.dumps(error.to_dict(), indent=2), highlight=False)
        else:
            self.error(error.message, error.hints)

    # Command results

    def whoami(self, email: Optional[str], source: Optional[str]) -> None:
        if self.json_mode:
            if email is None:
                self.json({"authenticated": False})
            else:
                self.json({"authenticated": True, "email": email, "source": source})
            return

        if email is None:
            self.print("Not authenticated. Run: anylist auth")
        else:
            self.print(f"Authenticated as: [bold]{escape(email)}[/bold]")
            if source == "environment":
                self.dim("(from ANYLIST_EMAIL / ANYLIST_PASSWORD)")

    def lists(self, lists: List[ListInfo]) -> None:
        if self.json_mode:
            self.json([lst.to_dict() for lst in lists])
            return

        if not lists:
            self.print("No lists found.")
            return

        self.print("Your lists:\n")
        for lst in lists:
            checked = f" [dim]({lst.checked_count} checked)[/dim]" if lst.checked_count > 0 else ""
            self.print(f"  • [bold]{escape(lst.name)}[/bold] - {_plural(lst.item_count, 'item')}{checked}")

    def items(self, list_name: str, items: List[ItemInfo], unchecked_only: bool = False) -> None:
        if self.json_mode:
            self.json({"name": list_name, "items": [item.to_dict() for item in items]})
            return

        if not items:
            message = "No unchecked items" if unchecked_only else "List is empty"
            self.print(f"{escape(list_name)}: {message}")
            return

        unchecked = [item for item in items if not item.checked]
        checked = [item for item in items if item.checked]

        self.print(f"[bold]{escape(list_name)}[/bold]:\n")

        for item in unchecked:
            qty = f" [dim]({escape(item.quantity)})[/dim]" if item.quantity else ""
            notes = f" [dim]- {escape(item.details)}[/dim]" if item.details else ""
            self.print(f"  • {escape(item.name)}{qty}{notes}")

        if checked and not unchecked_only:
            if unchecked:
                self.print()
            self.dim("Checked:")
            for item in checked:
                qty = f" ({item.quantity})" if item.quantity else ""
                self.dim(f"  ✓ {escape(item.name + qty)}")

    def item(self, item: ItemInfo, message: str) -> None:
        """Show a single item after a mutation."""
        if self.json_mode:
            self.json(item.to_dict())
        else:
            self.success(message)

    def removed(self, list_name: str, item_name: str) -> None:
        if self.json_mode:
            self.json({"list": list_name, "removed": item_name})
        else:
            self.success(f'Removed "{escape(item_name)}" from {escape(list_name)}')

    def cleared(self, list_name: str, count: int) -> None:
        if self.json_mode:
            self.json({"list": list_name, "cleared": count})
        elif count == 0:
            self.print("No checked items to clear.")
        else:
            self.success(f"Cleared {_plural(count, 'checked item')} from {escape(list_name)}")

    def categories(self, categories: Dict[str, str]) -> None:
        entries = [{"name": name, "id": category_id} for name, category_id in categories.items()]
        if self.json_mode:
            self.json(entries)
            return

        self.print("Available categories:\n")
        for entry in entries:
            arrow = f" [dim]→ {entry['id']}[/dim]" if entry["name"] != entry["id"] else ""
            self.print(f"  {entry['name']}{arrow}")
