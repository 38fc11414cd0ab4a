# cli.py
import asyncio
import logging
import sys
from datetime import datetime
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from catalog_sdk.client import AsyncProductClient
from catalog_sdk.config import get_settings
from catalog_sdk.editor import EditorSession
from catalog_sdk.models import CATEGORIES
from catalog_sdk.store import CatalogStore
from catalog_sdk.view import CardActions, ProductCard, build_cards, render_catalog, render_form, render_header

console = Console()
logger = logging.getLogger("catalog.cli")

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

YES_NO = WordCompleter(["y", "n", "yes", "no"], ignore_case=True)

FIELDS = [
    ("name", "Product name"),
    ("price", "💰 Price ($)"),
    ("description", "Description"),
    ("category", "🏷️ Category"),
]


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product Manager",
        "[bold blue]Catalog terminal client[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def parse_yes_no(raw: str, default: bool) -> Optional[bool]:
    answer = raw.strip().lower()
    if not answer:
        return default
    if answer in ("y", "yes"):
        return True
    if answer in ("n", "no"):
        return False
    return None


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


class CatalogApp:
    """Terminal front end. Owns nothing but the prompt; state lives in the store and editor."""

    def __init__(self, store: CatalogStore, editor: EditorSession):
        self.store = store
        self.editor = editor
        self.session = PromptSession(style=custom_style)
        self.actions = CardActions(request_edit=self.request_edit, request_delete=self.request_delete)

    # ---------------------------
    # Card capabilities
    # ---------------------------
    def request_edit(self, product):
        self.editor.open_for_edit(product)

    async def request_delete(self, product_id: str):
        if not await self.confirm("Are you sure you want to delete this product?"):
            return
        if await self.store.delete(product_id):
            console.print(show_status("Product deleted"))

    # ---------------------------
    # Input helpers
    # ---------------------------
    async def ask(self, message: str, completer=None, default: str = "") -> str:
        return await self.session.prompt_async(f"{message} ", completer=completer, default=default)

    async def confirm(self, message: str, default: bool = False) -> bool:
        hint = "[Y/n]" if default else "[y/N]"
        while True:
            answer = parse_yes_no(await self.ask(f"{message} {hint}", completer=YES_NO), default)
            if answer is not None:
                return answer
            console.print("[red]Please answer y or n.[/red]")

    async def pick_card(self) -> Optional[ProductCard]:
        cards: List[ProductCard] = build_cards(self.store, self.actions)
        if not cards:
            console.print("[italic yellow]No products to choose from[/italic yellow]")
            return None
        raw = (await self.ask("Product number", completer=WordCompleter([str(i) for i in range(1, len(cards) + 1)]))).strip()
        try:
            index = int(raw)
        except ValueError:
            console.print("[red]Please enter a product number.[/red]")
            return None
        if not 1 <= index <= len(cards):
            console.print("[red]No product with that number.[/red]")
            return None
        return cards[index - 1]

    async def fill_form(self):
        draft = self.editor.draft
        for field, label in FIELDS:
            completer = WordCompleter(CATEGORIES, ignore_case=True) if field == "category" else None
            value = await self.ask(label, completer=completer, default=getattr(draft, field))
            self.editor.update_field(field, value)

    async def run_form(self):
        """Prompt for every field, then submit until it succeeds or the user gives up."""
        while self.editor.visible:
            console.print(render_form(self.editor))
            await self.fill_form()
            console.print(render_form(self.editor))
            if not await self.confirm(f"{self.editor.submit_label}?", default=True):
                self.editor.cancel()
                return
            if await self.editor.submit():
                console.print(show_status("Product saved"))
                return
            console.print(show_status(f"Error: {self.store.error}", False))
            if not await self.confirm("Edit and retry?", default=True):
                self.editor.cancel()

    # ---------------------------
    # Main menu
    # ---------------------------
    def render(self):
        console.print(render_header(self.store))
        console.print(render_catalog(self.store, self.actions))

    async def menu(self):
        console.clear()
        console.print(create_header())
        await self.store.refresh()

        while True:
            self.render()

            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_row("1", "🔄 Refresh products", "3", "✏️ Edit product")
            menu_table.add_row("2", "+ Add New Product", "4", "🗑️ Delete product")
            menu_table.add_row("", "", "q", "👋 Quit")
            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = (await self.ask(
                "\nChoose an option",
                completer=WordCompleter(["1", "2", "3", "4", "q", "quit", "exit"]),
            )).strip()

            if choice == "1":
                if await self.store.refresh():
                    console.print(show_status("Products loaded successfully"))

            elif choice == "2":
                self.editor.toggle()
                await self.run_form()

            elif choice == "3":
                card = await self.pick_card()
                if card:
                    card.edit()
                    await self.run_form()

            elif choice == "4":
                card = await self.pick_card()
                if card:
                    await card.delete()

            elif choice.lower() in ("q", "quit", "exit"):
                if await self.confirm("Are you sure you want to quit?"):
                    console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                    return

            console.print()
            console.rule(style="dim")


async def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    async with AsyncProductClient(base_url=settings.api_url, timeout=settings.timeout) as client:
        store = CatalogStore(client)
        app = CatalogApp(store, EditorSession(store))
        await app.menu()


def main():
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
