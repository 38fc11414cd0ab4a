# catalog_sdk/view.py
from decimal import Decimal
from typing import Any, Awaitable, Callable, List, NamedTuple

from rich import box
from rich.columns import Columns
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from catalog_sdk.editor import EditorSession
from catalog_sdk.models import Product
from catalog_sdk.store import CatalogStore


class CardActions(NamedTuple):
    """What a product card can ask for. The card never edits or deletes anything itself."""

    request_edit: Callable[[Product], Any]
    request_delete: Callable[[str], Awaitable[Any]]


def format_price(price: Decimal) -> str:
    return f"${price:.2f}"


def format_date(product: Product) -> str:
    created = product.created_at
    return f"{created:%b} {created.day}, {created.year}"


class ProductCard:
    def __init__(self, product: Product, actions: CardActions):
        self.product = product
        self.actions = actions

    def edit(self):
        return self.actions.request_edit(self.product)

    def delete(self):
        return self.actions.request_delete(self.product.id)

    def render(self, index: int = 0) -> Panel:
        p = self.product
        title = Text()
        if index:
            title.append(f"[{index}] ", style="dim")
        title.append(p.name, style="bold")

        body = Table.grid(padding=(0, 1))
        body.add_column()
        body.add_row(Text(p.description or "", style="italic"))
        body.add_row(Text.assemble(("Price ", "dim"), (format_price(p.price), "bold green")))
        body.add_row(Text(f"📅 {format_date(p)}", style="dim"))
        return Panel(
            body,
            title=title,
            subtitle=f"[cyan]{p.category.value}[/cyan]",
            box=box.ROUNDED,
            width=36,
        )


def build_cards(store: CatalogStore, actions: CardActions) -> List[ProductCard]:
    return [ProductCard(p, actions) for p in store.products]


# ---------------------------
# Screen sections
# ---------------------------
def render_header(store: CatalogStore) -> Panel:
    stats = Table(show_header=True, box=box.ROUNDED, header_style="bold")
    stats.add_column("Total Products", justify="center", style="blue")
    stats.add_column("Total Value", justify="center", style="green")
    stats.add_column("Categories", justify="center", style="magenta")
    stats.add_row(str(len(store.products)), format_price(store.total_value), str(store.category_count))
    return Panel(stats, title="🛍️ Product Manager", border_style="bold blue")


def render_error(message: str) -> Panel:
    return Panel.fit(f"[red]⚠️ [bold]Error:[/bold] {message}[/red]", border_style="red")


def render_catalog(store: CatalogStore, actions: CardActions) -> Group:
    parts = []
    if store.error:
        parts.append(render_error(store.error))

    if store.loading:
        parts.append(Text("Loading products...", style="italic cyan"))
    elif not store.products:
        parts.append(Panel.fit(
            "📦 [bold]No products yet[/bold]\n[dim]Choose \"Add New Product\" to get started![/dim]",
            border_style="yellow",
        ))
    else:
        cards = build_cards(store, actions)
        parts.append(Columns([card.render(i) for i, card in enumerate(cards, start=1)]))
    return Group(*parts)


def render_form(editor: EditorSession) -> Panel:
    draft = editor.draft
    if draft is None:
        return Panel.fit("[dim]Form closed[/dim]")

    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Field", style="bold cyan", width=14)
    table.add_column("Value", width=40)
    table.add_row("Product Name", draft.name)
    table.add_row("Price ($)", draft.price)
    table.add_row("Description", draft.description)
    table.add_row("Category", draft.category)
    icon = "✏️" if editor.editing_id else "✨"
    return Panel(table, title=f"{icon} {editor.title}", border_style="yellow")
