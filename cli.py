# cli.py - interactive catalog browser
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from app.models import CATEGORIES
from sdk.catalog import CatalogAPIError, CatalogClient

console = Console()
c = CatalogClient(
    base_url=os.environ.get("CATALOG_URL", "http://127.0.0.1:8085"),
    api_key=os.environ.get("CATALOG_API_KEY"),
)

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=28)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Category", width=12)
    table.add_column("Stock", width=8)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A")[:8] + "...",
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock,
        )
    console.print(table)


def show_page(result: Dict[str, Any]):
    pagination = result.get("pagination", {})
    title = (
        f"📦 Page {pagination.get('currentPage', 1)}/{max(pagination.get('totalPages', 1), 1)}"
        f" - {pagination.get('totalProducts', 0)} products"
    )
    show_products(result.get("products", []), title=title)


def show_product(product: Dict[str, Any]):
    body = (
        f"[bold]{product.get('name')}[/bold]\n"
        f"{product.get('description')}\n\n"
        f"💰 ${product.get('price', 0):.2f}   🏷️ {product.get('category')}   "
        f"{'✅ in stock' if product.get('inStock') else '❌ out of stock'}\n"
        f"[dim]created {product.get('createdAt')} · updated {product.get('updatedAt')}[/dim]"
    )
    console.print(Panel(body, title=f"ℹ️ {product.get('id')}", border_style="cyan"))


def show_stats(stats: Dict[str, Any]):
    price_range = stats.get("priceRange", {})
    low, high = price_range.get("min"), price_range.get("max")
    summary = (
        f"Total: [bold]{stats.get('totalProducts', 0)}[/bold]   "
        f"In stock: [green]{stats.get('inStockProducts', 0)}[/green]   "
        f"Out of stock: [red]{stats.get('outOfStockProducts', 0)}[/red]\n"
        f"Average price: [bold]${stats.get('averagePrice', 0):.2f}[/bold]   "
        f"Range: {'-' if low is None else f'${low:.2f}'} .. {'-' if high is None else f'${high:.2f}'}"
    )

    table = Table(box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category", width=16)
    table.add_column("Products", justify="right", width=10)
    for category, count in stats.get("categoryCounts", {}).items():
        table.add_row(category, str(count))

    console.print(Panel(summary, title="📊 Catalog Stats", border_style="yellow"))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns None on failure after reporting the error envelope.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except CatalogAPIError as e:
        status_message = f"Error: {e.message}"
        details = "\n".join(f"  • {d}" for d in e.details)
        console.print(show_status(f"Error {e.status_code}: {e.message}" + (f"\n{details}" if details else ""), False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    result = try_api(c.list_products, limit=100)
    product_cache = result.get("products", []) if result else []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    return WordCompleter(CATEGORIES, ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    key_state = "[green]key set[/green]" if c.api_key else "[yellow]read-only[/yellow]"
    header.add_row(
        f"🛍️ Catalog CLI ({key_state})",
        "[bold blue]Product Catalog API[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("📝 Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("📄 Description", default=current.get("description", "")),
        "price": ask_float("💰 Price in dollars", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete(
            "🏷️ Category", completer=get_category_completer(), default=current.get("category", "Other"),
        ),
        "in_stock": Confirm.ask("📦 In stock?", default=current.get("inStock", True)),
    }


def require_key() -> bool:
    if c.api_key:
        return True
    console.print("[yellow]This action needs an API key (option 8).[/yellow]")
    return False


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search / filter", "6", "✏️ Update product"),
            ("3", "📊 Catalog stats", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "8", "🔑 Set API key"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Page size", default=10)
            result = try_api(c.list_products, page=page, limit=limit, success_msg="Products loaded successfully")
            if result is not None:
                show_page(result)

        elif choice == "2":
            term = prompt_with_autocomplete("Search term (blank for none)").strip()
            category = prompt_with_autocomplete(
                "Category (blank for any)", completer=get_category_completer(),
            ).strip()
            result = try_api(
                c.list_products, category=category or None, search=term or None,
                success_msg="Search completed",
            )
            if result is not None:
                show_page(result)

        elif choice == "3":
            stats = try_api(c.get_stats, success_msg="Stats loaded")
            if stats:
                show_stats(stats)

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            product = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if product:
                show_product(product)

        elif choice == "5":
            if not require_key():
                continue
            fields = ask_product_fields()
            product = try_api(c.create_product, **fields, success_msg=f"Product '{fields['name']}' created")
            if product:
                show_product(product)
                refresh_product_cache()

        elif choice == "6":
            if not require_key():
                continue
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                product = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
                if product:
                    show_product(product)
                    refresh_product_cache()

        elif choice == "7":
            if not require_key():
                continue
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                product = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if product:
                    refresh_product_cache()

        elif choice == "8":
            key = Prompt.ask("API key", password=True)
            if key:
                c.set_api_key(key)
                status_message = "API key set"
                console.print(create_header())

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
