# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient
import requests

console = Console()
c = CatalogClient(
    base_url=os.getenv("CATALOG_API_URL", "http://127.0.0.1:3000"),
    api_key=os.getenv("CATALOG_API_TOKEN", "secret-token"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
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
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=8)

    for p in products:
        in_stock = p.get("inStock", False)
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            "[green]yes[/green]" if in_stock else "[red]no[/red]",
        )
    console.print(table)


def show_page(result: Dict[str, Any]):
    show_products(result.get("products", []))
    nav = []
    if "previous" in result:
        nav.append(f"◀ page {result['previous']['page']}")
    if "next" in result:
        nav.append(f"page {result['next']['page']} ▶")
    console.print(
        f"[dim]Page {result.get('page')} · limit {result.get('limit')} · "
        f"{result.get('total', 0)} matching[/dim]  " + "  ".join(nav)
    )


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_text(e: Exception) -> str:
    # the API always answers failures with {"error": "..."}
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            return f"HTTP {e.response.status_code}: {e.response.json().get('error')}"
        except ValueError:
            return f"HTTP {e.response.status_code}"
    return str(e)


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after printing the error.
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
    except Exception as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    # large limit so completion sees the whole catalog
    result = try_api(c.list_products, limit=1000) or {}
    product_cache = result.get("products", [])


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    categories = sorted({p.get("category", "") for p in product_cache if p.get("category")})
    return WordCompleter(categories, ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Catalog SDK",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
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


def ask_in_stock(allow_skip: bool) -> Optional[bool]:
    choices = ["yes", "no", "skip"] if allow_skip else ["yes", "no"]
    answer = Prompt.ask("📦 In stock?", choices=choices, default=choices[-1] if allow_skip else "yes")
    if answer == "skip":
        return None
    return answer == "yes"


def ask_product_fields(current: Optional[Dict[str, Any]] = None):
    current = current or {}
    name = prompt_with_autocomplete("Product name", default=current.get("name", ""))
    description = prompt_with_autocomplete("Description", default=current.get("description", ""))
    price = ask_float("💰 Price", default=current.get("price", 10.0))
    category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer(),
                                        default=current.get("category", ""))
    in_stock = ask_in_stock(allow_skip=bool(current))
    return name, price, category, description, in_stock


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
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
            ("1", "📦 List products", "4", "➕ Create product"),
            ("2", "🔍 Search / filter", "5", "✏️ Update product"),
            ("3", "ℹ️ Get product by ID", "6", "🗑️ Delete product"),
            ("", "", "q", "👋 Quit")
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Per page", default=10)
            result = try_api(c.list_products, page=page, limit=limit, success_msg="Products loaded successfully")
            if result is not None:
                show_page(result)

        elif choice == "2":
            term = prompt_with_autocomplete("Search term (blank for none)")
            category = prompt_with_autocomplete("Category (blank for any)", completer=get_category_completer())
            stock = Prompt.ask("In stock?", choices=["any", "yes", "no"], default="any")
            in_stock = None if stock == "any" else stock == "yes"
            result = try_api(c.list_products, search=term or None, category=category or None,
                             in_stock=in_stock, success_msg="Search completed")
            if result is not None:
                show_page(result)

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            name, price, category, description, in_stock = ask_product_fields()
            resp = try_api(c.create_product, name, price, category, description, in_stock,
                           success_msg=f"Product '{name}' created successfully")
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                refresh_product_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                show_products([current], title="Current record")
                name, price, category, description, in_stock = ask_product_fields(current)
                resp = try_api(c.update_product, pid, name, price, category, description, in_stock,
                               success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp], title="Updated record")
                    refresh_product_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    show_products([resp["product"]], title=resp.get("message", "Deleted"))
                    refresh_product_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
