# cli.py - interactive product catalog console
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

from sdk.catalog_client import CatalogClient

console = Console()
c = CatalogClient(
    base_url=os.getenv("CATALOG_API_URL", "http://127.0.0.1:8085"),
    api_key=os.getenv("API_KEY"),
)

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def products_table(products: List[Dict[str, Any]], title: str = "Products") -> Table:
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
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=15)

    for p in products:
        stock = p.get("stock", 0)
        table.add_row(
            p.get("id", "N/A")[:12],
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            str(stock) if stock else "[red]0[/red]",
            p.get("category", "N/A")
        )
    return table


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(products_table(products))


def page_summary(page: Dict[str, Any]) -> str:
    total = page.get("total", 0)
    limit = page.get("limit", 10) or 10
    pages = max(1, -(-total // limit))
    return f"Page {page.get('page', 1)} of {pages} ({total} matching)"


def show_page(page: Dict[str, Any]):
    show_products(page.get("products", []))
    console.print(f"[dim]{page_summary(page)}[/dim]")


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Errors are shown in a status panel and None is returned.
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
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    page = try_api(c.list_products, limit=100)
    product_cache = page["products"] if page else []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    words = [p.get("name", "") for p in product_cache] + [p.get("id", "") for p in product_cache]
    return WordCompleter([w for w in words if w], ignore_case=True)


def resolve_product_id(text: str) -> str:
    # accept a product name from the completer as well as an id
    for p in product_cache:
        if p.get("name", "").lower() == text.lower():
            return p["id"]
    return text


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = None) -> Optional[float]:
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if raw == "":
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "price": ask_float("Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete("Category", default=current.get("category", "")),
        "stock": IntPrompt.ask("Stock", default=current.get("stock", 0)),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    console.print(Panel(f"[bold blue]Product Catalog Console[/bold blue]  [dim]{now}[/dim]", style="bold blue"))
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "List products", "5", "Update product"),
            ("2", "Search and filter", "6", "Delete product"),
            ("3", "Get product by ID", "q", "Quit"),
            ("4", "Create product", "", ""),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page_no = IntPrompt.ask("Page", default=1)
            page = try_api(c.list_products, page=page_no, success_msg="Products loaded")
            if page is not None:
                show_page(page)

        elif choice == "2":
            q = Prompt.ask("Search text", default="")
            category = Prompt.ask("Category", default="")
            min_price = ask_float("Min price")
            max_price = ask_float("Max price")
            page = try_api(c.list_products, q=q, category=category, min_price=min_price,
                           max_price=max_price, success_msg="Search completed")
            if page is not None:
                show_page(page)

        elif choice == "3":
            pid = resolve_product_id(prompt_with_autocomplete("Product", completer=get_product_completer()))
            product = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if product:
                show_products([product])

        elif choice == "4":
            fields = ask_product_fields()
            product = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created", **fields)
            if product:
                show_products([product])
                refresh_product_cache()

        elif choice == "5":
            pid = resolve_product_id(prompt_with_autocomplete("Product", completer=get_product_completer()))
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                product = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
                if product:
                    show_products([product])
                    refresh_product_cache()

        elif choice == "6":
            pid = resolve_product_id(prompt_with_autocomplete("Product", completer=get_product_completer()))
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_product_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye![/bold green]", title="Goodbye"))
            sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
