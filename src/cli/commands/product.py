"""Product CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from store import Product
from store.workflows import new_id

console = Console()


@click.group()
def product():
    """Products and offers your content can promote."""
    pass


@product.command("list")
def product_list():
    """List products."""
    c = get_components(skip_writer=True)
    products = c["repo"].list_products()
    if not products:
        console.print("No products stored.")
        return

    table = Table(title="Products")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Persona")
    table.add_column("Link", style="cyan")
    for p in products:
        table.add_row(p.id, p.name, p.persona[:40], p.link)
    console.print(table)


@product.command("add")
@click.argument("name")
@click.option("--persona", default="", help="Who it is for")
@click.option("--pain-points", default="")
@click.option("--solution", default="")
@click.option("--link", default="")
@click.option("--notes", default="")
def product_add(name, persona, pain_points, solution, link, notes):
    """Add a product."""
    c = get_components(skip_writer=True)
    p = Product(
        id=new_id("prod"),
        name=name,
        persona=persona,
        pain_points=pain_points,
        solution=solution,
        link=link,
        notes=notes,
    )
    c["repo"].add_product(p)
    console.print(f"[green]Added:[/] {p.name} [dim]({p.id})[/]")


@product.command("delete")
@click.argument("product_id")
def product_delete(product_id: str):
    """Delete a product."""
    c = get_components(skip_writer=True)
    c["repo"].delete_product(product_id)
    console.print(f"Deleted {product_id}")
