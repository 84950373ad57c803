"""Catalog Upgrader CLI entrypoint."""
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing import List, Optional

from upgrader.catalog.models import CatalogUpgrade
from upgrader.catalog.parser import CatalogSyntaxError
from upgrader.catalog.reader import list_catalog_dependencies
from upgrader.catalog.updater import update_catalog_dependency
from upgrader.options import Options

app = typer.Typer(help="Catalog Upgrader - in-place version bumps for pnpm/Yarn dependency catalogs")
console = Console()
error_console = Console(stderr=True)

def report_error(message: str) -> None:
    """Print an error without interpreting it as rich markup."""
    error_console.print(message, style="bold red", markup=False, highlight=False)

def read_workspace_file(file: str) -> str:
    """Read a workspace file, keeping its line endings."""
    try:
        with open(file, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except OSError as e:
        report_error(f"Error: {e}")
        raise typer.Exit(code=1)

@app.command("upgrade")
def upgrade(
    file: str = typer.Argument(..., help="Path to the workspace YAML file"),
    key_path: List[str] = typer.Argument(..., help="Key path of the dependency, e.g. catalogs react17 react"),
    to: str = typer.Option(..., "--to", "-t", help="New version"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the updated file instead of writing it"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information")
):
    """Set the version of one catalog dependency, keeping the file's formatting."""
    options = Options(debug=debug, error_reporter=report_error)
    content = read_workspace_file(file)
    label = ".".join(key_path)

    try:
        updated = update_catalog_dependency(
            content,
            CatalogUpgrade(path=list(key_path), new_value=to),
            options=options,
            file_path=file,
        )
    except CatalogSyntaxError:
        # Already printed by the error reporter
        raise typer.Exit(code=1)

    if updated is None:
        report_error(f"Unable to upgrade {label} in {file}: not a catalog entry with a plain scalar value")
        raise typer.Exit(code=1)

    if updated is content:
        console.print(f"[green]{escape(label)} is already at {escape(to)}[/]", highlight=False)
        return

    if dry_run:
        typer.echo(updated, nl=False)
        return

    with open(file, 'w', encoding='utf-8', newline='') as f:
        f.write(updated)
    console.print(f"[green]Upgraded {escape(label)} to {escape(to)} in {escape(file)}[/]", highlight=False)

@app.command("list")
def list_dependencies(
    file: str = typer.Argument(..., help="Path to the workspace YAML file"),
    catalog: Optional[str] = typer.Option(None, "--catalog", "-c", help="Only show entries of this named catalog"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information")
):
    """List the dependencies pinned in the file's catalogs."""
    options = Options(debug=debug, error_reporter=report_error)
    content = read_workspace_file(file)

    try:
        dependencies = list_catalog_dependencies(content, options=options, file_path=file)
    except CatalogSyntaxError:
        raise typer.Exit(code=1)

    if catalog is not None:
        dependencies = [d for d in dependencies if d.catalog == catalog]

    if not dependencies:
        console.print("[yellow]No catalog dependencies found.[/]")
        return

    table = Table(title="Catalog Dependencies")
    table.add_column("Catalog", style="cyan")
    table.add_column("Name")
    table.add_column("Version", style="green")
    for dependency in dependencies:
        table.add_row(dependency.catalog or "(default)", dependency.name, dependency.version)
    console.print(table)

if __name__ == "__main__":
    app()
