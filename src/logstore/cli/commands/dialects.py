"""
Dialects command for CLI.
"""

import click
from rich.console import Console
from rich.table import Table

from ...storage.capabilities import DriverCapabilities
from ...storage.dialects import DIALECTS, DRIVER_DIALECTS

console = Console()


@click.command("dialects")
def dialects_command():
    """
    List known SQL dialects.

    Shows how the event id is resolved for each dialect and which
    driver modules are detected as that dialect.
    """
    table = Table(title="SQL Dialects", show_header=True, header_style="bold magenta")
    table.add_column("Dialect", style="cyan")
    table.add_column("Key Strategy", style="green")
    table.add_column("Select Insert Id", style="yellow")
    table.add_column("Drivers")

    for name in sorted(DIALECTS):
        capabilities = DriverCapabilities.for_dialect(name)
        drivers = sorted(module for module, dialect in DRIVER_DIALECTS.items() if dialect == name)
        table.add_row(
            name,
            capabilities.key_strategy,
            capabilities.select_insert_id_sql or "-",
            ", ".join(drivers),
        )

    console.print(table)
