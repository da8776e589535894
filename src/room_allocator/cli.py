"""CLI entry point for the room allocator."""

import logging
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from .engine import create_allocator
from .exceptions import AllocationInputError
from .exporters import get_exporter
from .loaders import load_clients, load_hotels
from .models import AllocationResult
from .validators import validate_roster

app = typer.Typer(
    name="room-allocator",
    help="Assign event attendees to hotel rooms",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_inputs(clients_file: Path, hotels_file: Path):
    try:
        clients = load_clients(clients_file)
        hotels = load_hotels(hotels_file)
    except AllocationInputError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    return clients, hotels


@app.command()
def allocate(
    clients_file: Annotated[
        Path,
        typer.Argument(help="Client roster (.json, .csv or .xlsx)", exists=True, readable=True),
    ],
    hotels_file: Annotated[
        Path,
        typer.Argument(help="Hotel inventory (.json, .csv or .xlsx)", exists=True, readable=True),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    rules: Annotated[
        Optional[Path],
        typer.Option("--rules", help="JSON file with allocation rules", exists=True),
    ] = None,
    allow_mixed: Annotated[
        Optional[bool],
        typer.Option("--allow-mixed/--no-allow-mixed", help="Allow any mixed-gender room"),
    ] = None,
    vip_mixed: Annotated[
        Optional[bool],
        typer.Option("--vip-mixed/--no-vip-mixed", help="Allow mixed rooms of VIPs"),
    ] = None,
    keep_groups: Annotated[
        Optional[bool],
        typer.Option("--keep-groups/--split-groups", help="Try one room per group first"),
    ] = None,
    optimize: Annotated[
        Optional[bool],
        typer.Option("--optimize/--no-optimize", help="Top up under-used rooms"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Allocate rooms for a client roster."""
    _configure_logging(verbose)
    clients, hotels = _load_inputs(clients_file, hotels_file)

    try:
        allocator = create_allocator(
            hotels,
            rules_path=rules,
            overrides={
                "allow_mixed_rooms": allow_mixed,
                "vip_can_be_mixed": vip_mixed,
                "keep_groups_together": keep_groups,
                "optimize_occupancy": optimize,
            },
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] Invalid rules file: {e}")
        raise typer.Exit(1)

    with console.status("[bold green]Allocating rooms..."):
        result = allocator.allocate(clients)

    _show_summary(result)

    if result.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(result.warnings)}):[/bold yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")

    if verbose:
        _show_rooms(result)
    if result.unassigned_clients:
        _show_unassigned(result)

    if output:
        exporter = get_exporter(format.value)

        if format == OutputFormat.csv:
            # CSV exports to directory
            output_path = output if output.is_dir() else output.parent / output.stem
        else:
            if not output.suffix:
                output = output.with_suffix(".xlsx" if format == OutputFormat.excel else ".json")
            output_path = output

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(result, output_path)

        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


@app.command()
def validate(
    clients_file: Annotated[
        Path,
        typer.Argument(help="Client roster (.json, .csv or .xlsx)"),
    ],
    hotels_file: Annotated[
        Path,
        typer.Argument(help="Hotel inventory (.json, .csv or .xlsx)"),
    ],
) -> None:
    """Validate a roster and inventory without allocating."""
    for path in (clients_file, hotels_file):
        if not path.exists():
            console.print(f"[bold red]Error:[/bold red] File not found: {path}")
            raise typer.Exit(1)

    clients, hotels = _load_inputs(clients_file, hotels_file)
    report = validate_roster(clients, hotels)

    console.print(f"\n[bold]Validation Results for:[/bold] {clients_file.name}, {hotels_file.name}")
    console.print(f"  Clients: {len(clients)}")
    console.print(f"  Hotels: {len(hotels)}")
    console.print(f"  Beds: {sum(h.total_beds for h in hotels)}")

    if report.is_valid:
        console.print("[bold green]✓ Input is valid[/bold green]")
    else:
        console.print("[bold red]✗ Input has issues[/bold red]")

    if report.errors:
        console.print(f"\n[bold red]Errors ({len(report.errors)}):[/bold red]")
        for error in report.errors:
            console.print(f"  [red]• {error}[/red]")

    if report.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(report.warnings)}):[/bold yellow]")
        for warning in report.warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")

    if not report.is_valid:
        raise typer.Exit(1)


@app.command()
def stats(
    clients_file: Annotated[
        Path,
        typer.Argument(help="Client roster (.json, .csv or .xlsx)", exists=True, readable=True),
    ],
) -> None:
    """Show roster breakdowns by type, gender and group."""
    try:
        clients = load_clients(clients_file)
    except AllocationInputError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Statistics for:[/bold] {clients_file.name}")

    groups = Counter(c.group_name for c in clients if c.group_name)

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")
    overview_table.add_row("Total Clients", str(len(clients)))
    overview_table.add_row("Groups", str(len(groups)))
    overview_table.add_row("Ungrouped Clients", str(sum(1 for c in clients if not c.group_name)))
    console.print(overview_table)

    for title, label, counts in (
        ("Clients by Type", "Type", Counter(c.client_type.value for c in clients)),
        ("Clients by Gender", "Gender", Counter(c.gender.value for c in clients)),
    ):
        table = Table(title=title)
        table.add_column(label, style="cyan")
        table.add_column("Count", style="green")
        for key, count in counts.most_common():
            table.add_row(key, str(count))
        console.print(table)

    if groups:
        group_table = Table(title="Groups")
        group_table.add_column("Group", style="cyan", max_width=40)
        group_table.add_column("Members", style="green")
        group_table.add_column("Genders", style="magenta")
        for name, count in groups.most_common():
            genders = sorted({c.gender.value for c in clients if c.group_name == name})
            group_table.add_row(name[:40], str(count), ", ".join(genders))
        console.print(group_table)


def _show_summary(result: AllocationResult) -> None:
    summary_table = Table(title="Allocation Summary", show_header=False)
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Value", style="green")

    summary_table.add_row("Assigned", str(result.total_assigned))
    summary_table.add_row("Unassigned", str(result.total_unassigned))
    summary_table.add_row("Rooms Used", str(result.rooms_used))
    summary_table.add_row("Mixed Rooms", str(result.mixed_rooms))
    summary_table.add_row("Average Occupancy", f"{result.occupancy_rate}%")

    console.print(summary_table)

    if result.statistics.by_hotel:
        hotel_table = Table(title="Clients by Hotel")
        hotel_table.add_column("Hotel", style="cyan")
        hotel_table.add_column("Clients", style="green")
        for hotel, count in result.statistics.by_hotel.items():
            hotel_table.add_row(hotel, str(count))
        console.print(hotel_table)


def _show_rooms(result: AllocationResult) -> None:
    """Show room assignments (first 30)."""
    rooms_table = Table(title="Rooms")
    rooms_table.add_column("Room", style="cyan")
    rooms_table.add_column("Hotel", style="blue")
    rooms_table.add_column("Beds", style="green")
    rooms_table.add_column("Occupants", style="white", max_width=50)
    rooms_table.add_column("Mixed", style="magenta")

    for room in result.assignments[:30]:
        rooms_table.add_row(
            room.room_id,
            room.hotel_name,
            f"{room.occupant_count}/{room.capacity}",
            ", ".join(o.name or o.client_id for o in room.occupants),
            "yes" if room.is_mixed else "",
        )

    if len(result.assignments) > 30:
        rooms_table.add_row("...", "...", "...", "...", "...")

    console.print(rooms_table)


def _show_unassigned(result: AllocationResult) -> None:
    unassigned_table = Table(title="Unassigned Clients")
    unassigned_table.add_column("ID", style="cyan")
    unassigned_table.add_column("Name", style="white")
    unassigned_table.add_column("Reason", style="yellow")
    unassigned_table.add_column("Code", style="red")

    for client in result.unassigned_clients:
        unassigned_table.add_row(client.id, client.name, client.reason, client.code.value)

    console.print(unassigned_table)


if __name__ == "__main__":
    app()
