"""
CLI output formatting utilities.

This module provides helpers for consistent terminal output using the
Rich library.
"""

from typing import List

from rich.console import Console
from rich.table import Table

from dblp_search.core.models import Author, Publication, Record, RecordKind, Venue

# Global console instance
console = Console()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def _publication_table(records: List[Publication]) -> Table:
    table = Table(title="Publications", show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Authors")
    table.add_column("Venue", style="cyan")
    table.add_column("Year", justify="right")
    table.add_column("Key", style="dim")

    for i, pub in enumerate(records, 1):
        authors = ", ".join(pub.authors[:3])
        if len(pub.authors) > 3:
            authors += f" (+{len(pub.authors) - 3})"
        table.add_row(str(i), pub.title, authors, ", ".join(pub.venues), pub.year, pub.key)

    return table


def _author_table(records: List[Author]) -> Table:
    table = Table(title="Authors", show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Aliases")
    table.add_column("Notes")
    table.add_column("Profile", style="cyan")

    for i, author in enumerate(records, 1):
        notes = "; ".join(f"{note.note_type}: {note.text}" for note in author.notes)
        table.add_row(str(i), author.name, ", ".join(author.aliases), notes, author.url)

    return table


def _venue_table(records: List[Venue]) -> Table:
    table = Table(title="Venues", show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Venue", style="bold")
    table.add_column("Acronym", style="cyan")
    table.add_column("Type")
    table.add_column("URL", style="dim")

    for i, venue in enumerate(records, 1):
        table.add_row(str(i), venue.name, venue.acronym or "", venue.type, venue.url)

    return table


def print_records(records: List[Record], kind: RecordKind) -> None:
    """Print records of one kind as a table."""
    builders = {
        RecordKind.PUBLICATION: _publication_table,
        RecordKind.AUTHOR: _author_table,
        RecordKind.VENUE: _venue_table,
    }
    console.print(builders[RecordKind(kind)](records))  # type: ignore[operator]
