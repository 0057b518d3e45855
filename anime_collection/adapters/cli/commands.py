"""
Commandes CLI de consultation du catalogue (list, export).

list reproduit la galerie de la page d'accueil sous forme de tableaux Rich,
export ecrit le rapport texte sur la sortie standard ou dans un fichier.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from anime_collection.adapters.cli.helpers import console, suppress_loguru, with_container
from anime_collection.core.exceptions import CatalogError
from anime_collection.core.value_objects.catalog import ALL_LANGUAGES, SortMode
from anime_collection.services.catalog_pipeline import arrange_home, format_season_label
from anime_collection.services.export import (
    DEFAULT_EXPORT_FIELDS,
    build_export_report,
    parse_export_fields,
)


def list_catalog(
    search: Annotated[
        str, typer.Option("--search", "-s", help="Filtre sur le nom")
    ] = "",
    language: Annotated[
        str, typer.Option("--language", "-l", help="Langue exacte (defaut: toutes)")
    ] = ALL_LANGUAGES,
    sort: Annotated[
        str, typer.Option("--sort", help="Tri: newest, episodes ou random")
    ] = SortMode.NEWEST.value,
) -> None:
    """Affiche le catalogue groupe par langue."""
    asyncio.run(_list_async(search, language, SortMode.parse(sort)))


@with_container
async def _list_async(container, search: str, language: str, sort: SortMode) -> None:
    """Implementation async de la commande list."""
    service = container.catalog_service()
    try:
        with suppress_loguru():
            entries = await service.list_entries()
    except CatalogError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)

    groups = arrange_home(entries, search, language, sort)
    if not groups:
        console.print("[yellow]Aucun anime ne correspond.[/yellow]")
        return

    for group_language, group in groups.items():
        table = Table(title=f"{group_language or 'Unknown'} ({len(group)})", show_header=True)
        table.add_column("Rang", justify="right", style="magenta")
        table.add_column("Nom", style="bold")
        table.add_column("Saison")
        table.add_column("Episodes", justify="right")
        for entry in group:
            table.add_row(
                str(entry.featured_rank) if entry.is_featured else "",
                entry.name,
                format_season_label(entry.season),
                "" if entry.total_episodes is None else str(entry.total_episodes),
            )
        console.print(table)

    console.print(f"[bold]Total:[/bold] {len(entries)} animes")


def export(
    field: Annotated[
        Optional[list[str]],
        typer.Option(
            "--field",
            "-f",
            help="Champ a inclure (repetable): name, season, episodes, featured_rank, image_url, created_at",
        ),
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Fichier de sortie")
    ] = None,
) -> None:
    """Exporte le catalogue en texte brut."""
    asyncio.run(_export_async(field or [], output))


@with_container
async def _export_async(container, field: list[str], output: Optional[Path]) -> None:
    """Implementation async de la commande export."""
    fields = parse_export_fields(field) or list(DEFAULT_EXPORT_FIELDS)
    service = container.catalog_service()
    try:
        with suppress_loguru():
            entries = await service.list_entries()
    except CatalogError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)

    report = build_export_report(entries, fields)
    if output is None:
        typer.echo(report, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report, encoding="utf-8")
    console.print(f"[green]{len(entries)} animes exportes dans {output}[/green]")
