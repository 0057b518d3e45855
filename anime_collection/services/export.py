"""
Export texte du catalogue.

Produit un rapport lisible, deterministe pour un meme instantane et un meme
jeu de champs : une section par langue (ordre de premiere apparition),
entrees numerotees dans leur section.
"""

from collections.abc import Iterable

from anime_collection.core.entities.anime import AnimeEntry
from anime_collection.core.value_objects.catalog import ExportField
from anime_collection.services.catalog_pipeline import (
    format_season_label,
    group_by_category,
)

EXPORT_TITLE = "Anime Collection Export"
NO_LANGUAGE_LABEL = "(no language)"
MISSING_VALUE = "-"

DEFAULT_EXPORT_FIELDS = (ExportField.NAME, ExportField.SEASON, ExportField.EPISODES)


def _field_value(entry: AnimeEntry, field: ExportField) -> str:
    """Valeur texte d'un champ, MISSING_VALUE si absente."""
    if field is ExportField.NAME:
        value = entry.name
    elif field is ExportField.SEASON:
        value = format_season_label(entry.season)
    elif field is ExportField.EPISODES:
        value = entry.total_episodes
    elif field is ExportField.FEATURED_RANK:
        value = entry.featured_rank
    elif field is ExportField.IMAGE_URL:
        value = entry.image_url
    else:
        value = entry.created_at.strftime("%Y-%m-%d %H:%M") if entry.created_at else None

    if value is None or value == "":
        return MISSING_VALUE
    return str(value)


def format_export_line(entry: AnimeEntry, index: int, fields: list[ExportField]) -> str:
    """Formate une ligne : le nom sans libelle, les autres champs en 'Libelle: valeur'."""
    parts = []
    for field in fields:
        value = _field_value(entry, field)
        if field is ExportField.NAME:
            parts.append(value)
        else:
            parts.append(f"{field.label}: {value}")
    return f"{index}. " + " | ".join(parts)


def build_export_report(
    entries: list[AnimeEntry],
    fields: Iterable[ExportField] = DEFAULT_EXPORT_FIELDS,
) -> str:
    """
    Construit le rapport d'export.

    Args:
        entries: Instantane du catalogue, dans l'ordre de la source
        fields: Champs a afficher sur chaque ligne (ordre de ExportField)

    Returns:
        Le rapport, termine par un saut de ligne
    """
    enabled = set(fields)
    ordered_fields = [f for f in ExportField if f in enabled]

    lines = [EXPORT_TITLE, f"Total: {len(entries)}"]
    for language, group in group_by_category(entries).items():
        lines.append("")
        lines.append(f"== {language or NO_LANGUAGE_LABEL} ({len(group)}) ==")
        for index, entry in enumerate(group, start=1):
            lines.append(format_export_line(entry, index, ordered_fields))

    return "\n".join(lines) + "\n"


def parse_export_fields(values: Iterable[str]) -> list[ExportField]:
    """Convertit des valeurs de formulaire en champs, valeurs inconnues ignorees."""
    fields = []
    for value in values:
        try:
            fields.append(ExportField(value))
        except ValueError:
            continue
    return fields
