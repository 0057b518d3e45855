"""
Pipeline d'affichage du catalogue.

Transforme un instantane de la source d'enregistrements en la sequence
affichee par la galerie :

    filtre -> partition (mis en avant / reste) -> tri -> regroupement par langue

Toutes les etapes sont des fonctions pures et synchrones : aucune ne modifie
une entree, chacune produit une nouvelle liste. Seul le mode RANDOM est
non deterministe, et uniquement pour les entrees non mises en avant.
"""

import random
import re
from typing import Optional

from anime_collection.core.entities.anime import AnimeEntry
from anime_collection.core.value_objects.catalog import ALL_LANGUAGES, SortMode

_SEASON_RANGE_RE = re.compile(r"^\d+-\d+$")
_SEASON_NUMBER_RE = re.compile(r"^\d+$")


def filter_entries(
    entries: list[AnimeEntry],
    search_text: str = "",
    language: Optional[str] = ALL_LANGUAGES,
    ignore_case: bool = False,
) -> list[AnimeEntry]:
    """
    Filtre par nom (sous-chaine, insensible a la casse) ET par langue.

    Args:
        entries: Instantane du catalogue
        search_text: Texte recherche dans le nom, vide = tout
        language: Langue exacte, ou ALL_LANGUAGES / None pour ne pas filtrer
        ignore_case: Compare aussi la langue sans tenir compte de la casse

    Returns:
        Les entrees retenues, dans l'ordre d'entree
    """
    needle = (search_text or "").lower()
    restrict = language is not None and language != ALL_LANGUAGES
    wanted = language.lower() if restrict and ignore_case else language

    result = []
    for entry in entries:
        if needle and needle not in (entry.name or "").lower():
            continue
        if restrict:
            value = entry.language
            if ignore_case and value is not None:
                value = value.lower()
            if value != wanted:
                continue
        result.append(entry)
    return result


def partition_featured(
    entries: list[AnimeEntry],
) -> tuple[list[AnimeEntry], list[AnimeEntry]]:
    """
    Separe les entrees mises en avant (rang entier dans [1, 10]) du reste.

    L'ordre relatif est conserve dans les deux listes.
    """
    featured: list[AnimeEntry] = []
    unfeatured: list[AnimeEntry] = []
    for entry in entries:
        (featured if entry.is_featured else unfeatured).append(entry)
    return featured, unfeatured


def _created_at_key(entry: AnimeEntry) -> float:
    # Horodatage absent = plus petite valeur comparable
    if entry.created_at is None:
        return float("-inf")
    return entry.created_at.timestamp()


def _episodes_key(entry: AnimeEntry) -> int:
    return entry.total_episodes or 0


def order_entries(
    featured: list[AnimeEntry],
    unfeatured: list[AnimeEntry],
    mode: SortMode = SortMode.RANDOM,
    rng: Optional[random.Random] = None,
) -> list[AnimeEntry]:
    """
    Ordonne les deux partitions et les concatene, mises en avant d'abord.

    Les mises en avant sont triees par rang croissant (tri stable). Le reste
    suit le mode demande :
    - NEWEST : created_at decroissant, horodatage absent en dernier
    - EPISODES : total_episodes decroissant, absent = 0
    - RANDOM : melange de Fisher-Yates, nouveau a chaque appel

    Args:
        featured: Entrees mises en avant
        unfeatured: Autres entrees
        mode: Mode de tri du reste
        rng: Generateur aleatoire pour RANDOM (module random par defaut)

    Returns:
        Nouvelle liste de longueur len(featured) + len(unfeatured)
    """
    ranked = sorted(featured, key=lambda e: e.featured_rank)

    if mode is SortMode.NEWEST:
        rest = sorted(unfeatured, key=_created_at_key, reverse=True)
    elif mode is SortMode.EPISODES:
        rest = sorted(unfeatured, key=_episodes_key, reverse=True)
    else:
        rest = list(unfeatured)
        (rng or random).shuffle(rest)

    return ranked + rest


def group_by_category(
    entries: list[AnimeEntry],
) -> dict[Optional[str], list[AnimeEntry]]:
    """
    Regroupe une sequence deja ordonnee par langue.

    Les groupes suivent l'ordre de premiere apparition, et chaque groupe
    herite de l'ordre d'entree. Une langue absente forme son propre groupe
    sous la cle None.
    """
    groups: dict[Optional[str], list[AnimeEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.language, []).append(entry)
    return groups


def distinct_languages(entries: list[AnimeEntry]) -> list[str]:
    """Langues presentes, dans l'ordre de premiere apparition (absentes ignorees)."""
    seen: dict[str, None] = {}
    for entry in entries:
        if entry.language:
            seen.setdefault(entry.language, None)
    return list(seen)


def format_season_label(season: Optional[str]) -> str:
    """
    Formate le libelle de saison pour l'affichage.

    "1-3" -> "Seasons 1-3", "2" -> "Season 2", sinon le libelle tel quel.
    """
    if not season:
        return ""
    if _SEASON_RANGE_RE.match(season):
        return f"Seasons {season}"
    if _SEASON_NUMBER_RE.match(season):
        return f"Season {season}"
    return season


def arrange_home(
    entries: list[AnimeEntry],
    search_text: str = "",
    language: Optional[str] = ALL_LANGUAGES,
    mode: SortMode = SortMode.NEWEST,
    rng: Optional[random.Random] = None,
) -> dict[Optional[str], list[AnimeEntry]]:
    """Pipeline complet de la page d'accueil : filtre, partition, tri, regroupement."""
    filtered = filter_entries(entries, search_text, language)
    featured, unfeatured = partition_featured(filtered)
    return group_by_category(order_entries(featured, unfeatured, mode, rng))


def arrange_language_page(
    entries: list[AnimeEntry],
    language: str,
    rng: Optional[random.Random] = None,
) -> list[AnimeEntry]:
    """Pipeline de la page d'une langue : mises en avant puis reste melange."""
    filtered = filter_entries(entries, language=language, ignore_case=True)
    featured, unfeatured = partition_featured(filtered)
    return order_entries(featured, unfeatured, SortMode.RANDOM, rng)
