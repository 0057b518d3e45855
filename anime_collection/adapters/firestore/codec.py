"""
Codec des valeurs typees de l'API REST Firestore.

Firestore represente chaque champ par un objet a une cle indiquant son type :
    {"stringValue": "Naruto"}, {"integerValue": "220"}, {"nullValue": None},
    {"timestampValue": "2024-03-01T10:00:00.123456789Z"}, ...

Ce module convertit ces objets vers les types Python et inversement, et
transforme un document complet en AnimeEntry.
"""

import re
from datetime import UTC, datetime
from typing import Any, Optional

from anime_collection.core.entities.anime import AnimeEntry

# Fraction de seconde Firestore : jusqu'a 9 chiffres, Python n'en accepte que 6
_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<tz>Z|[+-]\d{2}:\d{2})$"
)


def parse_timestamp(value: str) -> datetime:
    """
    Convertit un horodatage RFC 3339 Firestore en datetime aware.

    Raises:
        ValueError: Si le format n'est pas reconnu
    """
    match = _TIMESTAMP_RE.match(value)
    if match is None:
        raise ValueError(f"Horodatage Firestore invalide: {value!r}")
    fraction = (match["fraction"] or "0")[:6].ljust(6, "0")
    tz = "+00:00" if match["tz"] == "Z" else match["tz"]
    return datetime.fromisoformat(f"{match['base']}.{fraction}{tz}")


def format_timestamp(value: datetime) -> str:
    """Formate un datetime en RFC 3339 UTC (datetime naif suppose en UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def decode_value(value: dict[str, Any]) -> Any:
    """Convertit une valeur typee Firestore en valeur Python."""
    if "nullValue" in value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "timestampValue" in value:
        return parse_timestamp(value["timestampValue"])
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    # Types non utilises par le catalogue (reference, geoPoint, bytes)
    return next(iter(value.values()), None)


def encode_value(value: Any) -> dict[str, Any]:
    """
    Convertit une valeur Python en valeur typee Firestore.

    Raises:
        TypeError: Pour un type non supporte
    """
    if value is None:
        return {"nullValue": None}
    # bool avant int : bool est une sous-classe d'int
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": format_timestamp(value)}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Type non supporte par Firestore: {type(value).__name__}")


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Convertit le dictionnaire 'fields' d'un document."""
    return {key: decode_value(value) for key, value in fields.items()}


def encode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Construit le dictionnaire 'fields' d'un document."""
    return {key: encode_value(value) for key, value in fields.items()}


def document_id(name: str) -> str:
    """Extrait l'identifiant du chemin complet 'projects/.../documents/animes/<id>'."""
    return name.rsplit("/", 1)[-1]


def _as_number(value: Any) -> Optional[int | float]:
    """Normalise un nombre : les flottants entiers deviennent des int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def document_to_entry(document: dict[str, Any]) -> AnimeEntry:
    """
    Convertit un document Firestore en AnimeEntry.

    Les champs manquants ou mal types deviennent None : un document
    incomplet reste affichable.
    """
    fields = decode_fields(document.get("fields", {}))
    created_at = fields.get("createdAt")
    episodes = _as_number(fields.get("totalEpisodes"))

    return AnimeEntry(
        id=document_id(document["name"]),
        name=_as_str(fields.get("name")) or "",
        language=_as_str(fields.get("language")),
        season=_as_str(fields.get("season")),
        total_episodes=episodes if isinstance(episodes, int) else None,
        image_url=_as_str(fields.get("imageUrl")),
        created_at=created_at if isinstance(created_at, datetime) else None,
        featured_rank=_as_number(fields.get("featuredRank")),
    )
