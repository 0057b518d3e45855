"""
Service catalogue orchestrant la source d'enregistrements et l'hebergeur d'images.

Responsabilites:
- Lecture de l'instantane complet du catalogue
- Validation des formulaires de creation et d'edition (avant tout appel reseau)
- Creation : envoi de l'image puis creation de l'enregistrement
- Edition, mise a jour du rang de mise en avant, suppression

Aucune relance automatique : une erreur distante remonte a l'appelant, qui
la presente a l'utilisateur pour une nouvelle tentative manuelle.
"""

from dataclasses import dataclass
from typing import Any, Optional

from loguru import logger

from anime_collection.core.entities.anime import AnimeEntry
from anime_collection.core.exceptions import CatalogValidationError, EntryNotFoundError
from anime_collection.core.ports.media_host import IMediaHost
from anime_collection.core.ports.repositories import IAnimeRepository
from anime_collection.core.value_objects.catalog import ImageUpload
from anime_collection.utils.constants import MAX_IMAGE_SIZE_BYTES


@dataclass
class AnimeDraft:
    """
    Saisie brute d'un formulaire de creation ou d'edition.

    Tous les champs sont des chaines telles que recues du navigateur ;
    la conversion et la validation sont faites par draft_to_fields().
    """

    name: str = ""
    language: str = ""
    season: str = ""
    total_episodes: str = ""
    featured_rank: str = ""

    @classmethod
    def from_entry(cls, entry: AnimeEntry) -> "AnimeDraft":
        """Pre-remplit un formulaire d'edition depuis une entree existante."""
        return cls(
            name=entry.name or "",
            language=entry.language or "",
            season=entry.season or "",
            total_episodes="" if entry.total_episodes is None else str(entry.total_episodes),
            featured_rank="" if entry.featured_rank is None else str(entry.featured_rank),
        )


def parse_optional_int(raw: Optional[str], field: str, label: str) -> Optional[int]:
    """
    Convertit une saisie en entier optionnel.

    Raises:
        CatalogValidationError: Si la saisie n'est pas un entier
    """
    value = (raw or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise CatalogValidationError(field, f"{label} must be a whole number")


def draft_to_fields(draft: AnimeDraft) -> dict[str, Any]:
    """
    Valide une saisie et la convertit en champs du document source.

    Raises:
        CatalogValidationError: Nom vide, nombre d'episodes ou rang invalide
    """
    name = draft.name.strip()
    if not name:
        raise CatalogValidationError("name", "Anime name is required")

    total_episodes = parse_optional_int(draft.total_episodes, "total_episodes", "Total episodes")
    if total_episodes is not None and total_episodes < 0:
        raise CatalogValidationError("total_episodes", "Total episodes cannot be negative")

    return {
        "name": name,
        "language": draft.language.strip() or None,
        "season": draft.season.strip() or None,
        "totalEpisodes": total_episodes,
        "featuredRank": parse_optional_int(draft.featured_rank, "featured_rank", "Featured rank"),
    }


def validate_image(image: Optional[ImageUpload]) -> ImageUpload:
    """
    Verifie l'image choisie : presente, de type image/*, 10 Mo maximum.

    Raises:
        CatalogValidationError: Si l'image est absente ou invalide
    """
    if image is None or not image.data:
        raise CatalogValidationError("image", "Please select an image")
    if not (image.content_type or "").startswith("image/"):
        raise CatalogValidationError("image", "Please select a valid image file")
    if image.size > MAX_IMAGE_SIZE_BYTES:
        raise CatalogValidationError("image", "Image size must be less than 10MB")
    return image


class CatalogService:
    """
    Service du catalogue pour la galerie, l'administration et la CLI.

    Example:
        service = CatalogService(repository=repo, media_host=host)
        entries = await service.list_entries()
        entry_id = await service.create_entry(AnimeDraft(name="Naruto"), image)
    """

    def __init__(self, repository: IAnimeRepository, media_host: IMediaHost) -> None:
        """
        Initialise le service.

        Args:
            repository: Source d'enregistrements du catalogue
            media_host: Hebergeur des images de couverture
        """
        self._repository = repository
        self._media_host = media_host

    async def list_entries(self) -> list[AnimeEntry]:
        """Recupere l'instantane complet du catalogue."""
        entries = await self._repository.list_all()
        logger.debug(f"Instantane du catalogue: {len(entries)} entrees")
        return entries

    async def get_entry(self, entry_id: str) -> AnimeEntry:
        """
        Recupere une entree par son identifiant.

        Raises:
            EntryNotFoundError: Si l'entree n'existe pas
        """
        entry = await self._repository.get_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    async def create_entry(self, draft: AnimeDraft, image: Optional[ImageUpload]) -> str:
        """
        Cree une entree : validation, envoi de l'image, puis enregistrement.

        La validation est complete avant le premier appel reseau : une saisie
        invalide ne produit aucune ecriture partielle.

        Returns:
            Identifiant de la nouvelle entree
        """
        fields = draft_to_fields(draft)
        image = validate_image(image)

        image_url = await self._media_host.upload(image)
        fields["imageUrl"] = image_url

        entry_id = await self._repository.create(fields)
        logger.info(f"Anime ajoute: {fields['name']} ({entry_id})")
        return entry_id

    async def update_entry(self, entry_id: str, draft: AnimeDraft) -> None:
        """Met a jour les champs editables d'une entree."""
        fields = draft_to_fields(draft)
        await self._repository.update(entry_id, fields)
        logger.info(f"Anime modifie: {fields['name']} ({entry_id})")

    async def set_featured_rank(self, entry_id: str, raw_rank: Optional[str]) -> Optional[int]:
        """
        Met a jour le rang de mise en avant (vide = retrait).

        Returns:
            Le rang enregistre
        """
        rank = parse_optional_int(raw_rank, "featured_rank", "Featured rank")
        await self._repository.update(entry_id, {"featuredRank": rank})
        logger.info(f"Rang de mise en avant de {entry_id}: {rank}")
        return rank

    async def delete_entry(self, entry_id: str) -> None:
        """Supprime une entree."""
        await self._repository.delete(entry_id)
        logger.info(f"Anime supprime: {entry_id}")
