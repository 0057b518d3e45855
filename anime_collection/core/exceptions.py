"""
Exceptions du domaine catalogue.

Toutes les erreurs sont limitees a l'action utilisateur qui les declenche :
aucune n'est fatale au processus.
"""


class CatalogError(Exception):
    """Erreur de base du catalogue."""


class CatalogValidationError(CatalogError):
    """
    Donnees de formulaire invalides, detectees avant tout appel reseau.

    Attributes:
        field: Nom du champ fautif
        message: Message affiche a cote du formulaire
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class ConfigurationError(CatalogError):
    """Identifiants externes requis absents de la configuration."""


class RecordSourceError(CatalogError):
    """Echec reseau ou distant de la base documentaire."""


class MediaUploadError(CatalogError):
    """Echec de l'envoi d'une image a l'hebergeur de medias."""


class EntryNotFoundError(CatalogError):
    """Aucune entree ne correspond a l'identifiant demande."""

    def __init__(self, entry_id: str) -> None:
        self.entry_id = entry_id
        super().__init__(f"Anime '{entry_id}' introuvable")


class AuthenticationError(CatalogError):
    """Mot de passe ou jeton d'administration invalide."""
