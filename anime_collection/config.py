"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe ANIMECOL_,
et peut optionnellement être fournie via un fichier .env.

Les identifiants externes (Firestore, Cloudinary, mot de passe admin) sont optionnels -
les fonctionnalités correspondantes sont désactivées si non fournis.
"""

import secrets
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de anime_collection/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe ANIMECOL_.
    Exemple : ANIMECOL_RECORD_SOURCE=firestore
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMECOL_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Source d'enregistrements : Firestore (production) ou SQLite (développement)
    record_source: Literal["sqlite", "firestore"] = Field(default="sqlite")

    # Base de données locale
    database_url: str = Field(default="sqlite:///anime_collection.db")

    # Firestore (OPTIONNEL - requis si record_source=firestore)
    firestore_project_id: Optional[str] = Field(default=None)
    firestore_api_key: Optional[str] = Field(default=None)
    firestore_database: str = Field(default="(default)")
    firestore_collection: str = Field(default="animes")

    # Cloudinary (OPTIONNEL - l'ajout d'anime est bloqué si non défini)
    cloudinary_cloud_name: Optional[str] = Field(default=None)
    cloudinary_upload_preset: Optional[str] = Field(default=None)
    cloudinary_folder: str = Field(default="anime-collection")

    # Administration (désactivée si aucun mot de passe)
    admin_password: Optional[str] = Field(default=None)
    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    jwt_algorithm: str = Field(default="HS256")
    admin_token_expire_minutes: int = Field(default=720, ge=1)

    # Réseau
    http_timeout: float = Field(default=30.0, gt=0)
    http_max_attempts: int = Field(default=4, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/anime_collection.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def firestore_enabled(self) -> bool:
        """Vérifie si Firestore est configuré."""
        return self.firestore_project_id is not None

    @property
    def media_host_enabled(self) -> bool:
        """Vérifie si l'envoi d'images Cloudinary est configuré."""
        return bool(self.cloudinary_cloud_name and self.cloudinary_upload_preset)

    @property
    def admin_enabled(self) -> bool:
        """Vérifie si l'administration est accessible."""
        return bool(self.admin_password)
