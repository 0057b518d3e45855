"""
Point d'entrée CLI d'Anime Collection.

Configure le logging et fournit les commandes CLI (consultation, export,
serveur web).
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import export, list_catalog
from .config import Settings
from .container import Container
from .logging_config import configure_logging_from_settings
from .web.deps import app_version

app = typer.Typer(
    name="anime-collection",
    help="Catalogue d'animes : galerie web et administration",
)
container = Container()

app.command(name="list")(list_catalog)
app.command()(export)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Source : {config.record_source}")
    if config.record_source == "sqlite":
        typer.echo(f"Base de données : {config.database_url}")
    else:
        typer.echo(f"Projet Firestore : {config.firestore_project_id or 'non défini'}")
        typer.echo(f"Collection : {config.firestore_collection}")
    typer.echo(f"Cloudinary : {'activé' if config.media_host_enabled else 'désactivé'}")
    typer.echo(f"Administration : {'activée' if config.admin_enabled else 'désactivée'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(app_version)


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web Anime Collection."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("anime_collection.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    configure_logging_from_settings(get_config())
    logger.debug("Démarrage de la CLI Anime Collection")
    app()


if __name__ == "__main__":
    main()
