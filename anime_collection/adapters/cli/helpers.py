"""
Utilitaires partages pour les commandes CLI d'Anime Collection.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from anime_collection.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("anime_collection")
    try:
        yield
    finally:
        loguru_logger.enable("anime_collection")


def with_container(func):
    """
    Decorateur qui injecte un container initialise en premier argument.

    La base SQLite n'est initialisee que si elle est la source configuree ;
    les clients HTTP sont fermes a la fin de la commande.

    Usage:
        @with_container
        async def my_command(container, ...):
            service = container.catalog_service()
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        container = Container()
        settings = container.config()
        if settings.record_source == "sqlite":
            container.database.init()
        try:
            return await func(container, *args, **kwargs)
        finally:
            if settings.record_source == "firestore":
                await container.firestore_repository().close()
            await container.media_host().close()
    return wrapper

