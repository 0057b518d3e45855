"""
Constantes globales pour Anime Collection.

Ce module contient les constantes partagees entre la web et la CLI :
- Langues proposees dans le formulaire d'ajout
- Limites de l'envoi d'images
- Nom du cookie de session d'administration
"""

# Langues proposees dans le formulaire (la source en accepte d'autres)
LANGUAGE_CHOICES = (
    "Japanese",
    "Hindi",
    "English",
    "Korean",
    "Chinese",
)

# Taille maximale d'une image de couverture (10 Mo)
MAX_IMAGE_SIZE_BYTES = 10 * 1024 * 1024

# Cookie portant le jeton d'administration
ADMIN_COOKIE_NAME = "animecol_admin"
