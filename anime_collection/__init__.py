"""
Anime Collection - Galerie publique et administration d'un catalogue d'animes.

Ce package fournit une galerie consultable (recherche, filtre par langue, tri)
et un espace d'administration (creation, edition, suppression, export), la
persistance etant deleguee a une base documentaire externe (Firestore) et les
images a un hebergeur de medias (Cloudinary).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (pipeline d'affichage, catalogue, export, auth)
- adapters/ : Couche infrastructure (CLI, clients Firestore et Cloudinary)
- infrastructure/ : Persistance SQLite locale (SQLModel)
- web/ : Interface FastAPI + Jinja2
"""
