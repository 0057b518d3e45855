"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur et
exceptions. Cette couche n'a AUCUNE dépendance vers l'infrastructure
(adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (AnimeEntry)
- ports/ : Interfaces abstraites (source d'enregistrements, hébergeur d'images)
- value_objects/ : Objets valeur immutables (SortMode, ExportField, ImageUpload)
"""
