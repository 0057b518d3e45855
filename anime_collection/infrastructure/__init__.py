"""
Couche infrastructure d'Anime Collection.

- persistence/ : Source d'enregistrements SQLite locale (SQLModel), utilisee
  en developpement et pour la CLI quand Firestore n'est pas configure

Les clients des services externes (Firestore, Cloudinary) sont dans adapters/.
"""
