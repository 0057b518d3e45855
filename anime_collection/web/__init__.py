"""
Interface web FastAPI : galerie publique et espace d'administration.
"""
