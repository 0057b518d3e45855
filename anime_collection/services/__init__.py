"""
Couche application : pipeline d'affichage, catalogue, export, authentification.
"""
