"""
MovieShelf - Catalogue personnel de films et liste de favoris.

Ce package fournit un client pour un catalogue de films par utilisateur,
adossé à une base documentaire distante et à un service d'authentification.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (gateway, store observable, authentification)
- presentation/ : Adaptateur de liste et contrôleurs d'écran
- adapters/ : Couche infrastructure (CLI, Firebase, SQLite, images)
"""

__version__ = "0.1.0"
