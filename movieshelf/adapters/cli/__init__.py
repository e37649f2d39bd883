"""
Interface ligne de commande (Typer + Rich).

Chaque commande joue le role d'un ecran : elle instancie le controleur
correspondant (presentation/screens.py) et affiche son etat avec Rich.
"""
