"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- cli/ : Interface ligne de commande (Typer + Rich)
- firebase/ : Firebase Authentication et Cloud Firestore (API REST)
- local/ : Backend SQLite (SQLModel)
- images/ : Chargement et cache des affiches

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
Cela permet de changer de backend sans affecter la logique métier.
"""
