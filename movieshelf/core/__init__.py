"""
Couche domaine (core).

Contient l'entité Movie, les ports (interfaces abstraites) et les objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entité métier (Movie)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (GatewayResult, AuthResult, AuthSession)
"""
