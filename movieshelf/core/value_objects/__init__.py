"""
Objets valeur immutables représentant des concepts du domaine sans identité.

Exports :
- GatewayResult : Résultat d'une opération du gateway (valeur ou échec typé)
- FailureReason : Raison d'échec (non authentifié, id manquant, erreur backend)
- AuthResult : Résultat d'une inscription/connexion
- AuthSession : Session authentifiée courante
"""

from movieshelf.core.value_objects.auth import AuthResult, AuthSession
from movieshelf.core.value_objects.results import FailureReason, GatewayResult

__all__ = [
    "AuthResult",
    "AuthSession",
    "FailureReason",
    "GatewayResult",
]
