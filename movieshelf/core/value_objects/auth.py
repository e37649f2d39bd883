"""
Objets valeur liés à l'authentification.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthResult:
    """
    Résultat d'une inscription ou d'une connexion.

    Attributs :
        success : True si l'opération a réussi
        error_message : Message lisible en cas d'échec
    """

    success: bool
    error_message: Optional[str] = None


@dataclass(frozen=True)
class AuthSession:
    """
    Session authentifiée courante.

    Attributs :
        uid : Identifiant du propriétaire (utilisé pour filtrer les documents)
        email : Adresse email du compte
        id_token : Jeton d'accès au backend (vide pour le backend local)
        refresh_token : Jeton de rafraîchissement (vide pour le backend local)
    """

    uid: str
    email: str = ""
    id_token: str = ""
    refresh_token: str = ""
