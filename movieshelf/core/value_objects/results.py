"""
Résultats des opérations du gateway.

Chaque opération du gateway retourne un GatewayResult portant soit la
valeur persistée, soit une raison d'échec typée. L'appelant doit traiter
les deux cas.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureReason(Enum):
    """Raison d'échec d'une opération du gateway."""

    UNAUTHENTICATED = "unauthenticated"
    MISSING_ID = "missing_id"
    BACKEND_ERROR = "backend_error"


# Messages affichables par défaut pour chaque raison
DEFAULT_MESSAGES = {
    FailureReason.UNAUTHENTICATED: "You must be logged in.",
    FailureReason.MISSING_ID: "This movie has not been saved yet.",
    FailureReason.BACKEND_ERROR: "The request could not be completed.",
}


@dataclass(frozen=True)
class GatewayResult(Generic[T]):
    """
    Résultat d'une opération du gateway.

    Attributs :
        value : Valeur retournée en cas de succès (None en cas d'échec)
        failure : Raison de l'échec, None en cas de succès
        message : Message détaillé de l'échec (vide en cas de succès)
    """

    value: Optional[T] = None
    failure: Optional[FailureReason] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        """Vérifie si l'opération a réussi."""
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "GatewayResult[T]":
        """Construit un résultat de succès."""
        return cls(value=value)

    @classmethod
    def fail(cls, reason: FailureReason, message: str = "") -> "GatewayResult[T]":
        """Construit un résultat d'échec, avec le message par défaut si absent."""
        return cls(failure=reason, message=message or DEFAULT_MESSAGES[reason])

    def unwrap(self) -> T:
        """
        Retourne la valeur ou lève une erreur si l'opération a échoué.

        Raises:
            ValueError: Si le résultat est un échec
        """
        if self.failure is not None:
            raise ValueError(f"{self.failure.value}: {self.message}")
        return self.value
