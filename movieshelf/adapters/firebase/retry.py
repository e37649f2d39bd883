"""
Mecanisme de retry avec backoff exponentiel pour les API Firebase.

Gere automatiquement les erreurs 429 (quota) et 503 (service indisponible)
en relancant les requetes avec un delai croissant et du jitter aleatoire.

Usage:
    response = await request_with_retry(client, "POST", url, json=payload)
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

# Codes HTTP consideres comme transitoires
RETRYABLE_STATUS_CODES = (429, 503)


class TransientBackendError(Exception):
    """
    Exception levee quand le backend repond 429 ou 503.

    Attributes:
        status_code: Code HTTP recu
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, status_code: int, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(f"Backend unavailable ({status_code}). Retry after: {retry_after}s")


def with_retry(max_attempts: int = 5, max_wait: int = 30):
    """
    Decorateur pour relancer sur TransientBackendError avec backoff exponentiel.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 30)
    """
    return retry(
        retry=retry_if_exception_type(TransientBackendError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429/503.

    Les autres reponses (succes ou erreurs 4xx/5xx) sont retournees telles
    quelles : l'appelant interprete le corps d'erreur propre a chaque API.

    Raises:
        TransientBackendError: Si 429/503 apres epuisement des tentatives
        httpx.HTTPError: Pour les erreurs de transport (connexion, timeout)
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            retry_after_header = response.headers.get("Retry-After")
            retry_after = (
                int(retry_after_header)
                if retry_after_header and retry_after_header.isdigit()
                else None
            )
            raise TransientBackendError(response.status_code, retry_after)
        return response

    return await _do_request()


def error_message(response: httpx.Response) -> str:
    """
    Extrait le message d'erreur d'une reponse Google API.

    Format attendu: {"error": {"code": 400, "message": "...", "status": "..."}}
    """
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, list) and payload:
        payload = payload[0]
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"HTTP {response.status_code}"
