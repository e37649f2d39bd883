"""
Logging de MovieShelf via loguru.

Deux sorties :
- console (stderr) : niveau choisi par -v/-q, prefixe par le backend actif
- fichier JSON avec rotation : tout le niveau DEBUG du paquet movieshelf,
  y compris les appels Firestore/Identity Toolkit et les livraisons du store

Le backend ("local" ou "firebase") est place dans extra pour que chaque
entree du fichier indique contre quelle base elle a ete produite.
"""

import sys
from pathlib import Path

from loguru import logger

APP_LOGGER_NAME = "movieshelf"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[backend]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path = Path("logs/movieshelf.log"),
    backend: str = "local",
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """
    Installe les handlers console et fichier.

    Args:
        log_level: Niveau minimum affiche sur la console
        log_file: Fichier JSON (le repertoire parent est cree si besoin)
        backend: Backend actif, expose dans extra["backend"]
        rotation_size: Taille declenchant la rotation du fichier
        retention_count: Nombre de fichiers archives conserves
    """
    logger.remove()
    logger.configure(extra={"backend": backend})

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    # Le fichier ne garde que les logs du paquet (pas ceux des tests ou scripts)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        filter=APP_LOGGER_NAME,
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), backend=backend)


def verbosity_to_level(verbose: int, quiet: bool, default: str = "WARNING") -> str:
    """Convertit les options -v/-q de la CLI en niveau de log console."""
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return default
