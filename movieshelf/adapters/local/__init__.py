"""
Backend local : base documentaire et comptes dans SQLite (SQLModel).
"""

from movieshelf.adapters.local.auth_provider import LocalAuthProvider
from movieshelf.adapters.local.document_store import SQLiteDocumentStore

__all__ = [
    "LocalAuthProvider",
    "SQLiteDocumentStore",
]
