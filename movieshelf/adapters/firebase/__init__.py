"""
Backend Firebase : Authentication et Cloud Firestore via leurs API REST (httpx).
"""

from movieshelf.adapters.firebase.auth_client import FirebaseAuthClient
from movieshelf.adapters.firebase.firestore_client import FirestoreDocumentStore

__all__ = [
    "FirebaseAuthClient",
    "FirestoreDocumentStore",
]
