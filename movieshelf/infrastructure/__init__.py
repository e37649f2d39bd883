"""
Couche infrastructure de MovieShelf.

- persistence/ : Stockage SQLite avec SQLModel pour le backend local
- session_store.py : Persistance de la session authentifiee entre deux commandes
"""
