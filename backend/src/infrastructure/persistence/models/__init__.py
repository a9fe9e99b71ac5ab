"""ORM Models Package"""

from .document import DocumentModel

__all__ = [
    "DocumentModel",
]
