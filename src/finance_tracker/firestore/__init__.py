from .client import FirestoreClient, FirestoreError
from .models import RawTransaction

__all__ = [
    "FirestoreClient",
    "FirestoreError",
    "RawTransaction",
]
