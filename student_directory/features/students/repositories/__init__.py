"""Student directory repositories package."""

from .document_repository import DocumentDirectoryRepository
from .protocols import DirectoryRepository

__all__ = [
    "DirectoryRepository",
    "DocumentDirectoryRepository",
]
