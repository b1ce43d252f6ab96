"""
Storage Package

Abstract audit storage interface plus an in-memory implementation.
"""

from journal_balance.storage.interface import (
    AuditStorageInterface,
    StorageError,
    StorageFullError,
)
from journal_balance.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "StorageError",
    "StorageFullError",
    # In-memory implementation
    "InMemoryAuditStorage",
]
