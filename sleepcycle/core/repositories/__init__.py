"""
Repositories for persisting sleep history and settings through a key-value store.
"""

from sleepcycle.core.repositories.history_repository import HistoryRepository, InMemoryStore, KeyValueStore

__all__ = ['HistoryRepository', 'InMemoryStore', 'KeyValueStore']
