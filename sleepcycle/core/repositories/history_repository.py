# sleepcycle/core/repositories/history_repository.py
import json
import logging
from typing import Dict, Iterable, List, Optional, Protocol

from sleepcycle.core.models.data_models import NotificationSettings, SleepRecord, UserPreferences
from sleepcycle.utils.constants import default_values, storage_keys
from sleepcycle.utils.data_validation import PayloadValidator

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistence collaborator storing strings by key"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryStore:
    """Dict-backed KeyValueStore for embedding and tests"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def remove(self, key):
        self.data.pop(key, None)


class HistoryRepository:
    """Data access layer for saved sleep records and user settings"""

    def __init__(self, store: KeyValueStore, error_handling='filter',
                 max_history: Optional[int] = default_values['max_history']):
        if max_history is not None and max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {max_history}")
        self.store = store
        self.error_handling = error_handling
        self.max_history = max_history
        self.keys = dict(storage_keys)

    def load_history(self) -> List[SleepRecord]:
        """Load saved records in the order they were saved"""
        raw = self.store.get(self.keys['history'])
        items = PayloadValidator.decode(raw, self.error_handling)
        records = PayloadValidator.validate_list(items, SleepRecord, self.error_handling)
        logger.debug(f"Loaded {len(records)} sleep records")
        return records

    def save_history(self, records: Iterable[SleepRecord]):
        """Persist records in order, keeping only the most recent `max_history`"""
        records = list(records)
        if self.max_history is not None and len(records) > self.max_history:
            logger.debug(f"Dropping {len(records) - self.max_history} oldest records from saved history")
            records = records[-self.max_history:]
        payload = [record.model_dump(mode='json') for record in records]
        self.store.set(self.keys['history'], json.dumps(payload))

    def append_record(self, record: SleepRecord) -> SleepRecord:
        records = self.load_history()
        records.append(record)
        self.save_history(records)
        return record

    def clear_history(self):
        self.store.remove(self.keys['history'])

    def get_preferences(self) -> UserPreferences:
        data = PayloadValidator.decode(self.store.get(self.keys['preferences']), self.error_handling)
        return PayloadValidator.validate_object(data, UserPreferences, UserPreferences(), self.error_handling)

    def save_preferences(self, preferences: UserPreferences):
        self.store.set(self.keys['preferences'], preferences.model_dump_json())

    def get_notification_settings(self) -> NotificationSettings:
        data = PayloadValidator.decode(self.store.get(self.keys['notifications']), self.error_handling)
        return PayloadValidator.validate_object(data, NotificationSettings, NotificationSettings(), self.error_handling)

    def save_notification_settings(self, settings: NotificationSettings):
        self.store.set(self.keys['notifications'], settings.model_dump_json())

    def clear_all(self):
        """Remove every key this repository owns"""
        for key in self.keys.values():
            self.store.remove(key)
