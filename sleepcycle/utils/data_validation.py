# sleepcycle/utils/data_validation.py

from pydantic import BaseModel, ValidationError
from typing import Any, List, Optional, Type
import json
import logging

logger = logging.getLogger(__name__)

ERROR_HANDLING_MODES = ('warn', 'raise', 'filter')


class PayloadValidator:
    """Utility class for validating JSON payloads read from the key-value store"""

    @staticmethod
    def decode(raw: Optional[str], error_handling='filter') -> Any:
        """
        Decode a JSON string

        Args:
            raw: JSON text, or None when the key is missing
            error_handling: 'warn', 'raise', or 'filter'

        Returns:
            Decoded value, or None when the key is missing or the text is not JSON
            (unless error_handling='raise')
        """
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            if error_handling == 'raise':
                raise
            logger.error(f"Error decoding stored JSON: {e}")
            return None

    @staticmethod
    def validate_list(items: Any, model_class: Type[BaseModel], error_handling='filter') -> List[BaseModel]:
        """
        Validate a list of plain dicts against a Pydantic model

        Args:
            items: Decoded JSON list
            model_class: Pydantic model class to validate against
            error_handling: 'warn', 'raise', or 'filter'

        Returns:
            List of validated model instances. With 'filter' invalid items are
            dropped; with 'warn' they are dropped as well but logged at warning
            level with the full error; with 'raise' the first error propagates.
        """
        if error_handling not in ERROR_HANDLING_MODES:
            raise ValueError(f"Invalid error handling mode. Must be one of: {', '.join(ERROR_HANDLING_MODES)}")

        if items is None:
            return []
        if not isinstance(items, list):
            if error_handling == 'raise':
                raise ValueError(f"Expected a JSON array, got {type(items).__name__}")
            logger.error(f"Expected a JSON array, got {type(items).__name__}")
            return []

        if error_handling == 'raise':
            # Validate all items, raise on first error
            return [model_class.model_validate(item) for item in items]

        valid_items = []
        for i, item in enumerate(items):
            try:
                valid_items.append(model_class.model_validate(item))
            except ValidationError as e:
                if error_handling == 'warn':
                    logger.warning(f"Validation error in item {i}: {e}")
                else:
                    logger.warning(f"Dropping invalid item {i} ({e.error_count()} errors)")
        return valid_items

    @staticmethod
    def validate_object(data: Any, model_class: Type[BaseModel], default: BaseModel, error_handling='filter') -> BaseModel:
        """Validate a single JSON object, falling back to `default` when missing or invalid"""
        if data is None:
            return default
        try:
            return model_class.model_validate(data)
        except ValidationError as e:
            if error_handling == 'raise':
                raise
            logger.warning(f"Validation error in stored {model_class.__name__}: {e}")
            return default
