"""
Typed Document

A JSON object with typed, keyed accessors. Resources such as
SignatureRequest wrap one of these and only supply the key names
and the types they expect back.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class TypedDocument:
    """
    Keyed access over a single JSON object.

    Usage:
        doc = TypedDocument(response_json, 'signature_request')
        doc.get_string('signature_request_id')
        doc.get_list(Signature, 'signatures')
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, key: Optional[str] = None):
        """
        Args:
            data: Parsed JSON object, or None for an empty document
            key: Optional wrapper key; when present in data, the
                 nested object under it becomes the document
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        if key is not None and key in data:
            data = data[key]
            if not isinstance(data, dict):
                raise ValidationError(
                    f"Expected a JSON object under '{key}', got {type(data).__name__}",
                    field=key
                )

        self._data = data

    def has(self, key: str) -> bool:
        """Check that the key exists and is not null."""
        return self._data.get(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_string(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        if value is None:
            return None
        return str(value)

    def get_boolean(self, key: str) -> bool:
        """Absent keys read as False."""
        return bool(self._data.get(key, False))

    def get_integer(self, key: str) -> Optional[int]:
        value = self._data.get(key)
        if value is None:
            return None
        return int(value)

    def get_list(self, item_type: Type[T], key: str) -> List[T]:
        """
        Get the list stored under key with each item converted.

        Records are built with item_type.from_dict(), anything else
        by calling item_type on the raw value. Missing keys give a
        new empty list.
        """
        raw = self._data.get(key)
        if not raw:
            return []

        if hasattr(item_type, 'from_dict'):
            return [item_type.from_dict(item) for item in raw]
        return [item_type(item) for item in raw]

    def set(self, key: str, value: Any) -> None:
        """Store a value. Setting None removes the key."""
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def add(self, key: str, value: Any) -> None:
        """Append a value to the list stored under key."""
        items = self._data.get(key)
        if items is None:
            items = []
            self._data[key] = items
        items.append(value)
        logger.debug(f"Added value to '{key}' ({len(items)} item(s))")

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)
