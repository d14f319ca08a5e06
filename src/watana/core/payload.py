"""
Operation payloads and mandatory-field validation.

An :class:`OperationPayload` is the ordered key/value body of one request.
It always ends up carrying the operation name under ``"operacion"``; once
that key is set it can be neither changed nor removed.
"""

from __future__ import annotations

__all__ = ["OperationPayload", "require_fields", "validate_operation"]

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from ..constants import FIELD_OPERATION, MANDATORY_FIELDS
from ..errors import ValidationError

_logger = logging.getLogger(__name__)


class OperationPayload(MutableMapping[str, Any]):
    """Ordered request body for a single Watana operation.

    Values must be JSON-serializable (str, int, float, bool, None, lists,
    and nested mappings).
    """

    def __init__(self, operation: str | None = None, **fields: Any) -> None:
        self._data: dict[str, Any] = {}
        if operation is not None:
            self.operation = operation
        for key, value in fields.items():
            self[key] = value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> OperationPayload:
        """Copy a plain mapping (which may already name its operation).

        An ``operacion`` key holding None counts as unset and is dropped.
        """
        if isinstance(data, OperationPayload):
            return data
        payload = cls()
        for key, value in data.items():
            if key == FIELD_OPERATION and value is None:
                continue
            payload[key] = value
        return payload

    # ── operation name ──

    @property
    def operation(self) -> str | None:
        value = self._data.get(FIELD_OPERATION)
        return None if value is None else str(value)

    @operation.setter
    def operation(self, value: str) -> None:
        self[FIELD_OPERATION] = value

    def ensure_operation(self, operation: str) -> str:
        """Set the operation name unless one is already present.

        Returns:
            The operation name the payload carries afterwards.
        """
        if self.operation is None:
            self.operation = operation
        elif self.operation != operation:
            _logger.debug(
                "Payload already names operation %s; keeping it over %s",
                self.operation,
                operation,
            )
        return self.operation or operation

    # ── MutableMapping ──

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key == FIELD_OPERATION:
            if not value or not isinstance(value, str):
                raise ValidationError(
                    "Operation name must be a non-empty string", field=FIELD_OPERATION
                )
            current = self._data.get(FIELD_OPERATION)
            if current is not None and current != value:
                raise ValidationError(
                    f"Operation name is already set to {current!r}", field=FIELD_OPERATION
                )
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        if key == FIELD_OPERATION and key in self._data:
            raise ValidationError("Operation name cannot be removed", field=FIELD_OPERATION)
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        keys = ", ".join(self._data)
        return f"OperationPayload({self.operation!r}, keys=[{keys}])"

    # ── helpers ──

    def merge(self, extra: Mapping[str, Any] | None, *, reserved: tuple[str, ...] = ()) -> None:
        """Merge caller-supplied options after mandatory fields are populated.

        Args:
            extra: Free-form options to add (may be None).
            reserved: Keys the options may not overwrite, in addition to
                the operation name.

        Raises:
            ValidationError: If *extra* tries to overwrite a reserved key.
        """
        if not extra:
            return
        protected = {FIELD_OPERATION, *reserved}
        for key, value in extra.items():
            if key in protected and key in self._data:
                raise ValidationError(
                    f"Option {key!r} would overwrite a reserved field", field=key
                )
            self[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy as a plain dict (key order preserved)."""
        return dict(self._data)


def require_fields(payload: Mapping[str, Any], *names: str) -> None:
    """
    Check that every name in *names* is present with a non-None value.

    Checks run in the given order and stop at the first failure.

    Raises:
        ValidationError: Naming the first missing field.
    """
    for name in names:
        if payload.get(name) is None:
            _logger.error("Mandatory field missing: %s", name)
            raise ValidationError(f"Field {name!r} is mandatory", field=name)


def validate_operation(operation: str, payload: Mapping[str, Any]) -> None:
    """Check the mandatory fields declared for *operation*."""
    require_fields(payload, *MANDATORY_FIELDS.get(operation, ()))
