"""Utility for resolving customer, farm and account names to IDs."""

from collections.abc import Mapping
from typing import Any


def resolve_reference(records: Mapping[int, Any], value: str | int, label: str) -> int:
    """Resolve a name or ID to the ID of a record in ``records``.

    Args:
        records: Collection keyed by ID; values must have a ``name``
        value: Record name (str) or ID (int or string representation of int)
        label: Human-readable record kind for error messages, e.g. "Customer"

    Returns:
        Record ID

    Raises:
        ValueError: If nothing matches, or a name matches several records
    """
    if isinstance(value, int):
        if value not in records:
            raise ValueError(f"{label} ID {value} not found")
        return value

    text = value.strip()
    if text.isdigit():
        record_id = int(text)
        if record_id not in records:
            raise ValueError(f"{label} ID {record_id} not found")
        return record_id

    matches = [record_id for record_id, record in records.items() if record.name == text]
    if not matches:
        lowered = text.lower()
        matches = [
            record_id for record_id, record in records.items() if record.name.lower() == lowered
        ]

    if not matches:
        raise ValueError(f"{label} '{text}' not found")
    if len(matches) > 1:
        ids = ", ".join(str(m) for m in matches)
        raise ValueError(f"{label} name '{text}' is ambiguous (IDs {ids}); use the ID instead")
    return matches[0]
