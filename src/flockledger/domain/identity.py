"""Id allocation for state collections."""

from collections.abc import Mapping
from typing import Any


def next_id(collection: Mapping[int, Any]) -> int:
    """Return the id for the next record in ``collection``.

    Ids are ``max + 1`` of the ids currently present, starting at 1. No
    counter is kept outside the collection itself.
    """
    if not collection:
        return 1
    return max(collection) + 1
