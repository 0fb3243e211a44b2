"""State container shared by the domain services."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

from flockledger.domain.entities import State
from flockledger.domain.errors import StorageError

if TYPE_CHECKING:
    from flockledger.database.base import StateStore

logger = logging.getLogger(__name__)


class Book:
    """Owns the current State and persists it after every change.

    Mutations are pure functions from ``State`` to ``(State, *results)``.
    The new state replaces the old one only once the function has returned,
    so a failing mutation leaves the book untouched. If the store cannot be
    written the book keeps working in memory for the rest of the session.
    """

    def __init__(self, store: Optional["StateStore"] = None, strict_references: bool = False):
        """Initialize the book.

        Args:
            store: State store to load from and save to, or None for an
                in-memory book
            strict_references: If True, voucher derivation refuses missing
                customers and farms instead of using placeholder names
        """
        self.store = store
        self.strict_references = strict_references
        self.persistent = store is not None
        self._state = store.load() if store is not None else State.default()

    @property
    def state(self) -> State:
        return self._state

    def apply(self, mutation: Callable[[State], tuple], *args: Any, **kwargs: Any) -> Any:
        """Run ``mutation(state, *args, **kwargs)`` and commit its new state.

        Returns:
            The mutation's results after the state: a single value when there
            is one, otherwise a tuple
        """
        new_state, *results = mutation(self._state, *args, **kwargs)
        self.replace_state(new_state)
        logger.debug("Applied %s", getattr(mutation, "__name__", mutation))
        return results[0] if len(results) == 1 else tuple(results)

    def replace_state(self, state: State) -> None:
        """Swap in ``state`` wholesale and persist it."""
        self._state = state
        self.save()

    def save(self) -> None:
        if not self.persistent:
            return
        try:
            self.store.save(self._state)
        except StorageError as e:
            logger.error("%s; continuing without saving for this session", e)
            self.persistent = False
