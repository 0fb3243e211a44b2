"""Abstract state store interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from flockledger.domain.entities import State


class StateStore(ABC):
    """Durable home for the whole book state.

    The state is always read and written as one snapshot. Implementations
    must make ``save`` atomic: a reader sees either the previous snapshot
    or the new one, never a mix.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create tables if needed.

        Raises:
            StorageError: If the store cannot be opened or created
        """
        pass

    @abstractmethod
    def load(self) -> State:
        """Load the persisted state.

        Never raises: an absent or unreadable store yields
        ``State.default()``, and an empty account list yields the seed
        accounts.
        """
        pass

    @abstractmethod
    def save(self, state: State) -> None:
        """Replace the persisted state with ``state``.

        Raises:
            StorageError: If the write failed; the previous snapshot is kept
        """
        pass
