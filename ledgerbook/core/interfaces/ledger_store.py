"""Abstract interface for numbering counters and atomic finalization."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from ledgerbook.core.entities.document import Counters, FinalizedDocument
from ledgerbook.core.entities.product import Product


class ILedgerStore(ABC):
    """Interface for the counters plus the all-or-nothing finalize write."""

    @abstractmethod
    async def get_counters(self) -> Counters:
        """Get the next number for each document type."""
        pass

    @abstractmethod
    async def finalize(
        self,
        build: Callable[[list[Product], Counters], FinalizedDocument],
    ) -> FinalizedDocument:
        """Run *build* against current state and persist its outcome atomically.

        *build* receives the current products and counters. The new document,
        the updated products and the advanced counters are written together;
        nothing is written if *build* raises.
        """
        pass
