"""SQLite implementation of counters and the atomic finalize write."""

from collections.abc import Callable

from pydantic import PositiveInt, TypeAdapter

from ledgerbook.config import get_logger
from ledgerbook.core.entities.document import Counters, FinalizedDocument
from ledgerbook.core.entities.product import Product
from ledgerbook.core.interfaces.ledger_store import ILedgerStore
from ledgerbook.infrastructure.storage.sqlite.document_store import DOCUMENT_LIST
from ledgerbook.infrastructure.storage.sqlite.inventory_store import PRODUCT_LIST
from ledgerbook.infrastructure.storage.sqlite.state_store import (
    DOCUMENTS_KEY,
    ESTIMATE_COUNTER_KEY,
    INVOICE_COUNTER_KEY,
    PRODUCTS_KEY,
    SQLiteStateStore,
    StateTransaction,
    dump_records,
)

logger = get_logger(__name__)

COUNTER = TypeAdapter(PositiveInt)


class SQLiteLedgerStore(ILedgerStore):
    """Counters under ``invoice-counter``/``estimate-counter`` plus finalize."""

    def __init__(self, state: SQLiteStateStore | None = None):
        self._state = state or SQLiteStateStore()

    async def get_counters(self) -> Counters:
        """Get the next number for each document type (1 when never saved)."""
        return Counters(
            invoice=await self._state.load(INVOICE_COUNTER_KEY, COUNTER, 1),
            estimate=await self._state.load(ESTIMATE_COUNTER_KEY, COUNTER, 1),
        )

    async def finalize(
        self,
        build: Callable[[list[Product], Counters], FinalizedDocument],
    ) -> FinalizedDocument:
        """Build and persist a document inside one serialized transaction."""
        async with self._state.mutation() as tx:
            products = await tx.read(PRODUCTS_KEY, PRODUCT_LIST, [])
            counters = await self._read_counters(tx)

            result = build(products, counters)

            documents = await tx.read(DOCUMENTS_KEY, DOCUMENT_LIST, [])
            await tx.write(PRODUCTS_KEY, dump_records(result.products))
            await tx.write(
                DOCUMENTS_KEY, dump_records([result.document, *documents])
            )
            await tx.write(INVOICE_COUNTER_KEY, result.counters.invoice)
            await tx.write(ESTIMATE_COUNTER_KEY, result.counters.estimate)

        logger.info(
            "document_recorded",
            document_id=result.document.id,
            number=result.document.number,
            type=result.document.type.value,
        )
        return result

    @staticmethod
    async def _read_counters(tx: StateTransaction) -> Counters:
        return Counters(
            invoice=await tx.read(INVOICE_COUNTER_KEY, COUNTER, 1),
            estimate=await tx.read(ESTIMATE_COUNTER_KEY, COUNTER, 1),
        )
