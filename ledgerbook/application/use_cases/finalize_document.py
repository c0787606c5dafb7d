"""
Finalize Document Use Case.

Turns a draft into an invoice or estimate. The engine runs inside the
ledger store's write transaction, against the inventory and counters read
in that same transaction, so two saves never share a number and a
rejected draft writes nothing.
"""

from dataclasses import dataclass, field

from ledgerbook.application.dto.requests import CreateDocumentRequest
from ledgerbook.application.dto.responses import (
    CreateDocumentResponse,
    document_response,
    line_item_result_response,
)
from ledgerbook.application.use_cases.draft_session import DraftSession
from ledgerbook.config import get_logger, get_settings
from ledgerbook.config.settings import LedgerSettings
from ledgerbook.core.entities.document import (
    Counters,
    Document,
    DocumentType,
    Draft,
    FinalizedDocument,
)
from ledgerbook.core.entities.product import Product
from ledgerbook.core.interfaces.ledger_store import ILedgerStore
from ledgerbook.core.services.ledger import (
    LedgerRules,
    LineItemResult,
    add_line_item,
    finalize_document,
)

logger = get_logger(__name__)


def rules_from_settings(settings: LedgerSettings) -> LedgerRules:
    return LedgerRules(
        gst_rate=settings.gst_rate,
        invoice_prefix=settings.invoice_prefix,
        estimate_prefix=settings.estimate_prefix,
        number_width=settings.number_width,
    )


@dataclass
class FinalizeDocumentResult:
    """Result of finalizing a document."""

    document: Document
    stock_updated: bool
    skipped_items: list[LineItemResult] = field(default_factory=list)


class FinalizeDocumentUseCase:
    """
    Use case for saving invoices and estimates.

    Flow:
    1. Open the ledger write transaction
    2. Validate the draft, number it and compute totals
    3. Decrement stock (invoices only)
    4. Persist document, inventory and counters together
    """

    def __init__(
        self,
        ledger_store: ILedgerStore | None = None,
        rules: LedgerRules | None = None,
    ):
        self._ledger_store = ledger_store
        self._rules = rules or rules_from_settings(get_settings().ledger)

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from ledgerbook.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, draft: Draft, doc_type: DocumentType) -> FinalizeDocumentResult:
        """
        Finalize a composed draft.

        Raises:
            DraftValidationError: If the client name or the line items are missing.
        """
        logger.info(
            "finalize_document_started",
            type=doc_type.value,
            items=len(draft.line_items),
        )

        def build(products: list[Product], counters: Counters) -> FinalizedDocument:
            return finalize_document(
                draft, doc_type, counters, products, rules=self._rules
            )

        store = await self._get_ledger_store()
        finalized = await store.finalize(build)

        return self._complete(finalized, [])

    async def save_draft(
        self, session: DraftSession, doc_type: DocumentType
    ) -> FinalizeDocumentResult:
        """Finalize the session's draft and clear it once the save succeeded.

        Edits made to the session while the save was in flight are kept.
        """
        draft = session.draft
        result = await self.execute(draft, doc_type)
        if session.draft == draft:
            session.clear()
        else:
            logger.warning(
                "draft_changed_during_save",
                document_id=result.document.id,
            )
        return result

    async def create(self, request: CreateDocumentRequest) -> FinalizeDocumentResult:
        """Compose and finalize a document in one step.

        Items are resolved against the inventory read inside the write
        transaction, using the same rules as adding to a draft.
        """
        logger.info(
            "finalize_document_started",
            type=request.type.value,
            items=len(request.items),
        )
        skipped: list[LineItemResult] = []

        def build(products: list[Product], counters: Counters) -> FinalizedDocument:
            skipped.clear()
            draft = Draft(
                client_name=request.client_name,
                client_address=request.client_address,
            )
            for requested in request.items:
                result = add_line_item(
                    draft, products, requested.product_id, requested.quantity
                )
                if result.skipped:
                    skipped.append(result)
            return finalize_document(
                draft, request.type, counters, products, rules=self._rules
            )

        store = await self._get_ledger_store()
        finalized = await store.finalize(build)

        return self._complete(finalized, skipped)

    @staticmethod
    def _complete(
        finalized: FinalizedDocument, skipped: list[LineItemResult]
    ) -> FinalizeDocumentResult:
        document = finalized.document
        stock_updated = document.type is DocumentType.INVOICE

        logger.info(
            "document_finalized",
            document_id=document.id,
            number=document.number,
            total=document.total,
            stock_updated=stock_updated,
            skipped_items=len(skipped),
        )
        return FinalizeDocumentResult(
            document=document,
            stock_updated=stock_updated,
            skipped_items=skipped,
        )

    @staticmethod
    def to_response(result: FinalizeDocumentResult) -> CreateDocumentResponse:
        """Convert result to API response."""
        return CreateDocumentResponse(
            document=document_response(result.document),
            stock_updated=result.stock_updated,
            skipped_items=[line_item_result_response(r) for r in result.skipped_items],
        )
