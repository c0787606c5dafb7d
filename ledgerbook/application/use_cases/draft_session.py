"""
Draft Session.

Holds the single in-progress document (client details plus line items)
for this process. The draft lives in memory only: it is lost on restart
and cleared after it is saved as a document.
"""

from ledgerbook.config import get_logger, get_settings
from ledgerbook.core.entities.document import Draft, Totals
from ledgerbook.core.entities.product import Product
from ledgerbook.core.services.ledger import (
    LineItemResult,
    add_line_item,
    compute_totals,
    remove_line_item,
)

logger = get_logger(__name__)


class DraftSession:
    """In-memory creator state."""

    def __init__(self, gst_rate: float | None = None):
        self._gst_rate = gst_rate if gst_rate is not None else get_settings().ledger.gst_rate
        self._draft = Draft()

    @property
    def draft(self) -> Draft:
        """Copy of the current draft; edits go through the session methods."""
        return self._draft.model_copy(deep=True)

    @property
    def totals(self) -> Totals:
        return compute_totals(self._draft.line_items, self._gst_rate)

    def set_client(self, client_name: str, client_address: str = "") -> Draft:
        self._draft.client_name = client_name
        self._draft.client_address = client_address
        return self.draft

    def add_item(
        self, products: list[Product], product_id: str, quantity: int = 1
    ) -> LineItemResult:
        """Add a product from the live inventory to the draft."""
        result = add_line_item(self._draft, products, product_id, quantity)

        if result.skipped:
            logger.info(
                "draft_item_skipped",
                product_id=product_id,
                quantity=quantity,
                outcome=result.outcome.value,
            )
        elif result.exceeds_stock:
            logger.warning(
                "draft_item_exceeds_stock",
                product_id=product_id,
                quantity=result.item.quantity if result.item else quantity,
            )
        return result

    def remove_item(self, product_id: str) -> bool:
        return remove_line_item(self._draft, product_id)

    def clear(self) -> None:
        self._draft = Draft()
        logger.debug("draft_cleared")


# Global session instance
_session: DraftSession | None = None


def get_draft_session() -> DraftSession:
    """Get or create the process-wide draft session."""
    global _session
    if _session is None:
        _session = DraftSession()
    return _session


def reset_draft_session() -> None:
    """Reset the draft session (for testing)."""
    global _session
    _session = None
