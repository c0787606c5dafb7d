"""
Dependency injection container for FastAPI.

Provides service instances to route handlers.
"""

from ledgerbook.application.commands import CommandDispatcher
from ledgerbook.application.use_cases import (
    AddProductUseCase,
    DeleteProductUseCase,
    DraftSession,
    FinalizeDocumentUseCase,
    GenerateDocumentPdfUseCase,
    UpdateProductUseCase,
    get_draft_session,
)
from ledgerbook.infrastructure.storage.sqlite import (
    SQLiteDocumentStore,
    SQLiteInventoryStore,
    get_document_store,
    get_inventory_store,
)


# Store dependencies
async def get_product_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_doc_store() -> SQLiteDocumentStore:
    """Get document store."""
    return await get_document_store()


# Draft session
def get_session() -> DraftSession:
    """Get the process-wide draft session."""
    return get_draft_session()


# Use case dependencies
def get_add_product_use_case() -> AddProductUseCase:
    """Get add product use case."""
    return AddProductUseCase()


def get_update_product_use_case() -> UpdateProductUseCase:
    """Get update product use case."""
    return UpdateProductUseCase()


def get_delete_product_use_case() -> DeleteProductUseCase:
    """Get delete product use case."""
    return DeleteProductUseCase()


def get_finalize_document_use_case() -> FinalizeDocumentUseCase:
    """Get finalize document use case."""
    return FinalizeDocumentUseCase()


def get_document_pdf_use_case() -> GenerateDocumentPdfUseCase:
    """Get document PDF use case."""
    return GenerateDocumentPdfUseCase()


async def get_command_dispatcher() -> CommandDispatcher:
    """Get command dispatcher bound to the live stores and draft."""
    return CommandDispatcher(
        session=get_draft_session(),
        inventory_store=await get_inventory_store(),
        document_store=await get_document_store(),
        finalize_use_case=FinalizeDocumentUseCase(),
    )
