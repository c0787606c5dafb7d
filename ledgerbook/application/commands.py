"""
Typed UI commands.

Every user action is one variant of a closed union discriminated by
``action``. The dispatcher routes each variant to exactly one handler and
answers with a full workspace snapshot for the client to re-render.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ledgerbook.application.dto.requests import CreateProductRequest, UpdateProductRequest
from ledgerbook.application.dto.responses import (
    WorkspaceSnapshot,
    document_response,
    draft_response,
    product_response,
)
from ledgerbook.application.use_cases.draft_session import DraftSession
from ledgerbook.application.use_cases.finalize_document import FinalizeDocumentUseCase
from ledgerbook.application.use_cases.manage_products import (
    AddProductUseCase,
    DeleteProductUseCase,
    UpdateProductUseCase,
)
from ledgerbook.config import get_logger
from ledgerbook.core.entities.document import Document, DocumentType
from ledgerbook.core.exceptions import DocumentNotFoundError, DraftValidationError
from ledgerbook.core.interfaces.document_store import IDocumentStore
from ledgerbook.core.interfaces.inventory_store import IInventoryStore
from ledgerbook.core.services.ledger import LineItemOutcome

logger = get_logger(__name__)

DRAFT_INCOMPLETE_NOTICE = "Please fill in client name and add at least one item."


class AddProductCommand(BaseModel):
    action: Literal["add_product"] = "add_product"
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    stock: int = Field(..., ge=0)


class UpdateProductCommand(BaseModel):
    action: Literal["update_product"] = "update_product"
    id: str
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    stock: int = Field(..., ge=0)


class DeleteProductCommand(BaseModel):
    action: Literal["delete_product"] = "delete_product"
    id: str


class SetClientCommand(BaseModel):
    action: Literal["set_client"] = "set_client"
    client_name: str = ""
    client_address: str = ""


class AddLineItemCommand(BaseModel):
    action: Literal["add_line_item"] = "add_line_item"
    product_id: str
    quantity: int = 1


class RemoveLineItemCommand(BaseModel):
    action: Literal["remove_line_item"] = "remove_line_item"
    product_id: str


class ClearDraftCommand(BaseModel):
    action: Literal["clear_draft"] = "clear_draft"


class SaveDocumentCommand(BaseModel):
    action: Literal["save_document"] = "save_document"
    type: DocumentType


class ViewDocumentCommand(BaseModel):
    action: Literal["view_document"] = "view_document"
    id: str


Command = Annotated[
    Union[
        AddProductCommand,
        UpdateProductCommand,
        DeleteProductCommand,
        SetClientCommand,
        AddLineItemCommand,
        RemoveLineItemCommand,
        ClearDraftCommand,
        SaveDocumentCommand,
        ViewDocumentCommand,
    ],
    Field(discriminator="action"),
]


class CommandRequest(BaseModel):
    """Envelope for ``POST /api/commands``."""

    command: Command


@dataclass
class CommandOutcome:
    """What a handler wants shown besides the refreshed state."""

    notice: str | None = None
    selected_document: Document | None = None


class CommandDispatcher:
    """Routes commands to handlers and builds the resulting snapshot."""

    def __init__(
        self,
        session: DraftSession,
        inventory_store: IInventoryStore,
        document_store: IDocumentStore,
        finalize_use_case: FinalizeDocumentUseCase | None = None,
    ):
        self._session = session
        self._inventory_store = inventory_store
        self._document_store = document_store
        self._finalize = finalize_use_case or FinalizeDocumentUseCase()
        self._handlers: dict[type[BaseModel], Callable[..., Awaitable[CommandOutcome]]] = {
            AddProductCommand: self._add_product,
            UpdateProductCommand: self._update_product,
            DeleteProductCommand: self._delete_product,
            SetClientCommand: self._set_client,
            AddLineItemCommand: self._add_line_item,
            RemoveLineItemCommand: self._remove_line_item,
            ClearDraftCommand: self._clear_draft,
            SaveDocumentCommand: self._save_document,
            ViewDocumentCommand: self._view_document,
        }

    async def dispatch(self, command: BaseModel) -> WorkspaceSnapshot:
        """Apply one command and return the workspace after it."""
        handler = self._handlers[type(command)]
        logger.info("command_dispatched", action=getattr(command, "action", None))
        outcome = await handler(command)
        return await self.snapshot(outcome)

    async def snapshot(self, outcome: CommandOutcome | None = None) -> WorkspaceSnapshot:
        outcome = outcome or CommandOutcome()
        products = await self._inventory_store.list_products()
        documents = await self._document_store.list_documents()
        return WorkspaceSnapshot(
            products=[product_response(p) for p in products],
            available_products=[product_response(p) for p in products if p.available],
            documents=[document_response(d) for d in documents],
            draft=draft_response(self._session.draft, self._session.totals),
            selected_document=(
                document_response(outcome.selected_document)
                if outcome.selected_document
                else None
            ),
            notice=outcome.notice,
        )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _add_product(self, command: AddProductCommand) -> CommandOutcome:
        await AddProductUseCase(self._inventory_store).execute(
            CreateProductRequest(name=command.name, price=command.price, stock=command.stock)
        )
        return CommandOutcome()

    async def _update_product(self, command: UpdateProductCommand) -> CommandOutcome:
        await UpdateProductUseCase(self._inventory_store).execute(
            command.id,
            UpdateProductRequest(name=command.name, price=command.price, stock=command.stock),
        )
        return CommandOutcome()

    async def _delete_product(self, command: DeleteProductCommand) -> CommandOutcome:
        await DeleteProductUseCase(self._inventory_store).execute(command.id)
        return CommandOutcome()

    async def _set_client(self, command: SetClientCommand) -> CommandOutcome:
        self._session.set_client(command.client_name, command.client_address)
        return CommandOutcome()

    async def _add_line_item(self, command: AddLineItemCommand) -> CommandOutcome:
        products = await self._inventory_store.list_products()
        result = self._session.add_item(products, command.product_id, command.quantity)

        if result.outcome is LineItemOutcome.SKIPPED_UNKNOWN_PRODUCT:
            return CommandOutcome(notice=f"Product not found: {command.product_id}")
        if result.outcome is LineItemOutcome.SKIPPED_INVALID_QUANTITY:
            return CommandOutcome(notice="Quantity must be at least 1.")
        if result.exceeds_stock:
            return CommandOutcome(notice="Quantity exceeds available stock.")
        return CommandOutcome()

    async def _remove_line_item(self, command: RemoveLineItemCommand) -> CommandOutcome:
        self._session.remove_item(command.product_id)
        return CommandOutcome()

    async def _clear_draft(self, command: ClearDraftCommand) -> CommandOutcome:
        self._session.clear()
        return CommandOutcome()

    async def _save_document(self, command: SaveDocumentCommand) -> CommandOutcome:
        try:
            result = await self._finalize.save_draft(self._session, command.type)
        except DraftValidationError as e:
            logger.info("save_document_rejected", problems=e.problems)
            return CommandOutcome(notice=DRAFT_INCOMPLETE_NOTICE)

        document = result.document
        return CommandOutcome(
            notice=f"{document.type.value} {document.number} saved.",
            selected_document=document,
        )

    async def _view_document(self, command: ViewDocumentCommand) -> CommandOutcome:
        document = await self._document_store.find_by_id(command.id)
        if document is None:
            raise DocumentNotFoundError(command.id)
        return CommandOutcome(selected_document=document)
