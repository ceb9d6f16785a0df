"""
Document API Routes

Edits to sales orders and invoices, and their edit history. Tenant users are
confined to their own tenant's documents.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from tenant_governance.api.error import raise_for_error
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.app.use_cases.documents import (
    EditDocumentResponse,
    EditDocumentUseCase,
    EditHistoryResponse,
    GetEditHistoryUseCase,
    InvoicePatch,
    SalesOrderPatch,
)
from tenant_governance.depends import get_current_actor, get_unit_of_work
from tenant_governance.domain.entities import Actor, DocumentType

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.patch(
    "/sales-orders/{document_id}",
    status_code=status.HTTP_200_OK,
    response_model=EditDocumentResponse,
)
async def edit_sales_order(
    document_id: UUID,
    request: SalesOrderPatch,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Edit Sales Order

    Recomputes subtotal and total when items change. A request that changes
    nothing records no history entry.

    Raises:
        - 404 Not Found: DOCUMENT_NOT_FOUND
        - 503 Service Unavailable: PERSISTENCE_ERROR
    """
    use_case = EditDocumentUseCase(uow, DocumentType.sales_order)
    result = await use_case.execute(document_id, request, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/invoices/{document_id}",
    status_code=status.HTTP_200_OK,
    response_model=EditDocumentResponse,
)
async def edit_invoice(
    document_id: UUID,
    request: InvoicePatch,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Edit Invoice - same rules as sales orders"""
    use_case = EditDocumentUseCase(uow, DocumentType.invoice)
    result = await use_case.execute(document_id, request, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{document_id}/history",
    status_code=status.HTTP_200_OK,
    response_model=EditHistoryResponse,
)
async def get_edit_history(
    document_id: UUID,
    actor: Actor = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Edit History

    All edits oldest first. Still available after the document is deleted;
    empty for a document that was never edited.
    """
    use_case = GetEditHistoryUseCase(uow)
    result = await use_case.execute(document_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
