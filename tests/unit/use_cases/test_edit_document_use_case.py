"""
Unit tests for EditDocumentUseCase
"""

import asyncio
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from tenant_governance.app.services.keyed_lock import KeyedLock
from tenant_governance.app.use_cases.documents import (
    EditDocumentUseCase,
    InvoicePatch,
    LineItem,
    SalesOrderPatch,
)
from tenant_governance.domain.entities import Actor, DocumentType, Invoice, SalesOrder
from tenant_governance.domain.exceptions import PersistenceError


@pytest.fixture
def order():
    return SalesOrder(
        id=uuid4(),
        tenant_id=uuid4(),
        order_number="SO-0001",
        customer_name="Alice",
        status="pending",
        items=[{"product_name": "Pen", "quantity": 2, "unit_price": 1.5}],
        subtotal=3.0,
        total=3.0,
    )


@pytest.fixture
def clerk(order):
    return Actor(id="u-7", name="Jane Clerk", role="staff", tenant_id=str(order.tenant_id))


def arrange(mock_uow, repository, document):
    repository.get_by_id = AsyncMock(return_value=document)
    repository.update = AsyncMock(side_effect=lambda d: d)
    mock_uow.edit_history.get_latest = AsyncMock(return_value=None)
    mock_uow.edit_history.append = AsyncMock(side_effect=lambda e: e)


@pytest.mark.asyncio
async def test_scalar_edit_records_old_and_new(mock_uow, order, clerk):
    arrange(mock_uow, mock_uow.sales_orders, order)

    use_case = EditDocumentUseCase(mock_uow, DocumentType.sales_order, KeyedLock())
    result = await use_case.execute(order.id, SalesOrderPatch(customer_name="Alicia"), clerk)

    assert result.is_ok()
    assert result.value.changed_fields == ["customer_name"]
    entry = result.value.entry
    assert entry.sequence == 1
    assert entry.edited_by == "u-7"
    assert entry.changes[0].old_value == "Alice"
    assert entry.changes[0].new_value == "Alicia"
    assert order.customer_name == "Alicia"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_items_edit_marks_items_and_recomputes_totals(mock_uow, order, clerk):
    arrange(mock_uow, mock_uow.sales_orders, order)
    patch = SalesOrderPatch(
        items=[
            LineItem(product_name="Pen", quantity=2, unit_price=1.5),
            LineItem(product_name="Notebook", quantity=1, unit_price=4.25),
        ]
    )

    use_case = EditDocumentUseCase(mock_uow, DocumentType.sales_order, KeyedLock())
    result = await use_case.execute(order.id, patch, clerk)

    changes = {c.field: c for c in result.value.entry.changes}
    assert changes["items"].marker == "items modified"
    assert changes["subtotal"].old_value == 3.0
    assert changes["subtotal"].new_value == 7.25
    assert changes["total"].new_value == 7.25
    assert order.total == 7.25
    assert len(order.items) == 2


@pytest.mark.asyncio
async def test_no_change_records_nothing(mock_uow, order, clerk):
    arrange(mock_uow, mock_uow.sales_orders, order)

    use_case = EditDocumentUseCase(mock_uow, DocumentType.sales_order, KeyedLock())
    result = await use_case.execute(
        order.id, SalesOrderPatch(customer_name="Alice", status="pending"), clerk
    )

    assert result.is_ok()
    assert result.value.changed_fields == []
    assert result.value.entry is None
    mock_uow.edit_history.append.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_other_tenant_cannot_see_document(mock_uow, order):
    arrange(mock_uow, mock_uow.sales_orders, order)
    outsider = Actor(id="u-9", name="Mallory", role="admin", tenant_id=str(uuid4()))

    use_case = EditDocumentUseCase(mock_uow, DocumentType.sales_order, KeyedLock())
    result = await use_case.execute(order.id, SalesOrderPatch(status="paid"), outsider)

    assert result.error.code == "DOCUMENT_NOT_FOUND"
    mock_uow.sales_orders.update.assert_not_called()


@pytest.mark.asyncio
async def test_history_failure_discards_edit(mock_uow, order, clerk):
    arrange(mock_uow, mock_uow.sales_orders, order)
    mock_uow.edit_history.append = AsyncMock(
        side_effect=PersistenceError("edit history append", "UNIQUE constraint failed")
    )

    use_case = EditDocumentUseCase(mock_uow, DocumentType.sales_order, KeyedLock())
    result = await use_case.execute(order.id, SalesOrderPatch(status="paid"), clerk)

    assert result.error.code == "PERSISTENCE_ERROR"
    mock_uow.commit.assert_not_called()
    mock_uow.rollback.assert_called()


@pytest.mark.asyncio
async def test_invoice_due_date_edit(mock_uow):
    invoice = Invoice(
        id=uuid4(),
        tenant_id=uuid4(),
        invoice_number="INV-1",
        customer_name="Bob",
        items=[],
        total=0.0,
    )
    arrange(mock_uow, mock_uow.invoices, invoice)
    admin = Actor(id="sa-1", name="Platform Admin")

    use_case = EditDocumentUseCase(mock_uow, DocumentType.invoice, KeyedLock())
    result = await use_case.execute(
        invoice.id, InvoicePatch(due_date="2031-03-01", notes="Net 30"), admin
    )

    assert result.value.changed_fields == ["due_date", "notes"]
    assert result.value.document_type == "invoice"
    mock_uow.sales_orders.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_edits_of_one_document_are_serialized(mock_uow, order, clerk):
    """The second edit reads only after the first has committed"""
    locks = KeyedLock()
    timeline = []

    async def read(document_id):
        timeline.append("read")
        return order

    async def commit():
        await asyncio.sleep(0.01)
        timeline.append("commit")

    mock_uow.sales_orders.get_by_id = AsyncMock(side_effect=read)
    mock_uow.sales_orders.update = AsyncMock(side_effect=lambda d: d)
    mock_uow.edit_history.get_latest = AsyncMock(return_value=None)
    mock_uow.edit_history.append = AsyncMock(side_effect=lambda e: e)
    mock_uow.commit = AsyncMock(side_effect=commit)

    use_case = EditDocumentUseCase(mock_uow, DocumentType.sales_order, locks)
    await asyncio.gather(
        use_case.execute(order.id, SalesOrderPatch(status="paid"), clerk),
        use_case.execute(order.id, SalesOrderPatch(customer_name="Al"), clerk),
    )

    assert timeline == ["read", "commit", "read", "commit"]
    assert len(locks) == 0
