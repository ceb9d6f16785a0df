"""
Unit tests for DeleteTenantUseCase (confirmed cascade deletion)
"""

import asyncio
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from tenant_governance.app.use_cases.deletion import DeleteTenantUseCase
from tenant_governance.domain.entities import AuditAction, Tenant, TenantStatus
from tenant_governance.domain.exceptions import PersistenceError


def arrange(mock_uow, tenant):
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.invoices.delete_by_tenant = AsyncMock(return_value=4)
    mock_uow.sales_orders.delete_by_tenant = AsyncMock(return_value=2)
    mock_uow.users.delete_by_tenant = AsyncMock(return_value=3)
    mock_uow.tenants.delete = AsyncMock(return_value=1)
    mock_uow.audit_entries.append = AsyncMock(return_value=99)


@pytest.fixture
def tenant():
    return Tenant(id=uuid4(), name="Acme Ltd", email="o@acme.example.com", status=TenantStatus.active)


@pytest.mark.asyncio
async def test_delete_tenant_success(mock_uow, superadmin, tenant):
    arrange(mock_uow, tenant)

    use_case = DeleteTenantUseCase(mock_uow)
    result = await use_case.execute(tenant.id, "DELETE", "Closed business", superadmin)

    assert result.is_ok()
    summary = result.value
    assert summary.status == "deleted"
    assert summary.target_name == "Acme Ltd"
    assert summary.removed == {"invoices": 4, "sales_orders": 2, "users": 3, "tenants": 1}
    assert summary.audit_sequence == 99

    entry = mock_uow.audit_entries.append.call_args[0][0]
    assert entry.action == AuditAction.delete_tenant
    assert entry.target_name == "Acme Ltd"
    assert entry.details.startswith("Closed business")
    assert "3 users" in entry.details

    mock_uow.commit.assert_called_once()
    # Edit history is never part of the cascade
    assert mock_uow.edit_history.method_calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("confirmation", ["delete", "DELETE ", "", None, "Acme Ltd"])
async def test_confirmation_mismatch_touches_nothing(mock_uow, superadmin, tenant, confirmation):
    arrange(mock_uow, tenant)

    use_case = DeleteTenantUseCase(mock_uow)
    result = await use_case.execute(tenant.id, confirmation, "Closed business", superadmin)

    assert result.error.code == "CONFIRMATION_MISMATCH"
    mock_uow.tenants.get_by_id.assert_not_called()
    mock_uow.users.delete_by_tenant.assert_not_called()
    mock_uow.audit_entries.append.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_delete_unknown_tenant(mock_uow, superadmin):
    mock_uow.tenants.get_by_id = AsyncMock(return_value=None)

    result = await DeleteTenantUseCase(mock_uow).execute(uuid4(), "DELETE", None, superadmin)

    assert result.error.code == "TENANT_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_store_failure_mid_cascade_rolls_back(mock_uow, superadmin, tenant):
    arrange(mock_uow, tenant)
    mock_uow.users.delete_by_tenant = AsyncMock(
        side_effect=PersistenceError("user cascade delete", "constraint failed")
    )

    result = await DeleteTenantUseCase(mock_uow).execute(
        tenant.id, "DELETE", "Closed", superadmin
    )

    assert result.error.code == "PARTIAL_FAILURE"
    assert "nothing was deleted" in result.error.message
    mock_uow.rollback.assert_called()
    mock_uow.commit.assert_not_called()
    mock_uow.tenants.delete.assert_not_called()


@pytest.mark.asyncio
async def test_audit_failure_rolls_back_cascade(mock_uow, superadmin, tenant):
    arrange(mock_uow, tenant)
    mock_uow.audit_entries.append = AsyncMock(
        side_effect=PersistenceError("audit append", "disk full")
    )

    result = await DeleteTenantUseCase(mock_uow).execute(
        tenant.id, "DELETE", "Closed", superadmin
    )

    assert result.error.code == "PARTIAL_FAILURE"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_cascade_timeout(mock_uow, superadmin, tenant):
    arrange(mock_uow, tenant)

    async def slow_delete(tenant_id):
        await asyncio.sleep(1)

    mock_uow.invoices.delete_by_tenant = AsyncMock(side_effect=slow_delete)

    use_case = DeleteTenantUseCase(mock_uow, timeout_seconds=0.05)
    result = await use_case.execute(tenant.id, "DELETE", "Closed", superadmin)

    assert result.error.code == "PARTIAL_FAILURE"
    mock_uow.commit.assert_not_called()
    mock_uow.rollback.assert_called()


@pytest.mark.asyncio
async def test_slow_commit_reports_deletion(mock_uow, superadmin, tenant):
    """A commit still running at the deadline finishes and is reported as done"""
    arrange(mock_uow, tenant)

    async def slow_commit():
        await asyncio.sleep(0.1)

    mock_uow.commit = AsyncMock(side_effect=slow_commit)

    use_case = DeleteTenantUseCase(mock_uow, timeout_seconds=0.05)
    result = await use_case.execute(tenant.id, "DELETE", "Closed", superadmin)

    assert result.is_ok()
    assert result.value.removed["tenants"] == 1
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_store_failure_on_read_deletes_nothing(mock_uow, superadmin, tenant):
    arrange(mock_uow, tenant)
    mock_uow.tenants.get_by_id = AsyncMock(
        side_effect=PersistenceError("tenant read", "disk I/O error")
    )

    result = await DeleteTenantUseCase(mock_uow).execute(
        tenant.id, "DELETE", "Closed", superadmin
    )

    assert result.error.code == "PARTIAL_FAILURE"
    mock_uow.invoices.delete_by_tenant.assert_not_called()
    mock_uow.commit.assert_not_called()
