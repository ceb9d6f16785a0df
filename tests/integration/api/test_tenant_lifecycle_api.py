"""
Integration tests for tenant lifecycle transitions through the admin API.
"""

import asyncio
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from tenant_governance.adapter.repositories.audit_log_repository import AuditLogRepository
from tenant_governance.domain.base import utcnow
from tenant_governance.domain.entities import (
    AuditLogEntry,
    NotificationEventType,
    Tenant,
    TenantStatus,
)
from tenant_governance.domain.exceptions import PersistenceError
from tests.integration.factories import create_tenant, tenant_headers


async def fetch_tenant(session_factory, tenant_id) -> Tenant:
    async with session_factory() as session:
        return await session.get(Tenant, tenant_id)


async def audit_actions(session_factory, tenant_id):
    async with session_factory() as session:
        result = await session.execute(
            select(AuditLogEntry)
            .where(AuditLogEntry.target_id == str(tenant_id))
            .order_by(AuditLogEntry.sequence)
        )
        return [entry.action.value for entry in result.scalars().all()]


@pytest.mark.asyncio
async def test_register_then_approve(
    client: AsyncClient, session_factory, admin_headers, dispatcher, notifier
):
    """A self-registered tenant waits for approval and is notified once approved"""
    response = await client.post(
        "/api/tenants/register",
        json={
            "tenant_name": "Kampala Hardware",
            "tenant_email": "owner@kampala-hw.example.com",
            "admin_name": "Grace",
            "admin_email": "grace@kampala-hw.example.com",
        },
    )
    assert response.status_code == 201
    tenant_id = response.json()["tenant"]["id"]
    assert response.json()["tenant"]["status"] == "pending_approval"

    response = await client.post(
        f"/api/admin/tenants/{tenant_id}/approve", headers=admin_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["previous_status"] == "pending_approval"
    assert data["status"] == "active"
    assert data["status_changed_by"] == "sa-1"
    assert data["audit_sequence"] >= 1

    assert await audit_actions(session_factory, tenant_id) == ["approve_tenant"]

    await dispatcher.drain()
    assert [e.event_type for e in notifier.sent] == [NotificationEventType.approval]
    assert notifier.sent[0].payload["tenant_name"] == "Kampala Hardware"


@pytest.mark.asyncio
async def test_suspend_for_seven_days(
    client: AsyncClient, db_session, session_factory, admin_headers
):
    tenant = await create_tenant(db_session)

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/suspend",
        headers=admin_headers,
        json={"reason": "Unpaid invoices", "duration_days": 7, "expected_status": "active"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "suspended"

    stored = await fetch_tenant(session_factory, tenant.id)
    assert stored.status == TenantStatus.suspended
    assert stored.status_reason == "Unpaid invoices"
    assert stored.version == tenant.version + 1
    expected_expiry = stored.status_changed_at + timedelta(days=7)
    assert abs((stored.suspension_expires_at - expected_expiry).total_seconds()) < 1

    assert await audit_actions(session_factory, tenant.id) == ["suspend_tenant"]


@pytest.mark.asyncio
async def test_rejected_tenant_cannot_be_suspended(
    client: AsyncClient, db_session, session_factory, admin_headers
):
    tenant = await create_tenant(db_session, status=TenantStatus.rejected)

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/suspend",
        headers=admin_headers,
        json={"reason": "Spam"},
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_TRANSITION"
    assert "rejected -> suspended" in error["message"]

    stored = await fetch_tenant(session_factory, tenant.id)
    assert stored.status == TenantStatus.rejected
    assert await audit_actions(session_factory, tenant.id) == []


@pytest.mark.asyncio
async def test_block_requires_reason(client: AsyncClient, db_session, admin_headers):
    tenant = await create_tenant(db_session)

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/block", headers=admin_headers, json={"reason": "  "}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "REASON_REQUIRED"


@pytest.mark.asyncio
async def test_stale_view_gets_conflict(
    client: AsyncClient, db_session, session_factory, admin_headers
):
    """Two admins act on the same pending tenant; the second sees STALE_STATE"""
    tenant = await create_tenant(db_session, status=TenantStatus.pending_approval)

    first = await client.post(
        f"/api/admin/tenants/{tenant.id}/reject",
        headers=admin_headers,
        json={"reason": "Incomplete documents", "expected_status": "pending_approval"},
    )
    second = await client.post(
        f"/api/admin/tenants/{tenant.id}/approve",
        headers=admin_headers,
        json={"expected_status": "pending_approval"},
    )

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "STALE_STATE"

    stored = await fetch_tenant(session_factory, tenant.id)
    assert stored.status == TenantStatus.rejected
    assert await audit_actions(session_factory, tenant.id) == ["reject_tenant"]


@pytest.mark.asyncio
async def test_concurrent_conflicting_transitions(
    client: AsyncClient, db_session, session_factory, admin_headers, dispatcher, notifier
):
    """Block and suspend race from the same observed state; exactly one wins"""
    tenant = await create_tenant(db_session)

    block, suspend = await asyncio.gather(
        client.post(
            f"/api/admin/tenants/{tenant.id}/block",
            headers=admin_headers,
            json={"reason": "Abuse", "expected_status": "active"},
        ),
        client.post(
            f"/api/admin/tenants/{tenant.id}/suspend",
            headers=admin_headers,
            json={"reason": "Late payment", "expected_status": "active"},
        ),
    )

    assert sorted([block.status_code, suspend.status_code]) == [200, 409]
    winner, loser = (block, suspend) if block.status_code == 200 else (suspend, block)
    assert loser.json()["error"]["code"] == "STALE_STATE"

    stored = await fetch_tenant(session_factory, tenant.id)
    assert stored.status.value == winner.json()["status"]
    assert stored.version == tenant.version + 1
    assert len(await audit_actions(session_factory, tenant.id)) == 1

    await dispatcher.drain()
    assert [e.event_type for e in notifier.sent] == [NotificationEventType.suspension]


@pytest.mark.asyncio
async def test_audit_store_outage_leaves_status_unchanged(
    client: AsyncClient,
    db_session,
    session_factory,
    admin_headers,
    dispatcher,
    notifier,
    monkeypatch,
):
    tenant = await create_tenant(db_session)

    async def unavailable(self, entry):
        raise PersistenceError("audit append", "database disk image is malformed")

    monkeypatch.setattr(AuditLogRepository, "append", unavailable)

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/block",
        headers=admin_headers,
        json={"reason": "Abuse"},
    )

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "PERSISTENCE_ERROR"

    stored = await fetch_tenant(session_factory, tenant.id)
    assert stored.status == TenantStatus.active
    assert stored.version == tenant.version
    assert await audit_actions(session_factory, tenant.id) == []

    await dispatcher.drain()
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_expected_version_guards_against_lost_update(
    client: AsyncClient, db_session, admin_headers
):
    tenant = await create_tenant(db_session)

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/block",
        headers=admin_headers,
        json={"reason": "Abuse", "expected_version": tenant.version + 5},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_ban_reversal_requires_explicit_override(
    client: AsyncClient, db_session, session_factory, admin_headers
):
    tenant = await create_tenant(db_session)
    await client.post(
        f"/api/admin/tenants/{tenant.id}/ban", headers=admin_headers, json={"reason": "Fraud"}
    )

    refused = await client.post(
        f"/api/admin/tenants/{tenant.id}/reactivate", headers=admin_headers
    )
    assert refused.status_code == 400

    allowed = await client.post(
        f"/api/admin/tenants/{tenant.id}/reactivate",
        headers=admin_headers,
        json={"reason": "Appeal upheld", "acknowledge_ban_reversal": True},
    )
    assert allowed.status_code == 200
    assert allowed.json()["previous_status"] == "banned"

    logs = await client.get(
        "/api/admin/audit-logs",
        headers=admin_headers,
        params={"action": "reactivate_tenant"},
    )
    assert logs.json()["entries"][0]["details"].startswith("BAN REVERSAL")


@pytest.mark.asyncio
async def test_deactivate_is_terminal(client: AsyncClient, db_session, admin_headers):
    tenant = await create_tenant(db_session)

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/deactivate",
        headers=admin_headers,
        json={"reason": "Business closed"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "inactive"

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/reactivate", headers=admin_headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_tenant(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/admin/tenants/00000000-0000-0000-0000-000000000000/approve",
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TENANT_NOT_FOUND"


@pytest.mark.asyncio
async def test_tenant_users_cannot_transition(client: AsyncClient, db_session):
    tenant = await create_tenant(db_session)

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/block",
        headers=tenant_headers("u-1", tenant.id),
        json={"reason": "x"},
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_missing_token_is_rejected(client: AsyncClient, db_session):
    tenant = await create_tenant(db_session)

    response = await client.post(f"/api/admin/tenants/{tenant.id}/approve")

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_expire_suspensions(
    client: AsyncClient, db_session, session_factory, admin_headers, dispatcher, notifier
):
    expired = await create_tenant(db_session, name="Expired Co", status=TenantStatus.suspended)
    running = await create_tenant(db_session, name="Running Co", status=TenantStatus.suspended)
    expired.suspension_expires_at = utcnow() - timedelta(hours=1)
    running.suspension_expires_at = utcnow() + timedelta(days=3)
    db_session.add(expired)
    db_session.add(running)
    await db_session.commit()

    response = await client.post(
        "/api/admin/tenants/expire-suspensions", headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["reactivated"] == [str(expired.id)]

    assert (await fetch_tenant(session_factory, expired.id)).status == TenantStatus.active
    assert (await fetch_tenant(session_factory, running.id)).status == TenantStatus.suspended

    await dispatcher.drain()
    assert [e.event_type for e in notifier.sent] == [NotificationEventType.reactivation]


@pytest.mark.asyncio
async def test_update_profile_and_create_user(
    client: AsyncClient, db_session, session_factory, admin_headers
):
    tenant = await create_tenant(db_session)

    response = await client.patch(
        f"/api/admin/tenants/{tenant.id}",
        headers=admin_headers,
        json={"name": "Acme Holdings"},
    )
    assert response.status_code == 200
    assert response.json()["changed_fields"] == ["name"]

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/users",
        headers=admin_headers,
        json={"name": "Sam", "email": "sam@acme.example.com", "role": "manager"},
    )
    assert response.status_code == 201

    duplicate = await client.post(
        f"/api/admin/tenants/{tenant.id}/users",
        headers=admin_headers,
        json={"name": "Sam", "email": "sam@acme.example.com"},
    )
    assert duplicate.status_code == 409

    assert await audit_actions(session_factory, tenant.id) == ["update_tenant"]
