"""
Tenant lifecycle transition table.

Every status change a tenant can go through is one member of
``TenantTransition``; its rule says which statuses it may start from, where it
lands, whether a reason is mandatory and how it is audited and notified.
Anything not in the table is rejected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from tenant_governance.libs.result import Error, Result, Return

from .entities.enums import AuditAction, NotificationEventType, TenantStatus

MAX_SUSPENSION_DAYS = 3650


class TenantTransition(str, Enum):
    approve = "approve"
    reject = "reject"
    block = "block"
    suspend = "suspend"
    ban = "ban"
    reactivate = "reactivate"
    deactivate = "deactivate"


@dataclass(frozen=True)
class TransitionRule:
    sources: FrozenSet[TenantStatus]
    target: TenantStatus
    reason_required: bool
    audit_action: AuditAction
    notification: NotificationEventType


TRANSITION_RULES = {
    TenantTransition.approve: TransitionRule(
        sources=frozenset({TenantStatus.pending_approval}),
        target=TenantStatus.active,
        reason_required=False,
        audit_action=AuditAction.approve_tenant,
        notification=NotificationEventType.approval,
    ),
    TenantTransition.reject: TransitionRule(
        sources=frozenset({TenantStatus.pending_approval}),
        target=TenantStatus.rejected,
        reason_required=True,
        audit_action=AuditAction.reject_tenant,
        notification=NotificationEventType.rejection,
    ),
    TenantTransition.block: TransitionRule(
        sources=frozenset({TenantStatus.active}),
        target=TenantStatus.blocked,
        reason_required=True,
        audit_action=AuditAction.block_tenant,
        notification=NotificationEventType.suspension,
    ),
    TenantTransition.suspend: TransitionRule(
        sources=frozenset({TenantStatus.active}),
        target=TenantStatus.suspended,
        reason_required=True,
        audit_action=AuditAction.suspend_tenant,
        notification=NotificationEventType.suspension,
    ),
    TenantTransition.ban: TransitionRule(
        sources=frozenset({TenantStatus.active}),
        target=TenantStatus.banned,
        reason_required=True,
        audit_action=AuditAction.ban_tenant,
        notification=NotificationEventType.suspension,
    ),
    TenantTransition.reactivate: TransitionRule(
        sources=frozenset(
            {TenantStatus.blocked, TenantStatus.suspended, TenantStatus.banned}
        ),
        target=TenantStatus.active,
        reason_required=False,
        audit_action=AuditAction.reactivate_tenant,
        notification=NotificationEventType.reactivation,
    ),
    TenantTransition.deactivate: TransitionRule(
        sources=frozenset(set(TenantStatus) - {TenantStatus.inactive}),
        target=TenantStatus.inactive,
        reason_required=True,
        audit_action=AuditAction.update_tenant,
        notification=NotificationEventType.suspension,
    ),
}

_missing = set(TenantTransition) - set(TRANSITION_RULES)
if _missing:
    raise RuntimeError(f"Transitions without a rule: {sorted(t.value for t in _missing)}")


@dataclass(frozen=True)
class TransitionPlan:
    transition: TenantTransition
    rule: TransitionRule
    source: TenantStatus
    reason: Optional[str]
    duration_days: Optional[int] = None
    reverses_ban: bool = False

    @property
    def target(self) -> TenantStatus:
        return self.rule.target

    def audit_details(self) -> str:
        """Human-readable justification stored on the audit entry"""
        parts = []
        if self.reverses_ban:
            parts.append("BAN REVERSAL: explicit override of a permanent ban")
        if self.transition is TenantTransition.deactivate:
            parts.append(f"Status changed {self.source.value} -> {self.target.value}")
        if self.reason:
            parts.append(self.reason)
        if self.duration_days is not None:
            parts.append(f"Suspended for {self.duration_days} day(s)")
        return "; ".join(parts)


def invalid_transition(
    current: TenantStatus, transition: TenantTransition, reason: Optional[str] = None
) -> Error:
    requested = TRANSITION_RULES[transition].target
    return Error(
        "INVALID_TRANSITION",
        f"Cannot {transition.value} tenant: {current.value} -> {requested.value} "
        f"is not an allowed transition",
        reason=reason,
    )


def plan_transition(
    current: TenantStatus,
    transition: TenantTransition,
    reason: Optional[str] = None,
    duration_days: Optional[int] = None,
    acknowledge_ban_reversal: bool = False,
) -> Result[TransitionPlan]:
    """
    Validate a requested transition against the tenant's current status.

    Returns:
        Result[TransitionPlan] describing the change to apply

    Errors:
        - INVALID_TRANSITION: not in the table, or an unacknowledged ban reversal
        - REASON_REQUIRED: the transition needs a justification
        - INVALID_DURATION: duration given for a non-suspension or out of range
    """
    rule = TRANSITION_RULES[transition]
    reason = reason.strip() if reason else None

    if current not in rule.sources:
        return Return.err(invalid_transition(current, transition))

    reverses_ban = current is TenantStatus.banned
    if reverses_ban and not acknowledge_ban_reversal:
        return Return.err(
            invalid_transition(
                current,
                transition,
                reason="Reactivating a banned tenant requires acknowledge_ban_reversal",
            )
        )

    if rule.reason_required and not reason:
        return Return.err(
            Error(
                "REASON_REQUIRED",
                f"A reason is required to {transition.value} a tenant",
            )
        )

    if duration_days is not None:
        if transition is not TenantTransition.suspend:
            return Return.err(
                Error("INVALID_DURATION", "duration_days only applies to suspensions")
            )
        if duration_days < 1 or duration_days > MAX_SUSPENSION_DAYS:
            return Return.err(
                Error(
                    "INVALID_DURATION",
                    f"duration_days must be between 1 and {MAX_SUSPENSION_DAYS}",
                )
            )

    return Return.ok(
        TransitionPlan(
            transition=transition,
            rule=rule,
            source=current,
            reason=reason,
            duration_days=duration_days,
            reverses_ban=reverses_ban,
        )
    )
