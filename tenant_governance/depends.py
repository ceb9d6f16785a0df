from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenant_governance.adapter.services.notifiers import LoggingNotifier, WebhookNotifier
from tenant_governance.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenant_governance.api.error import ClientError
from tenant_governance.api.utils.jwt import verify_jwt
from tenant_governance.app.services.notification_dispatcher import NotificationDispatcher
from tenant_governance.domain.entities import Actor
from tenant_governance.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

_dispatcher: Optional[NotificationDispatcher] = None


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_dispatcher() -> NotificationDispatcher:
    """Process-wide dispatcher; webhook delivery when a URL is configured"""
    global _dispatcher
    if _dispatcher is None:
        if ApplicationConfig.NOTIFIER_WEBHOOK_URL:
            notifier = WebhookNotifier(
                ApplicationConfig.NOTIFIER_WEBHOOK_URL,
                timeout=ApplicationConfig.NOTIFIER_TIMEOUT_SECONDS,
            )
        else:
            notifier = LoggingNotifier()
        _dispatcher = NotificationDispatcher(notifier)
    return _dispatcher


async def get_current_actor(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Actor:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Returns:
        Actor built from the user_id, name, role and tenant_id claims

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    payload = verify_jwt(credentials.credentials)

    if payload is None or "user_id" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return Actor(
        id=payload["user_id"],
        name=payload.get("name") or payload["user_id"],
        role=payload.get("role", ""),
        tenant_id=payload.get("tenant_id"),
        ip_address=request.client.host if request.client else None,
    )


async def require_superadmin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_superadmin:
        raise ClientError(
            Error("INSUFFICIENT_ROLE", "Superadmin access required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return actor
