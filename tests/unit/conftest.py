import pytest
from unittest.mock import AsyncMock, MagicMock

from tenant_governance.domain.entities import Actor


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.audit_entries.append = AsyncMock(return_value=1)
    return uow


@pytest.fixture
def superadmin():
    return Actor(id="sa-1", name="Platform Admin", ip_address="10.0.0.1")


@pytest.fixture
def mock_dispatcher():
    dispatcher = MagicMock()
    dispatcher.dispatch = MagicMock()
    return dispatcher
