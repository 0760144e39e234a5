import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.shop_settings import ShopSettings


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def shop_settings():
    """Default shop settings (no default payment method)"""
    return ShopSettings()
