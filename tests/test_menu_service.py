import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock
from app.adapters.driven.menu_repository_memory import InMemoryMenuRepository
from app.domain.errors import MenuItemNotFound, ProviderError
from app.domain.services.menu_service import MenuService
from app.domain.services.product_notifier import ProductNotifier


def _notifier():
    n = MagicMock()
    n.notify_product_added = AsyncMock(return_value=None)
    n.notify_product_updated = AsyncMock(return_value=None)
    return n


def test_create_writes_then_notifies():
    repo = InMemoryMenuRepository()
    notifier = _notifier()
    svc = MenuService(repo, notifier)

    item = asyncio.run(svc.create("Tacos", "tortilla, carne", "  asar  "))

    assert item.id == 1
    assert item.preparacion == "asar"
    assert repo.get(1) == item
    notifier.notify_product_added.assert_awaited_once_with(1, "Tacos")


def test_update_applies_only_given_fields_and_notifies():
    repo = InMemoryMenuRepository()
    notifier = _notifier()
    svc = MenuService(repo, notifier)
    created = asyncio.run(svc.create("Tacos", "tortilla", "asar"))

    item = asyncio.run(svc.update(created.id, titulo="Tacos al pastor", ingredientes=None))

    assert item.titulo == "Tacos al pastor"
    assert item.ingredientes == "tortilla"
    notifier.notify_product_updated.assert_awaited_once_with(created.id, "Tacos al pastor")


def test_update_missing_item():
    notifier = _notifier()
    svc = MenuService(InMemoryMenuRepository(), notifier)
    with pytest.raises(MenuItemNotFound):
        asyncio.run(svc.update(99, titulo="x"))
    notifier.notify_product_updated.assert_not_awaited()


def test_create_succeeds_when_every_notification_fails(ready_gateway, provider):
    provider.fail_for["new_products"] = ProviderError("x")
    provider.fail_for["menu_notifications"] = ProviderError("y")
    svc = MenuService(InMemoryMenuRepository(), ProductNotifier(ready_gateway))

    item = asyncio.run(svc.create("Tacos", "tortilla", "asar"))

    assert item.titulo == "Tacos"
    assert svc.list() == [item]


def test_create_succeeds_when_gateway_not_initialized(gateway):
    svc = MenuService(InMemoryMenuRepository(), ProductNotifier(gateway))
    item = asyncio.run(svc.create("Tacos", "tortilla", "asar"))
    assert svc.list() == [item]


def test_delete():
    svc = MenuService(InMemoryMenuRepository(), _notifier())
    item = asyncio.run(svc.create("Tacos", "tortilla", "asar"))
    svc.delete(item.id)
    assert svc.list() == []
    with pytest.raises(MenuItemNotFound):
        svc.delete(item.id)
