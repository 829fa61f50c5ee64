from dataclasses import replace
from typing import Optional
from app.domain.entities import MenuItem
from app.domain.errors import MenuItemNotFound
from app.domain.ports import MenuRepository
from app.domain.services.product_notifier import ProductNotifier

class MenuService:
    def __init__(self, repository: MenuRepository, notifier: ProductNotifier):
        self._repository = repository
        self._notifier = notifier

    def list(self) -> list[MenuItem]:
        return self._repository.list()

    async def create(self, titulo: str, ingredientes: str, preparacion: str, imagen: Optional[str] = None) -> MenuItem:
        item = self._repository.create(titulo, ingredientes, preparacion.strip(), imagen)
        await self._notifier.notify_product_added(item.id, item.titulo)
        return item

    async def update(self, item_id: int, **changes) -> MenuItem:
        item = self._repository.get(item_id)
        if item is None:
            raise MenuItemNotFound(item_id)
        changes = {k: v for k, v in changes.items() if v is not None}
        if "preparacion" in changes:
            changes["preparacion"] = changes["preparacion"].strip()
        item = self._repository.save(replace(item, **changes))
        await self._notifier.notify_product_updated(item.id, item.titulo)
        return item

    def delete(self, item_id: int) -> None:
        if not self._repository.delete(item_id):
            raise MenuItemNotFound(item_id)
