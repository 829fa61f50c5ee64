import itertools
import threading
from typing import Optional
from app.domain.entities import MenuItem
from app.domain.ports import MenuRepository

class InMemoryMenuRepository(MenuRepository):
    def __init__(self):
        self._items: dict[int, MenuItem] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def list(self) -> list[MenuItem]:
        return list(self._items.values())

    def get(self, item_id: int) -> Optional[MenuItem]:
        return self._items.get(item_id)

    def create(self, titulo: str, ingredientes: str, preparacion: str, imagen: Optional[str] = None) -> MenuItem:
        with self._lock:
            item = MenuItem(
                id=next(self._ids),
                titulo=titulo,
                ingredientes=ingredientes,
                preparacion=preparacion,
                imagen=imagen,
            )
            self._items[item.id] = item
        return item

    def save(self, item: MenuItem) -> MenuItem:
        with self._lock:
            self._items[item.id] = item
        return item

    def delete(self, item_id: int) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None
