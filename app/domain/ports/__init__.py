from abc import ABC, abstractmethod
from typing import Optional
from app.domain.entities import ProviderCredentials, PushMessage, MenuItem

class PushProvider(ABC):
    @abstractmethod
    async def initialize(self, credentials: ProviderCredentials) -> None:
        ...

    @abstractmethod
    async def send(self, message: PushMessage, dry_run: bool = False) -> str:
        """Returns the provider message id; raises ProviderError on rejection."""
        ...

class TokenRegistry(ABC):
    @abstractmethod
    def add(self, token: str, user_id: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def remove(self, token: str) -> bool:
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    @abstractmethod
    def user_of(self, token: str) -> Optional[str]:
        ...

class MenuRepository(ABC):
    @abstractmethod
    def list(self) -> list[MenuItem]:
        ...

    @abstractmethod
    def get(self, item_id: int) -> Optional[MenuItem]:
        ...

    @abstractmethod
    def create(self, titulo: str, ingredientes: str, preparacion: str, imagen: Optional[str] = None) -> MenuItem:
        ...

    @abstractmethod
    def save(self, item: MenuItem) -> MenuItem:
        ...

    @abstractmethod
    def delete(self, item_id: int) -> bool:
        ...
