import threading
from typing import Optional
from app.domain.ports import TokenRegistry

class InMemoryTokenRegistry(TokenRegistry):
    def __init__(self):
        self._tokens: dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def add(self, token: str, user_id: Optional[str] = None) -> None:
        with self._lock:
            self._tokens[token] = user_id

    def remove(self, token: str) -> bool:
        with self._lock:
            if token not in self._tokens:
                return False
            del self._tokens[token]
            return True

    def count(self) -> int:
        return len(self._tokens)

    def user_of(self, token: str) -> Optional[str]:
        return self._tokens.get(token)
