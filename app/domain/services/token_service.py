import logging
from typing import Optional
from app.domain.errors import InvalidToken
from app.domain.ports import TokenRegistry
from app.domain.services.notification_gateway import NotificationGateway, short_token
from app.domain.services.product_notifier import ProductNotifier

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(self, gateway: NotificationGateway, notifier: ProductNotifier, registry: TokenRegistry):
        self._gateway = gateway
        self._notifier = notifier
        self._registry = registry

    async def register_token(self, token: str, user_id: Optional[str] = None) -> None:
        if not token:
            raise InvalidToken("Token FCM obrigatório")
        if not await self._gateway.validate_token(token):
            raise InvalidToken("Token FCM inválido")
        self._registry.add(token, user_id)
        logger.info("Token FCM registrado: %s", short_token(token))
        # boas-vindas é best-effort; send_welcome não propaga erro
        await self._notifier.send_welcome(token)

    async def unregister_token(self, token: str) -> bool:
        if not token:
            raise InvalidToken("Token FCM obrigatório")
        user_id = self._registry.user_of(token)
        removed = self._registry.remove(token)
        logger.info("Token FCM desregistrado: %s (usuário %s)", short_token(token), user_id or "-")
        return removed

    def active_tokens(self) -> int:
        return self._registry.count()
