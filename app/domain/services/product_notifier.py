import asyncio
import logging
from typing import Optional
from app.domain.entities import ProductEvent, TopicPayload, TokenPayload
from app.domain.services.notification_gateway import NotificationGateway, short_token

logger = logging.getLogger(__name__)

TOPIC_NEW_PRODUCTS = "new_products"
TOPIC_PRODUCT_UPDATES = "product_updates"
TOPIC_MENU_NOTIFICATIONS = "menu_notifications"
TOPICS_AVAILABLE = (TOPIC_NEW_PRODUCTS, TOPIC_PRODUCT_UPDATES, TOPIC_MENU_NOTIFICATIONS)

# plano de fan-out fixo por tipo de evento
FAN_OUT = {
    "product_added": (TOPIC_NEW_PRODUCTS, TOPIC_MENU_NOTIFICATIONS),
    "product_updated": (TOPIC_PRODUCT_UPDATES, TOPIC_MENU_NOTIFICATIONS),
}

_TEXTS = {
    "product_added": ("🍽️ ¡Nuevo platillo disponible!", "Se agregó '{title}' al menú del día"),
    "product_updated": ("📝 Platillo actualizado", "Se actualizó '{title}' en el menú"),
}


class ProductNotifier:
    """Notificações disparadas como efeito colateral de mutações do menu.

    Nenhum método daqui propaga erro: o retorno é sempre ``None`` e toda falha
    (gateway não inicializado, provedor recusando, deadline estourado) fica no log.
    A criação/atualização do platillo nunca depende do resultado.
    """

    def __init__(self, gateway: NotificationGateway, timeout: Optional[float] = None):
        self._gateway = gateway
        self._timeout = timeout or None

    async def notify_product_added(self, item_id, title: str) -> None:
        await self._fan_out(ProductEvent.added(item_id, title))

    async def notify_product_updated(self, item_id, title: str) -> None:
        await self._fan_out(ProductEvent.updated(item_id, title))

    def _payloads(self, event: ProductEvent) -> list[TopicPayload]:
        title, body = _TEXTS[event.type]
        return [
            TopicPayload(
                topic=topic,
                title=title,
                body=body.format(title=event.product_title),
                data={
                    "type": event.type,
                    "product_id": event.product_id,
                    "product_title": event.product_title,
                },
            )
            for topic in FAN_OUT[event.type]
        ]

    async def _fan_out(self, event: ProductEvent) -> None:
        if not self._gateway.is_initialized:
            logger.warning("Firebase não inicializado; notificações de %s não enviadas", event.type)
            return
        payloads = self._payloads(event)
        sends = asyncio.gather(
            *(self._gateway.send_to_topic(p) for p in payloads),
            return_exceptions=True,
        )
        try:
            results = await asyncio.wait_for(sends, self._timeout)
        except asyncio.TimeoutError:
            logger.error("Timeout de %ss enviando notificações de %s (%s)", self._timeout, event.type, event.product_title)
            return
        except Exception:
            logger.exception("Erro enviando notificações de %s", event.type)
            return

        failed = 0
        for payload, result in zip(payloads, results):
            if isinstance(result, BaseException):
                failed += 1
                logger.error("Falha no envio de %s ao topic %s: %s", event.type, payload.topic, result)
        if failed:
            logger.warning("%d/%d notificações de %s falharam para '%s'", failed, len(payloads), event.type, event.product_title)
        else:
            logger.info("Notificações de %s enviadas para '%s'", event.type, event.product_title)

    async def send_welcome(self, token: str) -> None:
        try:
            await self._gateway.send_to_token(TokenPayload(
                token=token,
                title="¡Bienvenido a nuestro menú!",
                body="Ahora recibirás notificaciones sobre nuevos platillos y actualizaciones del menú",
                data={"type": "welcome", "product_id": "", "product_title": ""},
            ))
        except Exception as e:
            logger.error("Erro enviando boas-vindas ao token %s: %s", short_token(token), e)
            return
        logger.info("Notificação de boas-vindas enviada")
