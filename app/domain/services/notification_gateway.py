import asyncio
import enum
import logging
from datetime import datetime, timezone
from typing import Mapping, Optional
from app.domain.entities import (
    ProviderCredentials,
    TopicPayload,
    TokenPayload,
    PushMessage,
    AndroidHints,
    ApnsHints,
)
from app.domain.errors import InitializationError, NotInitialized, DeliveryError
from app.domain.ports import PushProvider

logger = logging.getLogger(__name__)

TEST_TOPIC = "test_topic"


class GatewayState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


def stringify_data(data: Optional[Mapping[str, object]]) -> dict[str, str]:
    """FCM só aceita valores string no bloco `data`."""
    if not data:
        return {}
    return {str(k): str(v) for k, v in data.items()}


def short_token(token: str) -> str:
    return f"{token[:20]}..." if len(token) > 20 else token


class NotificationGateway:
    """Envio de push sobre um PushProvider, com inicialização única.

    Construída uma vez no startup e injetada onde for usada. O estado só sai de
    READY com o fim do processo; uma falha de inicialização volta para
    UNINITIALIZED e permite nova tentativa.
    """

    def __init__(self, provider: PushProvider):
        self._provider = provider
        self._state = GatewayState.UNINITIALIZED
        self._credentials: Optional[ProviderCredentials] = None
        self._init_lock = asyncio.Lock()
        self.sent_count = 0
        self.last_sent_at: Optional[datetime] = None

    @property
    def state(self) -> GatewayState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is GatewayState.READY

    def project_info(self) -> Optional[dict]:
        if not self.is_initialized:
            return None
        return {"projectId": self._credentials.project_id, "clientEmail": self._credentials.client_email}

    async def initialize(self, credentials: ProviderCredentials) -> None:
        if self.is_initialized:
            logger.info("Firebase já inicializado")
            return
        async with self._init_lock:
            if self.is_initialized:
                return
            self._state = GatewayState.INITIALIZING
            try:
                await self._provider.initialize(credentials)
            except Exception as e:
                self._state = GatewayState.UNINITIALIZED
                logger.error("Erro inicializando Firebase Admin SDK: %s", e)
                raise InitializationError(f"Não foi possível inicializar o Firebase Admin SDK: {e}") from e
            self._credentials = credentials
            self._state = GatewayState.READY
            logger.info("Firebase Admin SDK inicializado (projeto %s)", credentials.project_id)

    def _require_ready(self) -> None:
        if not self.is_initialized:
            raise NotInitialized()

    def _build(self, *, title: str, body: str, data, topic=None, token=None) -> PushMessage:
        return PushMessage(
            data=stringify_data(data),
            title=title,
            body=body,
            topic=topic,
            token=token,
            android=AndroidHints(),
            apns=ApnsHints(),
        )

    async def _deliver(self, message: PushMessage) -> str:
        message_id = await self._provider.send(message)
        self.sent_count += 1
        self.last_sent_at = datetime.now(timezone.utc)
        return message_id

    async def send_to_topic(self, payload: TopicPayload) -> str:
        self._require_ready()
        logger.info("Enviando notificação ao topic %s: %s", payload.topic, payload.title)
        message = self._build(title=payload.title, body=payload.body, data=payload.data, topic=payload.topic)
        try:
            message_id = await self._deliver(message)
        except Exception as e:
            logger.error("Erro enviando notificação ao topic %s: %s", payload.topic, e)
            if "not found" in str(e).lower():
                logger.error("O topic '%s' pode não existir ou não ter inscritos", payload.topic)
            raise DeliveryError(str(e), target=message.target, code=getattr(e, "code", None)) from e
        logger.info("Notificação enviada ao topic %s (id %s)", payload.topic, message_id)
        return message_id

    async def send_to_token(self, payload: TokenPayload) -> str:
        self._require_ready()
        logger.info("Enviando notificação ao token %s: %s", short_token(payload.token), payload.title)
        message = self._build(title=payload.title, body=payload.body, data=payload.data, token=payload.token)
        try:
            message_id = await self._deliver(message)
        except Exception as e:
            err = DeliveryError(str(e), target=message.target, code=getattr(e, "code", None))
            logger.error("Erro enviando notificação ao token %s: %s", short_token(payload.token), e)
            if err.invalid_token:
                logger.error("O token FCM parece inválido ou expirado")
            raise err from e
        logger.info("Notificação enviada ao token (id %s)", message_id)
        return message_id

    async def validate_token(self, token: str) -> bool:
        """Dry-run ao token. Checagem best-effort: o provedor pode aceitar um
        token bem-formado que já não está instalado em nenhum dispositivo."""
        if not self.is_initialized:
            logger.warning("Firebase não inicializado; não é possível validar token")
            return False
        try:
            await self._provider.send(PushMessage(data={"test": "true"}, token=token), dry_run=True)
        except Exception as e:
            logger.warning("Token inválido %s: %s", short_token(token), e)
            return False
        return True

    async def test_connection(self) -> bool:
        try:
            await self.send_to_topic(TopicPayload(
                topic=TEST_TOPIC,
                title="🧪 Test de conexión",
                body="Conexión con Firebase exitosa",
                data={"type": "test", "product_id": "test", "product_title": "test"},
            ))
        except Exception as e:
            logger.error("Erro testando conexão com Firebase: %s", e)
            return False
        return True
