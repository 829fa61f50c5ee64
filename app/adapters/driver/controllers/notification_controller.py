import logging
from typing import Any, Callable, Optional
from fastapi import APIRouter, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from infra.settings import settings
from infra import container
from app.domain.entities import TopicPayload, TokenPayload
from app.domain.errors import InvalidToken
from app.domain.services.product_notifier import TOPICS_AVAILABLE

logger = logging.getLogger(__name__)

_gateway = container.gateway
_token_service = container.token_service

class NotificationRequest(BaseModel):
    topic: Optional[str] = Field(None, description="Topic de destino")
    token: Optional[str] = Field(None, description="Token FCM de destino")
    title: Optional[str] = Field(None, description="Título da notificação")
    message: Optional[str] = Field(None, description="Corpo da notificação")
    data: Optional[dict[str, Any]] = Field(None, description="Dados extras; valores viram string")

class TokenRegistrationRequest(BaseModel):
    token: Optional[str] = Field(None, description="Token FCM")
    userId: Optional[str] = Field(None, description="Usuário dono do token")

class SampleNotificationRequest(BaseModel):
    token: Optional[str] = None
    topic: Optional[str] = None

def _ok(message: str, data: Optional[dict] = None) -> dict:
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return body

def _fail(status: int, message: str, exc: Optional[Exception] = None) -> JSONResponse:
    body = {"success": False, "message": message}
    if exc is not None and settings.is_development:
        body["error"] = str(exc)
    return JSONResponse(status_code=status, content=body)

class EnvelopeRoute(APIRoute):
    """Corpo inválido vira 400 no envelope {success, message}, não o 422 padrão."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as e:
                return _fail(400, "Corpo da requisição inválido", e)

        return route_handler

router = APIRouter(prefix="/notifications", route_class=EnvelopeRoute)

@router.post("/topic")
async def send_topic_notification(p: NotificationRequest):
    if not p.topic or not p.title or not p.message:
        return _fail(400, "Campos obrigatórios ausentes: topic, title, message")
    try:
        message_id = await _gateway.send_to_topic(
            TopicPayload(topic=p.topic, title=p.title, body=p.message, data=p.data)
        )
    except Exception as e:
        logger.error("Erro enviando notificação ao topic: %s", e)
        return _fail(500, "Erro enviando notificação", e)
    return _ok("Notificação enviada com sucesso", {"messageId": message_id, "topic": p.topic, "title": p.title})

@router.post("/token")
async def send_token_notification(p: NotificationRequest):
    if not p.token or not p.title or not p.message:
        return _fail(400, "Campos obrigatórios ausentes: token, title, message")
    try:
        message_id = await _gateway.send_to_token(
            TokenPayload(token=p.token, title=p.title, body=p.message, data=p.data)
        )
    except Exception as e:
        logger.error("Erro enviando notificação ao token: %s", e)
        return _fail(500, "Erro enviando notificação", e)
    return _ok("Notificação enviada com sucesso", {"messageId": message_id, "title": p.title})

@router.post("/register-token")
async def register_token(p: TokenRegistrationRequest):
    try:
        await _token_service.register_token(p.token, p.userId)
    except InvalidToken as e:
        return _fail(400, str(e))
    except Exception as e:
        logger.error("Erro registrando token: %s", e)
        return _fail(500, "Erro registrando token", e)
    return _ok("Token registrado com sucesso")

@router.delete("/unregister-token")
async def unregister_token(p: TokenRegistrationRequest):
    try:
        await _token_service.unregister_token(p.token)
    except InvalidToken as e:
        return _fail(400, str(e))
    except Exception as e:
        logger.error("Erro desregistrando token: %s", e)
        return _fail(500, "Erro desregistrando token", e)
    return _ok("Token desregistrado com sucesso")

@router.post("/test")
async def send_test_notification(p: SampleNotificationRequest):
    if not p.token and not p.topic:
        return _fail(400, "Informe token ou topic")

    title = "🧪 Notificación de prueba"
    message = "Esta es una notificación de prueba del sistema de menú"
    data = {"type": "test", "product_id": "", "product_title": "test"}
    try:
        if p.token:
            message_id = await _gateway.send_to_token(TokenPayload(token=p.token, title=title, body=message, data=data))
        else:
            message_id = await _gateway.send_to_topic(TopicPayload(topic=p.topic, title=title, body=message, data=data))
    except Exception as e:
        logger.error("Erro enviando notificação de teste: %s", e)
        return _fail(500, "Erro enviando notificação de teste", e)
    target = "token" if p.token else f"topic: {p.topic}"
    return _ok("Notificação de teste enviada com sucesso", {"messageId": message_id, "title": title, "target": target})

@router.get("/stats")
def get_notification_stats():
    last = _gateway.last_sent_at
    return _ok("Estatísticas obtidas com sucesso", {
        "totalNotificationsSent": _gateway.sent_count,
        "activeTokens": _token_service.active_tokens(),
        "topicsAvailable": list(TOPICS_AVAILABLE),
        "lastNotificationSent": last.isoformat() if last else None,
        "firebase": _gateway.project_info(),
    })
