import asyncio
from typing import Optional
import firebase_admin
from firebase_admin import credentials, exceptions, messaging
from app.domain.entities import ProviderCredentials, PushMessage
from app.domain.errors import ProviderError
from app.domain.ports import PushProvider

TOKEN_URI = "https://oauth2.googleapis.com/token"


def _error_code(exc: Exception) -> str:
    if isinstance(exc, messaging.UnregisteredError):
        return "registration-token-not-registered"
    if isinstance(exc, exceptions.InvalidArgumentError) and "registration token" in str(exc).lower():
        return "invalid-registration-token"
    if isinstance(exc, exceptions.FirebaseError):
        return str(exc.code).replace("_", "-").lower()
    return "invalid-argument"


def _as_fcm(message: PushMessage) -> messaging.Message:
    notification = None
    if message.title is not None or message.body is not None:
        notification = messaging.Notification(title=message.title, body=message.body)
    android = None
    if message.android:
        hints = message.android
        android = messaging.AndroidConfig(
            notification=messaging.AndroidNotification(
                icon=hints.icon,
                color=hints.color,
                sound=hints.sound,
                priority=hints.priority,
                channel_id=hints.channel_id,
            )
        )
    apns = None
    if message.apns:
        apns = messaging.APNSConfig(
            payload=messaging.APNSPayload(aps=messaging.Aps(sound=message.apns.sound, badge=message.apns.badge))
        )
    return messaging.Message(
        data=dict(message.data),
        notification=notification,
        topic=message.topic,
        token=message.token,
        android=android,
        apns=apns,
    )


class FcmPushProvider(PushProvider):
    """PushProvider sobre o firebase-admin. O SDK é bloqueante, então cada
    chamada roda em thread para não travar o event loop."""

    def __init__(self, app_name: str = "[DEFAULT]"):
        self._app_name = app_name
        self._app: Optional[firebase_admin.App] = None

    def _init_app(self, creds: ProviderCredentials) -> firebase_admin.App:
        cert = credentials.Certificate({
            "type": "service_account",
            "project_id": creds.project_id,
            "client_email": creds.client_email,
            "private_key": creds.private_key,
            "token_uri": TOKEN_URI,
        })
        return firebase_admin.initialize_app(cert, {"projectId": creds.project_id}, name=self._app_name)

    async def initialize(self, credentials: ProviderCredentials) -> None:
        self._app = await asyncio.to_thread(self._init_app, credentials)

    async def send(self, message: PushMessage, dry_run: bool = False) -> str:
        if self._app is None:
            raise ProviderError("Firebase app não inicializado", code="app-not-initialized")
        try:
            fcm_message = _as_fcm(message)
            return await asyncio.to_thread(messaging.send, fcm_message, dry_run, self._app)
        except (exceptions.FirebaseError, ValueError) as e:
            raise ProviderError(str(e), code=_error_code(e)) from e
