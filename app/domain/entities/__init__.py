from dataclasses import dataclass, field
from typing import Optional, Literal, Mapping, Union

EventType = Literal["product_added", "product_updated"]

@dataclass(frozen=True)
class ProviderCredentials:
    project_id: str
    client_email: str
    private_key: str = field(repr=False)

    def __repr__(self) -> str:
        return (
            f"ProviderCredentials(project_id={self.project_id!r}, "
            f"client_email={self.client_email!r}, private_key=<{len(self.private_key)} chars>)"
        )

@dataclass(frozen=True)
class TopicPayload:
    topic: str
    title: str
    body: str
    data: Optional[Mapping[str, object]] = None

    def __post_init__(self):
        if not self.topic:
            raise ValueError("topic é obrigatório")

@dataclass(frozen=True)
class TokenPayload:
    token: str
    title: str
    body: str
    data: Optional[Mapping[str, object]] = None

    def __post_init__(self):
        if not self.token:
            raise ValueError("token é obrigatório")

NotificationPayload = Union[TopicPayload, TokenPayload]

@dataclass(frozen=True)
class AndroidHints:
    sound: str = "default"
    priority: str = "high"
    channel_id: str = "push_channel"
    icon: str = "ic_notification"
    color: str = "#CD5C5C"

@dataclass(frozen=True)
class ApnsHints:
    sound: str = "default"
    badge: int = 1

@dataclass(frozen=True)
class PushMessage:
    """Provider-neutral message; exactly one of topic/token is set."""
    data: dict
    title: Optional[str] = None
    body: Optional[str] = None
    topic: Optional[str] = None
    token: Optional[str] = None
    android: Optional[AndroidHints] = None
    apns: Optional[ApnsHints] = None

    def __post_init__(self):
        if bool(self.topic) == bool(self.token):
            raise ValueError("PushMessage precisa de exatamente um destino: topic ou token")

    @property
    def target(self) -> str:
        return f"topic:{self.topic}" if self.topic else "token"

@dataclass(frozen=True)
class ProductEvent:
    type: EventType
    product_id: str
    product_title: str

    @classmethod
    def added(cls, item_id, title: str) -> "ProductEvent":
        return cls(type="product_added", product_id=str(item_id), product_title=title)

    @classmethod
    def updated(cls, item_id, title: str) -> "ProductEvent":
        return cls(type="product_updated", product_id=str(item_id), product_title=title)

@dataclass(frozen=True)
class MenuItem:
    id: int
    titulo: str
    ingredientes: str
    preparacion: str
    imagen: Optional[str] = None
