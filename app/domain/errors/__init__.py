from typing import Optional, Sequence


class NotificationError(Exception):
    """Base de todos os erros do serviço de notificações."""


class ConfigurationError(NotificationError):
    """Configuração ausente ou inválida; fatal no startup."""


class MissingConfig(ConfigurationError):
    def __init__(self, missing: Sequence[str], env_names: Sequence[str] = ()):
        self.missing = tuple(missing)
        self.env_names = tuple(env_names) or self.missing
        super().__init__(f"Variáveis do Firebase ausentes: {', '.join(self.env_names)}")


class InvalidProjectId(ConfigurationError):
    pass


class InvalidServiceAccountEmail(ConfigurationError):
    pass


class InvalidPrivateKey(ConfigurationError):
    pass


class InitializationError(NotificationError):
    pass


class NotInitialized(NotificationError):
    def __init__(self, message: str = "Firebase não inicializado; chame initialize() primeiro"):
        super().__init__(message)


class ProviderError(NotificationError):
    """Erro devolvido pelo provedor de push; `code` segue os códigos do FCM."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class DeliveryError(NotificationError):
    INVALID_TOKEN_CODES = frozenset({"invalid-registration-token", "registration-token-not-registered"})

    def __init__(self, message: str, *, target: str, code: Optional[str] = None):
        self.target = target
        self.code = code
        super().__init__(message)

    @property
    def invalid_token(self) -> bool:
        return self.code in self.INVALID_TOKEN_CODES


class InvalidToken(NotificationError):
    pass


class MenuItemNotFound(NotificationError):
    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Platillo {item_id} não encontrado")
