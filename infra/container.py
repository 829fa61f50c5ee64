# Singletons do processo, montados uma vez e injetados nos controllers.
from infra.settings import settings
from app.adapters.driven.push_provider_fcm import FcmPushProvider
from app.adapters.driven.token_registry_memory import InMemoryTokenRegistry
from app.adapters.driven.menu_repository_memory import InMemoryMenuRepository
from app.domain.services.notification_gateway import NotificationGateway
from app.domain.services.product_notifier import ProductNotifier
from app.domain.services.token_service import TokenService
from app.domain.services.menu_service import MenuService

gateway = NotificationGateway(provider=FcmPushProvider())
notifier = ProductNotifier(gateway=gateway, timeout=settings.NOTIFY_TIMEOUT)
token_service = TokenService(gateway=gateway, notifier=notifier, registry=InMemoryTokenRegistry())
menu_service = MenuService(repository=InMemoryMenuRepository(), notifier=notifier)
