import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from infra.settings import settings
from infra import container
from app.domain.services.credential_validator import validate_credentials, describe_credentials
from app.adapters.driver.controllers.notification_controller import router as notification_router
from app.adapters.driver.controllers.menu_controller import router as menu_router

logger = logging.getLogger("menu_notifications")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # erros de configuração/inicialização derrubam o startup
    credentials = validate_credentials(settings.firebase_raw())
    logger.info("Configuração do Firebase: %s (%s)", describe_credentials(credentials), settings.APP_ENV)
    await container.gateway.initialize(credentials)
    yield

def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Menu Notification Service", lifespan=lifespan)
    app.include_router(notification_router, tags=["notifications"])
    app.include_router(menu_router, tags=["menu"])
    return app

app = create_app()
