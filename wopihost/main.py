import logging
from typing import Optional

from fastapi import FastAPI

from wopihost.api.http.health import router as health_router
from wopihost.api.http.wopi import router as wopi_router
from wopihost.core.config import Settings, get_settings
from wopihost.core.db import create_db_engine, create_session_factory
from wopihost.db.models import Base  # Base вместе со всеми моделями
from wopihost.domains.discovery.services import XmlDiscovery
from wopihost.domains.documents.contracts import DocumentContext

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Сборка приложения WOPI-хоста: uvicorn wopihost.main:create_app --factory"""
    settings = settings or get_settings()

    app = FastAPI(
        title="WOPI Host",
        description="WOPI-хост для совместного редактирования документов",
        version="1.0.0"
    )

    engine = create_db_engine(settings)
    Base.metadata.create_all(engine)

    discovery = None
    if settings.wopi_discovery_file:
        discovery = XmlDiscovery.from_file(settings.wopi_discovery_file)
    else:
        logger.warning("WOPI discovery is not configured, action urls are unavailable")

    app.state.session_factory = create_session_factory(engine)
    app.state.context = DocumentContext.from_settings(settings, discovery)

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(wopi_router)

    return app
