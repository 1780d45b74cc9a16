"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, moteur SQL, configuration métier, journal d'audit)
et expose un singleton `container` utilisé par le reste de l'application.
"""

from stargate.core.settings import Settings, get_settings
from stargate.domain.config import AppConfig
from stargate.infra.repo.db import get_engine
from stargate.infra.repo.log_repo import AuditLogRepo
from stargate.infra.repo.models import Base
from stargate.services.request_log import RequestLog


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.engine = get_engine(self.settings.DATABASE_URL)
        self.app_config = AppConfig.from_settings(self.settings)
        if self.settings.DB_AUTO_CREATE:
            Base.metadata.create_all(self.engine)
        self.request_log = RequestLog(
            AuditLogRepo(self.engine), enabled=self.settings.AUDIT_LOG_ENABLED
        )
        self.storage_backend = self.engine.dialect.name


container = Container()
