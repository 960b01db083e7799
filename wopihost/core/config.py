from typing import Optional, Protocol

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./wopi.db"

    # Базовый адрес хоста, по которому WOPI-клиент обращается к файлам
    wopi_host_url: str = "http://localhost:8000"
    wopi_discovery_file: Optional[str] = None

    # Поддерживаемые возможности протокола
    wopi_support_locks: bool = True
    wopi_support_update: bool = True
    wopi_support_rename: bool = True
    wopi_support_delete: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator('wopi_host_url')
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip('/')


class ConfigRepository(Protocol):
    """Источник флагов поддерживаемых возможностей WOPI"""

    def support_locks(self) -> bool: ...

    def support_update(self) -> bool: ...

    def support_rename(self) -> bool: ...

    def support_delete(self) -> bool: ...


class SettingsConfigRepository:
    """Флаги возможностей, прочитанные из настроек приложения"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def support_locks(self) -> bool:
        return self.settings.wopi_support_locks

    def support_update(self) -> bool:
        return self.settings.wopi_support_update

    def support_rename(self) -> bool:
        return self.settings.wopi_support_rename

    def support_delete(self) -> bool:
        return self.settings.wopi_support_delete


def get_settings() -> Settings:
    return Settings()
