import base64
import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Optional

from wopihost.core.config import ConfigRepository, Settings, SettingsConfigRepository
from wopihost.domains.discovery.services import Discovery
from wopihost.domains.documents.actions import ActionUrlBuilder, SourceUrlResolver, host_source_url
from wopihost.domains.documents.capabilities import Capability, project_properties
from wopihost.domains.documents.exceptions import ActionUrlsNotConfiguredError, DocumentNotFoundError
from wopihost.domains.documents.identity import UserResolver


# Размер файла передается клиенту как 64-битное знаковое целое
MAX_FILE_SIZE = 2 ** 63 - 1


@dataclass
class DocumentContext:
    """Зависимости документа в рамках одного запроса"""
    config: ConfigRepository
    discovery: Optional[Discovery] = None
    source_url: Optional[SourceUrlResolver] = None

    @classmethod
    def from_settings(cls, settings: Settings, discovery: Optional[Discovery] = None) -> "DocumentContext":
        """Контекст для работы с документами вне HTTP-запроса"""
        return cls(
            config=SettingsConfigRepository(settings),
            discovery=discovery,
            source_url=host_source_url(settings.wopi_host_url)
        )


class AbstractDocument(ABC):
    """
    Документ на стороне хоста. Конкретное хранилище реализует
    абстрактные методы и перечисляет в capabilities необязательные
    операции, которые должны попасть в ответ CheckFileInfo.
    """

    capabilities: FrozenSet[Capability] = frozenset({
        Capability.BASENAME,
        Capability.OWNER,
        Capability.SIZE,
        Capability.VERSION,
        Capability.USER_ID,
        Capability.CAN_USER_WRITE,
        Capability.SUPPORT_DELETE,
        Capability.SUPPORT_LOCKS,
        Capability.SUPPORT_UPDATE,
        Capability.SUPPORT_RENAME,
    })

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        missing = sorted(
            capability.value
            for capability in cls.capabilities
            if not callable(getattr(cls, capability.value, None))
        )
        if missing:
            raise TypeError(
                f"{cls.__name__} declares capabilities without methods: {', '.join(missing)}"
            )

    def __init__(self, context: DocumentContext):
        self.context = context
        self._user = UserResolver()

    @abstractmethod
    def id(self) -> str:
        """
        Уникальный идентификатор файла, безопасный для использования в URL.
        Должен совпадать с file_id, который принимает DocumentRepository.find.
        """

    @abstractmethod
    def basename(self) -> str:
        """Имя файла с расширением, без пути"""

    @abstractmethod
    def owner(self) -> str:
        """Идентификатор владельца файла, обычно пользователь, который его загрузил"""

    @abstractmethod
    def size(self) -> int:
        """Размер файла в байтах"""

    @abstractmethod
    def version(self) -> str:
        """
        Текущая версия файла. Меняется при каждом изменении содержимого
        и никогда не повторяется для одного и того же файла.
        """

    @abstractmethod
    def content(self) -> bytes:
        """Двоичное содержимое файла, а не ссылка на него"""

    @abstractmethod
    def is_locked(self) -> bool:
        """Заблокирован ли документ"""

    @abstractmethod
    def get_lock(self) -> str:
        """Текущая блокировка документа"""

    @abstractmethod
    def put(self, content: bytes, editor_ids: Optional[List[str]] = None) -> None:
        """Замена содержимого документа"""

    @abstractmethod
    def delete_lock(self) -> None:
        """Снятие блокировки. Отсутствие блокировки ошибкой не считается"""

    @abstractmethod
    def lock(self, lock_id: str) -> None:
        """Блокировка документа от изменения и удаления"""

    def support_locks(self) -> bool:
        return self.context.config.support_locks()

    def support_update(self) -> bool:
        return self.context.config.support_update()

    def support_rename(self) -> bool:
        return self.context.config.support_rename()

    def support_delete(self) -> bool:
        return self.context.config.support_delete()

    def can_user_write(self) -> bool:
        """
        Пользователь может изменять файл. True означает, что WOPI-клиент
        может вызывать PutFile от его имени.
        """
        return True

    def set_user_id(self, user_id: str) -> "AbstractDocument":
        """Явная установка идентификатора пользователя"""
        self._user.set_user_id(user_id)
        return self

    def get_user_using(self, provider: Callable[[], Optional[str]]) -> "AbstractDocument":
        """Установка идентификатора пользователя через функцию"""
        self._user.get_user_using(provider)
        return self

    def user_id(self) -> str:
        """Пользователь, который сейчас работает с файлом"""
        return self._user.resolve()

    def get_url_for_action(self, action: str) -> str:
        """Ссылка запуска WOPI-клиента для действия над документом"""
        if self.context.discovery is None or self.context.source_url is None:
            raise ActionUrlsNotConfiguredError()

        builder = ActionUrlBuilder(self.context.discovery, self.context.source_url)
        return builder.build(self, action)

    def get_response_properties(self) -> Dict[str, Any]:
        """Свойства ответа CheckFileInfo на основе реализованных возможностей"""
        return project_properties(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AbstractDocument):
            return False
        return self.id() == other.id()

    def __hash__(self) -> int:
        return hash(self.id())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id()})"


class DocumentRepository(ABC):
    """Поиск и создание документов в конкретном хранилище"""

    def __init__(self, context: DocumentContext):
        self.context = context

    @abstractmethod
    def find(self, file_id: str) -> AbstractDocument:
        """
        Поиск документа по идентификатору.

        Raises:
            DocumentNotFoundError: если документа нет
        """

    @abstractmethod
    def find_by_name(self, filename: str) -> AbstractDocument:
        """
        Поиск документа по имени файла.

        Raises:
            DocumentNotFoundError: если документа нет
        """

    @abstractmethod
    def create(self, name: str, content: bytes, size: int) -> AbstractDocument:
        """
        Создание нового документа в хранилище.

        Raises:
            DocumentNotFoundError: если хранилище отклонило запрос
        """

    def validate_new_file(self, name: str, size: int) -> None:
        """Проверка имени и размера создаваемого файла"""
        if not name or not name.strip() or "/" in name or "\\" in name:
            raise DocumentNotFoundError(name, "Invalid file name")

        if size < 0 or size > MAX_FILE_SIZE:
            raise DocumentNotFoundError(name, "Invalid file size")


def content_sha256(content: bytes) -> str:
    """SHA-256 содержимого в base64, в формате свойства SHA256"""
    return base64.b64encode(hashlib.sha256(content).digest()).decode("ascii")
