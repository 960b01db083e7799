import logging
from typing import Callable, TYPE_CHECKING

from wopihost.domains.discovery.services import Discovery
from wopihost.domains.documents.capabilities import Capability
from wopihost.domains.documents.exceptions import UnsupportedActionError

if TYPE_CHECKING:
    from wopihost.domains.documents.contracts import AbstractDocument

logger = logging.getLogger(__name__)

SourceUrlResolver = Callable[[str], str]


def host_source_url(host_url: str) -> SourceUrlResolver:
    """Ссылка на файл от базового адреса хоста, для построения вне HTTP-запроса"""
    host_url = host_url.rstrip("/")

    def source_url(file_id: str) -> str:
        return f"{host_url}/wopi/files/{file_id}"

    return source_url


def document_extension(document: "AbstractDocument") -> str:
    """Расширение файла без точки, пустая строка если его нет"""
    if Capability.EXTENSION in document.capabilities:
        return document.extension()

    basename = document.basename()
    return basename.rpartition('.')[2] if '.' in basename else ''


class ActionUrlBuilder:
    """Построение ссылки запуска WOPI-клиента для действия над документом"""

    def __init__(self, discovery: Discovery, source_url: SourceUrlResolver):
        self.discovery = discovery
        self.source_url = source_url

    def build(self, document: "AbstractDocument", action: str) -> str:
        extension = document_extension(document)
        url = self.source_url(document.id())

        action_url = self.discovery.discover_action(extension, action) or {}

        if action_url.get('urlsrc') is None:
            logger.warning(f"No discovery entry for action {action} on extension {extension}")
            raise UnsupportedActionError(extension, action)

        # Ссылка собирается как есть, без дополнительного кодирования
        return f"{action_url['urlsrc']}WOPISrc={url}"
